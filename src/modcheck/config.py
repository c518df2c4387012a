"""Configuration loading and validation."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError as PydanticValidationError, field_validator

from modcheck.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "ConfigDocument", "DEFAULTS"]

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "validator": {
        "check_default_types": True,
        "check_examples": True,
        "require_example_inputs": False,
    },
    "schemas": {"files": []},
    "report": {"format": "human"},
    "logging": {"level": "WARNING"},
}


class ValidatorSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    check_default_types: StrictBool = True
    check_examples: StrictBool = True
    require_example_inputs: StrictBool = False


class SchemaSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    files: list[str] = Field(default_factory=list)


class ReportSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    format: Literal["human", "json"] = "human"


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class ConfigDocument(BaseModel):
    """Shape of a modcheck configuration, after merging with ``DEFAULTS``."""

    model_config = ConfigDict(extra="forbid")

    validator: ValidatorSettings = Field(default_factory=ValidatorSettings)
    schemas: SchemaSettings = Field(default_factory=SchemaSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration accessor with dot-path key support.

    Values not present in ``data`` fall back to ``DEFAULTS``. The merged
    result is checked against ``ConfigDocument``.

    Raises:
        ConfigError: If a key is unknown or a value has the wrong type.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        merged = _deep_merge(DEFAULTS, data or {})
        try:
            document = ConfigDocument.model_validate(merged)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err.get('loc', ())) or '/'}: {err.get('msg', '')}" for err in e.errors()
            )
            raise ConfigError(message=f"Invalid configuration: {problems}", cause=e) from e
        self._data: dict[str, Any] = document.model_dump()

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigNotFoundError(config_path=str(config_path))

        try:
            parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {config_path}", cause=e) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(message=f"Cannot read config file: {config_path}: {e}", cause=e) from e

        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {config_path}")

        logger.debug("Loaded config from %s", config_path)
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current
