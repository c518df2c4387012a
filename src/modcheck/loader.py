"""Module definition loader — reads YAML/JSON documents into ModuleDefinition."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from modcheck.errors import DefinitionNotFoundError, DefinitionParseError
from modcheck.types import (
    ABSENT,
    ExampleUsage,
    InputParameter,
    ModuleDefinition,
    OutputValue,
    Present,
    VariableType,
)

__all__ = ["ModuleDocument", "load_module", "parse_module"]

logger = logging.getLogger(__name__)


class VariableDocument(BaseModel):
    """Raw ``variables`` entry."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str = "string"
    default: Any = None
    required: bool | None = None
    description: str | None = None

    @field_validator("type")
    @classmethod
    def _known_type(cls, v: str) -> str:
        try:
            VariableType.parse(v)
        except ValueError as e:
            allowed = ", ".join(t.value for t in VariableType)
            raise ValueError(f"unsupported variable type '{v}' (expected one of: {allowed})") from e
        return v


class OutputDocument(BaseModel):
    """Raw ``outputs`` entry. ``value`` names the resource attribute."""

    model_config = ConfigDict(extra="forbid")

    name: str
    value: str
    description: str | None = None


class ExampleDocument(BaseModel):
    """Raw ``examples`` entry."""

    model_config = ConfigDict(extra="forbid")

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ModuleDocument(BaseModel):
    """Top-level shape of a module definition file."""

    model_config = ConfigDict(extra="forbid")

    name: str
    resource_kind: str = "container-registry"
    variables: Union[list[dict[str, Any]], dict[str, Union[dict[str, Any], None]]] = Field(default_factory=list)
    outputs: Union[list[OutputDocument], dict[str, str]] = Field(default_factory=list)
    examples: list[ExampleDocument] = Field(default_factory=list)


def _variable_entries(
    raw: list[dict[str, Any]] | dict[str, dict[str, Any] | None], source: str
) -> list[dict[str, Any]]:
    if not isinstance(raw, dict):
        return list(raw)
    entries: list[dict[str, Any]] = []
    for name, spec in raw.items():
        spec = spec or {}
        if "name" in spec and spec["name"] != name:
            raise DefinitionParseError(
                message=f"Variable '{name}' in {source} declares a conflicting name '{spec['name']}'"
            )
        entries.append({**spec, "name": name})
    return entries


def _to_input(entry: dict[str, Any]) -> InputParameter:
    # A ``default`` key that is present but null is still a declared default.
    has_default = "default" in entry
    doc = VariableDocument.model_validate(entry)
    return InputParameter(
        name=doc.name,
        type=VariableType.parse(doc.type),
        default=Present(doc.default) if has_default else ABSENT,
        declared_required=doc.required,
        description=doc.description,
    )


def parse_module(data: Any, source: str = "<data>") -> ModuleDefinition:
    """Build a ModuleDefinition from already-parsed document data.

    Raises:
        DefinitionParseError: If the data does not have the module document shape.
    """
    if not isinstance(data, dict):
        raise DefinitionParseError(message=f"Module definition must be a mapping: {source}")

    try:
        doc = ModuleDocument.model_validate(data)
        inputs = [_to_input(entry) for entry in _variable_entries(doc.variables, source)]
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ())) or '/'}: {err.get('msg', '')}" for err in e.errors()
        )
        raise DefinitionParseError(message=f"Invalid module definition in {source}: {problems}", cause=e) from e

    if isinstance(doc.outputs, dict):
        outputs = [OutputValue(name=name, source_attribute=attr) for name, attr in doc.outputs.items()]
    else:
        outputs = [OutputValue(name=o.name, source_attribute=o.value, description=o.description) for o in doc.outputs]

    examples = [ExampleUsage(name=e.name, arguments=e.arguments) for e in doc.examples]

    logger.debug(
        "Parsed module '%s' from %s: %d input(s), %d output(s), %d example(s)",
        doc.name,
        source,
        len(inputs),
        len(outputs),
        len(examples),
    )
    return ModuleDefinition(
        name=doc.name,
        inputs=tuple(inputs),
        outputs=tuple(outputs),
        resource_kind=doc.resource_kind,
        examples=tuple(examples),
    )


def load_module(path: str | Path) -> ModuleDefinition:
    """Load a module definition from a YAML or JSON file.

    Raises:
        DefinitionNotFoundError: If the file does not exist.
        DefinitionParseError: If the file is not valid YAML/JSON or has the wrong shape.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DefinitionNotFoundError(path=str(file_path))

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DefinitionParseError(message=f"Cannot read module definition {file_path}: {e}", cause=e) from e

    try:
        if file_path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DefinitionParseError(message=f"Invalid syntax in module definition {file_path}: {e}", cause=e) from e

    if data is None:
        raise DefinitionParseError(message=f"Module definition is empty: {file_path}")

    return parse_module(data, source=str(file_path))
