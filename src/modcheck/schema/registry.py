"""Registry of resource schemas, looked up by resource kind."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Iterable

import yaml

from modcheck.errors import ConfigError, ConfigNotFoundError, ResourceSchemaNotFoundError
from modcheck.types import ResourceSchema

logger = logging.getLogger(__name__)

__all__ = ["CONTAINER_REGISTRY", "ResourceSchemaRegistry", "default_registry"]

CONTAINER_REGISTRY = ResourceSchema(
    resource_kind="container-registry",
    available_attributes=frozenset({"url", "arn", "name"}),
)


class ResourceSchemaRegistry:
    """Maps resource kinds to the attributes their provisioned resources expose."""

    def __init__(self, schemas: Iterable[ResourceSchema] | None = None, include_builtins: bool = True) -> None:
        self._schemas: dict[str, ResourceSchema] = {}
        self._write_lock = threading.RLock()
        if include_builtins:
            self.register(CONTAINER_REGISTRY)
        for schema in schemas or ():
            self.register(schema)

    def register(self, schema: ResourceSchema) -> None:
        """Register a schema, replacing any existing one for the same kind."""
        with self._write_lock:
            if schema.resource_kind in self._schemas:
                logger.debug("Replacing resource schema for '%s'", schema.resource_kind)
            self._schemas[schema.resource_kind] = schema

    def get(self, resource_kind: str) -> ResourceSchema:
        """Return the schema for ``resource_kind``.

        Raises:
            ResourceSchemaNotFoundError: If no schema is registered for the kind.
        """
        schema = self._schemas.get(resource_kind)
        if schema is None:
            raise ResourceSchemaNotFoundError(resource_kind=resource_kind)
        return schema

    def has(self, resource_kind: str) -> bool:
        return resource_kind in self._schemas

    def __contains__(self, resource_kind: object) -> bool:
        return resource_kind in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    @property
    def kinds(self) -> list[str]:
        return sorted(self._schemas)

    def load_file(self, path: str | Path) -> int:
        """Register every schema declared in a YAML file.

        Accepts either a mapping of ``kind: [attribute, ...]`` or a list of
        ``{resource_kind: ..., attributes: [...]}`` entries.

        Returns:
            Number of schemas registered.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or has the wrong shape.
        """
        schema_path = Path(path)
        if not schema_path.exists():
            raise ConfigNotFoundError(config_path=str(schema_path))

        try:
            parsed = yaml.safe_load(schema_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in resource schema file: {schema_path}", cause=e) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(message=f"Cannot read resource schema file: {schema_path}: {e}", cause=e) from e

        if parsed is None:
            logger.warning("Resource schema file is empty: %s", schema_path)
            return 0

        entries: list[tuple[Any, Any]]
        if isinstance(parsed, dict):
            entries = list(parsed.items())
        elif isinstance(parsed, list):
            entries = []
            for item in parsed:
                if not isinstance(item, dict) or "resource_kind" not in item:
                    raise ConfigError(message=f"Resource schema entry missing 'resource_kind' in {schema_path}")
                entries.append((item["resource_kind"], item.get("attributes")))
        else:
            raise ConfigError(message=f"Resource schema file must be a mapping or list: {schema_path}")

        count = 0
        for kind, attributes in entries:
            if not isinstance(attributes, list) or not all(isinstance(a, str) for a in attributes):
                raise ConfigError(message=f"Attributes for '{kind}' must be a list of strings in {schema_path}")
            if not attributes:
                logger.warning("Resource schema '%s' in %s exposes no attributes", kind, schema_path)
            self.register(ResourceSchema(resource_kind=str(kind), available_attributes=frozenset(attributes)))
            count += 1
        return count


def default_registry() -> ResourceSchemaRegistry:
    """Return a fresh registry holding only the built-in schemas."""
    return ResourceSchemaRegistry()
