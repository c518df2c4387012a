"""Resource schema lookup.

Example usage::

    from modcheck.schema import ResourceSchemaRegistry

    registry = ResourceSchemaRegistry()
    registry.load_file("schemas.yaml")
    schema = registry.get("container-registry")
"""

from __future__ import annotations

from modcheck.schema.registry import CONTAINER_REGISTRY, ResourceSchemaRegistry, default_registry

__all__ = ["CONTAINER_REGISTRY", "ResourceSchemaRegistry", "default_registry"]
