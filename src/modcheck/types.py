"""Module definition data types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from modcheck.errors import ModuleValidationError, ValidationIssue

__all__ = [
    "VariableType",
    "Absent",
    "ABSENT",
    "Present",
    "Default",
    "InputParameter",
    "OutputValue",
    "ExampleUsage",
    "ResourceSchema",
    "ModuleDefinition",
    "ValidationResult",
]


class VariableType(str, Enum):
    """Declared type of a module input."""

    STRING = "string"
    BOOL = "bool"
    MAP_STRING = "map(string)"

    @classmethod
    def parse(cls, raw: str) -> VariableType:
        """Parse a type expression, accepting ``map<string,string>`` as an alias."""
        normalized = raw.strip().replace(" ", "")
        if normalized in ("map<string,string>", "map(string)"):
            return cls.MAP_STRING
        return cls(normalized)

    def accepts(self, value: Any) -> bool:
        """Whether a concrete value conforms to this type. Null conforms to any type."""
        if value is None:
            return True
        if self is VariableType.STRING:
            return isinstance(value, str)
        if self is VariableType.BOOL:
            return isinstance(value, bool)
        return isinstance(value, Mapping) and all(
            isinstance(k, str) and isinstance(v, str) for k, v in value.items()
        )


class Absent:
    """Marker for an input declared without a default."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()


@dataclass(frozen=True)
class Present:
    """A declared default value, possibly null."""

    value: Any


Default = Absent | Present


@dataclass(frozen=True)
class InputParameter:
    """A declared module input.

    Attributes:
        name: Variable name, unique within a module.
        type: Declared variable type.
        default: ``ABSENT`` or ``Present(value)``.
        declared_required: Explicit ``required`` flag from the definition, if any.
        description: Optional human-readable description.
    """

    name: str
    type: VariableType
    default: Default = ABSENT
    declared_required: bool | None = None
    description: str | None = None

    @property
    def has_default(self) -> bool:
        return isinstance(self.default, Present)

    @property
    def required(self) -> bool:
        """Required inputs are exactly those without a default."""
        return not self.has_default


@dataclass(frozen=True)
class OutputValue:
    """A module output exposing one resource attribute."""

    name: str
    source_attribute: str
    description: str | None = None


@dataclass(frozen=True)
class ExampleUsage:
    """An example module call or variable file (e.g. ``terraform.tfvars``)."""

    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", MappingProxyType(dict(self.arguments)))

    def __hash__(self) -> int:
        return hash((self.name, tuple(self.arguments)))


@dataclass(frozen=True)
class ResourceSchema:
    """Attributes exposed by a provisioned resource kind."""

    resource_kind: str
    available_attributes: frozenset[str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "available_attributes", frozenset(self.available_attributes))

    def exposes(self, attribute: str) -> bool:
        return attribute in self.available_attributes


@dataclass(frozen=True)
class ModuleDefinition:
    """An immutable description of one declarative infrastructure module.

    The resource schema is referenced by ``resource_kind`` and looked up in a
    ``ResourceSchemaRegistry``; the definition does not own it.
    """

    name: str
    inputs: tuple[InputParameter, ...]
    outputs: tuple[OutputValue, ...]
    resource_kind: str = "container-registry"
    examples: tuple[ExampleUsage, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))
        object.__setattr__(self, "examples", tuple(self.examples))

    @property
    def input_names(self) -> list[str]:
        return [p.name for p in self.inputs]

    @property
    def output_names(self) -> list[str]:
        return [o.name for o in self.outputs]


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a module definition.

    Attributes:
        errors: Every issue found, in check order. Empty means ``Ok``.
    """

    errors: tuple[ValidationIssue, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def is_ok(self) -> bool:
        return self.valid

    def to_error(self) -> ModuleValidationError:
        """Convert this result into a ModuleValidationError exception."""
        if self.valid:
            raise ValueError("Cannot convert valid result to error")
        error_dicts = [
            {"kind": e.kind, "code": e.code, "field": e.field, "detail": e.detail}
            for e in self.errors
        ]
        return ModuleValidationError(message="Module validation failed", errors=error_dicts)
