"""Error hierarchy for modcheck."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "ModcheckError",
    "ConfigNotFoundError",
    "ConfigError",
    "DefinitionNotFoundError",
    "DefinitionParseError",
    "ResourceSchemaNotFoundError",
    "ModuleValidationError",
    "ValidationIssue",
    "DuplicateNameError",
    "UnknownAttributeError",
    "InvalidDefaultError",
    "EmptySectionError",
    "UnknownVariableError",
    "MissingRequiredInputError",
    "ErrorCodes",
]


class ModcheckError(Exception):
    """Base error for all modcheck errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(ModcheckError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(ModcheckError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class DefinitionNotFoundError(ModcheckError):
    """Raised when a module definition file cannot be found."""

    def __init__(self, path: str, **kwargs: Any) -> None:
        super().__init__(
            code="DEFINITION_NOT_FOUND",
            message=f"Module definition not found: {path}",
            details={"path": path},
            **kwargs,
        )


class DefinitionParseError(ModcheckError):
    """Raised when a module definition has invalid syntax or shape."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="DEFINITION_PARSE_ERROR", message=message, **kwargs)


class ResourceSchemaNotFoundError(ModcheckError):
    """Raised when no resource schema is registered for a kind."""

    def __init__(self, resource_kind: str, **kwargs: Any) -> None:
        super().__init__(
            code="RESOURCE_SCHEMA_NOT_FOUND",
            message=f"Resource schema not found: {resource_kind}",
            details={"resource_kind": resource_kind},
            **kwargs,
        )

    @property
    def resource_kind(self) -> str:
        """The resource kind that has no registered schema."""
        return self.details["resource_kind"]


class ModuleValidationError(ModcheckError):
    """Raised when a caller treats validation findings as blocking."""

    def __init__(
        self,
        message: str = "Module validation failed",
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="MODULE_VALIDATION_ERROR",
            message=message,
            details={"errors": errors or []},
            **kwargs,
        )


# === Validation findings ===
#
# These are collected into a ValidationResult rather than raised.


class ValidationIssue(ModcheckError):
    """A single consistency violation found in a module definition.

    Subclasses set ``field`` (the offending key) and ``detail`` (a short
    human-readable explanation) used by the report formatter.
    """

    field: str = ""
    detail: str = ""

    @property
    def kind(self) -> str:
        """The issue class name, used as the report prefix."""
        return type(self).__name__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationIssue):
            return NotImplemented
        return type(self) is type(other) and self.details == other.details

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(sorted((k, repr(v)) for k, v in self.details.items()))))

    def __repr__(self) -> str:
        return f"{self.kind}({self.details!r})"


class DuplicateNameError(ValidationIssue):
    """An input or output name is declared more than once."""

    def __init__(self, section: str, name: str, **kwargs: Any) -> None:
        super().__init__(
            code="DUPLICATE_NAME",
            message=f"Duplicate {section} name: {name}",
            details={"section": section, "name": name},
            **kwargs,
        )
        self.field = name
        self.detail = f"declared more than once in {section}"

    @property
    def name(self) -> str:
        return self.details["name"]

    @property
    def section(self) -> str:
        return self.details["section"]


class UnknownAttributeError(ValidationIssue):
    """An output references an attribute the resource does not expose."""

    def __init__(self, output_name: str, attribute: str, **kwargs: Any) -> None:
        super().__init__(
            code="UNKNOWN_ATTRIBUTE",
            message=f"Output {output_name} references unknown attribute {attribute}",
            details={"output_name": output_name, "attribute": attribute},
            **kwargs,
        )
        self.field = output_name
        self.detail = f"attribute '{attribute}' is not exposed by the resource"

    @property
    def output_name(self) -> str:
        return self.details["output_name"]

    @property
    def attribute(self) -> str:
        return self.details["attribute"]


class InvalidDefaultError(ValidationIssue):
    """An input default conflicts with its declaration."""

    def __init__(self, param_name: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="INVALID_DEFAULT",
            message=f"Invalid default for {param_name}: {reason}",
            details={"param_name": param_name, "reason": reason},
            **kwargs,
        )
        self.field = param_name
        self.detail = reason

    @property
    def param_name(self) -> str:
        return self.details["param_name"]


class EmptySectionError(ValidationIssue):
    """A module declares no inputs or no outputs."""

    def __init__(self, section: str, **kwargs: Any) -> None:
        super().__init__(
            code="EMPTY_SECTION",
            message=f"Module declares no {section}",
            details={"section": section},
            **kwargs,
        )
        self.field = section
        self.detail = "at least one entry is required"

    @property
    def section(self) -> str:
        return self.details["section"]


class UnknownVariableError(ValidationIssue):
    """An example usage passes an argument the module does not declare."""

    def __init__(self, example: str, variable: str, **kwargs: Any) -> None:
        super().__init__(
            code="UNKNOWN_VARIABLE",
            message=f"Example {example} sets undeclared variable {variable}",
            details={"example": example, "variable": variable},
            **kwargs,
        )
        self.field = variable
        self.detail = f"set in '{example}' but not declared as an input"

    @property
    def example(self) -> str:
        return self.details["example"]

    @property
    def variable(self) -> str:
        return self.details["variable"]


class MissingRequiredInputError(ValidationIssue):
    """An example usage omits a required input."""

    def __init__(self, example: str, param_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="MISSING_REQUIRED_INPUT",
            message=f"Example {example} omits required input {param_name}",
            details={"example": example, "param_name": param_name},
            **kwargs,
        )
        self.field = param_name
        self.detail = f"required but not set in '{example}'"

    @property
    def param_name(self) -> str:
        return self.details["param_name"]


class ErrorCodes:
    """All modcheck error code constants."""

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    DEFINITION_NOT_FOUND = "DEFINITION_NOT_FOUND"
    DEFINITION_PARSE_ERROR = "DEFINITION_PARSE_ERROR"
    RESOURCE_SCHEMA_NOT_FOUND = "RESOURCE_SCHEMA_NOT_FOUND"
    MODULE_VALIDATION_ERROR = "MODULE_VALIDATION_ERROR"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    UNKNOWN_ATTRIBUTE = "UNKNOWN_ATTRIBUTE"
    INVALID_DEFAULT = "INVALID_DEFAULT"
    EMPTY_SECTION = "EMPTY_SECTION"
    UNKNOWN_VARIABLE = "UNKNOWN_VARIABLE"
    MISSING_REQUIRED_INPUT = "MISSING_REQUIRED_INPUT"
