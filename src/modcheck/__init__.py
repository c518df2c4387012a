"""modcheck - consistency checks for declarative infrastructure modules."""

from __future__ import annotations

# Types
from modcheck.types import (
    ABSENT,
    Absent,
    ExampleUsage,
    InputParameter,
    ModuleDefinition,
    OutputValue,
    Present,
    ResourceSchema,
    ValidationResult,
    VariableType,
)

# Config
from modcheck.config import Config

# Errors
from modcheck.errors import (
    ConfigError,
    ConfigNotFoundError,
    DefinitionNotFoundError,
    DefinitionParseError,
    DuplicateNameError,
    EmptySectionError,
    ErrorCodes,
    InvalidDefaultError,
    MissingRequiredInputError,
    ModcheckError,
    ModuleValidationError,
    ResourceSchemaNotFoundError,
    UnknownAttributeError,
    UnknownVariableError,
    ValidationIssue,
)

# Schema registry
from modcheck.schema import CONTAINER_REGISTRY, ResourceSchemaRegistry

# Loading, validation, reporting
from modcheck.loader import load_module, parse_module
from modcheck.validator import ModuleValidator, validate
from modcheck.report import format_report

__version__ = "0.1.0"

__all__ = [
    # Types
    "ABSENT",
    "Absent",
    "Present",
    "VariableType",
    "InputParameter",
    "OutputValue",
    "ExampleUsage",
    "ResourceSchema",
    "ModuleDefinition",
    "ValidationResult",
    # Config
    "Config",
    # Errors
    "ErrorCodes",
    "ModcheckError",
    "ConfigError",
    "ConfigNotFoundError",
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
    # Schema registry
    "CONTAINER_REGISTRY",
    "ResourceSchemaRegistry",
    # Operations
    "load_module",
    "parse_module",
    "ModuleValidator",
    "validate",
    "format_report",
]
