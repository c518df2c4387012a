"""ModuleValidator — checks a module definition for internal consistency."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from modcheck.config import Config
from modcheck.errors import (
    DuplicateNameError,
    EmptySectionError,
    InvalidDefaultError,
    MissingRequiredInputError,
    UnknownAttributeError,
    UnknownVariableError,
    ValidationIssue,
)
from modcheck.schema.registry import ResourceSchemaRegistry
from modcheck.types import InputParameter, ModuleDefinition, Present, ResourceSchema, ValidationResult

__all__ = ["ModuleValidator", "validate"]

logger = logging.getLogger(__name__)


def _duplicates(names: Iterable[str]) -> list[str]:
    """Names occurring more than once, in order of first appearance."""
    counts = Counter(names)
    seen: list[str] = []
    for name in counts:
        if counts[name] > 1:
            seen.append(name)
    return seen


class ModuleValidator:
    """Validates module definitions and collects every violation in one pass.

    The validator holds no per-call state, so one instance may be shared
    across threads.
    """

    def __init__(
        self,
        config: Config | None = None,
        registry: ResourceSchemaRegistry | None = None,
    ) -> None:
        self._config = config or Config()
        self._registry = registry or ResourceSchemaRegistry()
        self._check_default_types = bool(self._config.get("validator.check_default_types", True))
        self._check_examples = bool(self._config.get("validator.check_examples", True))
        self._require_example_inputs = bool(self._config.get("validator.require_example_inputs", False))

    def validate(self, module: ModuleDefinition, schema: ResourceSchema | None = None) -> ValidationResult:
        """Validate ``module`` against ``schema`` (or the registered schema for its kind).

        Raises:
            ResourceSchemaNotFoundError: If no schema is given and none is registered
                for ``module.resource_kind``.
        """
        if schema is None:
            schema = self._registry.get(module.resource_kind)

        errors: list[ValidationIssue] = []
        errors.extend(self._check_sections(module))
        errors.extend(self._check_unique_names(module))
        errors.extend(self._check_outputs(module, schema))
        errors.extend(self._check_defaults(module))
        if self._check_examples:
            errors.extend(self._check_example_usage(module))

        logger.debug("Validated module '%s': %d issue(s)", module.name, len(errors))
        return ValidationResult(errors=tuple(errors))

    def _check_sections(self, module: ModuleDefinition) -> list[ValidationIssue]:
        errors: list[ValidationIssue] = []
        if not module.inputs:
            errors.append(EmptySectionError(section="inputs"))
        if not module.outputs:
            errors.append(EmptySectionError(section="outputs"))
        return errors

    def _check_unique_names(self, module: ModuleDefinition) -> list[ValidationIssue]:
        errors: list[ValidationIssue] = []
        for name in _duplicates(module.input_names):
            errors.append(DuplicateNameError(section="inputs", name=name))
        for name in _duplicates(module.output_names):
            errors.append(DuplicateNameError(section="outputs", name=name))
        return errors

    def _check_outputs(self, module: ModuleDefinition, schema: ResourceSchema) -> list[ValidationIssue]:
        errors: list[ValidationIssue] = []
        for output in module.outputs:
            if not schema.exposes(output.source_attribute):
                errors.append(UnknownAttributeError(output_name=output.name, attribute=output.source_attribute))
        return errors

    def _check_defaults(self, module: ModuleDefinition) -> list[ValidationIssue]:
        errors: list[ValidationIssue] = []
        for param in module.inputs:
            errors.extend(self._check_default(param))
        return errors

    def _check_default(self, param: InputParameter) -> list[ValidationIssue]:
        if not isinstance(param.default, Present):
            if param.declared_required is False:
                return [InvalidDefaultError(param_name=param.name, reason="optional parameter must declare a default")]
            return []
        if param.declared_required:
            return [InvalidDefaultError(param_name=param.name, reason="required parameter must not declare a default")]
        if self._check_default_types and not param.type.accepts(param.default.value):
            actual = type(param.default.value).__name__
            return [
                InvalidDefaultError(
                    param_name=param.name,
                    reason=f"default of type {actual} does not match declared type {param.type.value}",
                )
            ]
        return []

    def _check_example_usage(self, module: ModuleDefinition) -> list[ValidationIssue]:
        errors: list[ValidationIssue] = []
        declared = set(module.input_names)
        required = list(dict.fromkeys(p.name for p in module.inputs if p.required))
        for example in module.examples:
            for variable in example.arguments:
                if variable not in declared:
                    errors.append(UnknownVariableError(example=example.name, variable=variable))
            if self._require_example_inputs:
                for name in required:
                    if name not in example.arguments:
                        errors.append(MissingRequiredInputError(example=example.name, param_name=name))
        return errors


def validate(
    module: ModuleDefinition,
    schema: ResourceSchema | None = None,
    config: Config | None = None,
) -> ValidationResult:
    """Validate a module definition with a default-configured validator."""
    return ModuleValidator(config=config).validate(module, schema=schema)
