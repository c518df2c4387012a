"""Shared test fixtures for the modcheck test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from modcheck.schema.registry import ResourceSchemaRegistry
from modcheck.types import (
    ABSENT,
    ExampleUsage,
    InputParameter,
    ModuleDefinition,
    OutputValue,
    Present,
    ResourceSchema,
    VariableType,
)
from modcheck.validator import ModuleValidator


@pytest.fixture
def fixtures_dir() -> Path:
    """Returns the absolute path to the tests/fixtures/ directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def registry_schema() -> ResourceSchema:
    return ResourceSchema(resource_kind="container-registry", available_attributes=frozenset({"url", "arn", "name"}))


@pytest.fixture
def ecr_module() -> ModuleDefinition:
    """A consistent container-registry module with an example call and a tfvars file."""
    return ModuleDefinition(
        name="ecr",
        inputs=(
            InputParameter(name="repository_name", type=VariableType.STRING),
            InputParameter(name="scan_on_push", type=VariableType.BOOL, default=Present(True)),
            InputParameter(name="tags", type=VariableType.MAP_STRING, default=Present({})),
        ),
        outputs=(
            OutputValue(name="repository_url", source_attribute="url"),
            OutputValue(name="repository_arn", source_attribute="arn"),
        ),
        examples=(
            ExampleUsage(name="example", arguments={"repository_name": "my-repo", "tags": {"team": "infra"}}),
            ExampleUsage(name="terraform.tfvars", arguments={"repository_name": "my-repo", "scan_on_push": False}),
        ),
    )


@pytest.fixture
def validator() -> ModuleValidator:
    return ModuleValidator()


@pytest.fixture
def registry() -> ResourceSchemaRegistry:
    return ResourceSchemaRegistry()


@pytest.fixture
def make_module() -> Callable[..., ModuleDefinition]:
    """Factory building a module with one required input and one valid output unless overridden."""

    def _make(
        inputs: tuple[InputParameter, ...] | None = None,
        outputs: tuple[OutputValue, ...] | None = None,
        examples: tuple[ExampleUsage, ...] = (),
        resource_kind: str = "container-registry",
    ) -> ModuleDefinition:
        if inputs is None:
            inputs = (InputParameter(name="repository_name", type=VariableType.STRING, default=ABSENT),)
        if outputs is None:
            outputs = (OutputValue(name="repository_url", source_attribute="url"),)
        return ModuleDefinition(
            name="test",
            inputs=inputs,
            outputs=outputs,
            resource_kind=resource_kind,
            examples=examples,
        )

    return _make
