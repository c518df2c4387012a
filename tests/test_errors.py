"""Tests for the modcheck error hierarchy."""

from __future__ import annotations

from modcheck.errors import (
    ConfigNotFoundError,
    DuplicateNameError,
    ErrorCodes,
    InvalidDefaultError,
    ModcheckError,
    UnknownAttributeError,
    ValidationIssue,
)


class TestModcheckError:
    def test_str_includes_code(self) -> None:
        error = ConfigNotFoundError(config_path="modcheck.yaml")
        assert str(error) == "[CONFIG_NOT_FOUND] Configuration file not found: modcheck.yaml"
        assert error.code == ErrorCodes.CONFIG_NOT_FOUND
        assert error.details == {"config_path": "modcheck.yaml"}

    def test_cause_kept(self) -> None:
        cause = ValueError("bad")
        error = ModcheckError(code="X", message="wrapped", cause=cause)
        assert error.cause is cause
        assert error.timestamp


class TestValidationIssue:
    def test_issues_are_modcheck_errors(self) -> None:
        assert issubclass(ValidationIssue, ModcheckError)
        assert isinstance(DuplicateNameError(section="inputs", name="tags"), ValidationIssue)

    def test_kind_field_detail(self) -> None:
        error = UnknownAttributeError(output_name="repository_tag", attribute="tag")
        assert error.kind == "UnknownAttributeError"
        assert error.field == "repository_tag"
        assert error.attribute == "tag"

    def test_equality_by_type_and_details(self) -> None:
        a = InvalidDefaultError(param_name="p", reason="r")
        assert a == InvalidDefaultError(param_name="p", reason="r")
        assert a != InvalidDefaultError(param_name="q", reason="r")
        assert DuplicateNameError(section="inputs", name="x") != DuplicateNameError(section="outputs", name="x")
        assert len({a, InvalidDefaultError(param_name="p", reason="r")}) == 1
