"""Tests for load_module() and parse_module()."""

from __future__ import annotations

from pathlib import Path

import pytest

from modcheck.errors import DefinitionNotFoundError, DefinitionParseError
from modcheck.loader import load_module, parse_module
from modcheck.types import ABSENT, Present, VariableType
from modcheck.validator import validate


class TestLoadModule:
    def test_load_yaml(self, fixtures_dir: Path) -> None:
        module = load_module(fixtures_dir / "ecr.module.yaml")
        assert module.name == "ecr"
        assert module.resource_kind == "container-registry"
        assert module.input_names == ["repository_name", "scan_on_push", "tags"]
        assert module.inputs[0].default is ABSENT
        assert module.inputs[0].description == "Name of the ECR repository"
        assert module.inputs[1].default == Present(True)
        assert module.inputs[2].type is VariableType.MAP_STRING
        assert [(o.name, o.source_attribute) for o in module.outputs] == [
            ("repository_url", "url"),
            ("repository_arn", "arn"),
        ]
        assert [e.name for e in module.examples] == ["example", "terraform.tfvars"]
        assert module.examples[1].arguments == {"repository_name": "my-repo", "scan_on_push": False}

    def test_load_yaml_validates_ok(self, fixtures_dir: Path) -> None:
        assert validate(load_module(fixtures_dir / "ecr.module.yaml")).valid is True

    def test_load_json_mapping_form(self, fixtures_dir: Path) -> None:
        module = load_module(fixtures_dir / "ecr.module.json")
        assert module.input_names == ["repository_name", "immutable"]
        assert module.inputs[1].default == Present(False)
        assert [o.source_attribute for o in module.outputs] == ["url", "name"]
        assert validate(module).valid is True

    def test_broken_fixture_reports_every_problem(self, fixtures_dir: Path) -> None:
        result = validate(load_module(fixtures_dir / "broken.module.yaml"))
        assert [e.kind for e in result.errors] == [
            "DuplicateNameError",
            "UnknownAttributeError",
            "InvalidDefaultError",
            "UnknownVariableError",
        ]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DefinitionNotFoundError):
            load_module(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(DefinitionParseError):
            load_module(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(DefinitionParseError):
            load_module(path)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_bytes(b"name: \xff\xfe\n")
        with pytest.raises(DefinitionParseError, match="Cannot read") as exc_info:
            load_module(path)
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(DefinitionParseError, match="empty"):
            load_module(path)


class TestParseModule:
    def test_null_default_is_present(self) -> None:
        module = parse_module(
            {
                "name": "m",
                "variables": [{"name": "kms_key", "type": "string", "default": None}],
                "outputs": [{"name": "repository_url", "value": "url"}],
            }
        )
        assert module.inputs[0].default == Present(None)

    def test_explicit_required_kept(self) -> None:
        module = parse_module(
            {
                "name": "m",
                "variables": [{"name": "repository_name", "required": True, "default": "x"}],
                "outputs": {"repository_url": "url"},
            }
        )
        param = module.inputs[0]
        assert param.declared_required is True
        assert param.type is VariableType.STRING
        assert param.default == Present("x")

    def test_mapping_variables_with_empty_spec(self) -> None:
        module = parse_module({"name": "m", "variables": {"repository_name": None}, "outputs": {"u": "url"}})
        assert module.inputs[0].name == "repository_name"
        assert module.inputs[0].default is ABSENT

    def test_duplicate_list_entries_preserved(self) -> None:
        module = parse_module(
            {
                "name": "m",
                "variables": [{"name": "tags", "type": "map(string)"}, {"name": "tags", "type": "map(string)"}],
                "outputs": {"u": "url"},
            }
        )
        assert module.input_names == ["tags", "tags"]

    def test_map_alias(self) -> None:
        module = parse_module(
            {"name": "m", "variables": [{"name": "tags", "type": "map<string,string>"}], "outputs": {"u": "url"}}
        )
        assert module.inputs[0].type is VariableType.MAP_STRING

    def test_unsupported_type(self) -> None:
        with pytest.raises(DefinitionParseError, match="unsupported variable type"):
            parse_module({"name": "m", "variables": [{"name": "n", "type": "number"}], "outputs": {}})

    def test_unknown_top_level_key(self) -> None:
        with pytest.raises(DefinitionParseError):
            parse_module({"name": "m", "resources": []})

    def test_missing_name(self) -> None:
        with pytest.raises(DefinitionParseError):
            parse_module({"variables": []})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(DefinitionParseError, match="must be a mapping"):
            parse_module(["name", "m"])

    def test_mapping_variable_with_matching_name(self) -> None:
        module = parse_module(
            {"name": "m", "variables": {"repository_name": {"name": "repository_name"}}, "outputs": {"u": "url"}}
        )
        assert module.input_names == ["repository_name"]

    def test_mapping_variable_with_conflicting_name(self) -> None:
        with pytest.raises(DefinitionParseError, match="conflicting name"):
            parse_module({"name": "m", "variables": {"repository_name": {"name": "other"}}, "outputs": {"u": "url"}})
