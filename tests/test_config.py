"""Rule configuration resolution and .validaterc loading."""

from __future__ import annotations

from pathlib import Path

import jsonschema
import pytest

from schema_audit.contracts.load import validate_instance
from schema_audit.core.config import (
    CONFIG_SCHEMA,
    ConfigurationError,
    SchemaRules,
    find_config_file,
    load_config,
)
from schema_audit.core.conventions import CaseConvention
from schema_audit.model import Severity


# ── SchemaRules.from_config ─────────────────────────────────────────


class TestDefaults:
    def test_default_severities(self) -> None:
        r = SchemaRules.from_config(None)
        assert r.invalid_type_format_pair is Severity.ERROR
        assert r.non_array_composition is Severity.ERROR
        assert r.no_schema_description is Severity.WARNING
        assert r.no_property_description is Severity.WARNING
        assert r.description_mentions_json is Severity.WARNING
        assert r.array_of_arrays is Severity.WARNING
        assert r.inconsistent_property_type is Severity.WARNING
        assert r.inconsistent_property_type_ignore == frozenset()

    def test_snake_case_only_governs_both_checks_by_default(self) -> None:
        r = SchemaRules.from_config({})
        assert r.property_naming.rule == "snake_case_only"
        assert r.property_naming.message == "Property names must be lower snake case."
        assert r.enum_naming.rule == "snake_case_only"
        assert r.enum_naming.message == "Enum values must be lower snake case."

    def test_explicit_defaults_when_legacy_off(self) -> None:
        r = SchemaRules.from_config({"schemas": {"snake_case_only": "off"}})
        assert r.property_naming is None
        assert r.enum_naming.rule == "enum_case_convention"
        assert r.enum_naming.severity is Severity.WARNING
        assert r.enum_naming.convention is CaseConvention.LOWER_SNAKE_CASE


class TestOverrides:
    def test_shared_section(self) -> None:
        r = SchemaRules.from_config({"shared": {"schemas": {"array_of_arrays": "error"}}})
        assert r.array_of_arrays is Severity.ERROR

    def test_inconsistent_property_type_severity_only_list(self) -> None:
        r = SchemaRules.from_config({"schemas": {"inconsistent_property_type": ["off"]}})
        assert r.inconsistent_property_type is Severity.OFF
        assert r.inconsistent_property_type_ignore == frozenset()

    def test_unknown_keys_are_ignored(self) -> None:
        r = SchemaRules.from_config({"schemas": {"not_a_rule": "error"}, "paths": {}})
        assert r == SchemaRules.from_config(None)

    def test_property_convention(self) -> None:
        r = SchemaRules.from_config({
            "schemas": {
                "snake_case_only": "off",
                "property_case_convention": ["error", "upper_camel_case"],
            }
        })
        assert r.property_naming.severity is Severity.ERROR
        assert r.property_naming.convention is CaseConvention.UPPER_CAMEL_CASE
        assert r.property_naming.message == (
            "Property names must follow case convention: upper_camel_case"
        )

    def test_inconsistent_property_type_ignore_list(self) -> None:
        r = SchemaRules.from_config(
            {"schemas": {"inconsistent_property_type": ["error", ["code", "type"]]}}
        )
        assert r.inconsistent_property_type is Severity.ERROR
        assert r.inconsistent_property_type_ignore == frozenset({"code", "type"})

    def test_disabled_rule_convention_is_not_parsed(self) -> None:
        r = SchemaRules.from_config({
            "schemas": {
                "snake_case_only": "off",
                "property_case_convention": ["off", "no_such_case"],
            }
        })
        assert r.property_naming is None


class TestErrors:
    def test_unknown_severity(self) -> None:
        with pytest.raises(ConfigurationError, match="array_of_arrays"):
            SchemaRules.from_config({"schemas": {"array_of_arrays": "loud"}})

    def test_unknown_convention_on_enabled_rule(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown case convention"):
            SchemaRules.from_config({
                "schemas": {
                    "snake_case_only": "off",
                    "enum_case_convention": ["warning", "no_such_case"],
                }
            })

    def test_non_mapping_config(self) -> None:
        with pytest.raises(ConfigurationError):
            SchemaRules.from_config(["schemas"])

    def test_non_mapping_section(self) -> None:
        with pytest.raises(ConfigurationError):
            SchemaRules.from_config({"schemas": "warning"})

    def test_bad_ignore_list(self) -> None:
        with pytest.raises(ConfigurationError):
            SchemaRules.from_config({"schemas": {"inconsistent_property_type": ["warning", "code"]}})

    def test_severity_is_case_sensitive(self) -> None:
        with pytest.raises(ConfigurationError, match="array_of_arrays"):
            SchemaRules.from_config({"schemas": {"array_of_arrays": "OFF"}})

    def test_bad_convention_checked_while_snake_case_only_is_on(self) -> None:
        with pytest.raises(ConfigurationError, match="enum_case_convention"):
            SchemaRules.from_config({"schemas": {"enum_case_convention": "warning"}})


class TestContractAgreement:
    """A configuration is accepted by the resolver iff the contract accepts it."""

    @pytest.mark.parametrize(
        "config",
        [
            {"schemas": {"array_of_arrays": "OFF"}},
            {"schemas": {"property_case_convention": "warning"}},
            {"schemas": {"enum_case_convention": ["off", 3]}},
            {"schemas": {"enum_case_convention": ["off"]}},
            {"schemas": {"inconsistent_property_type": ["warning", ["a"], "extra"]}},
            {"schemas": {"inconsistent_property_type": []}},
            {"shared": "x"},
        ],
    )
    def test_rejected_by_both(self, config: dict) -> None:
        with pytest.raises(ConfigurationError):
            SchemaRules.from_config(config)
        with pytest.raises(jsonschema.ValidationError):
            validate_instance(config, CONFIG_SCHEMA)

    @pytest.mark.parametrize(
        "config",
        [
            {},
            {"schemas": {"array_of_arrays": "off"}},
            {
                "schemas": {
                    "snake_case_only": "off",
                    "property_case_convention": ["error", "upper_camel_case"],
                }
            },
            {"schemas": {"inconsistent_property_type": ["warning"]}},
            {"shared": {"schemas": {"no_schema_description": "error"}}},
        ],
    )
    def test_accepted_by_both(self, config: dict) -> None:
        SchemaRules.from_config(config)
        validate_instance(config, CONFIG_SCHEMA)


# ── files ───────────────────────────────────────────────────────────


class TestFiles:
    def test_load_yaml_config(self, tmp_path: Path) -> None:
        rc = tmp_path / ".validaterc"
        rc.write_text("schemas:\n  snake_case_only: 'off'\n", encoding="utf-8")
        assert load_config(rc) == {"schemas": {"snake_case_only": "off"}}

    def test_load_json_config(self, tmp_path: Path) -> None:
        rc = tmp_path / ".validaterc"
        rc.write_text('{"shared": {"schemas": {"array_of_arrays": "error"}}}', encoding="utf-8")
        assert load_config(rc)["shared"]["schemas"]["array_of_arrays"] == "error"

    def test_empty_file_is_empty_config(self, tmp_path: Path) -> None:
        rc = tmp_path / ".validaterc"
        rc.write_text("", encoding="utf-8")
        assert load_config(rc) == {}

    def test_contract_violation(self, tmp_path: Path) -> None:
        rc = tmp_path / ".validaterc"
        rc.write_text('{"schemas": {"array_of_arrays": "loud"}}', encoding="utf-8")
        with pytest.raises(jsonschema.ValidationError):
            load_config(rc)

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        rc = tmp_path / ".validaterc"
        rc.write_text("- error\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(rc)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="cannot read"):
            load_config(tmp_path / "nope")

    def test_find_config_file_walks_up(self, tmp_path: Path) -> None:
        rc = tmp_path / ".validaterc"
        rc.write_text("{}", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        doc = nested / "api.yaml"
        doc.write_text("swagger: '2.0'\n", encoding="utf-8")
        assert find_config_file(doc) == rc.resolve()
        assert find_config_file(nested) == rc.resolve()
