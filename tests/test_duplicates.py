"""Same-named properties with different (type, format) signatures."""

from __future__ import annotations

from pathlib import Path

from schema_audit.api import validate, validate_file
from schema_audit.core.duplicates import DuplicatePropertyDetector
from schema_audit.core.results import ResultAggregator
from schema_audit.model import Severity

FIXTURE = Path(__file__).resolve().parent / "fixtures" / "oas3" / "duplicateProperties.yaml"

KID_REQUEST_PROP = [
    "paths", "/kid", "post", "requestBody", "content",
    "multipart/form-data", "schema", "properties", "person_prop",
]


class TestDetector:
    def test_same_signature_is_not_a_conflict(self) -> None:
        det = DuplicatePropertyDetector()
        det.record("name", "string", None, ["a"])
        det.record("name", "string", None, ["b"])
        assert det.conflicts == []

    def test_untyped_declarations_are_skipped(self) -> None:
        det = DuplicatePropertyDetector()
        det.record("name", "string", None, ["a"])
        det.record("name", None, None, ["b"])
        assert det.conflicts == []

    def test_ignored_names(self) -> None:
        det = DuplicatePropertyDetector(ignore=frozenset({"code"}))
        det.record("code", "string", None, ["a"])
        det.record("code", "integer", "int32", ["b"])
        assert det.conflicts == []

    def test_one_conflict_per_distinct_signature(self) -> None:
        det = DuplicatePropertyDetector()
        det.record("id", "string", None, ["a"])
        det.record("id", "integer", "int32", ["b"])
        det.record("id", "integer", "int32", ["c"])
        det.record("id", "integer", "int64", ["d"])
        assert [(f.path, c.path) for f, c in det.conflicts] == [
            (("a",), ("b",)),
            (("a",), ("d",)),
        ]

    def test_report_off_adds_nothing(self) -> None:
        det = DuplicatePropertyDetector()
        det.record("id", "string", None, ["a"])
        det.record("id", "integer", None, ["b"])
        results = ResultAggregator()
        det.report(results, Severity.OFF)
        assert results.warnings == []
        assert results.errors == []


class TestDocument:
    def test_fixture_warnings_with_lines(self) -> None:
        loaded, res = validate_file(FIXTURE)
        assert loaded.is_oas3 is True
        assert res.errors == []
        assert [w.message for w in res.warnings] == [
            "Properties person_prop and person_prop have the same name but different types",
            "Properties name and name have the same name but different types",
        ]
        first, second = res.warnings
        assert first.path == KID_REQUEST_PROP
        assert first.related_path == ["components", "schemas", "person", "properties", "person_prop"]
        assert first.line == 14
        assert second.path == ["components", "schemas", "person", "properties", "name"]
        assert second.related_path == ["components", "schemas", "kid", "properties", "name"]
        assert second.line == 26
        assert {w.rule for w in res.warnings} == {"inconsistent_property_type"}

    def test_ignore_list_from_config(self) -> None:
        config = {"schemas": {"inconsistent_property_type": ["warning", ["name"]]}}
        _, res = validate_file(FIXTURE, config=config)
        assert [w.path[-1] for w in res.warnings] == ["person_prop"]

    def test_error_severity(self) -> None:
        _, res = validate_file(FIXTURE, config={"schemas": {"inconsistent_property_type": "error"}})
        assert len(res.errors) == 2
        assert res.warnings == []

    def test_ref_property_uses_resolved_signature(self) -> None:
        spec = {
            "definitions": {
                "Id": {"type": "string", "description": "an id"},
                "A": {
                    "type": "object",
                    "description": "a",
                    "properties": {"ident": {"$ref": "#/definitions/Id"}},
                },
                "B": {
                    "type": "object",
                    "description": "b",
                    "properties": {
                        "ident": {"type": "integer", "format": "int64", "description": "an id"}
                    },
                },
            }
        }
        res = validate(spec)
        assert [(w.path, w.related_path) for w in res.warnings] == [(
            ["definitions", "A", "properties", "ident"],
            ["definitions", "B", "properties", "ident"],
        )]

    def test_unresolved_ref_property_is_skipped(self) -> None:
        spec = {
            "definitions": {
                "A": {
                    "type": "object",
                    "description": "a",
                    "properties": {"ident": {"$ref": "other.yaml#/Id"}},
                },
                "B": {
                    "type": "object",
                    "description": "b",
                    "properties": {"ident": {"type": "integer", "description": "an id"}},
                },
            }
        }
        res = validate(spec)
        assert res.warnings == []

    def test_first_site_follows_document_order(self) -> None:
        prop_a = {"type": "string", "description": "an id"}
        prop_b = {"type": "integer", "description": "an id"}
        paths_first = {
            "paths": {
                "/a": {
                    "get": {
                        "parameters": [{
                            "name": "body",
                            "in": "body",
                            "schema": {"type": "object", "properties": {"ident": prop_a}},
                        }]
                    }
                }
            },
            "definitions": {
                "B": {"type": "object", "description": "b", "properties": {"ident": prop_b}}
            },
        }
        res = validate(paths_first)
        assert [w.path for w in res.warnings] == [
            ["paths", "/a", "get", "parameters", "0", "schema", "properties", "ident"]
        ]
        assert res.warnings[0].related_path == ["definitions", "B", "properties", "ident"]

        definitions_first = {
            "definitions": paths_first["definitions"],
            "paths": paths_first["paths"],
        }
        res = validate(definitions_first)
        assert [w.path for w in res.warnings] == [["definitions", "B", "properties", "ident"]]
