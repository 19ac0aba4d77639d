"""Canonical rule registry.

Single source of truth for the rule names accepted under ``schemas`` in a
``.validaterc`` file and carried on every emitted ``Finding.rule``.

Structure:
  SCHEMA_RULE_IDS     - every configurable schema rule
  NAMING_RULE_IDS     - rules driven by a case convention
  MESSAGES            - fixed user-facing message per rule (naming rules
                        format theirs at resolution time)
"""

from __future__ import annotations

# ── Shape rules ─────────────────────────────────────────────────────
INVALID_TYPE_FORMAT_PAIR = "invalid_type_format_pair"
ARRAY_OF_ARRAYS = "array_of_arrays"
NON_ARRAY_COMPOSITION = "non_array_composition"

# ── Description rules ───────────────────────────────────────────────
NO_SCHEMA_DESCRIPTION = "no_schema_description"
NO_PROPERTY_DESCRIPTION = "no_property_description"
DESCRIPTION_MENTIONS_JSON = "description_mentions_json"

# ── Naming rules ────────────────────────────────────────────────────
SNAKE_CASE_ONLY = "snake_case_only"
PROPERTY_CASE_CONVENTION = "property_case_convention"
ENUM_CASE_CONVENTION = "enum_case_convention"

# ── Whole-document rules ────────────────────────────────────────────
INCONSISTENT_PROPERTY_TYPE = "inconsistent_property_type"

# ── Buckets ─────────────────────────────────────────────────────────

NAMING_RULE_IDS: list[str] = sorted([
    SNAKE_CASE_ONLY,
    PROPERTY_CASE_CONVENTION,
    ENUM_CASE_CONVENTION,
])

SCHEMA_RULE_IDS: list[str] = sorted([
    INVALID_TYPE_FORMAT_PAIR,
    ARRAY_OF_ARRAYS,
    NON_ARRAY_COMPOSITION,
    NO_SCHEMA_DESCRIPTION,
    NO_PROPERTY_DESCRIPTION,
    DESCRIPTION_MENTIONS_JSON,
    INCONSISTENT_PROPERTY_TYPE,
    *NAMING_RULE_IDS,
])

MESSAGES: dict[str, str] = {
    INVALID_TYPE_FORMAT_PAIR: "Property type+format is not well-defined.",
    ARRAY_OF_ARRAYS: "Array properties should avoid having items of type array.",
    NON_ARRAY_COMPOSITION: "{keyword} value should be an array",
    NO_SCHEMA_DESCRIPTION: "Schema must have a non-empty description.",
    NO_PROPERTY_DESCRIPTION: (
        "Schema properties must have a description with content in it."
    ),
    DESCRIPTION_MENTIONS_JSON: (
        "Not all languages use JSON, so descriptions should not state "
        "that the model is a JSON object."
    ),
    INCONSISTENT_PROPERTY_TYPE: (
        "Properties {name} and {name} have the same name but different types"
    ),
}

SNAKE_CASE_PROPERTY_MESSAGE = "Property names must be lower snake case."
SNAKE_CASE_ENUM_MESSAGE = "Enum values must be lower snake case."
PROPERTY_CONVENTION_MESSAGE = "Property names must follow case convention: {convention}"
ENUM_CONVENTION_MESSAGE = "Enum values must follow case convention: {convention}"


def _assert_rule_registry_invariants() -> None:
    """Fail fast on invariant violations.

    Called at import time so CI and local runs catch issues immediately.
    """
    import re

    rule_re = re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$")

    def _check_bucket(name: str, ids: list[str]) -> None:
        if ids != sorted(ids):
            raise AssertionError(f"{name} must be sorted")
        if len(ids) != len(set(ids)):
            raise AssertionError(f"{name} must contain unique IDs")
        bad = [x for x in ids if not rule_re.match(x)]
        if bad:
            raise AssertionError(f"{name} contains invalid rule IDs: {bad}")

    _check_bucket("NAMING_RULE_IDS", NAMING_RULE_IDS)
    _check_bucket("SCHEMA_RULE_IDS", SCHEMA_RULE_IDS)

    if not set(NAMING_RULE_IDS) <= set(SCHEMA_RULE_IDS):
        raise AssertionError("NAMING_RULE_IDS must be a subset of SCHEMA_RULE_IDS")

    unknown = set(MESSAGES) - set(SCHEMA_RULE_IDS)
    if unknown:
        raise AssertionError(f"MESSAGES references unknown rules: {sorted(unknown)}")


_assert_rule_registry_invariants()
