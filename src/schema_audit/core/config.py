"""Rule configuration: resolved once per validation call.

A ``.validaterc`` file (JSON or YAML) carries rule severities under a
``schemas`` section, optionally nested under ``shared``::

    {
      "schemas": {
        "snake_case_only": "off",
        "property_case_convention": ["warning", "lower_camel_case"],
        "inconsistent_property_type": ["warning", ["code", "type"]]
      }
    }

Absent keys fall back to ``DEFAULT_SCHEMA_RULES``; unknown keys are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from schema_audit import rules
from schema_audit.contracts.load import validate_instance
from schema_audit.core.conventions import CaseConvention, parse_convention
from schema_audit.model import Severity

_logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".validaterc"
CONFIG_SCHEMA = "validaterc.schema.json"

DEFAULT_SCHEMA_RULES: dict[str, Any] = {
    rules.INVALID_TYPE_FORMAT_PAIR: "error",
    rules.NO_SCHEMA_DESCRIPTION: "warning",
    rules.NO_PROPERTY_DESCRIPTION: "warning",
    rules.DESCRIPTION_MENTIONS_JSON: "warning",
    rules.ARRAY_OF_ARRAYS: "warning",
    rules.NON_ARRAY_COMPOSITION: "error",
    rules.SNAKE_CASE_ONLY: "warning",
    rules.PROPERTY_CASE_CONVENTION: ["off", CaseConvention.LOWER_SNAKE_CASE.value],
    rules.ENUM_CASE_CONVENTION: ["warning", CaseConvention.LOWER_SNAKE_CASE.value],
    rules.INCONSISTENT_PROPERTY_TYPE: "warning",
}


class ConfigurationError(ValueError):
    """Raised when a rule configuration cannot be resolved."""


@dataclass(frozen=True)
class NamingCheck:
    """A resolved case-convention check: severity, convention and message."""

    rule: str
    severity: Severity
    convention: CaseConvention
    message: str


@dataclass(frozen=True)
class SchemaRules:
    """Immutable per-call view of the ``schemas`` rule section."""

    invalid_type_format_pair: Severity = Severity.ERROR
    no_schema_description: Severity = Severity.WARNING
    no_property_description: Severity = Severity.WARNING
    description_mentions_json: Severity = Severity.WARNING
    array_of_arrays: Severity = Severity.WARNING
    non_array_composition: Severity = Severity.ERROR
    inconsistent_property_type: Severity = Severity.WARNING
    inconsistent_property_type_ignore: frozenset[str] = field(default_factory=frozenset)
    property_naming: NamingCheck | None = None
    enum_naming: NamingCheck | None = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> SchemaRules:
        """Resolve *config* (a ``.validaterc``-shaped mapping) against defaults."""
        section = {**DEFAULT_SCHEMA_RULES, **_schemas_section(config)}

        dup_severity, ignore = _parse_inconsistent_property_type(
            section[rules.INCONSISTENT_PROPERTY_TYPE]
        )
        property_naming, enum_naming = _resolve_naming(section)

        return cls(
            invalid_type_format_pair=_parse_severity(
                section[rules.INVALID_TYPE_FORMAT_PAIR], rules.INVALID_TYPE_FORMAT_PAIR
            ),
            no_schema_description=_parse_severity(
                section[rules.NO_SCHEMA_DESCRIPTION], rules.NO_SCHEMA_DESCRIPTION
            ),
            no_property_description=_parse_severity(
                section[rules.NO_PROPERTY_DESCRIPTION], rules.NO_PROPERTY_DESCRIPTION
            ),
            description_mentions_json=_parse_severity(
                section[rules.DESCRIPTION_MENTIONS_JSON], rules.DESCRIPTION_MENTIONS_JSON
            ),
            array_of_arrays=_parse_severity(
                section[rules.ARRAY_OF_ARRAYS], rules.ARRAY_OF_ARRAYS
            ),
            non_array_composition=_parse_severity(
                section[rules.NON_ARRAY_COMPOSITION], rules.NON_ARRAY_COMPOSITION
            ),
            inconsistent_property_type=dup_severity,
            inconsistent_property_type_ignore=ignore,
            property_naming=property_naming,
            enum_naming=enum_naming,
        )


# ── parsing helpers ─────────────────────────────────────────────────


def _schemas_section(config: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if config is None:
        return {}
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            f"configuration must be a mapping, got {type(config).__name__}"
        )
    shared = config.get("shared")
    if shared is not None and not isinstance(shared, Mapping):
        raise ConfigurationError("'shared' configuration must be a mapping")
    if isinstance(shared, Mapping) and "schemas" in shared:
        config = shared
    section = config.get("schemas", {})
    if not isinstance(section, Mapping):
        raise ConfigurationError("'schemas' configuration must be a mapping")
    return section


def _parse_severity(value: Any, rule: str) -> Severity:
    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        try:
            return Severity(value)
        except ValueError:
            pass
    raise ConfigurationError(
        f"{rule}: severity must be one of 'error', 'warning', 'off' (got {value!r})"
    )


def _parse_convention_setting(value: Any, rule: str) -> tuple[Severity, Any]:
    """Split ``[severity, convention]``; the convention is left unparsed."""
    if isinstance(value, (list, tuple)) and len(value) == 2 and isinstance(value[1], str):
        return _parse_severity(value[0], rule), value[1]
    raise ConfigurationError(
        f"{rule}: expected [severity, convention_name] (got {value!r})"
    )


def _naming_check(rule: str, severity: Severity, convention: Any, template: str) -> NamingCheck:
    try:
        conv = parse_convention(convention)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{rule}: {exc}") from None
    return NamingCheck(
        rule=rule,
        severity=severity,
        convention=conv,
        message=template.format(convention=conv.value),
    )


def _resolve_naming(
    section: Mapping[str, Any],
) -> tuple[NamingCheck | None, NamingCheck | None]:
    """Apply the ``snake_case_only`` override before the explicit conventions.

    Both settings are shape-checked; disabled rules never have their
    convention name parsed.
    """
    property_setting = _parse_convention_setting(
        section[rules.PROPERTY_CASE_CONVENTION], rules.PROPERTY_CASE_CONVENTION
    )
    enum_setting = _parse_convention_setting(
        section[rules.ENUM_CASE_CONVENTION], rules.ENUM_CASE_CONVENTION
    )
    legacy = _parse_severity(section[rules.SNAKE_CASE_ONLY], rules.SNAKE_CASE_ONLY)
    if legacy.enabled:
        return (
            NamingCheck(
                rule=rules.SNAKE_CASE_ONLY,
                severity=legacy,
                convention=CaseConvention.LOWER_SNAKE_CASE,
                message=rules.SNAKE_CASE_PROPERTY_MESSAGE,
            ),
            NamingCheck(
                rule=rules.SNAKE_CASE_ONLY,
                severity=legacy,
                convention=CaseConvention.LOWER_SNAKE_CASE,
                message=rules.SNAKE_CASE_ENUM_MESSAGE,
            ),
        )

    property_naming = None
    severity, convention = property_setting
    if severity.enabled:
        property_naming = _naming_check(
            rules.PROPERTY_CASE_CONVENTION,
            severity,
            convention,
            rules.PROPERTY_CONVENTION_MESSAGE,
        )

    enum_naming = None
    severity, convention = enum_setting
    if severity.enabled:
        enum_naming = _naming_check(
            rules.ENUM_CASE_CONVENTION,
            severity,
            convention,
            rules.ENUM_CONVENTION_MESSAGE,
        )

    return property_naming, enum_naming


def _parse_inconsistent_property_type(value: Any) -> tuple[Severity, frozenset[str]]:
    """Accept ``"warning"`` or ``["warning", ["code", "type"]]``."""
    rule = rules.INCONSISTENT_PROPERTY_TYPE
    if isinstance(value, (list, tuple)):
        if not 1 <= len(value) <= 2:
            raise ConfigurationError(f"{rule}: expected [severity, [names...]]")
        severity = _parse_severity(value[0], rule)
        ignore = value[1] if len(value) > 1 else []
        if not isinstance(ignore, (list, tuple)) or not all(isinstance(n, str) for n in ignore):
            raise ConfigurationError(f"{rule}: ignored names must be a list of strings")
        return severity, frozenset(ignore)
    return _parse_severity(value, rule), frozenset()


# ── config files ────────────────────────────────────────────────────


def find_config_file(start: Path) -> Path | None:
    """Return the nearest ``.validaterc`` in *start* or one of its parents."""
    start = start.resolve()
    if start.is_file():
        start = start.parent
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path) -> dict[str, Any]:
    """Load a JSON/YAML ``.validaterc`` and validate it against the bundled schema.

    Raises ``ConfigurationError`` for unreadable or non-mapping files and
    ``jsonschema.ValidationError`` for contract violations.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot read configuration {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"cannot parse configuration {path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: configuration must be a mapping")

    validate_instance(data, CONFIG_SCHEMA)
    _logger.debug("loaded configuration from %s", path)
    return data
