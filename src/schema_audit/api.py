"""
schema_audit.api
================

Programmatic entrypoints for using schema_audit as a library.

Goals:
  - No argparse / CLI dependencies
  - One call walks one document to completion and returns a fresh result
  - Stable, JSON-friendly outputs (``ValidationResult.to_dict()``)

Non-goals:
  - Owning presentation (callers render results)
  - Resolving external ``$ref`` targets

Usage::

    from schema_audit.api import validate, validate_file

    result = validate(spec_dict, {"schemas": {"snake_case_only": "off"}}, is_oas3=True)
    loaded, result = validate_file("openapi.yaml")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from schema_audit.core.config import SchemaRules, find_config_file, load_config
from schema_audit.core.duplicates import DuplicatePropertyDetector
from schema_audit.core.loader import LoadedDocument, load_document
from schema_audit.core.refs import RefResolver
from schema_audit.core.results import LineMap, ResultAggregator
from schema_audit.core.walker import SchemaWalker
from schema_audit.model.finding import ValidationResult

_logger = logging.getLogger(__name__)


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


# ── validate ────────────────────────────────────────────────────────


def validate(
    document: Mapping[str, Any],
    config: Optional[Mapping[str, Any]] = None,
    *,
    is_oas3: bool = False,
    line_map: Optional[LineMap] = None,
) -> ValidationResult:
    """Validate the schema-shaped parts of an already-parsed API document.

    Parameters
    ----------
    document:
        Parsed Swagger 2 / OpenAPI 3 document. Never mutated.
    config:
        ``.validaterc``-shaped mapping; ``None`` applies the defaults.
    is_oas3:
        Selects the OpenAPI 3 shape family (Swagger 2 otherwise).
    line_map:
        Optional ``path tuple -> line`` index from the loader, used to
        attribute findings to source lines.

    Raises
    ------
    TypeError
        If *document* is not a mapping.
    ConfigurationError
        If an enabled rule names an unknown severity or case convention.
    """
    if not isinstance(document, Mapping):
        raise TypeError(
            f"validate: document must be a mapping, got {type(document).__name__}"
        )

    schema_rules = SchemaRules.from_config(config)
    results = ResultAggregator(line_map=line_map)
    duplicates = DuplicatePropertyDetector(ignore=schema_rules.inconsistent_property_type_ignore)
    walker = SchemaWalker(
        rules=schema_rules,
        resolver=RefResolver(document),
        results=results,
        duplicates=duplicates,
        is_oas3=is_oas3,
    )

    walker.walk_document(document)
    duplicates.report(results, schema_rules.inconsistent_property_type)

    result = results.result()
    _logger.debug(
        "validation finished: %d error(s), %d warning(s)",
        len(result.errors),
        len(result.warnings),
    )
    return result


# ── validate_file ───────────────────────────────────────────────────


def validate_file(
    path: str | Path,
    *,
    config: Optional[Mapping[str, Any]] = None,
    config_path: str | Path | None = None,
    is_oas3: Optional[bool] = None,
) -> tuple[LoadedDocument, ValidationResult]:
    """Load a YAML/JSON document from disk and validate it.

    Configuration precedence: explicit *config* mapping, then *config_path*,
    then the nearest ``.validaterc`` above the document, then defaults.
    The shape family is detected from the ``openapi`` key unless *is_oas3*
    is given.

    Raises
    ------
    DocumentLoadError
        If the document cannot be read or parsed.
    """
    loaded = load_document(_to_path(path))

    if config is None:
        rc = _to_path(config_path) if config_path is not None else find_config_file(loaded.path)
        if rc is not None:
            config = load_config(rc)

    oas3 = loaded.is_oas3 if is_oas3 is None else is_oas3
    result = validate(loaded.spec, config, is_oas3=oas3, line_map=loaded.line_map)
    return loaded, result
