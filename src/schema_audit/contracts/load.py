"""Load and validate JSON instances against the bundled contract schemas.

Usage::

    from schema_audit.contracts.load import validate_instance

    validate_instance(config_dict, "validaterc.schema.json")
    validate_instance(result_dict, "validation_result.schema.json")
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/schema_audit/data/schemas/`` relative to this file
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("schema_audit") / SCHEMA_DIR / name) as p:
        return p


def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=instance, schema=schema)
