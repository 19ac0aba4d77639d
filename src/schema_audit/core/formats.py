"""Well-defined ``(type, format)`` pairs for schema nodes."""

from __future__ import annotations

from typing import Any, Mapping

FILE_TYPE = "file"

# An absent format is always acceptable for a known type.
WELL_DEFINED_FORMATS: Mapping[str, frozenset[str]] = {
    "integer": frozenset({"int32", "int64"}),
    "number": frozenset({"float", "double"}),
    "string": frozenset({
        "byte",
        "binary",
        "date",
        "date-time",
        "password",
        "email",
        "uri",
        "url",
        "uuid",
    }),
    "boolean": frozenset(),
    "object": frozenset(),
    "array": frozenset(),
}


def is_well_defined(type_: Any, format_: Any = None, *, allow_file: bool = False) -> bool:
    """Return True when *type_* / *format_* is a recognised combination.

    ``file`` is only meaningful at the root of a Swagger 2 body/response
    schema; callers pass ``allow_file`` for that position.
    """
    if type_ == FILE_TYPE:
        return allow_file and format_ is None
    if not isinstance(type_, str) or type_ not in WELL_DEFINED_FORMATS:
        return False
    if format_ is None:
        return True
    return format_ in WELL_DEFINED_FORMATS[type_]
