"""Case conventions for property names and enum values.

Each convention is a member of a closed enumeration mapped to a compiled
full-match pattern; ``matches`` never dispatches on arbitrary strings.
"""

from __future__ import annotations

import re
from enum import Enum

VENDOR_EXTENSION_PREFIX = "x-"


class CaseConvention(str, Enum):
    LOWER_SNAKE_CASE = "lower_snake_case"
    UPPER_SNAKE_CASE = "upper_snake_case"
    LOWER_CAMEL_CASE = "lower_camel_case"
    UPPER_CAMEL_CASE = "upper_camel_case"
    K8S_CAMEL_CASE = "k8s_camel_case"
    LOWER_DASH_CASE = "lower_dash_case"
    UPPER_DASH_CASE = "upper_dash_case"


_PATTERNS: dict[CaseConvention, re.Pattern[str]] = {
    CaseConvention.LOWER_SNAKE_CASE: re.compile(r"[a-z0-9]+(?:_[a-z0-9]+)*"),
    CaseConvention.UPPER_SNAKE_CASE: re.compile(r"[A-Z0-9]+(?:_[A-Z0-9]+)*"),
    CaseConvention.LOWER_CAMEL_CASE: re.compile(r"[a-z][a-z0-9]*(?:[A-Z][a-z0-9]*)*"),
    CaseConvention.UPPER_CAMEL_CASE: re.compile(r"(?:[A-Z][a-z0-9]*)+"),
    # Like lower camel case but tolerates acronym runs (``podIP``, ``apiURLPath``).
    CaseConvention.K8S_CAMEL_CASE: re.compile(r"[a-z][a-z0-9]*(?:[A-Z]+[a-z0-9]*)*"),
    CaseConvention.LOWER_DASH_CASE: re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*"),
    CaseConvention.UPPER_DASH_CASE: re.compile(r"[A-Z0-9]+(?:-[A-Z0-9]+)*"),
}


def parse_convention(name: str | CaseConvention) -> CaseConvention:
    """Return the enum member for *name*; raises ``ValueError`` if unknown."""
    if isinstance(name, CaseConvention):
        return name
    try:
        return CaseConvention(name)
    except ValueError:
        known = ", ".join(c.value for c in CaseConvention)
        raise ValueError(f"unknown case convention {name!r} (expected one of: {known})") from None


def matches(value: str, convention: str | CaseConvention) -> bool:
    """Return True when *value* is spelled according to *convention*."""
    return _PATTERNS[parse_convention(convention)].fullmatch(value) is not None


def is_vendor_extension(key: object) -> bool:
    """``x-*`` keys are never evaluated against a convention."""
    return isinstance(key, str) and key.startswith(VENDOR_EXTENSION_PREFIX)
