"""Enums shared across the engine, CLI and web layers."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Configured severity of a rule: ``off`` disables it entirely."""

    ERROR = "error"
    WARNING = "warning"
    OFF = "off"

    @property
    def enabled(self) -> bool:
        return self is not Severity.OFF
