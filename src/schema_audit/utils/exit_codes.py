"""Centralized exit-code contract for the CLI.

Code  Meaning
----  -------
  0   Success - no error-severity findings (warnings allowed)
  1   Violation - at least one error-severity finding
  2   Error - usage error, unreadable document, invalid configuration
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
