"""Result aggregation: buckets findings by configured severity."""

from __future__ import annotations

from typing import Mapping, Sequence

from schema_audit.model import Severity
from schema_audit.model.finding import Finding, PathSegment, ValidationResult

LineMap = Mapping[tuple[str, ...], int]


def line_for(path: Sequence[PathSegment], line_map: LineMap | None) -> int | None:
    """Line of *path* in the source text, or of its nearest mapped ancestor."""
    if not line_map:
        return None
    key = tuple(str(seg) for seg in path)
    while key:
        line = line_map.get(key)
        if line is not None:
            return line
        key = key[:-1]
    return None


class ResultAggregator:
    """Collects findings in evaluation order; ``off`` severities are dropped."""

    def __init__(self, line_map: LineMap | None = None) -> None:
        self._line_map = line_map
        self.errors: list[Finding] = []
        self.warnings: list[Finding] = []

    def add(
        self,
        severity: Severity,
        path: Sequence[PathSegment],
        message: str,
        *,
        rule: str,
        related_path: Sequence[PathSegment] | None = None,
    ) -> None:
        if severity is Severity.OFF:
            return
        finding = Finding(
            path=list(path),
            message=message,
            rule=rule,
            line=line_for(path, self._line_map),
            related_path=list(related_path) if related_path is not None else None,
        )
        if severity is Severity.ERROR:
            self.errors.append(finding)
        else:
            self.warnings.append(finding)

    def result(self) -> ValidationResult:
        return ValidationResult(errors=list(self.errors), warnings=list(self.warnings))
