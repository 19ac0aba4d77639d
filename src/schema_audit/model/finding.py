"""Finding: one reported error or warning at a document path."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

PathSegment = Union[str, int]


@dataclass(frozen=True, slots=True)
class Finding:
    """Immutable finding emitted by a schema rule.

    ``path`` addresses the offending node from the document root.
    ``related_path`` is only set by rules that correlate two locations.
    """

    path: list[PathSegment]
    message: str
    rule: str
    line: int | None = None
    related_path: list[PathSegment] | None = None

    @property
    def dotted_path(self) -> str:
        return ".".join(str(seg) for seg in self.path)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        d: dict = {
            "path": list(self.path),
            "message": self.message,
            "rule": self.rule,
        }
        if self.line is not None:
            d["line"] = self.line
        if self.related_path is not None:
            d["related_path"] = list(self.related_path)
        return d


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Errors and warnings in the order the rules produced them."""

    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> dict:
        return {
            "errors": [f.to_dict() for f in self.errors],
            "warnings": [f.to_dict() for f in self.warnings],
        }
