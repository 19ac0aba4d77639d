"""Duplicate property detector.

Every property declaration visited by the walker is recorded with its
``(type, format)`` signature.  Once the walk is complete, each name whose
declarations disagree yields one warning per additional distinct signature,
in the order the conflicts were discovered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from schema_audit import rules
from schema_audit.core.results import ResultAggregator
from schema_audit.model import Severity
from schema_audit.model.finding import PathSegment

Signature = tuple[Any, Any]


@dataclass(frozen=True, slots=True)
class PropertySite:
    name: str
    signature: Signature
    path: tuple[PathSegment, ...]


class DuplicatePropertyDetector:
    """Accumulates property sites for one validation call."""

    def __init__(self, ignore: frozenset[str] = frozenset()) -> None:
        self._ignore = ignore
        self._sites: dict[str, dict[Signature, PropertySite]] = {}
        self._conflicts: list[tuple[PropertySite, PropertySite]] = []

    def record(
        self,
        name: str,
        type_: Any,
        format_: Any,
        path: Sequence[PathSegment],
    ) -> None:
        if type_ is None or name in self._ignore:
            return
        signature = (_hashable(type_), _hashable(format_))
        seen = self._sites.setdefault(name, {})
        if signature in seen:
            return
        site = PropertySite(name=name, signature=signature, path=tuple(path))
        if seen:
            first = next(iter(seen.values()))
            self._conflicts.append((first, site))
        seen[signature] = site

    @property
    def conflicts(self) -> list[tuple[PropertySite, PropertySite]]:
        return list(self._conflicts)

    def report(self, results: ResultAggregator, severity: Severity) -> None:
        if severity is Severity.OFF:
            return
        template = rules.MESSAGES[rules.INCONSISTENT_PROPERTY_TYPE]
        for first, conflicting in self._conflicts:
            results.add(
                severity,
                first.path,
                template.format(name=first.name),
                rule=rules.INCONSISTENT_PROPERTY_TYPE,
                related_path=conflicting.path,
            )


def _hashable(value: Any) -> Any:
    # ``type: [string, "null"]`` shows up in the wild.
    if isinstance(value, list):
        return tuple(_hashable(v) for v in value)
    if isinstance(value, dict):
        return tuple(sorted((str(k), _hashable(v)) for k, v in value.items()))
    return value
