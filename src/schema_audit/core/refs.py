"""Local ``$ref`` resolution.

Only in-document pointers are supported:

- ``#/definitions/<name>`` (Swagger 2)
- ``#/components/<kind>/<name>`` (OpenAPI 3)

Anything else (external files, URLs, deeper pointers) is treated as
unresolved.  A resolver instance is scoped to one validation call.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

_logger = logging.getLogger(__name__)

_LOCAL_REF_RE = re.compile(
    r"^#/(?:definitions/(?P<definition>[^/]+)"
    r"|components/(?P<kind>[^/]+)/(?P<name>[^/]+))$"
)


def is_ref(node: Any) -> bool:
    return isinstance(node, Mapping) and isinstance(node.get("$ref"), str)


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def parse_ref(ref: Any) -> tuple[str, ...] | None:
    """Split a supported local ref into document keys, or return None."""
    if not isinstance(ref, str):
        return None
    m = _LOCAL_REF_RE.match(ref)
    if not m:
        return None
    if m.group("definition") is not None:
        return ("definitions", _unescape(m.group("definition")))
    return ("components", _unescape(m.group("kind")), _unescape(m.group("name")))


class RefResolver:
    """Resolve ``$ref`` pointers against a single document (cycle-safe)."""

    def __init__(self, document: Mapping[str, Any]) -> None:
        self._document = document

    def lookup(self, ref: Any) -> Mapping[str, Any] | None:
        """Follow exactly one ``$ref`` hop."""
        keys = parse_ref(ref)
        if keys is None:
            _logger.debug("unsupported or external $ref skipped: %r", ref)
            return None
        node: Any = self._document
        for key in keys:
            if not isinstance(node, Mapping) or key not in node:
                _logger.debug("unresolved $ref skipped: %s", ref)
                return None
            node = node[key]
        return node if isinstance(node, Mapping) else None

    def resolve(self, node: Any) -> Mapping[str, Any] | None:
        """Follow a chain of refs from *node* to the first non-ref schema.

        Returns *node* itself when it is not a ref, and None when the chain
        is unresolved or re-enters a ref already being resolved.
        """
        if not isinstance(node, Mapping):
            return None
        resolving: set[str] = set()
        while is_ref(node):
            ref = node["$ref"]
            if ref in resolving:
                _logger.debug("$ref cycle at %s; resolution skipped", ref)
                return None
            resolving.add(ref)
            node = self.lookup(ref)
            if node is None:
                return None
        return node
