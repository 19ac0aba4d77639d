"""Document loader: YAML/JSON text to a mapping plus a path → line index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

_logger = logging.getLogger(__name__)

LineMap = dict[tuple[str, ...], int]


class DocumentLoadError(Exception):
    """Raised when a document cannot be read or is not a mapping."""


@dataclass(frozen=True)
class LoadedDocument:
    path: Path
    spec: dict[str, Any]
    line_map: LineMap = field(default_factory=dict)
    is_oas3: bool = False


def detect_oas3(spec: dict[str, Any]) -> bool:
    """OpenAPI 3 documents declare ``openapi: 3.x``; everything else is Swagger 2."""
    version = spec.get("openapi")
    return isinstance(version, str) and version.startswith("3")


def build_line_map(text: str) -> LineMap:
    """Map every mapping key / sequence item path to its 1-based source line."""
    root = yaml.compose(text, Loader=yaml.SafeLoader)
    line_map: LineMap = {}
    if root is None:
        return line_map

    stack: list[tuple[yaml.Node, tuple[str, ...]]] = [(root, ())]
    seen: set[int] = set()
    while stack:
        node, path = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        if isinstance(node, yaml.MappingNode):
            for key_node, value_node in node.value:
                child = (*path, str(key_node.value))
                line_map.setdefault(child, key_node.start_mark.line + 1)
                stack.append((value_node, child))
        elif isinstance(node, yaml.SequenceNode):
            for index, item in enumerate(node.value):
                child = (*path, str(index))
                line_map.setdefault(child, item.start_mark.line + 1)
                stack.append((item, child))
    return line_map


def load_document(path: Path) -> LoadedDocument:
    """Read *path* (YAML or JSON) into a ``LoadedDocument``."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"cannot read {path}: {exc}") from exc

    try:
        spec = yaml.safe_load(text)
        line_map = build_line_map(text)
    except yaml.YAMLError as exc:
        raise DocumentLoadError(f"cannot parse {path}: {exc}") from exc

    if not isinstance(spec, dict):
        raise DocumentLoadError(f"{path}: top level of an API document must be a mapping")

    _logger.debug("loaded %s (%d mapped locations)", path, len(line_map))
    return LoadedDocument(path=path, spec=spec, line_map=line_map, is_oas3=detect_oas3(spec))
