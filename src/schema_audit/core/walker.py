"""Schema tree walker: the recursive descent engine.

The walker enumerates every schema-bearing location of a Swagger 2 or
OpenAPI 3 document (definitions, component schemas, parameters, request
bodies, responses) and descends each one through its four nesting
relations: ``properties``, ``items``, ``allOf``/``oneOf``/``anyOf`` and
``$ref``.  At every visited node it evaluates, in this order:

1. type/format well-definedness
2. description presence (definition roots and properties)
3. JSON mentioned in an object description
4. array of arrays
5. property-name convention
6. enum-value convention

``$ref`` nodes are never descended: the referenced schema is validated once
at its own definition site.  The resolver is only consulted to recover the
referenced ``(type, format)`` for duplicate-property detection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from schema_audit import rules
from schema_audit.core.config import NamingCheck, SchemaRules
from schema_audit.core.conventions import is_vendor_extension, matches
from schema_audit.core.duplicates import DuplicatePropertyDetector
from schema_audit.core.formats import is_well_defined
from schema_audit.core.refs import RefResolver, is_ref
from schema_audit.core.results import ResultAggregator
from schema_audit.model.finding import PathSegment

_logger = logging.getLogger(__name__)

COMPOSITION_KEYWORDS = ("allOf", "oneOf", "anyOf")

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Rules that never fire for an ``x-*`` property key.  Type/format and
# array-of-arrays checks still apply to the value of such a property.
VENDOR_EXTENSION_EXEMPT_RULES = frozenset({
    rules.SNAKE_CASE_ONLY,
    rules.PROPERTY_CASE_CONVENTION,
    rules.NO_PROPERTY_DESCRIPTION,
    rules.DESCRIPTION_MENTIONS_JSON,
})

NodePath = list[PathSegment]


# ── node shape ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class NodeShape:
    """Keys of one schema node, read once before rule dispatch.

    A ``$ref`` node carries nothing else: its target is validated at its
    own definition site.
    """

    is_ref: bool = False
    type: Any = None
    format: Any = None
    properties: Mapping[str, Any] | None = None
    items: Any = None
    compositions: tuple[str, ...] = ()


def shape_of(node: Mapping[str, Any]) -> NodeShape:
    if is_ref(node):
        return NodeShape(is_ref=True)

    props = node.get("properties")
    return NodeShape(
        type=node.get("type"),
        format=node.get("format"),
        properties=props if isinstance(props, Mapping) else None,
        items=node.get("items"),
        compositions=tuple(k for k in COMPOSITION_KEYWORDS if k in node),
    )


def exempt_rules(property_name: str | None) -> frozenset[str]:
    """Rules that do not apply to the property called *property_name*."""
    if property_name is not None and is_vendor_extension(property_name):
        return VENDOR_EXTENSION_EXEMPT_RULES
    return frozenset()


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


# ── entry points ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class EntryPoint:
    """A traversal root: ``type: file`` is only tolerated here."""

    node: Mapping[str, Any]
    path: tuple[PathSegment, ...]
    definition: bool = False


def _mapping_items(value: Any) -> Iterator[tuple[Any, Any]]:
    if isinstance(value, Mapping):
        yield from value.items()


def _named_schemas(section: Any, path: NodePath) -> Iterator[EntryPoint]:
    for name, schema in _mapping_items(section):
        if isinstance(schema, Mapping):
            yield EntryPoint(schema, (*path, name), definition=True)


def _content_schemas(container: Any, path: NodePath) -> Iterator[EntryPoint]:
    if not isinstance(container, Mapping) or is_ref(container):
        return
    for media_type, media in _mapping_items(container.get("content")):
        if isinstance(media, Mapping) and isinstance(media.get("schema"), Mapping):
            yield EntryPoint(media["schema"], (*path, "content", media_type, "schema"))


def _parameter_schemas(param: Any, path: NodePath) -> Iterator[EntryPoint]:
    if not isinstance(param, Mapping) or is_ref(param):
        return
    if isinstance(param.get("schema"), Mapping):
        yield EntryPoint(param["schema"], (*path, "schema"))
    elif isinstance(param.get("content"), Mapping):
        yield from _content_schemas(param, path)
    elif any(k in param for k in ("type", "items", "enum")):
        # Non-body parameters carry their schema inline.
        yield EntryPoint(param, tuple(path))


def _parameter_list(params: Any, path: NodePath) -> Iterator[EntryPoint]:
    if isinstance(params, list):
        for index, param in enumerate(params):
            yield from _parameter_schemas(param, [*path, str(index)])


def _response_schemas(response: Any, path: NodePath, *, is_oas3: bool) -> Iterator[EntryPoint]:
    if not isinstance(response, Mapping) or is_ref(response):
        return
    if is_oas3:
        yield from _content_schemas(response, path)
    elif isinstance(response.get("schema"), Mapping):
        yield EntryPoint(response["schema"], (*path, "schema"))


def _component_entries(components: Any) -> Iterator[EntryPoint]:
    for kind, section in _mapping_items(components):
        base = ["components", kind]
        if kind == "schemas":
            yield from _named_schemas(section, base)
        elif kind in ("parameters", "headers"):
            for name, param in _mapping_items(section):
                yield from _parameter_schemas(param, [*base, name])
        elif kind == "responses":
            for name, response in _mapping_items(section):
                yield from _response_schemas(response, [*base, name], is_oas3=True)
        elif kind == "requestBodies":
            for name, body in _mapping_items(section):
                yield from _content_schemas(body, [*base, name])


def _path_entries(paths: Any, *, is_oas3: bool) -> Iterator[EntryPoint]:
    for route, path_item in _mapping_items(paths):
        if not isinstance(path_item, Mapping):
            continue
        base = ["paths", route]
        for key, operation in path_item.items():
            if key == "parameters":
                yield from _parameter_list(operation, [*base, "parameters"])
                continue
            if key not in HTTP_METHODS or not isinstance(operation, Mapping):
                continue
            op_path = [*base, key]
            yield from _parameter_list(operation.get("parameters"), [*op_path, "parameters"])
            if is_oas3:
                yield from _content_schemas(operation.get("requestBody"), [*op_path, "requestBody"])
            for status, response in _mapping_items(operation.get("responses")):
                yield from _response_schemas(
                    response, [*op_path, "responses", str(status)], is_oas3=is_oas3
                )


def iter_entry_points(document: Mapping[str, Any], *, is_oas3: bool) -> Iterator[EntryPoint]:
    """Yield every schema root of *document* for the selected shape family.

    Top-level sections are visited in document order, so first-seen
    locations follow the source text.
    """
    for key, section in document.items():
        # Swagger 2 style definitions are honoured under both families.
        if key == "definitions":
            yield from _named_schemas(section, ["definitions"])
        elif key == "paths":
            yield from _path_entries(section, is_oas3=is_oas3)
        elif is_oas3 and key == "components":
            yield from _component_entries(section)
        elif not is_oas3 and key == "parameters":
            for name, param in _mapping_items(section):
                yield from _parameter_schemas(param, ["parameters", name])
        elif not is_oas3 and key == "responses":
            for name, response in _mapping_items(section):
                yield from _response_schemas(response, ["responses", name], is_oas3=False)


# ── walker ───────────────────────────────────────────────────────────


class SchemaWalker:
    """Applies the schema rule set to every node reachable from the entry points."""

    def __init__(
        self,
        *,
        rules: SchemaRules,
        resolver: RefResolver,
        results: ResultAggregator,
        duplicates: DuplicatePropertyDetector,
        is_oas3: bool = False,
    ) -> None:
        self.rules = rules
        self.resolver = resolver
        self.results = results
        self.duplicates = duplicates
        self.is_oas3 = is_oas3
        self._active: set[int] = set()

    def walk_document(self, document: Mapping[str, Any]) -> int:
        """Walk every entry point of *document*; returns how many were visited."""
        count = 0
        for entry in iter_entry_points(document, is_oas3=self.is_oas3):
            self.walk(entry.node, list(entry.path), root=True, definition=entry.definition)
            count += 1
        _logger.debug(
            "walked %d schema entry point(s) (%s)", count, "OAS3" if self.is_oas3 else "Swagger 2"
        )
        return count

    def walk(
        self,
        node: Any,
        path: NodePath,
        *,
        root: bool = False,
        definition: bool = False,
        property_name: str | None = None,
    ) -> None:
        if not isinstance(node, Mapping):
            return
        # YAML aliases can make a subtree contain itself.
        if id(node) in self._active:
            _logger.debug("re-entered node at %s; descent skipped", ".".join(map(str, path)))
            return

        shape = shape_of(node)
        if property_name is not None:
            self._record_property(property_name, node, shape, path)

        if shape.is_ref:
            if property_name is not None:
                self._check_property_name(property_name, node, path)
            return

        self._check_type_format(shape, path, root=root)
        self._check_description(node, shape, path, definition=definition, property_name=property_name)
        self._check_array_of_arrays(shape, path)
        if property_name is not None:
            self._check_property_name(property_name, node, path)
        self._check_enum(node, path)

        self._active.add(id(node))
        try:
            self._descend(node, shape, path)
        finally:
            self._active.discard(id(node))

    def _descend(self, node: Mapping[str, Any], shape: NodeShape, path: NodePath) -> None:
        for keyword in shape.compositions:
            self._walk_composition(node[keyword], [*path, keyword], keyword)

        if shape.properties:
            for name, prop in shape.properties.items():
                self.walk(prop, [*path, "properties", name], property_name=str(name))

        if isinstance(shape.items, Mapping):
            self.walk(shape.items, [*path, "items"])

        additional = node.get("additionalProperties")
        if isinstance(additional, Mapping):
            self.walk(additional, [*path, "additionalProperties"])

        # A schema wrapped one level down (``prop: {schema: {...}}``).
        wrapped = node.get("schema")
        if isinstance(wrapped, Mapping):
            self.walk(wrapped, [*path, "schema"])

    def _walk_composition(self, members: Any, path: NodePath, keyword: str) -> None:
        if not isinstance(members, list):
            severity = self.rules.non_array_composition
            if severity.enabled:
                self.results.add(
                    severity,
                    path,
                    rules.MESSAGES[rules.NON_ARRAY_COMPOSITION].format(keyword=keyword),
                    rule=rules.NON_ARRAY_COMPOSITION,
                )
            return
        for index, member in enumerate(members):
            self.walk(member, [*path, index])

    # ── rules ────────────────────────────────────────────────────────

    def _check_type_format(self, shape: NodeShape, path: NodePath, *, root: bool) -> None:
        severity = self.rules.invalid_type_format_pair
        if not severity.enabled or shape.type is None:
            return
        allow_file = root and not self.is_oas3
        if not is_well_defined(shape.type, shape.format, allow_file=allow_file):
            self.results.add(
                severity,
                [*path, "type"],
                rules.MESSAGES[rules.INVALID_TYPE_FORMAT_PAIR],
                rule=rules.INVALID_TYPE_FORMAT_PAIR,
            )

    def _check_description(
        self,
        node: Mapping[str, Any],
        shape: NodeShape,
        path: NodePath,
        *,
        definition: bool,
        property_name: str | None,
    ) -> None:
        exempt = exempt_rules(property_name)
        if property_name is not None:
            severity = self.rules.no_property_description
            missing_path = [*path, "description"]
            message = rules.MESSAGES[rules.NO_PROPERTY_DESCRIPTION]
            rule = rules.NO_PROPERTY_DESCRIPTION
        elif definition:
            severity = self.rules.no_schema_description
            missing_path = path
            message = rules.MESSAGES[rules.NO_SCHEMA_DESCRIPTION]
            rule = rules.NO_SCHEMA_DESCRIPTION
        else:
            return

        description = node.get("description")
        if not _has_text(description):
            if severity.enabled and rule not in exempt:
                self.results.add(severity, missing_path, message, rule=rule)
            return

        severity = self.rules.description_mentions_json
        if not severity.enabled or rules.DESCRIPTION_MENTIONS_JSON in exempt:
            return
        if shape.type == "object" and "JSON" in description:
            self.results.add(
                severity,
                [*path, "description"],
                rules.MESSAGES[rules.DESCRIPTION_MENTIONS_JSON],
                rule=rules.DESCRIPTION_MENTIONS_JSON,
            )

    def _check_array_of_arrays(self, shape: NodeShape, path: NodePath) -> None:
        severity = self.rules.array_of_arrays
        if not severity.enabled or shape.type != "array":
            return
        items = shape.items
        if isinstance(items, Mapping) and items.get("type") == "array":
            self.results.add(
                severity,
                [*path, "items", "type"],
                rules.MESSAGES[rules.ARRAY_OF_ARRAYS],
                rule=rules.ARRAY_OF_ARRAYS,
            )

    def _check_property_name(self, name: str, node: Mapping[str, Any], path: NodePath) -> None:
        naming = self.rules.property_naming
        if naming is None:
            return
        if naming.rule in exempt_rules(name):
            return
        if node.get("deprecated") is True:
            return
        if not matches(name, naming.convention):
            self._report_naming(naming, path)

    def _check_enum(self, node: Mapping[str, Any], path: NodePath) -> None:
        naming = self.rules.enum_naming
        if naming is None:
            return
        values = node.get("enum")
        if not isinstance(values, list):
            return
        for index, value in enumerate(values):
            if isinstance(value, str) and not matches(value, naming.convention):
                self._report_naming(naming, [*path, "enum", str(index)])

    def _report_naming(self, naming: NamingCheck, path: NodePath) -> None:
        self.results.add(naming.severity, path, naming.message, rule=naming.rule)

    # ── duplicate detection feed ─────────────────────────────────────

    def _record_property(
        self, name: str, node: Mapping[str, Any], shape: NodeShape, path: NodePath
    ) -> None:
        if not self.rules.inconsistent_property_type.enabled:
            return
        if shape.is_ref:
            target = self.resolver.resolve(node)
            if target is None:
                return
            self.duplicates.record(name, target.get("type"), target.get("format"), path)
        else:
            self.duplicates.record(name, shape.type, shape.format, path)
