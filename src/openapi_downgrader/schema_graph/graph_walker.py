"""Discovery and traversal of every schema node in an OpenAPI 3.x document."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from openapi_downgrader.reference_resolution import format_pointer, resolve_pointer

from .constants import HTTP_METHODS

PathTuple = tuple[str | int, ...]

_COMPOSITION_KEYS = ("allOf", "anyOf", "oneOf")


@dataclass(frozen=True)
class SchemaLocation:
    """One reachable schema node and, when tracked, where it was found."""

    schema: dict[str, Any]
    path: PathTuple

    @property
    def pointer(self) -> str:
        return format_pointer(self.path)


def iter_schema_nodes(document: Any, *, track_path: bool = False) -> Iterator[SchemaLocation]:
    """Yield each schema node reachable from the document exactly once.

    Nodes are deduplicated by identity, so shared or cyclic object graphs are
    visited once. Children are read after the consumer has handled the yielded
    node, which lets callers rewrite a node in place before it is expanded.
    """
    if not isinstance(document, Mapping):
        return
    collector = _SchemaCollector(document, track_path=track_path)
    collector.discover()
    yield from collector.drain()


class _SchemaCollector:
    """Worklist state for schema root discovery and expansion."""

    def __init__(self, document: Mapping[str, Any], *, track_path: bool) -> None:
        self._document = document
        self._track_path = track_path
        self._seen: set[int] = set()
        self._stack: list[tuple[dict[str, Any], PathTuple]] = []
        self._path_items: list[tuple[Any, PathTuple]] = []
        self._seen_path_items: set[int] = set()

    def discover(self) -> None:
        for section in ("paths", "webhooks"):
            entries = self._document.get(section)
            if isinstance(entries, Mapping):
                for name, path_item in entries.items():
                    self._path_items.append((path_item, (section, name)))
        components = self._document.get("components")
        if isinstance(components, Mapping):
            self._walk_components(components, ("components",))

        while self._path_items:
            path_item, path = self._path_items.pop()
            self._walk_path_item(path_item, path)

    def drain(self) -> Iterator[SchemaLocation]:
        while self._stack:
            schema, path = self._stack.pop()
            yield SchemaLocation(schema=schema, path=path)

            for key in _COMPOSITION_KEYS:
                members = schema.get(key)
                if isinstance(members, list):
                    for index, member in enumerate(members):
                        self._push_schema(member, path + (key, index))
            self._push_schema(schema.get("not"), path + ("not",))
            items = schema.get("items")
            if isinstance(items, list):
                for index, item in enumerate(items):
                    self._push_schema(item, path + ("items", index))
            else:
                self._push_schema(items, path + ("items",))
            properties = schema.get("properties")
            if isinstance(properties, Mapping):
                for name, child in properties.items():
                    self._push_schema(child, path + ("properties", name))
            self._push_schema(schema.get("additionalProperties"), path + ("additionalProperties",))

    def _push_schema(self, schema: Any, path: PathTuple) -> None:
        if not isinstance(schema, dict) or id(schema) in self._seen:
            return
        self._seen.add(id(schema))
        self._stack.append((schema, path if self._track_path else ()))

    def _walk_content(self, content: Any, path: PathTuple) -> None:
        if not isinstance(content, Mapping):
            return
        for media_type, media in content.items():
            if isinstance(media, Mapping):
                self._push_schema(media.get("schema"), path + (media_type, "schema"))

    def _walk_parameter(self, parameter: Any, path: PathTuple) -> None:
        if not isinstance(parameter, Mapping):
            return
        self._push_schema(parameter.get("schema"), path + ("schema",))
        self._walk_content(parameter.get("content"), path + ("content",))

    def _walk_parameters(self, parameters: Any, path: PathTuple) -> None:
        if not isinstance(parameters, list):
            return
        for index, parameter in enumerate(parameters):
            self._walk_parameter(parameter, path + ("parameters", index))

    def _walk_header(self, header: Any, path: PathTuple) -> None:
        # Header objects share the schema/content shape of parameters.
        self._walk_parameter(header, path)

    def _walk_response(self, response: Any, path: PathTuple) -> None:
        if not isinstance(response, Mapping):
            return
        self._walk_content(response.get("content"), path + ("content",))
        headers = response.get("headers")
        if isinstance(headers, Mapping):
            for name, header in headers.items():
                self._walk_header(header, path + ("headers", name))

    def _walk_request_body(self, request_body: Any, path: PathTuple) -> None:
        if isinstance(request_body, Mapping):
            self._walk_content(request_body.get("content"), path + ("content",))

    def _walk_callback(self, callback: Any, path: PathTuple) -> None:
        if not isinstance(callback, Mapping):
            return
        for expression, path_item in callback.items():
            self._path_items.append((path_item, path + (expression,)))

    def _walk_callbacks(self, callbacks: Any, path: PathTuple) -> None:
        if not isinstance(callbacks, Mapping):
            return
        for name, callback in callbacks.items():
            self._walk_callback(callback, path + (name,))

    def _walk_operation(self, operation: Any, path: PathTuple) -> None:
        if not isinstance(operation, Mapping):
            return
        self._walk_parameters(operation.get("parameters"), path)
        self._walk_request_body(operation.get("requestBody"), path + ("requestBody",))
        responses = operation.get("responses")
        if isinstance(responses, Mapping):
            for code, response in responses.items():
                self._walk_response(response, path + ("responses", code))
        self._walk_callbacks(operation.get("callbacks"), path + ("callbacks",))

    def _walk_path_item(self, path_item: Any, path: PathTuple) -> None:
        if isinstance(path_item, Mapping) and "$ref" in path_item:
            path_item = resolve_pointer(self._document, path_item["$ref"])
        if not isinstance(path_item, Mapping) or id(path_item) in self._seen_path_items:
            return
        self._seen_path_items.add(id(path_item))
        self._walk_parameters(path_item.get("parameters"), path)
        for method in HTTP_METHODS:
            if path_item.get(method):
                self._walk_operation(path_item[method], path + (method,))
        self._walk_callbacks(path_item.get("callbacks"), path + ("callbacks",))

    def _walk_components(self, components: Mapping[str, Any], path: PathTuple) -> None:
        schemas = components.get("schemas")
        if isinstance(schemas, Mapping):
            for name, schema in schemas.items():
                self._push_schema(schema, path + ("schemas", name))
        for section, walker in (
            ("parameters", self._walk_parameter),
            ("requestBodies", self._walk_request_body),
            ("responses", self._walk_response),
            ("headers", self._walk_header),
            ("callbacks", self._walk_callback),
        ):
            entries = components.get(section)
            if isinstance(entries, Mapping):
                for name, entry in entries.items():
                    walker(entry, path + (section, name))
        path_items = components.get("pathItems")
        if isinstance(path_items, Mapping):
            for name, path_item in path_items.items():
                self._path_items.append((path_item, path + ("pathItems", name)))
