"""Draft-4 schema validity enforcement for Swagger 2.0 documents."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from openapi_downgrader.schema_graph import HTTP_METHODS, UNSUPPORTED_JSON_SCHEMA_KEYS

from .allof_flattening import AllOfFlattener, backfill_schema_type, repair_dangling_ref

_LOGGER = logging.getLogger("openapi_downgrader.sanitize")

SANITIZE_PASSES = 2
STRICT_STRIPPED_KEYS = UNSUPPORTED_JSON_SCHEMA_KEYS + (
    "oneOf",
    "anyOf",
    "not",
    "const",
    "nullable",
    "deprecated",
    "writeOnly",
)
_SCHEMA_MARKER_KEYS = (
    "$ref",
    "type",
    "format",
    "properties",
    "items",
    "allOf",
    "anyOf",
    "oneOf",
    "enum",
    "discriminator",
)
_CHILD_LIST_KEYS = ("allOf", "anyOf", "oneOf")


def sanitize_swagger2(
    document: MutableMapping[str, Any], *, strip_extensions: bool = False
) -> MutableMapping[str, Any]:
    """Make every schema of a Swagger 2.0 document draft-4 compliant, in place.

    The second pass picks up `allOf` chains that only became reachable after
    the first pass merged their owners.
    """
    flattener = AllOfFlattener(document)
    for pass_number in range(1, SANITIZE_PASSES + 1):
        sanitized = _run_pass(document, flattener, strip_extensions=strip_extensions)
        _LOGGER.debug("sanitize_pass pass=%d schemas=%d", pass_number, sanitized)
    return document


def is_schema_like(node: Mapping[str, Any]) -> bool:
    if any(key in node for key in _SCHEMA_MARKER_KEYS):
        return True
    return bool(node.get("additionalProperties"))


def sanitize_schema_node(
    document: Any,
    schema: dict[str, Any],
    flattener: AllOfFlattener,
    *,
    strip_extensions: bool = False,
) -> None:
    """Apply the strict rewrites to one schema node."""
    if strip_extensions:
        for key in [key for key in schema if isinstance(key, str) and key.startswith("x-")]:
            del schema[key]
    schema.pop("example", None)
    schema.pop("examples", None)

    if schema.get("allOf"):
        flattener.flatten(schema)
    elif "allOf" in schema:
        del schema["allOf"]

    repaired = repair_dangling_ref(document, schema.get("$ref"))
    if repaired is not None:
        schema["$ref"] = repaired

    for key in STRICT_STRIPPED_KEYS:
        schema.pop(key, None)
    if isinstance(schema.get("additionalProperties"), bool):
        del schema["additionalProperties"]
    backfill_schema_type(schema)


def _run_pass(
    document: MutableMapping[str, Any], flattener: AllOfFlattener, *, strip_extensions: bool
) -> int:
    stack = list(_iter_schema_roots(document))
    seen: set[int] = set()
    sanitized = 0
    while stack:
        node = stack.pop()
        if not isinstance(node, dict) or id(node) in seen:
            continue
        seen.add(id(node))
        if is_schema_like(node):
            sanitize_schema_node(document, node, flattener, strip_extensions=strip_extensions)
            sanitized += 1
        stack.extend(_iter_child_schemas(node))
    return sanitized


def _iter_child_schemas(schema: Mapping[str, Any]) -> Iterator[Any]:
    properties = schema.get("properties")
    if isinstance(properties, Mapping):
        yield from properties.values()
    items = schema.get("items")
    if isinstance(items, list):
        yield from items
    else:
        yield items
    additional = schema.get("additionalProperties")
    if isinstance(additional, Mapping):
        yield additional
    for key in _CHILD_LIST_KEYS:
        members = schema.get(key)
        if isinstance(members, list):
            yield from members
    yield schema.get("not")


def _iter_schema_roots(document: Mapping[str, Any]) -> Iterator[Any]:
    definitions = document.get("definitions")
    if isinstance(definitions, Mapping):
        yield from definitions.values()
    parameters = document.get("parameters")
    if isinstance(parameters, Mapping):
        for parameter in parameters.values():
            yield from _iter_parameter_schemas(parameter)
    responses = document.get("responses")
    if isinstance(responses, Mapping):
        for response in responses.values():
            yield from _iter_response_schemas(response)

    paths = document.get("paths")
    if not isinstance(paths, Mapping):
        return
    for path_item in paths.values():
        if not isinstance(path_item, Mapping):
            continue
        yield from _iter_parameter_list_schemas(path_item.get("parameters"))
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, Mapping):
                continue
            yield from _iter_parameter_list_schemas(operation.get("parameters"))
            operation_responses = operation.get("responses")
            if isinstance(operation_responses, Mapping):
                for response in operation_responses.values():
                    yield from _iter_response_schemas(response)


def _iter_parameter_list_schemas(parameters: Any) -> Iterator[Any]:
    if isinstance(parameters, list):
        for parameter in parameters:
            yield from _iter_parameter_schemas(parameter)


def _iter_parameter_schemas(parameter: Any) -> Iterator[Any]:
    if not isinstance(parameter, Mapping):
        return
    if parameter.get("in") == "body":
        yield parameter.get("schema")
    else:
        yield parameter.get("items")


def _iter_response_schemas(response: Any) -> Iterator[Any]:
    if not isinstance(response, Mapping):
        return
    yield response.get("schema")
    headers = response.get("headers")
    if isinstance(headers, Mapping):
        for header in headers.values():
            if isinstance(header, Mapping):
                yield header.get("items")
