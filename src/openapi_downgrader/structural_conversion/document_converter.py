"""Whole-document OpenAPI 3.0 to Swagger 2.0 conversion."""

from __future__ import annotations

import logging
import time
from collections.abc import MutableMapping
from typing import Any

from openapi_downgrader.reference_resolution import resolve_reference
from openapi_downgrader.schema_graph import HTTP_METHODS

from .parameter_conversion import convert_parameters, convert_request_body
from .response_conversion import convert_responses
from .schema_conversion import convert_schema
from .security_conversion import convert_security_schemes
from .server_conversion import convert_servers

_LOGGER = logging.getLogger("openapi_downgrader.convert")

SWAGGER_VERSION = "2.0"


def convert_to_swagger2(document: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Convert an OpenAPI 3.0 document into Swagger 2.0 in place.

    Raises:
      ReferenceResolutionError: If an external `$ref` is met while resolving
        path items, operations, parameters, request bodies or responses.
    """
    started_at = time.perf_counter()
    document["swagger"] = SWAGGER_VERSION
    convert_servers(document)
    operation_count = _convert_operations(document)

    components = document.get("components")
    if isinstance(components, MutableMapping):
        _convert_components(document, components)
        document["x-components"] = document.pop("components")

    fix_refs(document)
    _LOGGER.debug(
        "convert_done ops=%d elapsed=%.1fms",
        operation_count,
        (time.perf_counter() - started_at) * 1000,
    )
    return document


def _convert_operations(document: MutableMapping[str, Any]) -> int:
    paths = document.get("paths")
    if not isinstance(paths, MutableMapping):
        return 0
    operation_count = 0
    for path in list(paths):
        path_item = paths[path] = resolve_reference(document, paths[path], clone=True)
        if not isinstance(path_item, dict):
            continue
        convert_parameters(document, path_item)
        for method in HTTP_METHODS:
            if method not in path_item:
                continue
            operation = path_item[method] = resolve_reference(
                document, path_item[method], clone=True
            )
            if not isinstance(operation, dict):
                continue
            operation_count += 1
            convert_request_body(document, operation)
            convert_responses(document, operation)
    return operation_count


def _convert_components(
    document: MutableMapping[str, Any], components: MutableMapping[str, Any]
) -> None:
    if "schemas" in components:
        definitions = components["schemas"]
        document["definitions"] = definitions
        if isinstance(definitions, MutableMapping):
            for schema in list(definitions.values()):
                convert_schema(document, schema)
        del components["schemas"]

    if "securitySchemes" in components:
        document["securityDefinitions"] = convert_security_schemes(components["securitySchemes"])
        del components["securitySchemes"]


def fix_ref(ref: str) -> str:
    return ref.replace("#/components/schemas/", "#/definitions/", 1).replace(
        "#/components/", "#/x-components/", 1
    )


def fix_refs(document: Any) -> None:
    """Point every `$ref` at its Swagger 2.0 container."""
    stack = [document]
    seen: set[int] = set()
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        if isinstance(node, list):
            stack.extend(node)
        elif isinstance(node, MutableMapping):
            for key, value in node.items():
                if key == "$ref" and isinstance(value, str):
                    node[key] = fix_ref(value)
                elif isinstance(value, dict | list):
                    stack.append(value)
