"""Response rewrites from OpenAPI 3.0 to Swagger 2.0."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from openapi_downgrader.reference_resolution import is_local_reference, resolve_reference

from .media_types import OCTET_STREAM, is_json_media_type
from .schema_conversion import convert_schema


def convert_responses(document: Any, operation: MutableMapping[str, Any]) -> None:
    """Move response `content` into `schema`/`examples` and collect `produces`."""
    responses = operation.get("responses")
    if not isinstance(responses, MutableMapping):
        return
    for code in list(responses):
        response = responses[code] = resolve_reference(document, responses[code], clone=True)
        if not isinstance(response, dict):
            continue
        content = response.get("content")
        if isinstance(content, Mapping) and content:
            _convert_content(document, operation, response, content)
        _convert_headers(document, response)
        response.pop("content", None)


def _convert_content(
    document: Any,
    operation: MutableMapping[str, Any],
    response: dict[str, Any],
    content: Mapping[str, Any],
) -> None:
    any_schema = None
    json_schema = None
    for media_range, media in content.items():
        media_type = OCTET_STREAM if "*" in media_range else media_range
        produces = operation.setdefault("produces", [])
        if media_type not in produces:
            produces.append(media_type)

        if not isinstance(media, Mapping):
            continue
        schema = media.get("schema")
        if any_schema is None:
            any_schema = schema
        if json_schema is None and is_json_media_type(media_type):
            json_schema = schema
        if media.get("example") is not None:
            response.setdefault("examples", {})[media_type] = media["example"]

    if any_schema is None:
        return
    schema = any_schema if json_schema is None else json_schema
    if isinstance(schema, Mapping) and "$ref" in schema and not is_local_reference(schema["$ref"]):
        schema = resolve_reference(document, schema, clone=True)
    response["schema"] = schema
    convert_schema(document, schema, "response")


def _convert_headers(document: Any, response: dict[str, Any]) -> None:
    headers = response.get("headers")
    if not isinstance(headers, MutableMapping):
        return
    for name in list(headers):
        header = resolve_reference(document, headers[name], clone=True)
        if isinstance(header, dict) and isinstance(header.get("schema"), Mapping):
            schema = header.pop("schema")
            for key in ("type", "format"):
                if key in schema:
                    header[key] = schema[key]
                else:
                    header.pop(key, None)
        headers[name] = header
