"""Parameter and request body rewrites from OpenAPI 3.0 to Swagger 2.0."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from openapi_downgrader.reference_resolution import is_local_reference, resolve_reference

from .media_types import (
    OCTET_STREAM,
    concrete_media_types,
    is_form_media_type,
    media_ranges,
    supported_media_types,
)
from .schema_conversion import convert_schema

SCHEMA_PROPERTIES = (
    "format",
    "minimum",
    "maximum",
    "exclusiveMinimum",
    "exclusiveMaximum",
    "minLength",
    "maxLength",
    "multipleOf",
    "minItems",
    "maxItems",
    "uniqueItems",
    "minProperties",
    "maxProperties",
    "additionalProperties",
    "pattern",
    "enum",
    "default",
    "type",
    "items",
)

BINARY_SCHEMA = {"type": "string", "format": "binary"}

_MISSING = object()


def convert_parameters(document: Any, owner: MutableMapping[str, Any]) -> None:
    """Convert the `parameters` list of a path item or operation in place."""
    if "parameters" not in owner:
        return
    parameters = owner["parameters"] or []
    owner["parameters"] = parameters
    for index, parameter in enumerate(parameters):
        parameter = parameters[index] = resolve_reference(document, parameter, clone=True)
        if isinstance(parameter, dict):
            _convert_parameter(document, parameter)


def convert_request_body(document: Any, operation: MutableMapping[str, Any]) -> None:
    """Replace `requestBody` with body or formData parameters, then convert all parameters."""
    operation["parameters"] = operation.get("parameters") or []
    if operation.get("requestBody"):
        _request_body_to_parameters(document, operation)
    operation.pop("requestBody", None)
    convert_parameters(document, operation)


def _request_body_to_parameters(document: Any, operation: MutableMapping[str, Any]) -> None:
    parameters: list[Any] = operation["parameters"]
    param = resolve_reference(document, operation["requestBody"], clone=True)
    if not isinstance(param, dict):
        return
    content = param.pop("content", None)
    if not isinstance(content, Mapping) or not content:
        return

    ranges = media_ranges(content)
    concrete = concrete_media_types(ranges)
    supported = supported_media_types(content)
    content_key = supported[0] if supported else None

    if is_form_media_type(content_key):
        param["name"] = "body"
        operation["consumes"] = concrete
        param["in"] = "formData"
        schema = resolve_reference(document, _media_schema(content, content_key), clone=True)
        param["schema"] = schema
        if (
            isinstance(schema, dict)
            and schema.get("type") == "object"
            and isinstance(schema.get("properties"), Mapping)
        ):
            required = schema.get("required") or []
            for name, property_schema in schema["properties"].items():
                if isinstance(property_schema, Mapping) and property_schema.get("readOnly"):
                    continue
                form_param: dict[str, Any] = {
                    "name": name,
                    "in": "formData",
                    "schema": property_schema,
                }
                if name in required:
                    form_param["required"] = True
                parameters.append(form_param)
        else:
            parameters.append(param)
    elif content_key is not None:
        param["name"] = "body"
        operation["consumes"] = concrete
        param["in"] = "body"
        param["schema"] = _substitute_external(document, _media_schema(content, content_key))
        parameters.append(param)
    elif ranges:
        operation["consumes"] = concrete or [OCTET_STREAM]
        param["in"] = "body"
        param.setdefault("name", "file")
        param.pop("type", None)
        schema = _media_schema(content, ranges[0])
        param["schema"] = dict(BINARY_SCHEMA) if schema is None else schema
        parameters.append(param)

    if param.get("schema") is not None:
        convert_schema(document, param["schema"], "request")


def _media_schema(content: Mapping[str, Any], media_type: str | None) -> Any:
    media = content.get(media_type) if media_type is not None else None
    if isinstance(media, Mapping):
        return media.get("schema")
    return None


def _substitute_external(document: Any, schema: Any) -> Any:
    """Inline a `$ref` schema that does not look local; local refs stay as references."""
    if isinstance(schema, Mapping) and "$ref" in schema and not is_local_reference(schema["$ref"]):
        return resolve_reference(document, schema, clone=True)
    return schema


def _convert_parameter(document: Any, param: dict[str, Any]) -> None:
    if param.get("in") != "body":
        _copy_schema_properties(document, param)
        if not param.get("description"):
            schema = resolve_reference(document, param.get("schema"))
            if isinstance(schema, Mapping) and schema.get("description"):
                param["description"] = schema["description"]
        param.pop("schema", None)
        param.pop("allowReserved", None)
        if "example" in param:
            param["x-example"] = param.pop("example")

    if param.get("type") == "array" and ("style" in param or "collectionFormat" not in param):
        collection_format = _collection_format(param)
        if collection_format is None:
            param.pop("collectionFormat", None)
        else:
            param["collectionFormat"] = collection_format
    param.pop("style", None)
    param.pop("explode", None)


def _copy_schema_properties(document: Any, param: dict[str, Any]) -> None:
    schema = resolve_reference(document, param.get("schema"), clone=True)
    if not isinstance(schema, Mapping):
        return
    for key in SCHEMA_PROPERTIES:
        value = schema.get(key, _MISSING)
        if value is _MISSING:
            continue
        if key == "additionalProperties" and isinstance(value, bool):
            continue
        param[key] = value
    for key, value in schema.items():
        if isinstance(key, str) and key.startswith("x-") and key not in param:
            param[key] = value


def _collection_format(param: Mapping[str, Any]) -> str | None:
    default_style = "form" if param.get("in") in ("query", "cookie") else "simple"
    style = param.get("style") or default_style
    explode = param.get("explode")
    if style == "matrix":
        return None if explode else "csv"
    if style == "label":
        return None
    if style == "simple":
        return "csv"
    if style == "spaceDelimited":
        return "ssv"
    if style == "pipeDelimited":
        return "pipes"
    # Registered spelling only; misspelled variants fall through to the form default.
    if style == "deepObject":
        return "multi"
    return "csv" if explode is False else "multi"
