"""Rewrite OpenAPI 3.1 (JSON Schema 2020-12) constructs into 3.0-compatible shapes."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

from openapi_downgrader.reference_resolution import format_pointer
from openapi_downgrader.schema_graph import UNSUPPORTED_JSON_SCHEMA_KEYS, iter_schema_nodes

_LOGGER = logging.getLogger("openapi_downgrader.normalize")

TARGET_OPENAPI_VERSION = "3.0.3"
UNSUPPORTED_BUCKET_KEY = "x-oas31-unsupported"
TYPE_ALTERNATIVES_KEY = "x-type-alternatives"


def normalize_openapi31(
    document: MutableMapping[str, Any], warnings: list[str] | None = None
) -> MutableMapping[str, Any]:
    """Normalize a 3.1 document in place; any other version is left untouched.

    Args:
      document: Parsed OpenAPI document.
      warnings: Caller-owned list collecting one message per rewrite, or `None`
        to skip collection.

    Returns:
      The same document object.
    """
    version = str(document.get("openapi") or "")
    if not version.startswith("3.1"):
        _LOGGER.debug("normalize_skip openapi=%s", version or "unknown")
        return document

    document["openapi"] = TARGET_OPENAPI_VERSION
    _warn(warnings, "Downgraded openapi version 3.1.x to 3.0.3 for conversion.")
    if "jsonSchemaDialect" in document:
        del document["jsonSchemaDialect"]
        _warn(warnings, "Removed jsonSchemaDialect (not supported in OpenAPI 3.0).")

    visited = 0
    for location in iter_schema_nodes(document, track_path=warnings is not None):
        normalize_schema_node(location.schema, location.path, warnings)
        visited += 1
    _LOGGER.debug("normalize_complete nodes=%d", visited)
    return document


def normalize_schema_node(
    schema: MutableMapping[str, Any],
    path: tuple[str | int, ...] = (),
    warnings: list[str] | None = None,
) -> None:
    """Apply every 3.1 to 3.0 rewrite to one schema node."""
    location = format_pointer(path)

    examples = schema.get("examples")
    if isinstance(examples, list) and examples and "example" not in schema:
        schema["example"] = examples[0]

    unsupported = {key: schema.pop(key) for key in UNSUPPORTED_JSON_SCHEMA_KEYS if key in schema}
    if unsupported:
        schema[UNSUPPORTED_BUCKET_KEY] = unsupported
        _warn(warnings, f"Removed unsupported JSON Schema keywords at {location}.")

    if isinstance(schema.get("type"), list):
        _collapse_type_list(schema, location, warnings)

    if "const" in schema:
        if "enum" not in schema:
            schema["enum"] = [schema["const"]]
        del schema["const"]
        _warn(warnings, f"Replaced const with enum at {location}.")

    for exclusive_key, bound_key in (
        ("exclusiveMinimum", "minimum"),
        ("exclusiveMaximum", "maximum"),
    ):
        bound = schema.get(exclusive_key)
        if not _is_number(bound):
            continue
        if bound_key in schema and schema[bound_key] != bound:
            _warn(warnings, f"{exclusive_key} overwrote {bound_key} at {location}.")
        schema[bound_key] = bound
        schema[exclusive_key] = True


def _collapse_type_list(
    schema: MutableMapping[str, Any], location: str, warnings: list[str] | None
) -> None:
    declared = schema["type"]
    types = [item for item in declared if item != "null"]
    if "null" in declared and schema.get("nullable") is None:
        schema["nullable"] = True

    if len(types) == 1:
        schema["type"] = types[0]
    elif types:
        schema["type"] = types[0]
        schema[TYPE_ALTERNATIVES_KEY] = types[1:]
        _warn(warnings, f"Collapsed multiple schema types at {location}.")
    else:
        del schema["type"]
        _warn(warnings, f"Dropped null-only schema type at {location}.")


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _warn(warnings: list[str] | None, message: str) -> None:
    _LOGGER.debug(message)
    if warnings is not None:
        warnings.append(message)
