"""Schema-level rewrites from OpenAPI 3.0 to Swagger 2.0."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Literal

from openapi_downgrader.reference_resolution import resolve_pointer

_LOGGER = logging.getLogger("openapi_downgrader.convert")

Direction = Literal["request", "response"]

_SCHEMA_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")
COMPONENT_SCHEMAS_POINTER = "#/components/schemas/"


def convert_schema(document: Any, schema: Any, direction: Direction | None = None) -> None:
    """Rewrite one schema and its nested schemas in place.

    `oneOf`/`anyOf` are dropped because Swagger 2.0 has no equivalent; the
    `allOf` wrapper is left for strict sanitization to flatten.
    """
    _SchemaConverter(document, direction).convert(schema)


class _SchemaConverter:
    def __init__(self, document: Any, direction: Direction | None) -> None:
        self._document = document
        self._direction = direction
        self._active: set[int] = set()

    def convert(self, schema: Any) -> None:
        if not isinstance(schema, dict) or id(schema) in self._active:
            return
        self._active.add(id(schema))
        try:
            self._convert_node(schema)
        finally:
            self._active.discard(id(schema))

    def _convert_node(self, schema: dict[str, Any]) -> None:
        for key in ("oneOf", "anyOf"):
            if key in schema:
                del schema[key]
                schema.pop("discriminator", None)

        members = schema.get("allOf")
        if isinstance(members, list):
            for member in members:
                self.convert(member)

        discriminator = schema.get("discriminator")
        if isinstance(discriminator, Mapping):
            mapping = discriminator.get("mapping")
            if isinstance(mapping, Mapping):
                convert_discriminator_mapping(self._document, mapping)
            if "propertyName" in discriminator:
                schema["discriminator"] = discriminator["propertyName"]
            else:
                del schema["discriminator"]

        properties = schema.get("properties")
        if isinstance(properties, dict):
            for name in list(properties):
                child = properties[name]
                if not isinstance(child, dict):
                    continue
                if child.get("writeOnly") is True and self._direction == "response":
                    del properties[name]
                else:
                    self.convert(child)
                    child.pop("writeOnly", None)

        items = schema.get("items")
        if isinstance(items, list):
            for item in items:
                self.convert(item)
        else:
            self.convert(items)
        self.convert(schema.get("additionalProperties"))

        if schema.get("nullable"):
            schema["x-nullable"] = True
        schema.pop("nullable", None)

        if "deprecated" in schema:
            schema.setdefault("x-deprecated", schema["deprecated"])
            del schema["deprecated"]


def convert_discriminator_mapping(document: Any, mapping: Mapping[str, Any]) -> None:
    """Tag each mapped subtype schema with its discriminator value."""
    for payload, name_or_ref in mapping.items():
        if not isinstance(name_or_ref, str):
            _LOGGER.warning("Ignoring %r for %s in discriminator.mapping.", name_or_ref, payload)
            continue

        schema = None
        if _SCHEMA_NAME_PATTERN.match(name_or_ref):
            schema = resolve_pointer(document, COMPONENT_SCHEMAS_POINTER + name_or_ref)
        if not isinstance(schema, dict):
            schema = resolve_pointer(document, name_or_ref)

        if isinstance(schema, dict):
            schema["x-discriminator-value"] = payload
            schema["x-ms-discriminator-value"] = payload
        else:
            _LOGGER.warning(
                "Unable to resolve %s for %s in discriminator.mapping.", name_or_ref, payload
            )
