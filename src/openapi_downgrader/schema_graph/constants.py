"""Keyword tables shared by the schema graph stages."""

from __future__ import annotations

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

UNSUPPORTED_JSON_SCHEMA_KEYS = (
    "$schema",
    "$id",
    "anchor",
    "defs",
    "$defs",
    "if",
    "then",
    "else",
    "dependentSchemas",
    "dependentRequired",
    "unevaluatedItems",
    "unevaluatedProperties",
    "propertyNames",
    "patternProperties",
    "contains",
    "minContains",
    "maxContains",
    "prefixItems",
    "contentEncoding",
    "contentMediaType",
    "contentSchema",
    "examples",
)
