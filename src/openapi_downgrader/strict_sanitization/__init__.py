"""Strict Swagger 2.0 sanitization exports."""

from .allof_flattening import AllOfFlattener, backfill_schema_type, repair_dangling_ref
from .swagger_sanitizer import is_schema_like, sanitize_schema_node, sanitize_swagger2

__all__ = [
    "AllOfFlattener",
    "backfill_schema_type",
    "is_schema_like",
    "repair_dangling_ref",
    "sanitize_schema_node",
    "sanitize_swagger2",
]
