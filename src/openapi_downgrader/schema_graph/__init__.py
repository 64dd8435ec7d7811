"""Schema graph traversal exports."""

from .constants import HTTP_METHODS, UNSUPPORTED_JSON_SCHEMA_KEYS
from .graph_walker import SchemaLocation, iter_schema_nodes

__all__ = [
    "HTTP_METHODS",
    "UNSUPPORTED_JSON_SCHEMA_KEYS",
    "SchemaLocation",
    "iter_schema_nodes",
]
