"""OpenAPI 3.1 to 3.0 normalization exports."""

from .schema_normalizer import normalize_openapi31, normalize_schema_node

__all__ = ["normalize_openapi31", "normalize_schema_node"]
