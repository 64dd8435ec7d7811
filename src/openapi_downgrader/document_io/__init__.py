"""Document loading and rendering exports."""

from .document_loader import (
    DEFAULT_MAX_DOCUMENT_BYTES,
    DocumentError,
    find_external_reference,
    load_document,
    parse_document_text,
)
from .document_renderer import OUTPUT_FORMATS, attach_conversion_info, render_document

__all__ = [
    "DEFAULT_MAX_DOCUMENT_BYTES",
    "OUTPUT_FORMATS",
    "DocumentError",
    "attach_conversion_info",
    "find_external_reference",
    "load_document",
    "parse_document_text",
    "render_document",
]
