"""Reference resolution exports."""

from .pointer_resolver import (
    ExternalReferenceError,
    ReferenceResolutionError,
    escape_pointer_token,
    format_pointer,
    is_local_reference,
    resolve_pointer,
    resolve_reference,
    split_pointer,
)

__all__ = [
    "ExternalReferenceError",
    "ReferenceResolutionError",
    "escape_pointer_token",
    "format_pointer",
    "is_local_reference",
    "resolve_pointer",
    "resolve_reference",
    "split_pointer",
]
