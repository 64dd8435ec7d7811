"""Reference inlining exports."""

from .dereferencer import DereferenceStats, Dereferencer, dereference_swagger2

__all__ = ["DereferenceStats", "Dereferencer", "dereference_swagger2"]
