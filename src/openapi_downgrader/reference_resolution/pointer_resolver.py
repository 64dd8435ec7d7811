"""Local JSON Pointer reference resolution."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping, Sequence
from typing import Any


class ReferenceResolutionError(Exception):
    """Raised when a reference cannot be resolved on the primary resolve path."""


class ExternalReferenceError(ReferenceResolutionError):
    """Raised for references that do not point into the current document."""


def is_local_reference(ref: object) -> bool:
    """Return whether `ref` is a `#`-anchored pointer into the current document."""
    return isinstance(ref, str) and ref.startswith("#")


def split_pointer(ref: str) -> list[str]:
    """Split a `#/a/b` pointer into unescaped tokens, without the leading empty token."""
    tokens = [_unescape_pointer_token(token) for token in ref.split("/")]
    return tokens[1:]


def escape_pointer_token(token: object) -> str:
    """Escape one path segment for inclusion in a JSON Pointer."""
    return str(token).replace("~", "~0").replace("/", "~1")


def format_pointer(path: Iterable[object]) -> str:
    """Format a key/index path as a `#/`-anchored JSON Pointer."""
    parts = [escape_pointer_token(part) for part in path]
    if not parts:
        return "#/"
    return "#/" + "/".join(parts)


def resolve_reference(root: Any, node: Any, *, clone: bool = False) -> Any:
    """Resolve `node` when it is a `$ref` object, otherwise return it unchanged.

    Args:
      root: Document root the pointer is evaluated against.
      node: Candidate reference object.
      clone: Return a deep copy of the target instead of the live subtree.

    Returns:
      The referenced subtree, or `None` when a pointer segment is missing.

    Raises:
      ExternalReferenceError: If the reference does not start with `#`.
    """
    if not isinstance(node, Mapping) or "$ref" not in node:
        return node
    ref = node["$ref"]
    if not is_local_reference(ref):
        raise ExternalReferenceError(
            f"External $ref values are not supported after bundling: {ref!r}"
        )
    target = _walk(root, split_pointer(ref))
    return copy.deepcopy(target) if clone else target


def resolve_pointer(root: Any, ref: object) -> Any | None:
    """Look up a local pointer without cloning; return `None` on any failure."""
    if not is_local_reference(ref):
        return None
    assert isinstance(ref, str)
    return _walk(root, split_pointer(ref))


def _walk(root: Any, tokens: Sequence[str]) -> Any | None:
    current = root
    for token in tokens:
        if isinstance(current, Mapping):
            if token not in current:
                return None
            current = current[token]
        elif isinstance(current, list):
            if not token.isdigit() or int(token) >= len(current):
                return None
            current = current[int(token)]
        else:
            return None
    return current


def _unescape_pointer_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")
