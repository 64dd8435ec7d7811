"""Document loading service."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

DEFAULT_MAX_DOCUMENT_BYTES = 5 * 1024 * 1024
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentError(Exception):
    """Raised when a source document cannot be read or parsed."""


class _DocumentYamlLoader(yaml.SafeLoader):
    """Safe loader that keeps YAML 1.1 timestamps as the strings they were written as."""


_DocumentYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, pattern) for tag, pattern in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_document(
    path: Path | str, *, max_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES
) -> dict[str, Any]:
    """Read and parse a JSON or YAML OpenAPI document from disk."""
    source = Path(path)
    if not source.is_file():
        raise DocumentError(f"OpenAPI document not found: {source}")
    if source.stat().st_size > max_bytes:
        raise DocumentError("OpenAPI document is too large.")
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(f"Failed to read OpenAPI document: {exc}") from exc
    return parse_document_text(text)


def parse_document_text(text: str) -> dict[str, Any]:
    """Parse document text, trying JSON first and falling back to YAML."""
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        try:
            parsed = yaml.load(text, Loader=_DocumentYamlLoader)
        except yaml.YAMLError as exc:
            raise DocumentError(f"Failed to parse the OpenAPI document: {exc}") from exc

    if not isinstance(parsed, dict):
        raise DocumentError("OpenAPI document is not an object.")
    return parsed


def find_external_reference(document: Any) -> str | None:
    """Return the first `$ref` that does not point into the document itself."""
    stack = [document]
    seen: set[int] = set()
    while stack:
        node = stack.pop()
        if not isinstance(node, Mapping | list) or id(node) in seen:
            continue
        seen.add(id(node))
        if isinstance(node, list):
            stack.extend(reversed(node))
            continue
        ref = node.get("$ref")
        if isinstance(ref, str) and not ref.startswith("#"):
            return ref
        stack.extend(node.values())
    return None
