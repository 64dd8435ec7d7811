"""Cycle-safe `allOf` flattening."""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from typing import Any

from openapi_downgrader.reference_resolution import is_local_reference, resolve_pointer

_DANGLING_ALLOF_SEGMENT = re.compile(r"/allOf/\d+")


def repair_dangling_ref(document: Any, ref: object) -> str | None:
    """Return `ref` without its `/allOf/<n>` segments when only that form resolves.

    A pointer into `X/allOf/<n>` dangles once `X` has been flattened; the merged
    keys now live directly under `X`.
    """
    if not isinstance(ref, str) or not _DANGLING_ALLOF_SEGMENT.search(ref):
        return None
    if resolve_pointer(document, ref) is not None:
        return None
    candidate = _DANGLING_ALLOF_SEGMENT.sub("", ref)
    if isinstance(resolve_pointer(document, candidate), dict):
        return candidate
    return None


def backfill_schema_type(schema: dict[str, Any]) -> None:
    if "type" in schema:
        return
    if any(key in schema for key in ("properties", "additionalProperties", "required")):
        schema["type"] = "object"
    elif "items" in schema:
        schema["type"] = "array"


class AllOfFlattener:
    """Merge `allOf` members into their owning schema.

    Merge policy: `properties` are unioned with later members overriding
    same-named entries, `required` is a de-duplicated union, and every other
    key keeps its first-seen value, starting with the node's own keys.
    """

    def __init__(self, document: Any) -> None:
        self._document = document
        self._active: set[int] = set()

    def flatten(self, schema: dict[str, Any]) -> bool:
        """Flatten `schema` in place; return whether its `allOf` was removed."""
        members = schema.get("allOf")
        if not isinstance(members, list) or not members:
            return False
        if id(schema) in self._active:
            return False
        self._active.add(id(schema))
        try:
            resolved = self._resolve_members(members)
            if resolved is None:
                return False
            merged = {key: value for key, value in schema.items() if key != "allOf"}
            for member in resolved:
                if member is not schema:
                    self.flatten(member)
                _merge_member(merged, member)
            schema.clear()
            schema.update(merged)
            backfill_schema_type(schema)
            return True
        finally:
            self._active.discard(id(schema))

    def _resolve_members(self, members: list[Any]) -> list[dict[str, Any]] | None:
        resolved: list[dict[str, Any]] = []
        for member in members:
            if not isinstance(member, dict):
                return None
            if "$ref" not in member:
                resolved.append(member)
                continue
            ref = member["$ref"]
            if not is_local_reference(ref):
                return None
            target = resolve_pointer(self._document, ref)
            if not isinstance(target, dict):
                repaired = repair_dangling_ref(self._document, ref)
                if repaired is None:
                    return None
                member["$ref"] = repaired
                target = resolve_pointer(self._document, repaired)
            resolved.append(target)
        return resolved


def _merge_member(merged: dict[str, Any], member: Mapping[str, Any]) -> None:
    for key, value in member.items():
        if key == "allOf":
            continue
        if key == "properties" and isinstance(value, Mapping):
            properties = merged.get("properties")
            if not isinstance(properties, dict):
                properties = {}
            properties.update(copy.deepcopy(dict(value)))
            merged["properties"] = properties
        elif key == "required" and isinstance(value, list):
            required = merged.get("required")
            required = list(required) if isinstance(required, list) else []
            for name in value:
                if name not in required:
                    required.append(name)
            merged["required"] = required
        elif key not in merged:
            merged[key] = copy.deepcopy(value)
