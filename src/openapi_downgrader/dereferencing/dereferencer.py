"""Inline local `$ref` pointers into a self-contained document tree."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from openapi_downgrader.reference_resolution import is_local_reference, resolve_pointer

_LOGGER = logging.getLogger("openapi_downgrader.dereference")

REDUNDANT_CONTAINERS = ("definitions", "parameters", "responses")


@dataclass
class DereferenceStats:
    """Counters describing one dereference run."""

    resolved: int = 0
    missing: int = 0
    cycles: int = 0


class Dereferencer:
    """Replace each `$ref` with a deep clone of its fully dereferenced target.

    Resolved targets are cached by pointer and handed out as fresh clones, so
    no two positions in the output share a subtree. A pointer met again while
    it is still being resolved is a true cycle and becomes `{}`.
    """

    def __init__(self, document: MutableMapping[str, Any]) -> None:
        self._document = document
        self._cache: dict[str, Any] = {}
        self._in_flight: set[str] = set()
        self._expanding: set[int] = set()
        self.stats = DereferenceStats()

    def dereference(self) -> MutableMapping[str, Any]:
        for key in list(self._document):
            self._document[key] = self._expand(self._document[key])
        _LOGGER.debug(
            "dereference_done resolved=%d missing=%d cycles=%d",
            self.stats.resolved,
            self.stats.missing,
            self.stats.cycles,
        )
        return self._document

    def _expand(self, node: Any) -> Any:
        if not isinstance(node, dict | list):
            return node
        if id(node) in self._expanding:
            self.stats.cycles += 1
            return {}
        self._expanding.add(id(node))
        try:
            if isinstance(node, list):
                return [self._expand(item) for item in node]
            if "$ref" in node:
                return self._expand_reference(node)
            return {key: self._expand(value) for key, value in node.items()}
        finally:
            self._expanding.discard(id(node))

    def _expand_reference(self, node: Mapping[str, Any]) -> Any:
        ref = node["$ref"]
        if not is_local_reference(ref):
            self.stats.missing += 1
            _LOGGER.debug("dereference_missing ref=%s reason=non-local", ref)
            return _fallback_schema(node)
        if ref in self._in_flight:
            self.stats.cycles += 1
            _LOGGER.debug("dereference_cycle ref=%s", ref)
            return {}

        if ref not in self._cache:
            target = resolve_pointer(self._document, ref)
            if not isinstance(target, dict):
                self.stats.missing += 1
                _LOGGER.debug("dereference_missing ref=%s reason=unresolved", ref)
                return _fallback_schema(node)
            self._in_flight.add(ref)
            try:
                self._cache[ref] = self._expand(copy.deepcopy(target))
            finally:
                self._in_flight.discard(ref)

        self.stats.resolved += 1
        result = copy.deepcopy(self._cache[ref])
        siblings = {key: value for key, value in node.items() if key != "$ref"}
        if siblings and isinstance(result, dict):
            result.update(self._expand(siblings))
        return result


def dereference_swagger2(
    document: MutableMapping[str, Any], *, drop_definitions: bool = False
) -> DereferenceStats:
    """Inline every local reference of the document in place and return the counters."""
    dereferencer = Dereferencer(document)
    dereferencer.dereference()
    if drop_definitions:
        for key in REDUNDANT_CONTAINERS:
            document.pop(key, None)
    return dereferencer.stats


def _fallback_schema(node: Mapping[str, Any]) -> dict[str, Any]:
    fallback: dict[str, Any] = {}
    if "description" in node:
        fallback["description"] = node["description"]
    fallback["type"] = "object"
    return fallback
