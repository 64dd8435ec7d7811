"""Tests for document loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from openapi_downgrader.document_io import (
    DocumentError,
    find_external_reference,
    load_document,
    parse_document_text,
)


def test_json_document_is_loaded(tmp_path: Path) -> None:
    source = tmp_path / "api.json"
    source.write_text('{"openapi": "3.1.0", "info": {"title": "Pets"}}', encoding="utf-8")

    assert load_document(source) == {"openapi": "3.1.0", "info": {"title": "Pets"}}


def test_yaml_document_is_loaded(tmp_path: Path) -> None:
    source = tmp_path / "api.yaml"
    source.write_text(
        "openapi: 3.0.3\ninfo:\n  title: Pets\n  version: '1.0'\npaths: {}\n", encoding="utf-8"
    )

    document = load_document(source)

    assert document["openapi"] == "3.0.3"
    assert document["info"]["version"] == "1.0"
    assert document["paths"] == {}


def test_missing_document_raises(tmp_path: Path) -> None:
    with pytest.raises(DocumentError, match="not found"):
        load_document(tmp_path / "missing.yaml")


def test_document_over_size_limit_raises(tmp_path: Path) -> None:
    source = tmp_path / "big.json"
    source.write_text('{"openapi": "3.0.0", "padding": "' + "x" * 64 + '"}', encoding="utf-8")

    with pytest.raises(DocumentError, match="too large"):
        load_document(source, max_bytes=32)


def test_unparseable_document_raises() -> None:
    with pytest.raises(DocumentError, match="Failed to parse"):
        parse_document_text("openapi: [unclosed")


@pytest.mark.parametrize("text", ["[1, 2, 3]", "just a string", ""])
def test_non_mapping_document_raises(text: str) -> None:
    with pytest.raises(DocumentError, match="not an object"):
        parse_document_text(text)


def test_find_external_reference_returns_first_remote_pointer() -> None:
    document = {
        "paths": {"/a": {"$ref": "#/components/pathItems/A"}},
        "components": {"schemas": {"Pet": {"$ref": "pet.yaml#/Pet"}}},
    }

    assert find_external_reference(document) == "pet.yaml#/Pet"


def test_find_external_reference_returns_none_for_local_document() -> None:
    shared: dict = {"$ref": "#/definitions/Pet"}
    document: dict = {"definitions": {"Pet": {"items": [shared, shared]}}}
    document["definitions"]["Pet"]["self"] = document

    assert find_external_reference(document) is None


def test_yaml_timestamps_stay_strings() -> None:
    document = parse_document_text(
        "openapi: 3.0.3\n"
        "components:\n"
        "  schemas:\n"
        "    Day:\n"
        "      type: string\n"
        "      example: 2024-01-01\n"
        "      default: 2020-01-01T00:00:00Z\n"
    )

    day = document["components"]["schemas"]["Day"]
    assert day["example"] == "2024-01-01"
    assert day["default"] == "2020-01-01T00:00:00Z"
