"""Tests for local reference inlining."""

from __future__ import annotations

from openapi_downgrader.dereferencing import dereference_swagger2


def _refs(node: object) -> list[str]:
    refs = []
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            if "$ref" in current:
                refs.append(current["$ref"])
            stack.extend(current.values())
        elif isinstance(current, list):
            stack.extend(current)
    return refs


def _document() -> dict:
    return {
        "swagger": "2.0",
        "definitions": {
            "Tag": {"type": "object", "properties": {"label": {"type": "string", "maxLength": 8}}},
            "Pet": {
                "type": "object",
                "properties": {
                    "tag": {"$ref": "#/definitions/Tag"},
                    "tags": {"type": "array", "items": {"$ref": "#/definitions/Tag"}},
                },
            },
        },
        "paths": {
            "/pets": {
                "get": {
                    "responses": {
                        "200": {"description": "ok", "schema": {"$ref": "#/definitions/Pet"}}
                    }
                }
            }
        },
    }


def test_acyclic_document_has_no_references_left() -> None:
    document = _document()

    stats = dereference_swagger2(document)

    assert _refs(document) == []
    assert stats.missing == 0
    assert stats.cycles == 0
    assert stats.resolved > 0
    schema = document["paths"]["/pets"]["get"]["responses"]["200"]["schema"]
    assert schema["properties"]["tag"]["properties"]["label"]["maxLength"] == 8
    assert schema["properties"]["tags"]["items"] == document["definitions"]["Tag"]


def test_inlined_targets_are_not_aliased() -> None:
    document = _document()

    dereference_swagger2(document)

    pet = document["definitions"]["Pet"]
    assert pet["properties"]["tag"] == pet["properties"]["tags"]["items"]
    assert pet["properties"]["tag"] is not pet["properties"]["tags"]["items"]
    assert pet["properties"]["tag"] is not document["definitions"]["Tag"]


def test_sibling_keys_override_target_keys() -> None:
    document = {
        "definitions": {"Tag": {"type": "object", "description": "a tag"}},
        "wrapper": {"$ref": "#/definitions/Tag", "description": "override", "readOnly": True},
    }

    dereference_swagger2(document)

    assert document["wrapper"] == {"type": "object", "description": "override", "readOnly": True}


def test_direct_self_reference_terminates_with_cycle_count() -> None:
    document = {"A": {"$ref": "#/A"}}

    stats = dereference_swagger2(document)

    assert stats.cycles >= 1
    assert document["A"] == {}


def test_recursive_definition_is_cut_at_the_cycle() -> None:
    document = {
        "definitions": {
            "Node": {
                "type": "object",
                "properties": {"next": {"$ref": "#/definitions/Node"}},
            }
        }
    }

    stats = dereference_swagger2(document)

    assert stats.cycles >= 1
    node = document["definitions"]["Node"]
    assert node["properties"]["next"]["properties"]["next"] == {}
    assert _refs(document) == []


def test_missing_and_external_references_fall_back_to_object() -> None:
    document = {
        "definitions": {
            "Pet": {
                "properties": {
                    "owner": {"$ref": "#/definitions/Owner", "description": "who owns it"},
                    "remote": {"$ref": "https://example.com/schemas/pet.json"},
                }
            }
        }
    }

    stats = dereference_swagger2(document)

    properties = document["definitions"]["Pet"]["properties"]
    assert properties["owner"] == {"description": "who owns it", "type": "object"}
    assert properties["remote"] == {"type": "object"}
    assert stats.missing == 2


def test_drop_definitions_removes_redundant_containers() -> None:
    document = _document()
    document["parameters"] = {"Limit": {"name": "limit", "in": "query", "type": "integer"}}
    document["responses"] = {"NotFound": {"description": "missing"}}

    dereference_swagger2(document, drop_definitions=True)

    assert "definitions" not in document
    assert "parameters" not in document
    assert "responses" not in document
    assert document["paths"]["/pets"]["get"]["responses"]["200"]["schema"]["type"] == "object"
