"""Tests for schema node discovery."""

from __future__ import annotations

from openapi_downgrader.schema_graph import iter_schema_nodes


def test_walker_visits_schemas_from_every_document_section() -> None:
    body_schema = {"type": "object"}
    response_schema = {"type": "array", "items": {"type": "string"}}
    header_schema = {"type": "integer"}
    parameter_schema = {"type": "string"}
    component_schema = {"type": "object", "properties": {"id": {"type": "integer"}}}
    document = {
        "paths": {
            "/pets": {
                "parameters": [{"name": "q", "in": "query", "schema": parameter_schema}],
                "post": {
                    "requestBody": {"content": {"application/json": {"schema": body_schema}}},
                    "responses": {
                        "200": {
                            "content": {"application/json": {"schema": response_schema}},
                            "headers": {"X-Rate": {"schema": header_schema}},
                        }
                    },
                },
            }
        },
        "components": {"schemas": {"Pet": component_schema}},
    }

    visited = [location.schema for location in iter_schema_nodes(document)]
    visited_ids = {id(schema) for schema in visited}

    for schema in (
        body_schema,
        response_schema,
        response_schema["items"],
        header_schema,
        parameter_schema,
        component_schema,
        component_schema["properties"]["id"],
    ):
        assert id(schema) in visited_ids
    assert len(visited) == len(visited_ids)


def test_walker_visits_shared_nodes_once_and_survives_cycles() -> None:
    shared = {"type": "string"}
    node = {"type": "object", "properties": {"a": shared, "b": shared}}
    node["properties"]["self"] = node
    document = {"components": {"schemas": {"Node": node, "Alias": shared}}}

    visited = [location.schema for location in iter_schema_nodes(document)]

    assert len(visited) == 2
    assert {id(schema) for schema in visited} == {id(node), id(shared)}


def test_walker_follows_path_item_references_and_callbacks() -> None:
    callback_schema = {"type": "boolean"}
    referenced_schema = {"type": "number"}
    document = {
        "paths": {
            "/hooks": {
                "post": {
                    "callbacks": {
                        "onEvent": {
                            "{$request.body#/url}": {
                                "post": {
                                    "requestBody": {
                                        "content": {"application/json": {"schema": callback_schema}}
                                    }
                                }
                            }
                        }
                    }
                }
            },
            "/shared": {"$ref": "#/components/pathItems/Shared"},
        },
        "components": {
            "pathItems": {
                "Shared": {
                    "get": {
                        "responses": {
                            "200": {"content": {"application/json": {"schema": referenced_schema}}}
                        }
                    }
                }
            }
        },
    }

    visited_ids = {id(location.schema) for location in iter_schema_nodes(document)}

    assert id(callback_schema) in visited_ids
    assert id(referenced_schema) in visited_ids


def test_walker_reports_pointer_paths_when_tracking() -> None:
    document = {
        "components": {
            "schemas": {
                "Pet": {
                    "type": "object",
                    "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
                }
            }
        }
    }

    pointers = {location.pointer for location in iter_schema_nodes(document, track_path=True)}

    assert pointers == {
        "#/components/schemas/Pet",
        "#/components/schemas/Pet/properties/tags",
        "#/components/schemas/Pet/properties/tags/items",
    }


def test_walker_expands_children_after_consumer_rewrites_node() -> None:
    document = {"components": {"schemas": {"Pet": {"type": "object"}}}}
    added_child = {"type": "string"}

    seen = []
    for location in iter_schema_nodes(document):
        seen.append(location.schema)
        if location.schema.get("type") == "object":
            location.schema["properties"] = {"name": added_child}

    assert any(schema is added_child for schema in seen)


def test_walker_ignores_non_mapping_documents() -> None:
    assert list(iter_schema_nodes(["not", "a", "document"])) == []
