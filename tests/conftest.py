"""Shared fixtures: sample Swagger documents and file helpers."""

import copy
import json

import pytest


PETSTORE = {
    "swagger": "2.0",
    "info": {"title": "Pet store", "version": "1.0.0"},
    "paths": {
        "/pets": {
            "parameters": [{"$ref": "#/parameters/TraceId"}],
            "get": {
                "parameters": [{"$ref": "#/parameters/Limit"}],
                "responses": {
                    "200": {
                        "description": "Pets",
                        "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                    },
                    "404": {"$ref": "#/responses/NotFound"},
                },
            },
            "post": {
                "parameters": [{"in": "body", "name": "pet", "schema": {"$ref": "#/definitions/Pet"}}],
                "responses": {"201": {"description": "Created", "schema": {"$ref": "#/definitions/Pet"}}},
            },
        },
        "/pets/{id}/tags": {
            "get": {
                "responses": {"200": {"description": "Tags", "schema": {"$ref": "#/definitions/TagList"}}},
            },
        },
    },
    "definitions": {
        "Pet": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "owner": {
                    "type": "object",
                    "title": "Owner",
                    "properties": {"name": {"type": "string"}},
                },
                "status": {"$ref": "#/definitions/PetStatus"},
            },
        },
        "PetStatus": {
            "type": "array",
            "description": "Pet status",
            "items": {"enum": ["available", "sold"]},
        },
        "TagList": {"type": "array", "items": {"$ref": "#/definitions/Tag"}},
        "Tag": {"type": "object", "properties": {"label": {"type": "string"}}},
        "Error": {"type": "object", "properties": {"message": {"type": "string"}}},
        "Unused": {"type": "object", "properties": {"x": {"type": "string"}}},
    },
    "parameters": {
        "Limit": {"name": "limit", "in": "query", "type": "integer"},
        "TraceId": {"name": "X-Trace-Id", "in": "header", "type": "string"},
        "UnusedParam": {"name": "unused", "in": "query", "type": "string"},
    },
    "responses": {
        "NotFound": {"description": "Not found", "schema": {"$ref": "#/definitions/Error"}},
        "UnusedResponse": {"description": "Never used"},
    },
}


SEARCH = {
    "swagger": "2.0",
    "info": {"title": "Search", "version": "1.0.0"},
    "paths": {
        "/search": {
            "get": {
                "parameters": [
                    {"in": "body", "name": "criteria", "schema": {"$ref": "#/definitions/Criteria"}},
                ],
                "responses": {"200": {"description": "OK", "schema": {"$ref": "#/definitions/SearchResult"}}},
            },
        },
    },
    "definitions": {
        "Criteria": {"type": "object", "properties": {"query": {"type": "string"}}},
        "SearchResult": {
            "type": "object",
            "properties": {"hits": {"type": "array", "items": {"$ref": "#/definitions/Hit"}}},
        },
        "Hit": {"type": "object", "properties": {"id": {"type": "string"}}},
        "Orphan": {"type": "object"},
    },
}


@pytest.fixture
def petstore():
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def search_doc():
    return copy.deepcopy(SEARCH)


@pytest.fixture
def write_json(tmp_path):
    """Write data as JSON under tmp_path and return the path."""

    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


def operation_doc(paths, definitions, **sections):
    """Build a minimal document from paths and sections."""
    doc = {"swagger": "2.0", "info": {"title": "t", "version": "1"}, "paths": paths, "definitions": definitions}
    doc.update(sections)
    return doc


def get_response(ref):
    """A GET operation returning a schema that references ``ref``."""
    return {"get": {"responses": {"200": {"description": "OK", "schema": {"$ref": ref}}}}}
