"""Tests for sharing the enums of array-of-enum definitions."""

import pytest

from swagger_modifier.context import RewriteContext
from swagger_modifier.enums import EnumArrayDeduplicator, deduplicate_enum_arrays
from swagger_modifier.exceptions import DanglingReferenceError

from conftest import get_response, operation_doc


def status_doc(status):
    paths = {
        "/orders": get_response("#/definitions/Status"),
        "/invoices": get_response("#/definitions/Status"),
    }
    return operation_doc(paths, {"Status": status})


def response_schema(doc, path):
    return doc["paths"][path]["get"]["responses"]["200"]["schema"]


class TestEnumArrayDeduplicator:
    def test_two_references_share_one_enum(self):
        doc = status_doc({"type": "array", "items": {"enum": ["A", "B"]}})

        rewritten = deduplicate_enum_arrays(RewriteContext(document=doc))

        assert rewritten == 2
        assert doc["definitions"] == {"StatusEnum": {"type": "string", "enum": ["A", "B"]}}
        expected = {"type": "array", "items": {"$ref": "#/definitions/StatusEnum"}}
        assert response_schema(doc, "/orders") == expected
        assert response_schema(doc, "/invoices") == expected

    def test_item_type_is_kept(self):
        doc = status_doc({"type": "array", "items": {"type": "integer", "enum": [1, 2]}})

        deduplicate_enum_arrays(RewriteContext(document=doc))

        assert doc["definitions"]["StatusEnum"] == {"type": "integer", "enum": [1, 2]}

    def test_metadata_moves_to_call_site_and_call_site_wins(self):
        doc = status_doc(
            {
                "type": "array",
                "description": "Order status",
                "minItems": 1,
                "maxItems": 2,
                "example": ["A"],
                "items": {"enum": ["A", "B"]},
            }
        )
        response_schema(doc, "/invoices")["description"] = "Invoice status"

        deduplicate_enum_arrays(RewriteContext(document=doc))

        orders = response_schema(doc, "/orders")
        invoices = response_schema(doc, "/invoices")
        assert orders["description"] == "Order status"
        assert invoices["description"] == "Invoice status"
        for schema in (orders, invoices):
            assert schema["minItems"] == 1
            assert schema["maxItems"] == 2
            assert schema["example"] == ["A"]
            assert schema["items"] == {"$ref": "#/definitions/StatusEnum"}

    def test_references_inside_definitions_and_parameters(self):
        doc = operation_doc(
            {},
            {
                "Status": {"type": "array", "items": {"enum": ["A"]}},
                "Order": {"type": "object", "properties": {"status": {"$ref": "#/definitions/Status"}}},
            },
            parameters={"StatusFilter": {"in": "body", "name": "s", "schema": {"$ref": "#/definitions/Status"}}},
        )

        deduplicate_enum_arrays(RewriteContext(document=doc))

        enum_ref = {"$ref": "#/definitions/StatusEnum"}
        assert doc["definitions"]["Order"]["properties"]["status"]["items"] == enum_ref
        assert doc["parameters"]["StatusFilter"]["schema"]["items"] == enum_ref
        assert "Status" not in doc["definitions"]

    def test_plain_arrays_are_not_candidates(self):
        doc = operation_doc(
            {"/tags": get_response("#/definitions/Tags")},
            {"Tags": {"type": "array", "items": {"type": "string"}}},
        )

        assert deduplicate_enum_arrays(RewriteContext(document=doc)) == 0
        assert response_schema(doc, "/tags") == {"$ref": "#/definitions/Tags"}

    def test_unreferenced_candidate_is_left_for_the_pruner(self):
        doc = operation_doc({}, {"Status": {"type": "array", "items": {"enum": ["A"]}}})

        assert deduplicate_enum_arrays(RewriteContext(document=doc)) == 0
        assert "Status" in doc["definitions"]


class TestMissingEnumDefinition:
    def deleted_status_context(self, strict):
        doc = status_doc({"type": "array", "items": {"enum": ["A"]}})
        context = RewriteContext(document=doc, strict=strict)
        dedup = EnumArrayDeduplicator(context)
        dedup.candidates = dedup.find_candidates()
        del doc["definitions"]["Status"]
        return dedup, doc

    def test_lenient_mode_leaves_reference(self, caplog):
        dedup, doc = self.deleted_status_context(strict=False)
        holder = response_schema(doc, "/orders")

        dedup.rewrite(holder, "Status", "GET /orders")

        assert holder == {"$ref": "#/definitions/Status"}
        assert "no shared enum exists" in caplog.text

    def test_strict_mode_raises(self):
        dedup, doc = self.deleted_status_context(strict=True)

        with pytest.raises(DanglingReferenceError):
            dedup.rewrite(response_schema(doc, "/orders"), "Status", "GET /orders")
