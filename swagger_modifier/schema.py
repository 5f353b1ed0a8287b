"""
Schema node classification and traversal.

Schemas are kept as the plain dicts loaded from JSON. ``classify`` maps any
node onto one of a small set of variants and ``child_sites`` enumerates the
positions where nested schemas live, so the rewriting stages share one walk.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple, Union

Container = Union[Dict[str, Any], List[Any]]
Site = Tuple[Container, Union[str, int]]


class SchemaKind(Enum):
    REFERENCE = "reference"
    OBJECT = "object"
    ARRAY = "array"
    ALL_OF = "allOf"
    SCALAR = "scalar"


def classify(node: Any) -> SchemaKind:
    """Return the variant of a schema node. Non-dict values are scalars."""
    if not isinstance(node, dict):
        return SchemaKind.SCALAR
    if "$ref" in node:
        return SchemaKind.REFERENCE
    if isinstance(node.get("allOf"), list):
        return SchemaKind.ALL_OF
    if node.get("type") == "array" or isinstance(node.get("items"), dict):
        return SchemaKind.ARRAY
    if node.get("type") == "object" or isinstance(node.get("properties"), dict):
        return SchemaKind.OBJECT
    return SchemaKind.SCALAR


def child_sites(node: Any) -> Iterator[Site]:
    """
    Yield ``(container, key)`` pairs for every nested schema of ``node``.

    Covers property values, array items, allOf members, the ``schema``
    wrapper of parameters and responses, and schema-valued
    additionalProperties. Keys are snapshotted, so callers may replace
    ``container[key]`` while iterating.
    """
    if not isinstance(node, dict):
        return

    properties = node.get("properties")
    if isinstance(properties, dict):
        for name in list(properties):
            if isinstance(properties[name], dict):
                yield properties, name

    for key in ("items", "schema", "additionalProperties"):
        if isinstance(node.get(key), dict):
            yield node, key

    members = node.get("allOf")
    if isinstance(members, list):
        for i, member in enumerate(members):
            if isinstance(member, dict):
                yield members, i


def is_promotable(node: Any) -> bool:
    """
    True for an inline, titled object schema that can become a definition.

    A ``properties`` map that itself carries a ``$ref`` is not a real
    property map and is left alone.
    """
    if classify(node) is not SchemaKind.OBJECT:
        return False
    properties = node.get("properties")
    return bool(node.get("title")) and isinstance(properties, dict) and "$ref" not in properties


def is_enum_array(node: Any) -> bool:
    """True for ``{type: array, items: {enum: [...]}}``."""
    if not isinstance(node, dict) or node.get("type") != "array":
        return False
    items = node.get("items")
    return isinstance(items, dict) and isinstance(items.get("enum"), list)


HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


def iter_operations(document: Dict[str, Any]) -> Iterator[Tuple[str, str, Dict[str, Any]]]:
    """Yield ``(api_path, method, operation)`` for every operation in paths."""
    for api_path, path_item in (document.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method.lower() in HTTP_METHODS and isinstance(operation, dict):
                yield api_path, method, operation
