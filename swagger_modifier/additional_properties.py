"""
Additional-properties normalizer.

Rewrites two shorthand shapes that code generators handle badly:

- properties under a ``Dictionaries`` key that hold a bare ``$ref`` become
  arrays of that reference;
- ``additionalProperties`` declared next to ``properties`` is copied into
  the properties map, since most generators drop the sibling declaration.
"""

import copy
import logging
from typing import Any, Dict

from .refs import SECTIONS
from .schema import iter_operations

logger = logging.getLogger(__name__)

DICTIONARIES_KEY = "Dictionaries"


def reshape_dictionaries(dictionaries: Dict[str, Any]) -> int:
    """Turn each ``$ref`` property of a Dictionaries node into an array of it."""
    properties = dictionaries.get("properties")
    if not isinstance(properties, dict):
        return 0

    count = 0
    for name, prop in properties.items():
        if not isinstance(prop, dict) or not isinstance(prop.get("$ref"), str):
            continue
        prop["type"] = "array"
        prop["items"] = {"$ref": prop.pop("$ref")}
        count += 1
        logger.debug("Dictionaries property %r is now an array of %s", name, prop["items"]["$ref"])
    return count


def normalize_additional_properties(node: Any) -> None:
    """Apply both rewrites to ``node`` and everything below it, in place."""
    if isinstance(node, list):
        for item in node:
            normalize_additional_properties(item)
        return
    if not isinstance(node, dict):
        return

    for key in list(node):
        value = node[key]
        if key == DICTIONARIES_KEY and isinstance(value, dict):
            reshape_dictionaries(value)
        elif key == "additionalProperties" and isinstance(node.get("properties"), dict):
            normalize_additional_properties(value)
            node["properties"]["additionalProperties"] = copy.deepcopy(value)
        elif isinstance(value, (dict, list)):
            normalize_additional_properties(value)


def normalize_document(document: Dict[str, Any]) -> None:
    """Normalize every section and every operation of a document."""
    for section in SECTIONS:
        normalize_additional_properties(document.get(section))

    for _, _, operation in iter_operations(document):
        normalize_additional_properties(operation.get("parameters"))
        normalize_additional_properties(operation.get("responses"))

    logger.info("Normalized additionalProperties and Dictionaries shapes")
