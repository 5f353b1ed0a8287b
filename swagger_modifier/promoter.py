"""
Definition promoter.

Lifts inline, titled object schemas (property values, array items, allOf
members and parameter/response ``schema`` wrappers) into top-level
definitions named after their title, leaving a ``$ref`` behind.
"""

import logging
from typing import Any, Dict

from .refs import SECTIONS, make_ref
from .schema import child_sites, is_promotable, iter_operations

logger = logging.getLogger(__name__)


class DefinitionPromoter:
    """Promotes titled inline schemas of one document to definitions."""

    def __init__(self, document: Dict[str, Any]):
        self.document = document
        self.promoted = 0

    def promote(self, schema: Dict[str, Any]) -> Dict[str, str]:
        title = schema["title"]
        definitions = self.document.setdefault("definitions", {})
        if title in definitions:
            logger.debug("Promoted schema %r overwrites an existing definition", title)

        definitions[title] = dict(schema)
        self.promoted += 1
        logger.debug("Promoted inline schema to %s", make_ref("definitions", title))
        self.visit(definitions[title])
        return {"$ref": make_ref("definitions", title)}

    def visit(self, node: Any) -> None:
        for container, key in child_sites(node):
            child = container[key]
            if is_promotable(child):
                container[key] = self.promote(child)
            else:
                self.visit(child)

    def visit_all(self, entries: Any) -> None:
        """Visit every schema of a name->schema mapping or a list."""
        if isinstance(entries, dict):
            entries = list(entries.values())
        if isinstance(entries, list):
            for entry in entries:
                self.visit(entry)

    def run(self) -> int:
        for section in SECTIONS:
            self.visit_all(self.document.get(section))

        for _, _, operation in iter_operations(self.document):
            self.visit_all(operation.get("responses"))
            self.visit_all(operation.get("parameters"))

        logger.info("Promoted %d inline schemas to definitions", self.promoted)
        return self.promoted


def promote_inline_definitions(document: Dict[str, Any]) -> int:
    """
    Promote titled inline schemas of ``document`` to named definitions.

    Returns:
        Number of promoted schemas
    """
    return DefinitionPromoter(document).run()
