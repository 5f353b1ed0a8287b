"""
Enum array deduplicator.

Definitions shaped ``{type: array, items: {enum: [...]}}`` make generators
emit one enum type per use site. Every reference to such a definition is
rewritten into an inline array whose items point at a shared
``<Name>Enum`` definition holding only the enum; the array-level metadata
moves to the call site and the original definition is removed.

The shared enum keeps the ``type`` of the original ``items`` (an integer
enum stays ``integer``) and only falls back to ``string`` when the items
declare no type.
"""

import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from .context import GeneratedEnum, RewriteContext
from .refs import SECTIONS, iter_refs, make_ref, parse_ref
from .schema import is_enum_array, iter_operations

logger = logging.getLogger(__name__)

ENUM_SUFFIX = "Enum"
METADATA_KEYS = ("description", "minItems", "maxItems", "example")


class EnumArrayDeduplicator:
    def __init__(self, context: RewriteContext):
        self.context = context
        self.document = context.document
        self.candidates: Set[str] = set()
        self.rewritten = 0

    def find_candidates(self) -> Set[str]:
        """Names of definitions that are arrays of enum."""
        definitions = self.document.get("definitions") or {}
        return {name for name, schema in definitions.items() if is_enum_array(schema)}

    def shared_enum(self, name: str, where: str) -> Optional[GeneratedEnum]:
        """
        Return the shared enum for ``name``, creating it on first use.

        Creating it moves the enum into ``<name>Enum`` and deletes the
        original array definition.
        """
        if name in self.context.generated_enums:
            return self.context.generated_enums[name]

        definitions = self.document.get("definitions") or {}
        original = definitions.get(name)
        if not is_enum_array(original):
            self.context.anomaly(
                make_ref("definitions", name), where, "array-of-enum definition is gone and no shared enum exists"
            )
            return None

        enum_name = f"{name}{ENUM_SUFFIX}"
        items = original["items"]
        shape = {"type": items.get("type", "string"), "enum": list(items["enum"])}
        if definitions.get(enum_name, shape) != shape:
            logger.warning("Replacing existing definition %s with the shared enum of %s", enum_name, name)

        definitions[enum_name] = shape
        del definitions[name]

        generated = GeneratedEnum(
            name=enum_name,
            metadata={key: original[key] for key in METADATA_KEYS if key in original},
        )
        self.context.generated_enums[name] = generated
        logger.debug("Created shared enum %s from %s", enum_name, name)
        return generated

    def rewrite(self, holder: Dict[str, Any], name: str, where: str) -> None:
        generated = self.shared_enum(name, where)
        if generated is None:
            return

        del holder["$ref"]
        for key, value in generated.metadata.items():
            holder.setdefault(key, value)
        holder["type"] = "array"
        holder["items"] = {"$ref": make_ref("definitions", generated.name)}
        self.rewritten += 1

    def collect_holders(self) -> List[Tuple[str, Dict[str, Any]]]:
        holders = []
        for section in SECTIONS:
            for ref_path, holder in iter_refs(self.document.get(section), section):
                holders.append((ref_path, holder))
        for api_path, method, operation in iter_operations(self.document):
            holders.extend(iter_refs(operation, f"{method.upper()} {api_path}"))
        return holders

    def run(self) -> int:
        self.candidates = self.find_candidates()
        if not self.candidates:
            return 0

        for where, holder in self.collect_holders():
            try:
                section, name = parse_ref(holder["$ref"])
            except ValueError:
                continue
            if section == "definitions" and name in self.candidates:
                self.rewrite(holder, name, where)

        logger.info(
            "Rewrote %d references to %d enum array definitions",
            self.rewritten,
            len(self.context.generated_enums),
        )
        return self.rewritten


def deduplicate_enum_arrays(context: RewriteContext) -> int:
    """Share the enums of array-of-enum definitions; returns rewritten reference count."""
    return EnumArrayDeduplicator(context).run()
