"""
Reference renamer.

Walks every operation and gives each model it references a per-operation
name: ``prefix + name + suffix`` for responses, with ``inputSuffix`` also
appended for parameters. Renamed entries are rebuilt from a snapshot of the
sections taken before renaming starts, so one model can be renamed
differently for several operations; the references inside each renamed
entry are renamed with the same affixes.

Every final reference is recorded in ``context.refs``, which the pruner
later uses to drop everything no operation reaches.
"""

import copy
import logging
from typing import Any, Dict, Iterator, Optional

from .config import ConfigMapping, RenameAffixes
from .context import RewriteContext
from .refs import SECTIONS, make_ref, parse_ref
from .schema import HTTP_METHODS

logger = logging.getLogger(__name__)


def is_decorated(name: str, affixes: RenameAffixes, is_input: bool = False) -> bool:
    """
    True when ``name`` already carries the affixes and must not be renamed.

    The name must start with the prefix and end with the suffix or the input
    suffix. In parameter walks a configured input suffix replaces the empty
    suffix as the required ending, so undecorated inputs still get it.
    """
    if not name.startswith(affixes.prefix):
        return False
    if is_input and affixes.input_suffix:
        return name.endswith(affixes.input_suffix) or (bool(affixes.suffix) and name.endswith(affixes.suffix))
    return name.endswith(affixes.suffix) or (bool(affixes.input_suffix) and name.endswith(affixes.input_suffix))


def rename_key(mapping: Dict[str, Any], old: str, new: str, value: Any) -> None:
    """Replace key ``old`` by ``new`` in place, keeping its position."""
    items = [(key, val) for key, val in mapping.items() if key != new]
    mapping.clear()
    for key, val in items:
        if key == old:
            mapping[new] = value
        else:
            mapping[key] = val


class ReferenceRenamer:
    def __init__(self, context: RewriteContext):
        self.context = context
        self.document = context.document
        self.renamed = 0

    def candidate_name(self, name: str, affixes: RenameAffixes, is_input: bool) -> str:
        if is_decorated(name, affixes, is_input):
            return name
        candidate = f"{affixes.prefix}{name}{affixes.suffix}"
        if is_input and affixes.input_suffix and not candidate.endswith(affixes.input_suffix):
            candidate += affixes.input_suffix
        return candidate

    def alternatives(self, candidate: str, affixes: RenameAffixes) -> Iterator[str]:
        """
        Candidate name first, then disambiguated variants of it.

        The counter goes in front of the trailing affix (``ABC2Z`` rather
        than ``ABCZ2``) so every variant still counts as decorated.
        """
        yield candidate
        base = candidate
        if affixes.input_suffix:
            base = f"{candidate}{affixes.input_suffix}"
            yield base
        tail = affixes.input_suffix or affixes.suffix
        stem = base[: len(base) - len(tail)]
        counter = 2
        while True:
            alternative = f"{stem}{counter}{tail}"
            logger.warning("Name %s is taken, trying %s", base, alternative)
            yield alternative
            counter += 1

    def materialize(self, section: str, name: str, final: str, where: str) -> bool:
        """
        Create entry ``final`` of ``section`` from the snapshot of ``name``.

        The original key is renamed in place when nothing has claimed it;
        otherwise the new entry is added alongside it.
        """
        originals = self.context.originals.get(section) or {}
        entries = self.document.get(section)
        if name not in originals or entries is None:
            self.context.anomaly(make_ref(section, name), where, "target does not exist")
            return False

        body = copy.deepcopy(originals[name])
        if final != name and name in entries and make_ref(section, name) not in self.context.claims:
            rename_key(entries, name, final, body)
        else:
            entries[final] = body

        if final != name:
            self.renamed += 1
            logger.debug("Renamed %s to %s", make_ref(section, name), make_ref(section, final))
        return True

    def claim(self, section: str, name: str, affixes: RenameAffixes, is_input: bool, where: str) -> Optional[str]:
        """Pick, record and materialize the final name for one reference."""
        original_ref = make_ref(section, name)
        candidate = self.candidate_name(name, affixes, is_input)

        for final in self.alternatives(candidate, affixes):
            final_ref = make_ref(section, final)
            owner = self.context.claims.get(final_ref)
            if owner == original_ref:
                return final
            if owner is not None:
                continue

            if not self.materialize(section, name, final, where):
                return None
            self.context.claims[final_ref] = original_ref
            self.context.refs.add(final_ref)
            self.walk(self.document[section][final], affixes, is_input, final_ref)
            return final
        return None

    def rename_ref(self, holder: Dict[str, Any], affixes: RenameAffixes, is_input: bool, where: str) -> None:
        ref = holder["$ref"]
        try:
            section, name = parse_ref(ref)
        except ValueError:
            self.context.anomaly(ref, where, "not a local reference")
            return
        if section not in SECTIONS:
            self.context.anomaly(ref, where, f"unsupported section '{section}'")
            return

        final = self.claim(section, name, affixes, is_input, where)
        if final is not None:
            holder["$ref"] = make_ref(section, final)

    def walk(self, node: Any, affixes: RenameAffixes, is_input: bool, where: str) -> None:
        if isinstance(node, list):
            for item in node:
                self.walk(item, affixes, is_input, where)
            return
        if not isinstance(node, dict):
            return

        if isinstance(node.get("$ref"), str):
            self.rename_ref(node, affixes, is_input, where)
        for key, value in node.items():
            if key != "$ref":
                self.walk(value, affixes, is_input, where)

    def snapshot(self) -> None:
        self.context.originals = {
            section: copy.deepcopy(self.document.get(section) or {}) for section in SECTIONS
        }

    def run(self, mapping: Optional[ConfigMapping] = None) -> int:
        mapping = mapping or ConfigMapping()
        self.snapshot()

        for api_path, path_item in (self.document.get("paths") or {}).items():
            if not isinstance(path_item, dict):
                continue

            if isinstance(path_item.get("parameters"), list):
                self.walk(path_item["parameters"], mapping.global_affixes(), True, f"{api_path} parameters")

            for method, operation in path_item.items():
                if method.lower() not in HTTP_METHODS or not isinstance(operation, dict):
                    continue
                affixes = mapping.affixes_for(api_path, method)
                where = f"{method.upper()} {api_path}"
                self.walk(operation.get("responses"), affixes, False, where)
                self.walk(operation.get("parameters"), affixes, True, where)

        logger.info("Renamed %d entries, %d references in use", self.renamed, len(self.context.refs))
        return self.renamed


def rename_references(context: RewriteContext, mapping: Optional[ConfigMapping] = None) -> int:
    """Apply per-operation affixes to referenced names; returns the rename count."""
    return ReferenceRenamer(context).run(mapping)
