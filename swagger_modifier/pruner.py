"""Unused definition pruner."""

import logging
from typing import Any, Dict, Iterable

from .refs import SECTIONS, make_ref

logger = logging.getLogger(__name__)


def remove_unused_models(document: Dict[str, Any], refs: Iterable[str]) -> Dict[str, int]:
    """
    Delete every definition, parameter and response no reference uses.

    Args:
        document: The document to prune in place
        refs: Final references in use, e.g. the renamer's reference set

    Returns:
        Number of removed entries per section
    """
    used = set(refs)
    removed = {}

    for section in SECTIONS:
        entries = document.get(section)
        if not isinstance(entries, dict):
            continue

        unused = [name for name in entries if make_ref(section, name) not in used]
        for name in unused:
            del entries[name]
            logger.debug("Removed unused %s", make_ref(section, name))
        removed[section] = len(unused)

    logger.info(
        "Removed %s unused entries",
        ", ".join(f"{count} {section}" for section, count in removed.items()) or "no",
    )
    return removed
