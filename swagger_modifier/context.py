"""Per-run rewriting state shared by the pipeline stages."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from .exceptions import DanglingReferenceError
from .refs import ReferenceSet

logger = logging.getLogger(__name__)


@dataclass
class GeneratedEnum:
    """Shared enum definition derived from an array-of-enum definition."""

    name: str
    metadata: Dict[str, Any]


@dataclass
class RewriteContext:
    """
    State for one pipeline run over one document.

    Attributes:
        document: The document being rewritten in place
        strict: Raise on structural anomalies instead of warning and skipping
        refs: Final references claimed by operations, in first-seen order
        claims: Final reference -> original reference it was derived from
        generated_enums: Original definition name -> its shared enum
        originals: Snapshot of the sections taken before renaming starts
    """

    document: Dict[str, Any]
    strict: bool = False
    refs: ReferenceSet = field(default_factory=ReferenceSet)
    claims: Dict[str, str] = field(default_factory=dict)
    generated_enums: Dict[str, GeneratedEnum] = field(default_factory=dict)
    originals: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def anomaly(self, ref: str, where: str, reason: str) -> None:
        """Raise in strict mode, otherwise log and let the caller skip."""
        if self.strict:
            raise DanglingReferenceError(ref, where)
        logger.warning("Skipping %s in %s: %s", ref, where, reason)
