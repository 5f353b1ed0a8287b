"""
Helpers for local Swagger v2 references (``#/<section>/<name>``).
"""

from typing import Any, Dict, Iterator, List, Tuple

SECTIONS = ("definitions", "parameters", "responses")


def make_ref(section: str, name: str) -> str:
    """Build a local reference string like ``#/definitions/Pet``."""
    return f"#/{section}/{name}"


def parse_ref(ref: str) -> Tuple[str, str]:
    """
    Split a local reference into ``(section, name)``.

    Args:
        ref: Reference string, e.g. "#/definitions/Pet"

    Returns:
        Tuple of (section, name)

    Raises:
        ValueError: If the reference is not a local ``#/<section>/<name>`` pointer
    """
    if not isinstance(ref, str) or not ref.startswith("#/"):
        raise ValueError(f"Not a local reference: {ref!r}")

    parts = ref[2:].split("/", 1)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Malformed reference: {ref!r}")

    return parts[0], parts[1]


def iter_refs(obj: Any, path: str = "") -> Iterator[Tuple[str, Dict[str, Any]]]:
    """
    Recursively find every object holding a string ``$ref``.

    Yields:
        Tuples of (json path, holder dict)
    """
    if isinstance(obj, dict):
        if isinstance(obj.get("$ref"), str):
            yield path, obj
        for key, value in obj.items():
            new_path = f"{path}.{key}" if path else key
            yield from iter_refs(value, new_path)
    elif isinstance(obj, list):
        for i, item in enumerate(obj):
            yield from iter_refs(item, f"{path}[{i}]")


def find_dangling_refs(document: Dict[str, Any]) -> List[Tuple[str, str]]:
    """
    List local references whose target entry does not exist.

    Only references into definitions, parameters and responses are checked.

    Returns:
        List of (json path, ref) tuples
    """
    dangling = []
    for ref_path, holder in iter_refs(document):
        ref = holder["$ref"]
        try:
            section, name = parse_ref(ref)
        except ValueError:
            continue
        if section not in SECTIONS:
            continue
        if name not in (document.get(section) or {}):
            dangling.append((ref_path, ref))
    return dangling


class ReferenceSet:
    """
    Ordered set of final reference strings.

    Insertion order is first-seen order; adding a reference twice keeps
    its original position.
    """

    def __init__(self, refs=None):
        self._refs: Dict[str, None] = {}
        for ref in refs or ():
            self.add(ref)

    def add(self, ref: str) -> None:
        self._refs.setdefault(ref, None)

    def names(self) -> List[str]:
        """Return the entry names of all references, in order."""
        return [parse_ref(ref)[1] for ref in self._refs]

    def __contains__(self, ref: object) -> bool:
        return ref in self._refs

    def __iter__(self) -> Iterator[str]:
        return iter(self._refs)

    def __len__(self) -> int:
        return len(self._refs)

    def __repr__(self) -> str:
        return f"ReferenceSet({list(self._refs)!r})"
