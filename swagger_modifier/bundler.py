"""
Swagger bundler: resolve external $refs into a single in-memory document.

Internal references of the root document (``#/definitions/Pet``) are kept
as they are, and pointers back into the root through its file name
(``swagger.json#/definitions/Pet``, from any file) become internal ones.
External references are either hoisted into the root document's
definitions/parameters/responses, when they point at a named entry of one
of those sections, or inlined.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urldefrag, urljoin, urlparse

import requests

from .exceptions import BundleError, DocumentLoadError
from .io import YAML_SUFFIXES, load_document, parse_document
from .refs import SECTIONS, make_ref

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 60


def is_url(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def unescape_pointer_part(part: str) -> str:
    return part.replace("~1", "/").replace("~0", "~")


def resolve_pointer(document: Any, fragment: str, source: str = "") -> Any:
    """
    Follow a JSON pointer fragment (``/definitions/Pet``) inside a document.

    Raises:
        BundleError: If a pointer segment does not exist
    """
    target = document
    pointer = fragment.lstrip("#")
    if not pointer or pointer == "/":
        return target

    for raw_part in pointer.lstrip("/").split("/"):
        part = unescape_pointer_part(raw_part)
        if isinstance(target, dict):
            if part not in target:
                raise BundleError(f"Invalid $ref key '{part}' in #{pointer} of {source}")
            target = target[part]
        elif isinstance(target, list):
            try:
                target = target[int(part)]
            except (ValueError, IndexError) as e:
                raise BundleError(f"Invalid array index '{part}' in #{pointer} of {source}") from e
        else:
            raise BundleError(f"Cannot navigate into non-object at '{part}' in #{pointer} of {source}")
    return target


class SwaggerBundler:
    """Bundles a multi-file Swagger document into one self-contained dict."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.cache: Dict[str, Dict[str, Any]] = {}
        self.hoisted_entries: Dict[str, Dict[str, Any]] = {}
        self.root_location = ""
        # (section, name) -> "location#fragment" of the hoisted entry
        self.hoisted: Dict[Tuple[str, str], str] = {}

    def normalize_location(self, location: str) -> str:
        if is_url(location):
            return location
        return str(Path(location).resolve())

    def fetch(self, url: str) -> Dict[str, Any]:
        """Download a remote document (JSON or YAML)."""
        try:
            response = self.session.get(url, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DocumentLoadError(f"Cannot fetch {url}: {e}") from e

        yaml_format = "yaml" in response.headers.get("content-type", "") or url.lower().endswith(YAML_SUFFIXES)
        data = parse_document(response.text, yaml_format, url)
        if not isinstance(data, dict):
            raise DocumentLoadError(f"Document {url} is not an object")
        return data

    def load(self, location: str) -> Dict[str, Any]:
        """Load a document once and cache it by normalized location."""
        if location not in self.cache:
            logger.debug("Loading %s", location)
            if is_url(location):
                self.cache[location] = self.fetch(location)
            else:
                self.cache[location] = load_document(location)
        return self.cache[location]

    def join(self, base: str, relative: str) -> str:
        if is_url(base) or is_url(relative):
            return urljoin(base, relative)
        return str((Path(base).parent / relative).resolve())

    def bundle(self, location: str) -> Dict[str, Any]:
        """
        Load the root document at ``location`` and resolve external refs.

        Args:
            location: File path or http(s) URL of the root document

        Returns:
            The bundled document
        """
        self.root_location = self.normalize_location(location)
        self.hoisted = {}
        self.hoisted_entries = {}
        root = self.load(self.root_location)

        # Names already taken by the root document itself
        for section in SECTIONS:
            for name in root.get(section) or {}:
                self.hoisted[(section, name)] = f"{self.root_location}#/{section}/{name}"

        bundled = self.resolve(copy.deepcopy(root), self.root_location, ())
        for section, entries in self.hoisted_entries.items():
            bundled.setdefault(section, {}).update(entries)
        logger.info("Bundled %s (%d documents loaded)", location, len(self.cache))
        return bundled

    def resolve(self, node: Any, base: str, stack: Tuple[str, ...]) -> Any:
        if isinstance(node, list):
            return [self.resolve(item, base, stack) for item in node]
        if not isinstance(node, dict):
            return node
        if isinstance(node.get("$ref"), str):
            return self.resolve_ref(node, base, stack)
        return {key: self.resolve(value, base, stack) for key, value in node.items()}

    def resolve_ref(self, node: Dict[str, Any], base: str, stack: Tuple[str, ...]) -> Any:
        file_part, fragment = urldefrag(node["$ref"])
        target = self.join(base, file_part) if file_part else base

        if target == self.root_location and fragment:
            # Pointer into the root document, possibly written with its file name
            return {**node, "$ref": f"#{fragment}"}

        key = f"{target}#{fragment}"
        parts = [unescape_pointer_part(p) for p in fragment.lstrip("/").split("/")] if fragment else []

        if len(parts) == 2 and parts[0] in SECTIONS:
            section, name = parts
            owner = self.hoisted.get((section, name))
            if owner == key:
                return {"$ref": make_ref(section, name)}
            if owner is None:
                self.hoisted[(section, name)] = key
                content = resolve_pointer(self.load(target), fragment, target)
                resolved = self.resolve(copy.deepcopy(content), target, stack + (key,))
                self.hoisted_entries.setdefault(section, {})[name] = resolved
                logger.debug("Hoisted %s as %s", key, make_ref(section, name))
                return {"$ref": make_ref(section, name)}
            logger.debug("Name %s/%s already taken, inlining %s", section, name, key)

        if key in stack:
            raise BundleError(f"Circular external reference: {' -> '.join(stack + (key,))}")

        content = resolve_pointer(self.load(target), fragment, target)
        return self.resolve(copy.deepcopy(content), target, stack + (key,))
