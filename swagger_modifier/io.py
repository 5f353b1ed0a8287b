"""JSON/YAML document loading and JSON writing."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .exceptions import DocumentLoadError, DocumentWriteError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def parse_document(text: str, yaml_format: bool, source: str) -> Any:
    """Parse JSON or YAML text, raising DocumentLoadError on syntax errors."""
    try:
        if yaml_format:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentLoadError(f"Invalid {'YAML' if yaml_format else 'JSON'} in {source}: {e}") from e


def load_json_file(file_path: Union[str, Path]) -> Any:
    """Load and parse a JSON file."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DocumentLoadError(f"Invalid JSON in {file_path}: {e}") from e
    except OSError as e:
        raise DocumentLoadError(f"Cannot read {file_path}: {e}") from e


def load_document(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a Swagger document from a JSON or YAML file.

    The format is chosen by file extension.

    Raises:
        DocumentLoadError: If the file is unreadable, unparsable or not an object
    """
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"Cannot read {path}: {e}") from e

    data = parse_document(text, path.suffix.lower() in YAML_SUFFIXES, str(path))
    if not isinstance(data, dict):
        raise DocumentLoadError(f"Document {path} is not an object")
    return data


def write_json_file(file_path: Union[str, Path], data: Any, indent: int = 2) -> None:
    """Write JSON data to a file, creating parent directories as needed."""
    path = Path(file_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise DocumentWriteError(f"Failed to write JSON to {path}: {e}") from e
    logger.debug("Wrote %s", path)
