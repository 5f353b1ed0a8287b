"""
Generator config emitter.

Writes an openapi-generator config whose ``customNames`` map the
generator's normalized model names back to the names chosen by the
renamer. An existing config file is read back and updated in place; if it
cannot be used a default config is started instead.
"""

import copy
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from jsonschema import Draft7Validator

from .io import write_json_file
from .refs import ReferenceSet

logger = logging.getLogger(__name__)

DEFAULT_OPENAPI_CONFIG: Dict[str, Any] = {
    "additionalProperties": {
        "generateAliasAsModel": True,
        "modelDocs": False,
        "apiDocs": False,
        "customNames": {},
    }
}

OPENAPI_CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "packageName": {"type": "string"},
        "additionalProperties": {
            "type": "object",
            "properties": {
                "customNames": {
                    "type": "object",
                    "additionalProperties": {"type": "string"},
                },
            },
        },
    },
}

_NON_ALNUM_RUN = re.compile(r"[^a-zA-Z0-9]+(.)")


def camelize(name: str) -> str:
    """
    Lowercase ``name`` and collapse non-alphanumeric runs, upper-casing the
    character that follows each run: ``"FOS_Criteria"`` -> ``"fosCriteria"``.
    """
    return _NON_ALNUM_RUN.sub(lambda m: m.group(1).upper(), name.lower())


def read_existing_config(file_path: Union[str, Path]) -> Optional[Dict[str, Any]]:
    """
    Read a previously written config, or None if missing or unusable.

    Unusable files (bad JSON, wrong shape) are logged and ignored.
    """
    path = Path(file_path)
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring existing config %s: %s", path, e)
        return None

    errors = sorted(Draft7Validator(OPENAPI_CONFIG_SCHEMA).iter_errors(data), key=lambda e: list(e.path))
    if errors:
        logger.warning("Ignoring existing config %s: %s", path, errors[0].message)
        return None
    return data


def build_openapi_config(
    refs: Iterable[str],
    existing: Optional[Dict[str, Any]] = None,
    package_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the generator config for the given final references.

    Args:
        refs: Final reference strings in use
        existing: Previously written config to update, if any
        package_name: Overrides ``packageName`` when given

    Returns:
        The config dict
    """
    config = copy.deepcopy(existing if existing is not None else DEFAULT_OPENAPI_CONFIG)
    additional = config.setdefault("additionalProperties", {})
    custom_names = additional.setdefault("customNames", {})

    for name in ReferenceSet(refs).names():
        custom_names[camelize(name)] = name

    if package_name:
        config["packageName"] = package_name
    return config


def emit_openapi_config(
    file_path: Union[str, Path],
    refs: Iterable[str],
    package_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Read-modify-write the generator config at ``file_path``."""
    config = build_openapi_config(refs, read_existing_config(file_path), package_name)
    write_json_file(file_path, config)
    logger.info(
        "Wrote generator config %s (%d custom names)",
        file_path,
        len(config["additionalProperties"]["customNames"]),
    )
    return config
