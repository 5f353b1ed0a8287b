"""
Config mapping: per-operation prefixes and suffixes for renamed models.

The mapping file is a JSON object. Top-level ``prefix``, ``suffix``,
``inputSuffix`` and ``packageName`` apply globally; every other key is an
API path mapping HTTP methods to their own affixes::

    {
      "prefix": "Api",
      "inputSuffix": "Input",
      "/search": {"get": {"prefix": "Search", "suffix": "V2"}}
    }

Per-operation values are appended to the global ones, not substituted.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigError, DocumentLoadError
from .io import load_json_file

logger = logging.getLogger(__name__)

FIELD_KEYS = {"prefix", "suffix", "inputSuffix", "input_suffix", "packageName", "package_name"}


class RenameAffixes(BaseModel):
    """Prefix, suffix and input suffix applied to referenced model names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    prefix: str = ""
    suffix: str = ""
    input_suffix: str = Field("", alias="inputSuffix")

    @field_validator("prefix", "suffix", "input_suffix", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def __add__(self, other: "RenameAffixes") -> "RenameAffixes":
        return RenameAffixes(
            prefix=self.prefix + other.prefix,
            suffix=self.suffix + other.suffix,
            input_suffix=self.input_suffix + other.input_suffix,
        )


class ConfigMapping(BaseModel):
    """Parsed config mapping file."""

    model_config = ConfigDict(populate_by_name=True)

    prefix: str = ""
    suffix: str = ""
    input_suffix: str = Field("", alias="inputSuffix")
    package_name: Optional[str] = Field(None, alias="packageName")
    operations: Dict[str, Dict[str, RenameAffixes]] = Field(default_factory=dict)

    @field_validator("prefix", "suffix", "input_suffix", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="before")
    @classmethod
    def split_operations(cls, data: Any) -> Any:
        """Move path keys of the raw mapping under ``operations``."""
        if not isinstance(data, dict):
            raise ValueError("config mapping must be a JSON object")
        if "operations" in data:
            return data

        split = {key: value for key, value in data.items() if key in FIELD_KEYS}
        operations = {}
        for key, value in data.items():
            if key in FIELD_KEYS:
                continue
            if not isinstance(value, dict):
                logger.warning("Ignoring config mapping entry %r: not an object", key)
                continue
            methods = {}
            for method, affixes in value.items():
                if not isinstance(affixes, dict):
                    logger.warning("Ignoring config mapping entry %r %r: not an object", key, method)
                    continue
                methods[method] = affixes
            operations[key] = methods
        split["operations"] = operations
        return split

    def global_affixes(self) -> RenameAffixes:
        return RenameAffixes(prefix=self.prefix, suffix=self.suffix, input_suffix=self.input_suffix)

    def affixes_for(self, api_path: str, method: str) -> RenameAffixes:
        """Effective affixes for one operation: global values plus the override."""
        affixes = self.global_affixes()
        override = self.operations.get(api_path, {}).get(method)
        if override is not None:
            affixes = affixes + override
        return affixes


def parse_config_mapping(data: Any) -> ConfigMapping:
    """Validate raw mapping data, raising ConfigError with the pydantic errors."""
    try:
        return ConfigMapping.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config mapping: {e}") from e


def load_config_mapping(file_path: Union[str, Path]) -> ConfigMapping:
    """
    Load and validate a config mapping file.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or is malformed
    """
    try:
        data = load_json_file(file_path)
    except DocumentLoadError as e:
        raise ConfigError(f"Error reading config mapping: {e}") from e

    mapping = parse_config_mapping(data)
    logger.info("Loaded config mapping from %s (%d paths)", file_path, len(mapping.operations))
    return mapping
