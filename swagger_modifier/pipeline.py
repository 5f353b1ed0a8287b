"""
Rewriting pipeline.

Runs the stages over one bundled document, in order:

1. promote titled inline schemas to definitions
2. normalize additionalProperties / Dictionaries shapes
3. share the enums of array-of-enum definitions
4. rename referenced models per operation
5. prune definitions no operation references
6. optionally write the generator config
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .additional_properties import normalize_document
from .bundler import SwaggerBundler
from .config import ConfigMapping
from .context import RewriteContext
from .enums import deduplicate_enum_arrays
from .exceptions import DanglingReferenceError
from .io import write_json_file
from .openapi_config import emit_openapi_config
from .promoter import promote_inline_definitions
from .pruner import remove_unused_models
from .refs import find_dangling_refs
from .renamer import rename_references

logger = logging.getLogger(__name__)


def rewrite_document(
    document: Dict[str, Any],
    mapping: Optional[ConfigMapping] = None,
    strict: bool = False,
) -> RewriteContext:
    """
    Apply stages 1-5 to ``document`` in place.

    Args:
        document: Bundled Swagger v2 document
        mapping: Prefix/suffix configuration, or None for no affixes
        strict: Raise DanglingReferenceError on structural anomalies

    Returns:
        The run's context; ``context.refs`` holds the references in use
    """
    context = RewriteContext(document=document, strict=strict)

    promote_inline_definitions(document)
    normalize_document(document)
    deduplicate_enum_arrays(context)
    rename_references(context, mapping)
    remove_unused_models(document, context.refs)

    if strict:
        dangling = find_dangling_refs(document)
        if dangling:
            where, ref = dangling[0]
            raise DanglingReferenceError(ref, where)

    return context


def modify_swagger_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    mapping: Optional[ConfigMapping] = None,
    openapi_config_output_path: Optional[Union[str, Path]] = None,
    strict: bool = False,
    bundler: Optional[SwaggerBundler] = None,
) -> RewriteContext:
    """
    Bundle ``input_path``, rewrite it and write the result to ``output_path``.

    Nothing is written if any stage fails; errors propagate to the caller.
    """
    bundler = bundler or SwaggerBundler()
    document = bundler.bundle(str(input_path))

    context = rewrite_document(document, mapping, strict)

    write_json_file(output_path, document)
    logger.info("Wrote %s", output_path)

    if openapi_config_output_path:
        package_name = mapping.package_name if mapping else None
        emit_openapi_config(openapi_config_output_path, context.refs, package_name)

    return context
