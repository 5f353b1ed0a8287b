"""Exceptions raised by the swagger modifier."""


class SwaggerModifierError(Exception):
    """Base class for all errors raised while modifying a document."""


class DocumentLoadError(SwaggerModifierError):
    """A document could not be read, fetched or parsed."""


class BundleError(DocumentLoadError):
    """An external $ref could not be resolved while bundling."""


class DocumentWriteError(SwaggerModifierError):
    """An output file could not be written."""


class ConfigError(SwaggerModifierError):
    """The config mapping file is unreadable or malformed."""


class DanglingReferenceError(SwaggerModifierError):
    """A $ref points at a section or entry that does not exist (strict mode)."""

    def __init__(self, ref: str, where: str = ""):
        self.ref = ref
        self.where = where
        message = f"Unresolved reference: {ref}"
        if where:
            message += f" (used in {where})"
        super().__init__(message)
