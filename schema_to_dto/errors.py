"""
Exception hierarchy for the schema to DTO generator.

Every fatal condition raised by the loaders, the directory merger, the
configuration loader and the generator derives from SchemaToDtoError, so
callers (the CLI in particular) can catch a single type.

Property path validation problems are not exceptions: they are reported
as a list of PathValidationError records (see pipeline.modifiers).
"""

from __future__ import annotations


class SchemaToDtoError(Exception):
    """Base class for all generator errors.

    Attributes:
        message: Human-readable error description
        context: Optional context about where the error occurred
    """

    def __init__(self, message: str, context: str | None = None):
        self.message = message
        self.context = context
        full_message = message
        if context:
            full_message = f"{message} (context: {context})"
        super().__init__(full_message)


class DirectoryNotFound(SchemaToDtoError, FileNotFoundError):
    """Raised when a schema directory does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Schema directory not found: {path}")


class SchemaFileNotFound(SchemaToDtoError, FileNotFoundError):
    """Raised when an input file (schema or configuration) does not exist."""

    def __init__(self, path: str, kind: str = "File"):
        self.path = path
        super().__init__(f"{kind} not found: {path}")


class NoSchemasFound(SchemaToDtoError):
    """Raised when a schema directory holds no .json files."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No .json files found in directory: {path}")


class SchemaParseError(SchemaToDtoError):
    """Raised when a schema file is not valid JSON or not a JSON object."""


class ConflictingDefinition(SchemaToDtoError):
    """Raised when two schema files define the same name with a different shape."""

    def __init__(self, name: str, first_source: str, second_source: str):
        self.name = name
        self.first_source = first_source
        self.second_source = second_source
        super().__init__(
            f"Conflicting schema definitions found for '{name}'. "
            f"Source files: '{first_source}' and '{second_source}'. "
            "Schema definitions with the same name must be identical."
        )


class UnresolvedReference(SchemaToDtoError):
    """Raised when a $ref names a definition that does not exist."""

    def __init__(self, ref: str, name: str):
        self.ref = ref
        self.name = name
        super().__init__(f"Invalid reference '{ref}' - referenced schema '{name}' not found in definitions.")


class InvalidSwaggerDocument(SchemaToDtoError, ValueError):
    """Raised when a document is missing a mandatory Swagger 2.0 field."""


class ConfigurationParseError(SchemaToDtoError):
    """Raised when a modifier configuration cannot be parsed."""


class UnsupportedConfigurationFormat(SchemaToDtoError, ValueError):
    """Raised when a configuration file has an unrecognised extension."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported file extension: {extension}. Supported extensions are .yml, .yaml, and .json")


class TemplateNotFound(SchemaToDtoError):
    """Raised when required templates are missing from the template directory."""

    def __init__(self, template_dir: str, missing: list[str]):
        self.template_dir = template_dir
        self.missing = missing
        listing = "\n".join(f"  - {name}" for name in missing)
        super().__init__(f"Required template files not found in directory: {template_dir}\nMissing templates:\n{listing}")


class OutputExistsError(SchemaToDtoError, FileExistsError):
    """Raised when an output file exists and overwriting is not allowed."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Output file already exists: {path}. Use force mode to overwrite.")


class OutputCollisionError(SchemaToDtoError):
    """Raised when two generated artifacts map to the same output file."""

    def __init__(self, path: str, first: str, second: str):
        self.path = path
        self.first = first
        self.second = second
        super().__init__(f"Definitions '{first}' and '{second}' both generate {path}. Rename one of them or use a modifier configuration to exclude it.")
