"""
Directory merger for JSON Schema files.

Loads every *.json file of a directory, extracts the root schemas and
their internal definitions, and merges them into one SwaggerDocument.
Identical duplicate definitions are allowed; conflicting ones are fatal.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ...errors import ConflictingDefinition, DirectoryNotFound, NoSchemasFound, SchemaParseError, UnresolvedReference
from .nodes import ConstrainedExtra, Info, Schema, SwaggerDocument
from .parser import SchemaParser

logger = logging.getLogger(__name__)

MERGED_TITLE = "Generated from JSON Schema Directory"
MERGED_VERSION = "1.0.0"


@dataclass
class _Origin:
    """Where a merged definition came from."""

    schema: Schema
    source: str


class SchemaDirectoryMerger:
    """Merges a directory of JSON Schema files into one document."""

    def __init__(self, parser: SchemaParser | None = None):
        self.parser = parser or SchemaParser()

    def merge(self, directory: str | Path) -> SwaggerDocument:
        """
        Load and merge all JSON Schema files of a directory.

        Args:
            directory: Directory containing *.json schema files (not recursive)

        Returns:
            A Swagger 2.0 document holding every merged definition

        Raises:
            DirectoryNotFound: if the directory does not exist
            NoSchemasFound: if it contains no .json files
            SchemaParseError: if a file is not a readable JSON Schema object
            ConflictingDefinition: if two files define one name differently
            UnresolvedReference: if a $ref names a missing definition
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise DirectoryNotFound(str(directory))

        files = sorted(p for p in directory.glob("*.json") if p.is_file())
        if not files:
            raise NoSchemasFound(str(directory))

        processed: dict[str, _Origin] = {}
        for path in files:
            self._load_file(path, processed)

        document = SwaggerDocument(
            swagger="2.0",
            info=Info(title=MERGED_TITLE, version=MERGED_VERSION),
            definitions={name: origin.schema for name, origin in processed.items()},
        )

        self.resolve_references(document)
        logger.info("Merged %d definitions from %d files in %s", len(document.definitions), len(files), directory)
        return document

    def _load_file(self, path: Path, processed: dict[str, _Origin]) -> None:
        """Parse one schema file and register its root schema and internal definitions."""
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SchemaParseError(f"Error parsing JSON Schema file '{path}': {e}") from e

        if not isinstance(raw, dict):
            raise SchemaParseError(f"Error parsing JSON Schema file '{path}': top-level value must be an object")

        try:
            schema = self.parser.parse_schema(raw, path.name)
            definitions = {
                def_name: self.parser.parse_schema(def_raw, f"{path.name}#/definitions/{def_name}")
                for def_name, def_raw in self.parser.mapping_field(raw, "definitions", path.name).items()
            }
        except SchemaParseError as e:
            raise SchemaParseError(f"Error parsing JSON Schema file '{path}': {e.message}", context=e.context) from e

        name = schema.title or path.stem
        if not self._register(name, schema, str(path), processed):
            # An identical root was already registered; its definitions came with it
            return

        for def_name, def_schema in definitions.items():
            self._register(def_name, def_schema, f"{path} (internal definition)", processed)

    def _register(self, name: str, schema: Schema, source: str, processed: dict[str, _Origin]) -> bool:
        """
        Register a named schema, checking for conflicts.

        Returns:
            True if the schema was added, False if it duplicated an identical one
        """
        existing = processed.get(name)
        if existing is not None:
            if not schemas_semantically_equal(schema, existing.schema):
                raise ConflictingDefinition(name, existing.source, source)
            logger.debug("Skipping identical duplicate definition '%s' from %s", name, source)
            return False

        processed[name] = _Origin(schema=schema, source=source)
        return True

    def resolve_references(self, document: SwaggerDocument) -> None:
        """Check that every $ref in the document names an existing definition."""
        for schema in document.definitions.values():
            self._check_refs(schema, document.definitions)

    def _check_refs(self, schema: Schema | None, definitions: dict[str, Schema]) -> None:
        if schema is None:
            return

        for prop in schema.properties.values():
            self._check_refs(prop, definitions)

        self._check_refs(schema.items, definitions)

        for entry in schema.all_of:
            self._check_refs(entry, definitions)

        if isinstance(schema.additional_properties, ConstrainedExtra):
            self._check_refs(schema.additional_properties.schema, definitions)

        if schema.ref and schema.ref_name not in definitions:
            raise UnresolvedReference(schema.ref, schema.ref_name)


def schemas_semantically_equal(first: Schema | None, second: Schema | None) -> bool:
    """
    Compare two schemas ignoring descriptions.

    additionalProperties, discriminator, readOnly, xml and externalDocs are
    not compared either.
    """
    if first is None and second is None:
        return True
    if first is None or second is None:
        return False

    return (
        first.type == second.type
        and first.format == second.format
        and first.ref == second.ref
        and first.max_length == second.max_length
        and first.min_length == second.min_length
        and first.maximum == second.maximum
        and first.minimum == second.minimum
        and first.max_items == second.max_items
        and first.min_items == second.min_items
        and first.unique_items == second.unique_items
        and first.pattern == second.pattern
        and _unordered_equal(first.required, second.required)
        and _unordered_equal(first.enum, second.enum)
        and _properties_equal(first.properties, second.properties)
        and schemas_semantically_equal(first.items, second.items)
        and _all_of_equal(first.all_of, second.all_of)
    )


def _unordered_equal(first: list[Any], second: list[Any]) -> bool:
    if len(first) != len(second):
        return False
    return sorted(map(str, first)) == sorted(map(str, second))


def _properties_equal(first: dict[str, Schema], second: dict[str, Schema]) -> bool:
    if len(first) != len(second):
        return False
    return all(name in second and schemas_semantically_equal(schema, second[name]) for name, schema in first.items())


def _all_of_equal(first: list[Schema], second: list[Schema]) -> bool:
    if len(first) != len(second):
        return False
    return all(schemas_semantically_equal(a, b) for a, b in zip(first, second))
