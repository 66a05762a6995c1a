"""
Schema parser that builds the schema model.

Phase 1 of the pipeline: turn raw JSON dictionaries into Schema and
SwaggerDocument nodes without resolving references.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ...errors import InvalidSwaggerDocument, SchemaFileNotFound, SchemaParseError
from .nodes import AnyExtra, ConstrainedExtra, Info, NoExtra, Schema, SwaggerDocument

logger = logging.getLogger(__name__)


class SchemaParser:
    """Parses JSON dictionaries into schema model nodes."""

    # JSON key -> Schema attribute for scalar fields copied verbatim
    SCALAR_FIELDS = {
        "$ref": "ref",
        "type": "type",
        "format": "format",
        "title": "title",
        "description": "description",
        "default": "default",
        "example": "example",
        "multipleOf": "multiple_of",
        "maximum": "maximum",
        "exclusiveMaximum": "exclusive_maximum",
        "minimum": "minimum",
        "exclusiveMinimum": "exclusive_minimum",
        "maxLength": "max_length",
        "minLength": "min_length",
        "pattern": "pattern",
        "maxItems": "max_items",
        "minItems": "min_items",
        "uniqueItems": "unique_items",
        "maxProperties": "max_properties",
        "minProperties": "min_properties",
        "discriminator": "discriminator",
        "readOnly": "read_only",
        "xml": "xml",
        "externalDocs": "external_docs",
    }

    # Fields that must hold a JSON string when present
    STRING_FIELDS = ("$ref", "title", "description", "format", "pattern")

    def parse_schema(self, data: dict[str, Any] | None, path: str = "#") -> Schema:
        """
        Parse a schema dictionary recursively.

        Args:
            data: The schema dictionary (None yields an empty schema)
            path: Current location, used in error messages

        Returns:
            The parsed Schema

        Raises:
            SchemaParseError: if a keyword holds a value of the wrong JSON type
        """
        if data is None:
            return Schema()
        if not isinstance(data, dict):
            raise SchemaParseError(f"Expected a schema object, got {type(data).__name__}", context=path)

        for key in self.STRING_FIELDS:
            if key in data and data[key] is not None and not isinstance(data[key], str):
                raise SchemaParseError(f"'{key}' must be a string, got {type(data[key]).__name__}", context=path)

        schema = Schema()
        for key, attr in self.SCALAR_FIELDS.items():
            value = data.get(key)
            if value is not None:
                setattr(schema, attr, value)

        # JSON Schema draft 4+ allows "type": ["string", "null"]; keep the first non-null entry
        if isinstance(schema.type, list):
            non_null = [t for t in schema.type if t != "null"]
            schema.type = non_null[0] if non_null else "null"

        # A draft 3 boolean "required" is rejected here
        schema.required = self.array_field(data, "required", path)
        if not all(isinstance(name, str) for name in schema.required):
            raise SchemaParseError("'required' must list property names", context=path)
        schema.enum = self.array_field(data, "enum", path)

        if isinstance(data.get("items"), dict):
            schema.items = self.parse_schema(data["items"], f"{path}/items")

        schema.all_of = [self.parse_schema(entry, f"{path}/allOf/{i}") for i, entry in enumerate(self.array_field(data, "allOf", path))]

        for name, prop in self.mapping_field(data, "properties", path).items():
            schema.properties[name] = self.parse_schema(prop, f"{path}/properties/{name}")

        if "additionalProperties" in data:
            schema.additional_properties = self._parse_additional_properties(data["additionalProperties"], path)

        return schema

    @staticmethod
    def array_field(data: dict[str, Any], key: str, path: str) -> list[Any]:
        value = data.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise SchemaParseError(f"'{key}' must be an array, got {type(value).__name__}", context=path)
        return list(value)

    @staticmethod
    def mapping_field(data: dict[str, Any], key: str, path: str) -> dict[str, Any]:
        value = data.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise SchemaParseError(f"'{key}' must be an object, got {type(value).__name__}", context=path)
        return value

    def _parse_additional_properties(self, value: Any, path: str):
        """Map the boolean-or-schema additionalProperties onto its three states."""
        if value is None:
            return None
        if value is True:
            return AnyExtra()
        if value is False:
            return NoExtra()
        if isinstance(value, dict):
            return ConstrainedExtra(schema=self.parse_schema(value, f"{path}/additionalProperties"))
        raise SchemaParseError(
            f"Unexpected value of type {type(value).__name__} for additionalProperties",
            context=path,
        )

    def parse_document(self, data: dict[str, Any]) -> SwaggerDocument:
        """
        Parse a Swagger 2.0 document dictionary.

        Args:
            data: The decoded JSON document

        Returns:
            The parsed SwaggerDocument (not yet validated)

        Raises:
            InvalidSwaggerDocument: if an info field is not a string
            SchemaParseError: if a list or map section has the wrong JSON type
        """
        info_data = data.get("info")
        info = None
        if isinstance(info_data, dict):
            for key in ("title", "version", "description", "termsOfService"):
                value = info_data.get(key)
                if value is not None and not isinstance(value, str):
                    raise InvalidSwaggerDocument(f"Document info field '{key}' must be a string, got {type(value).__name__}")
            info = Info(
                title=info_data.get("title") or "",
                version=info_data.get("version") or "",
                description=info_data.get("description") or "",
                terms_of_service=info_data.get("termsOfService") or "",
                contact=info_data.get("contact"),
                license=info_data.get("license"),
            )

        document = SwaggerDocument(
            swagger=str(data.get("swagger") or ""),
            info=info,
            host=data.get("host") or "",
            base_path=data.get("basePath") or "",
            schemes=self.array_field(data, "schemes", "#"),
            consumes=self.array_field(data, "consumes", "#"),
            produces=self.array_field(data, "produces", "#"),
            paths=dict(self.mapping_field(data, "paths", "#")),
            parameters=dict(self.mapping_field(data, "parameters", "#")),
            responses=dict(self.mapping_field(data, "responses", "#")),
        )

        for name, def_schema in self.mapping_field(data, "definitions", "#").items():
            document.definitions[name] = self.parse_schema(def_schema, f"#/definitions/{name}")

        return document


def validate_swagger_document(document: SwaggerDocument) -> None:
    """
    Check the mandatory Swagger 2.0 fields.

    Raises:
        InvalidSwaggerDocument: naming the first missing or invalid field
    """
    if not document.swagger.strip():
        raise InvalidSwaggerDocument("Document must have a 'swagger' field")

    if not document.swagger.startswith("2."):
        raise InvalidSwaggerDocument(f"Only Swagger 2.0 is supported. Found version: {document.swagger}")

    if document.info is None:
        raise InvalidSwaggerDocument("Document must have an 'info' field")

    if not document.info.title.strip():
        raise InvalidSwaggerDocument("Document info must have a 'title' field")

    if not document.info.version.strip():
        raise InvalidSwaggerDocument("Document info must have a 'version' field")


def parse_swagger(text: str) -> SwaggerDocument:
    """
    Parse and validate a Swagger 2.0 JSON string.

    Args:
        text: The JSON text

    Returns:
        The validated SwaggerDocument
    """
    if not text or not text.strip():
        raise InvalidSwaggerDocument("JSON string cannot be null or empty")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaParseError(f"Error parsing Swagger JSON: {e}") from e

    if not isinstance(data, dict):
        raise SchemaParseError("Error parsing Swagger JSON: top-level value must be an object")

    document = SchemaParser().parse_document(data)
    validate_swagger_document(document)
    return document


def load_swagger_file(path: str | Path) -> SwaggerDocument:
    """
    Load and validate a Swagger 2.0 JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        The validated SwaggerDocument
    """
    path = Path(path)
    if not path.is_file():
        raise SchemaFileNotFound(str(path))

    logger.info("Loading Swagger file %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise SchemaParseError(f"Error reading Swagger file '{path}': {e}") from e
    return parse_swagger(text)


def summarize(document: SwaggerDocument | None) -> str:
    """Build a short human-readable summary of a document."""
    if document is None:
        return "No document provided"

    info = document.info or Info()
    lines = [
        "Swagger Document Summary:",
        f"  Title: {info.title or 'N/A'}",
        f"  Version: {info.version or 'N/A'}",
        f"  Description: {info.description or 'N/A'}",
        f"  Swagger Version: {document.swagger}",
        f"  Host: {document.host}",
        f"  Base Path: {document.base_path}",
        f"  Schemes: [{', '.join(document.schemes)}]",
        f"  Paths: {len(document.paths)}",
        f"  Definitions: {len(document.definitions)}",
    ]

    for title, names in (("Available Paths", list(document.paths)), ("Available Definitions", list(document.definitions))):
        if not names:
            continue
        lines.append("")
        lines.append(f"  {title}:")
        lines.extend(f"    {name}" for name in names[:10])
        if len(names) > 10:
            lines.append(f"    ... and {len(names) - 10} more")

    return "\n".join(lines) + "\n"
