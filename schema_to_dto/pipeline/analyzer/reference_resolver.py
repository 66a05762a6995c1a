"""
Reference resolver for $ref resolution.

Resolves local "#/definitions/Name" references against the document's
definitions and classifies allOf entries.
"""

from __future__ import annotations

from ..schema_ast.nodes import AllOfBranch, Schema, ref_to_name


class ReferenceResolver:
    """Resolves $ref to actual definitions."""

    def __init__(self, definitions: dict[str, Schema]):
        """
        Args:
            definitions: All named definitions of the document
        """
        self.definitions = definitions

    def resolve(self, ref: str) -> Schema | None:
        """Return the definition a $ref points to, or None if it is missing."""
        if not ref:
            return None
        return self.definitions.get(ref_to_name(ref))

    def resolve_schema(self, schema: Schema | None) -> Schema | None:
        """Follow a schema's $ref once; schemas without a $ref are returned as-is."""
        if schema is None or not schema.ref:
            return schema
        return self.resolve(schema.ref)

    def branches(self, schema: Schema) -> list[AllOfBranch]:
        """Classify the allOf entries of a schema into reference and inline branches."""
        return schema.all_of_branches(self.definitions)
