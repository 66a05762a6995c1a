"""
Type name formatting and base type mapping.

Every generated type name (DTO class, enum, constants class, referenced
class) goes through TypeNameFormatter.format so the configured prefix and
suffix are applied consistently across the whole model.
"""

from __future__ import annotations

from ...utils import to_pascal_case
from ..schema_ast.nodes import Schema
from .ir_nodes import TypeKind, TypeRef


class TypeNameFormatter:
    """Applies the global type name prefix/suffix and maps schema types to IR types."""

    def __init__(self, prefix: str = "", suffix: str = "", nullable_references: bool = False):
        """
        Args:
            prefix: Prepended to every generated type name
            suffix: Appended to every generated type name
            nullable_references: Mark $ref types as nullable (nullable reference types mode)
        """
        self.prefix = prefix or ""
        self.suffix = suffix or ""
        self.nullable_references = nullable_references

    def format(self, name: str) -> str:
        return f"{self.prefix}{name}{self.suffix}"

    def class_name(self, definition_name: str) -> str:
        """Formatted class name for a definition key."""
        return self.format(to_pascal_case(definition_name))

    def enum_name(self, schema_name: str, property_name: str) -> str:
        return self.format(f"{to_pascal_case(schema_name)}{to_pascal_case(property_name)}")

    def constants_name(self, schema_name: str, property_name: str) -> str:
        return self.format(f"{to_pascal_case(schema_name)}{to_pascal_case(property_name)}Constants")

    def map_type(self, schema: Schema | None) -> TypeRef:
        """
        Map a schema to its semantic IR type.

        Args:
            schema: The property schema (None maps to an untyped object)

        Returns:
            TypeRef for the schema
        """
        if schema is None:
            return TypeRef.any()

        if schema.ref:
            # Same name the referenced definition's class gets
            return TypeRef(
                kind=TypeKind.CLASS,
                name=self.class_name(schema.ref_name),
                is_nullable=self.nullable_references,
            )

        schema_type = (schema.type or "object").lower()

        if schema_type == "integer":
            return TypeRef.primitive("int64" if schema.format == "int64" else "int32")
        if schema_type == "number":
            return TypeRef.primitive("float" if schema.format == "float" else "decimal")
        if schema_type == "string":
            return TypeRef.primitive("datetime" if schema.format == "date-time" else "string")
        if schema_type == "boolean":
            return TypeRef.primitive("boolean")
        if schema_type == "array":
            item_schema = schema.items if schema.items is not None else Schema(type="object")
            return TypeRef.array_of(self.map_type(item_schema))

        return TypeRef.any()
