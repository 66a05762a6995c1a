"""
C# code generation backend.

Generates C# DTO classes, FluentValidation validators, enums and constants
classes from IR.
"""

from __future__ import annotations

from ..analyzer.ir_nodes import TypeKind, TypeRef
from .base import CodeBackend


class CSharpBackend(CodeBackend):
    """C# code generation backend."""

    TEMPLATE_LANG = "cs"
    FILE_EXTENSION = "cs"

    TYPE_MAP = {
        "int32": "int",
        "int64": "long",
        "float": "float",
        "decimal": "decimal",
        "datetime": "DateTime",
        "string": "string",
        "boolean": "bool",
        "object": "object",
    }

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate IR type to C# type string."""
        if type_ref.kind == TypeKind.OVERRIDE:
            # Configured types are used verbatim
            return type_ref.name

        result = self._translate_type_inner(type_ref)

        # Handle nullability
        if type_ref.is_nullable and not result.endswith("?"):
            result = f"{result}?"

        return result

    def _translate_type_inner(self, type_ref: TypeRef) -> str:
        """Inner type translation without nullable handling."""
        if type_ref.kind == TypeKind.PRIMITIVE:
            return self.TYPE_MAP.get(type_ref.name, type_ref.name)

        if type_ref.kind in (TypeKind.CLASS, TypeKind.ENUM):
            return type_ref.name

        if type_ref.kind == TypeKind.ARRAY:
            if type_ref.item is not None:
                return f"List<{self.translate_type(type_ref.item)}>"
            return "List<object>"

        return "object"
