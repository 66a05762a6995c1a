"""
Analyzer module.

Contains reference resolution, type name formatting, the enum sweep and
class model building.
"""

from __future__ import annotations

from .analyzer import ClassModelBuilder, SchemaAnalyzer, format_default_value
from .enum_collector import EnumCollector
from .ir_nodes import (
    ClassModel,
    ConstantInfo,
    ConstantsInfo,
    EnumInfo,
    EnumValueInfo,
    GenerationModel,
    PropertyModel,
    TypeKind,
    TypeRef,
)
from .reference_resolver import ReferenceResolver
from .type_formatter import TypeNameFormatter

__all__ = [
    "ClassModel",
    "ClassModelBuilder",
    "ConstantInfo",
    "ConstantsInfo",
    "EnumCollector",
    "EnumInfo",
    "EnumValueInfo",
    "GenerationModel",
    "PropertyModel",
    "ReferenceResolver",
    "SchemaAnalyzer",
    "TypeKind",
    "TypeNameFormatter",
    "TypeRef",
    "format_default_value",
]
