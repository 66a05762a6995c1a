"""
Enum and constants collection.

Sweeps every definition before any class is built and registers one
EnumInfo per integer enum property and one ConstantsInfo per string enum
property. Names are computed from (schema name, property name); a second
property producing the same name reuses the first registration.
"""

from __future__ import annotations

import logging

from ...utils import to_constant_name, to_enum_member_name
from ..schema_ast.nodes import InlineBranch, RefBranch, Schema
from .ir_nodes import ConstantInfo, ConstantsInfo, EnumInfo, EnumValueInfo
from .reference_resolver import ReferenceResolver
from .type_formatter import TypeNameFormatter

logger = logging.getLogger(__name__)


class EnumCollector:
    """Collects enum and constants metadata for one generation run."""

    def __init__(self, formatter: TypeNameFormatter, namespace: str):
        self.formatter = formatter
        self.namespace = namespace
        self.enums: dict[str, EnumInfo] = {}
        self.constants: dict[str, ConstantsInfo] = {}

    def collect(self, definitions: dict[str, Schema]) -> None:
        """Sweep all definitions in order."""
        resolver = ReferenceResolver(definitions)
        for name, schema in definitions.items():
            self._collect_schema(name, schema, resolver, set())

    def _collect_schema(self, schema_name: str, schema: Schema, resolver: ReferenceResolver, visiting: set[str]) -> None:
        if schema_name in visiting:
            return
        visiting.add(schema_name)

        for prop_name, prop in schema.properties.items():
            self.collect_property(schema_name, prop_name, prop)

        for branch in resolver.branches(schema):
            if isinstance(branch, RefBranch):
                # Referenced properties are registered under the referenced name
                self._collect_schema(branch.name, branch.schema, resolver, visiting)
            elif isinstance(branch, InlineBranch):
                for prop_name, prop in branch.schema.properties.items():
                    self.collect_property(schema_name, prop_name, prop)

    def collect_property(self, schema_name: str, property_name: str, schema: Schema | None) -> None:
        """Register the enum or constants type for one property, if it has an enum."""
        if schema is None or not schema.enum:
            return

        property_type = (schema.type or "").lower()

        if property_type == "integer":
            enum_name = self.formatter.enum_name(schema_name, property_name)
            if enum_name in self.enums:
                logger.debug("Reusing enum %s for %s.%s", enum_name, schema_name, property_name)
                return
            self.enums[enum_name] = EnumInfo(
                enum_name=enum_name,
                namespace=self.namespace,
                description=f"Enum values for {schema_name}.{property_name}",
                values=[
                    EnumValueInfo(name=to_enum_member_name(value), value=value, description=f"Value: {value}")
                    for value in schema.enum
                ],
            )

        elif property_type == "string":
            class_name = self.formatter.constants_name(schema_name, property_name)
            if class_name in self.constants:
                logger.debug("Reusing constants class %s for %s.%s", class_name, schema_name, property_name)
                return
            self.constants[class_name] = ConstantsInfo(
                class_name=class_name,
                namespace=self.namespace,
                description=f"Constants for {schema_name}.{property_name}",
                constants=[
                    ConstantInfo(name=to_constant_name(value), value=str(value), description=f"Value: {value}")
                    for value in schema.enum
                ],
            )
