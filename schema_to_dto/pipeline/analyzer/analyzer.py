"""
Schema analyzer that builds the IR.

Phase 2 of the pipeline: sweep enums, then turn every included definition
into a ClassModel, applying modifier rules at each property path and
attaching the validation rules of every property.
"""

from __future__ import annotations

import logging
from typing import Any

from ...utils import format_number, to_pascal_case
from ...validator import ValidationRuleBuilder
from ..config import CodeGeneratorConfig
from ..modifiers.modifier_configuration import ModifierConfiguration, PropertyRule
from ..schema_ast.nodes import InlineBranch, RefBranch, Schema, SwaggerDocument
from .enum_collector import EnumCollector
from .ir_nodes import ClassModel, ConstantsInfo, EnumInfo, GenerationModel, PropertyModel, TypeKind, TypeRef
from .reference_resolver import ReferenceResolver
from .type_formatter import TypeNameFormatter

logger = logging.getLogger(__name__)


class ClassModelBuilder:
    """Builds ClassModels for the definitions of one document."""

    def __init__(
        self,
        definitions: dict[str, Schema],
        formatter: TypeNameFormatter,
        namespace: str,
        modifier_config: ModifierConfiguration | None = None,
        enums: dict[str, EnumInfo] | None = None,
        constants: dict[str, ConstantsInfo] | None = None,
        generate_enum_types: bool = False,
        nullable_mode: bool = False,
    ):
        """
        Initialize the builder.

        Args:
            definitions: All definitions of the document
            formatter: Type name formatter (prefix/suffix, base type mapping)
            namespace: Namespace of the generated classes
            modifier_config: Optional modifier configuration
            enums: Enums collected by the enum sweep (read-only here)
            constants: Constants classes collected by the enum sweep (read-only here)
            generate_enum_types: Whether enum/constants types are generated
            nullable_mode: Mark optional properties as nullable
        """
        self.definitions = definitions
        self.resolver = ReferenceResolver(definitions)
        self.formatter = formatter
        self.namespace = namespace
        self.modifier_config = modifier_config
        self.enums = enums if enums is not None else {}
        self.constants = constants if constants is not None else {}
        self.generate_enum_types = generate_enum_types
        self.nullable_mode = nullable_mode

        self.rule_builder = ValidationRuleBuilder(legacy_mode=modifier_config is None)

        include_descriptions = True
        if modifier_config is not None and modifier_config.global_settings is not None:
            include_descriptions = modifier_config.global_settings.include_descriptions
        self.include_descriptions = include_descriptions

    @property
    def legacy_path(self) -> bool:
        """Plain property mapping: no enum generation and no modifier configuration."""
        return not self.generate_enum_types and self.modifier_config is None

    def is_included(self, path: str) -> bool:
        if self.modifier_config is None:
            return True
        return self.modifier_config.is_included(path)

    def get_rule(self, path: str) -> PropertyRule | None:
        if self.modifier_config is None:
            return None
        return self.modifier_config.get_rule(path)

    def build(self, name: str, schema: Schema, path: str | None = None) -> ClassModel:
        """
        Build the ClassModel of one definition.

        Args:
            name: Definition name
            schema: Definition schema
            path: Property path of the class (defaults to the definition name)

        Returns:
            The ClassModel, properties in schema order
        """
        path = path or name

        class_model = ClassModel(
            class_name=self.formatter.class_name(name),
            original_name=name,
            namespace=self.namespace,
            description=self._description(schema),
        )

        class_rule = self.get_rule(path)
        if class_rule is not None and class_rule.description:
            class_model.description = class_rule.description

        for prop_name, prop_schema, required in self._candidate_properties(schema, class_model):
            prop_path = f"{path}.{prop_name}"
            if not self.is_included(prop_path):
                logger.debug("Excluding property %s", prop_path)
                continue
            class_model.properties.append(self.map_property(name, prop_name, prop_schema, required, prop_path))

        return class_model

    def _candidate_properties(self, schema: Schema, class_model: ClassModel):
        """
        Yield (name, schema, required-set) for every property of a definition.

        allOf branches are flattened in declaration order. A property coming
        through a $ref branch is required if the referenced schema or the
        composing schema lists it.
        """
        if not schema.all_of:
            required = set(schema.required)
            for prop_name, prop_schema in schema.properties.items():
                yield prop_name, prop_schema, required
            return

        branches = self.resolver.branches(schema)
        composing_required = set(schema.required)
        for branch in branches:
            if isinstance(branch, InlineBranch):
                composing_required.update(branch.schema.required)

        for branch in branches:
            if isinstance(branch, RefBranch):
                class_model.base_types.append(self.formatter.class_name(branch.name))
                required = set(branch.schema.required) | composing_required
                for prop_name, prop_schema in branch.schema.properties.items():
                    yield prop_name, prop_schema, required
            else:
                required = set(branch.schema.required) | set(schema.required)
                for prop_name, prop_schema in branch.schema.properties.items():
                    yield prop_name, prop_schema, required

    def _description(self, schema: Schema | None) -> str:
        if schema is None or not self.include_descriptions:
            return ""
        return schema.description or ""

    def map_property(
        self,
        schema_name: str,
        name: str,
        schema: Schema | None,
        required: set[str],
        path: str,
    ) -> PropertyModel:
        """
        Build the PropertyModel of one property.

        Args:
            schema_name: Name of the definition owning the property
            name: Property key as written in the schema
            schema: Property schema (None is treated as an untyped object)
            required: Required property names of the owning schema
            path: Full dotted property path

        Returns:
            The PropertyModel with its validation rules
        """
        is_required = name in required

        if schema is None:
            return PropertyModel(
                name=to_pascal_case(name),
                json_name=name,
                type=TypeRef.any(),
                is_required=is_required,
                is_nullable=self.nullable_mode and not is_required,
            )

        if self.legacy_path:
            return self._map_plain_property(name, schema, is_required)

        rule = self.get_rule(path)
        validation = rule.validation if rule is not None else None

        prop = self._new_property(name, schema, is_required)

        if rule is not None and rule.description:
            prop.description = rule.description

        if validation is not None:
            if validation.required is not None:
                prop.is_required = validation.required
            if validation.min_length is not None:
                prop.min_length = validation.min_length
            if validation.max_length is not None:
                prop.max_length = validation.max_length
            if validation.pattern is not None:
                prop.pattern = validation.pattern
            if validation.minimum is not None:
                prop.minimum = validation.minimum
            if validation.maximum is not None:
                prop.maximum = validation.maximum

        prop.is_nullable = self.nullable_mode and not prop.is_required

        if rule is not None and rule.type:
            # Override types bypass mapping and enum detection
            prop.type = TypeRef(kind=TypeKind.OVERRIDE, name=rule.type)
        else:
            prop.type = self._resolve_type(schema_name, name, schema, prop)

        if rule is not None and rule.default is not None:
            prop.default_value = format_default_value(rule.default, prop.type)
        elif schema.default is not None:
            prop.default_value = format_default_value(schema.default, prop.type)

        prop.validation_rules = self.rule_builder.build(
            name,
            schema,
            prop.is_required,
            enum_type_name=prop.enum_type_name,
            constants_class_name=prop.constants_class_name,
            rule=rule,
        )
        return prop

    def _map_plain_property(self, name: str, schema: Schema, is_required: bool) -> PropertyModel:
        """Map a property without enum lookup or modifier rules."""
        prop = self._new_property(name, schema, is_required)
        prop.is_nullable = self.nullable_mode and not is_required
        prop.type = self._mark_nullable(self.formatter.map_type(schema), prop.is_nullable)
        if schema.default is not None:
            prop.default_value = format_default_value(schema.default, prop.type)
        prop.validation_rules = self.rule_builder.build(name, schema, is_required)
        return prop

    def _new_property(self, name: str, schema: Schema, is_required: bool) -> PropertyModel:
        return PropertyModel(
            name=to_pascal_case(name),
            json_name=name,
            description=self._description(schema),
            is_required=is_required,
            min_length=schema.min_length,
            max_length=schema.max_length,
            pattern=schema.pattern,
            minimum=schema.minimum,
            maximum=schema.maximum,
            min_items=schema.min_items,
            max_items=schema.max_items,
            unique_items=schema.unique_items,
            min_properties=schema.min_properties,
            max_properties=schema.max_properties,
            multiple_of=schema.multiple_of,
            enum_values=list(schema.enum),
        )

    def _resolve_type(self, schema_name: str, name: str, schema: Schema, prop: PropertyModel) -> TypeRef:
        """Resolve the property type, binding generated enums and constants classes."""
        if schema.enum:
            property_type = (schema.type or "").lower()
            if property_type == "integer":
                enum_name = self.formatter.enum_name(schema_name, name)
                if enum_name in self.enums:
                    prop.enum_type_name = enum_name
                    return self._mark_nullable(TypeRef(kind=TypeKind.ENUM, name=enum_name), prop.is_nullable)
            elif property_type == "string":
                constants_name = self.formatter.constants_name(schema_name, name)
                if constants_name in self.constants:
                    # The property stays a string; validation refers to the constants class
                    prop.constants_class_name = constants_name

        return self._mark_nullable(self.formatter.map_type(schema), prop.is_nullable)

    @staticmethod
    def _mark_nullable(type_ref: TypeRef, is_nullable: bool) -> TypeRef:
        if is_nullable:
            type_ref.is_nullable = True
        return type_ref


class SchemaAnalyzer:
    """Analyzes a document and produces the GenerationModel."""

    def __init__(self, config: CodeGeneratorConfig | None = None, modifier_config: ModifierConfiguration | None = None):
        """
        Initialize the analyzer.

        Args:
            config: Code generation configuration
            modifier_config: Optional modifier configuration
        """
        self.config = config or CodeGeneratorConfig()
        self.modifier_config = modifier_config

    @property
    def namespace(self) -> str:
        """Target namespace; a configured global namespace wins."""
        settings = self.modifier_config.global_settings if self.modifier_config is not None else None
        if settings is not None and settings.namespace:
            return settings.namespace
        return self.config.namespace

    @property
    def generate_enum_types(self) -> bool:
        settings = self.modifier_config.global_settings if self.modifier_config is not None else None
        if settings is not None and settings.generate_enum_types is not None:
            return settings.generate_enum_types
        return self.config.generate_enum_types

    def create_formatter(self) -> TypeNameFormatter:
        prefix = suffix = ""
        if self.modifier_config is not None:
            prefix = self.modifier_config.type_name_prefix
            suffix = self.modifier_config.type_name_suffix
        return TypeNameFormatter(prefix, suffix, nullable_references=self.config.use_nullable_reference_types)

    def analyze(self, document: SwaggerDocument) -> GenerationModel:
        """
        Build the GenerationModel for a document.

        The enum sweep over all definitions completes before the first
        ClassModel is built.

        Args:
            document: The parsed (and, for directories, merged) document

        Returns:
            GenerationModel with classes in definition order
        """
        namespace = self.namespace
        formatter = self.create_formatter()
        generate_enums = self.generate_enum_types

        collector = EnumCollector(formatter, namespace)
        if generate_enums:
            collector.collect(document.definitions)
            logger.info("Collected %d enums and %d constants classes", len(collector.enums), len(collector.constants))

        builder = ClassModelBuilder(
            document.definitions,
            formatter,
            namespace,
            modifier_config=self.modifier_config,
            enums=collector.enums,
            constants=collector.constants,
            generate_enum_types=generate_enums,
            nullable_mode=self.config.use_nullable_reference_types,
        )

        model = GenerationModel(namespace=namespace, enums=collector.enums, constants=collector.constants)
        for name, schema in document.definitions.items():
            if self.modifier_config is not None and not self.modifier_config.is_included(name):
                logger.info("Skipping definition %s (excluded by configuration)", name)
                continue
            model.classes.append(builder.build(name, schema))

        return model


def format_default_value(value: Any, type_ref: TypeRef) -> str:
    """
    Format a default value for the final property type.

    Strings are quoted and booleans lower-cased; anything else is written as is.
    """
    type_name = type_ref.name.lower()
    if type_ref.is_string or (type_ref.kind == TypeKind.OVERRIDE and type_name == "string"):
        return f'"{value}"'
    if type_ref.is_boolean or (type_ref.kind == TypeKind.OVERRIDE and type_name in ("bool", "boolean")):
        return str(value).lower()
    return format_number(value)
