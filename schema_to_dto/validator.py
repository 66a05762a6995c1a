"""
Validation rule builder.

Derives the ordered list of validation rules of a property from its
effective constraints (schema values, overridden by modifier rules).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from .validation_rules import (
    EnumMembershipRule,
    MaxItemsRule,
    MaxLengthRule,
    MaxValueRule,
    MinItemsRule,
    MinLengthRule,
    MinValueRule,
    MultipleOfRule,
    NotEmptyRule,
    PatternRule,
    UniqueItemsRule,
    ValidationRule,
)

if TYPE_CHECKING:
    from .pipeline.modifiers.modifier_configuration import PropertyRule
    from .pipeline.schema_ast.nodes import Schema


class ValidationRuleBuilder:
    """Build validation rules from schema constraints and modifier overrides"""

    def __init__(self, legacy_mode: bool = False, language: str = "cs"):
        """
        Initialize the rule builder.

        Args:
            legacy_mode: True when the run has no modifier configuration; array
                rules then use the legacy phrasing without null guards
            language: Target language of the rule templates
        """
        self.legacy_mode = legacy_mode
        self.language = language

    def build(
        self,
        field_name: str,
        schema: Schema,
        is_required: bool,
        enum_type_name: Optional[str] = None,
        constants_class_name: Optional[str] = None,
        rule: Optional[PropertyRule] = None,
    ) -> List[ValidationRule]:
        """
        Build the rules of a single property.

        The emission order is fixed: required, length bounds, pattern,
        numeric bounds, array rules, multiple-of, enum membership.

        Args:
            field_name: Name of the property
            schema: The property schema
            is_required: Effective required flag (after overrides)
            enum_type_name: Generated enum the property is typed with, if any
            constants_class_name: Generated constants class backing the property, if any
            rule: Modifier rule for the property path, if any

        Returns:
            Ordered list of rules
        """
        validation = rule.validation if rule is not None else None

        min_length = schema.min_length
        max_length = schema.max_length
        minimum = schema.minimum
        maximum = schema.maximum
        pattern = schema.pattern
        message = None
        if validation is not None:
            min_length = validation.min_length if validation.min_length is not None else min_length
            max_length = validation.max_length if validation.max_length is not None else max_length
            minimum = validation.minimum if validation.minimum is not None else minimum
            maximum = validation.maximum if validation.maximum is not None else maximum
            pattern = validation.pattern if validation.pattern is not None else pattern
            message = validation.message

        rules: List[ValidationRule] = []

        if is_required:
            rules.append(NotEmptyRule(field_name, message, self.language))

        if min_length is not None:
            rules.append(MinLengthRule(field_name, min_length, message, self.language))

        if max_length is not None:
            rules.append(MaxLengthRule(field_name, max_length, message, self.language))

        if pattern:
            rules.append(PatternRule(field_name, pattern, message, self.language))

        if minimum is not None:
            rules.append(MinValueRule(field_name, minimum, message, self.language))

        if maximum is not None:
            rules.append(MaxValueRule(field_name, maximum, message, self.language))

        rules.extend(self._create_array_rules(field_name, schema, message))

        if schema.multiple_of is not None:
            rules.append(MultipleOfRule(field_name, schema.multiple_of, message, self.language))

        if schema.enum:
            rules.append(
                EnumMembershipRule(
                    field_name,
                    schema.enum,
                    enum_type_name=enum_type_name,
                    constants_class_name=constants_class_name,
                    message=message,
                    language=self.language,
                )
            )

        return rules

    def _create_array_rules(self, field_name: str, schema: Schema, message: Optional[str]) -> List[ValidationRule]:
        """Create array validation rules"""
        rules: List[ValidationRule] = []

        if schema.min_items is not None:
            rules.append(MinItemsRule(field_name, schema.min_items, message, self.legacy_mode, self.language))

        if schema.max_items is not None:
            rules.append(MaxItemsRule(field_name, schema.max_items, message, self.legacy_mode, self.language))

        if schema.unique_items:
            rules.append(UniqueItemsRule(field_name, message, self.legacy_mode, self.language))

        return rules
