"""
Validation rule objects that generate validator code.

Each rule represents one constraint of a property (required, length
bounds, numeric bounds, pattern, array cardinality, uniqueness, multiple-of,
enum membership). A rule knows its kind, its parameters and its message,
and renders itself as a FluentValidation rule chain using the string
templates of validation_rules_{language}.json.
"""

import json
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .utils import format_number


class RuleKind(str, Enum):
    """Semantic kind of a validation rule."""

    NOT_EMPTY = "NotEmpty"
    MIN_LENGTH = "MinLength"
    MAX_LENGTH = "MaxLength"
    PATTERN = "Pattern"
    MIN_VALUE = "MinValue"
    MAX_VALUE = "MaxValue"
    MIN_ITEMS = "MinItems"
    MAX_ITEMS = "MaxItems"
    UNIQUE_ITEMS = "UniqueItems"
    MULTIPLE_OF = "MultipleOf"
    ENUM_MEMBERSHIP = "EnumMembership"


class EnumVariant(str, Enum):
    """How an enum membership check is expressed."""

    ENUM_TYPE = "enum_type"  # Property typed with a generated enum
    CONSTANTS = "constants"  # String property backed by a constants class
    FALLBACK = "fallback"  # Plain property, values compared as strings


class ValidationRule(ABC):
    """Base class for all validation rules"""

    KIND: RuleKind

    # Class-level cache for loaded string templates
    _string_templates: Dict[str, Dict[str, Any]] = {}

    def __init__(self, field_name: str, message: Optional[str] = None, language: str = "cs"):
        """
        Initialize a validation rule.

        Args:
            field_name: Name of the property being validated
            message: Custom message replacing the default one
            language: Target language of the string templates
        """
        self.field_name = field_name
        self.custom_message = message
        self.language = language

    @classmethod
    def _load_string_templates(cls, language: str) -> Dict[str, Any]:
        """
        Load string templates from JSON file for the given language.
        Results are cached to avoid repeated file I/O.
        """
        if language not in cls._string_templates:
            template_file = Path(__file__).parent / f"validation_rules_{language}.json"
            with open(template_file, "r", encoding="utf-8") as f:
                cls._string_templates[language] = json.load(f)
        return cls._string_templates[language]

    def template_section(self) -> Dict[str, Any]:
        """The JSON template block used by this rule (subclasses may pick a sub-block)."""
        templates = self._load_string_templates(self.language)
        class_name = self.__class__.__name__

        if class_name not in templates:
            raise KeyError(f"No string templates found for {class_name} in {self.language}")

        return templates[class_name]

    def get_string(self, key: str, **format_params) -> Union[str, List, Dict]:
        """
        Get a string template for this validation rule and format it.

        Args:
            key: The string key to retrieve (e.g., 'default_message', 'parameters')
            **format_params: Parameters to format into the string template

        Returns:
            Formatted string, list, or dict depending on the template structure
        """
        section = self.template_section()
        if key not in section:
            raise KeyError(f"Key '{key}' not found in templates for {self.__class__.__name__}")

        return self._format_template(section[key], format_params)

    def _format_template(self, template, format_params: dict):
        """Recursively format a template that can be a string, list, or dict."""
        if isinstance(template, str):
            return template.format(**format_params)
        elif isinstance(template, list):
            return [self._format_template(item, format_params) for item in template]
        elif isinstance(template, dict):
            return {k: self._format_template(v, format_params) for k, v in template.items()}
        else:
            return template

    @abstractmethod
    def get_template_params(self) -> Dict[str, Any]:
        """
        Get rule-specific parameters for template formatting.

        Returns:
            Dictionary with parameters specific to this validation rule
        """

    def uses_custom_message(self) -> bool:
        """Whether a custom message may replace the default one."""
        return True

    @property
    def kind(self) -> RuleKind:
        return self.KIND

    @property
    def method(self) -> str:
        """Name of the validator method, e.g. 'MaximumLength' or 'Must'."""
        return self.template_section()["method"]

    @property
    def parameters(self) -> List[str]:
        params = self.get_string("parameters", **self.get_template_params())
        return list(params)

    @property
    def message(self) -> str:
        if self.custom_message and self.uses_custom_message():
            return self.custom_message
        return self.get_string("default_message", **self.get_template_params())

    def generate_code(self) -> str:
        """Render the rule as one link of a validator rule chain."""
        template = self._load_string_templates(self.language).get("_template", {})
        call = template.get("rule_call", ".{method}({parameters})").format(method=self.method, parameters=", ".join(self.parameters))
        with_message = template.get("with_message", '.WithMessage("{message}")').format(message=escape_string(self.message))
        return call + with_message

    def __eq__(self, other) -> bool:
        if not isinstance(other, ValidationRule):
            return NotImplemented
        return (self.kind, self.parameters, self.message) == (other.kind, other.parameters, other.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.field_name!r}, parameters={self.parameters!r}, message={self.message!r})"


class CollectionValidationRule(ValidationRule):
    """
    Base class for array rules.

    These keep two phrasings: the legacy one (no null guard, fixed message)
    used when the run has no modifier configuration, and the null-guarded
    one used when it does.
    """

    def __init__(self, field_name: str, message: Optional[str] = None, legacy: bool = False, language: str = "cs"):
        super().__init__(field_name, message, language)
        self.legacy = legacy

    def template_section(self) -> Dict[str, Any]:
        section = super().template_section()
        if self.legacy:
            return {**section, **section["legacy"]}
        return section

    def uses_custom_message(self) -> bool:
        return not self.legacy


class NotEmptyRule(ValidationRule):
    """Validates that a required property is present and not empty"""

    KIND = RuleKind.NOT_EMPTY

    def get_template_params(self) -> Dict[str, Any]:
        return {}


class MinLengthRule(ValidationRule):
    """Validates minimum string length"""

    KIND = RuleKind.MIN_LENGTH

    def __init__(self, field_name: str, min_length: int, message: Optional[str] = None, language: str = "cs"):
        super().__init__(field_name, message, language)
        self.min_length = min_length

    def get_template_params(self) -> Dict[str, Any]:
        return {"min_length": self.min_length}


class MaxLengthRule(ValidationRule):
    """Validates maximum string length"""

    KIND = RuleKind.MAX_LENGTH

    def __init__(self, field_name: str, max_length: int, message: Optional[str] = None, language: str = "cs"):
        super().__init__(field_name, message, language)
        self.max_length = max_length

    def get_template_params(self) -> Dict[str, Any]:
        return {"max_length": self.max_length}


class PatternRule(ValidationRule):
    """Validates that a string matches a regex pattern"""

    KIND = RuleKind.PATTERN

    def __init__(self, field_name: str, pattern: str, message: Optional[str] = None, language: str = "cs"):
        super().__init__(field_name, message, language)
        self.pattern = pattern

    def get_template_params(self) -> Dict[str, Any]:
        # Verbatim string literal: only quotes need doubling
        return {"pattern": self.pattern, "literal_pattern": self.pattern.replace('"', '""')}


class MinValueRule(ValidationRule):
    """Validates minimum numeric value"""

    KIND = RuleKind.MIN_VALUE

    def __init__(self, field_name: str, minimum: float, message: Optional[str] = None, language: str = "cs"):
        super().__init__(field_name, message, language)
        self.minimum = minimum

    def get_template_params(self) -> Dict[str, Any]:
        return {"minimum": format_number(self.minimum)}


class MaxValueRule(ValidationRule):
    """Validates maximum numeric value"""

    KIND = RuleKind.MAX_VALUE

    def __init__(self, field_name: str, maximum: float, message: Optional[str] = None, language: str = "cs"):
        super().__init__(field_name, message, language)
        self.maximum = maximum

    def get_template_params(self) -> Dict[str, Any]:
        return {"maximum": format_number(self.maximum)}


class MinItemsRule(CollectionValidationRule):
    """Validates minimum array length"""

    KIND = RuleKind.MIN_ITEMS

    def __init__(self, field_name: str, min_items: int, message: Optional[str] = None, legacy: bool = False, language: str = "cs"):
        super().__init__(field_name, message, legacy, language)
        self.min_items = min_items

    def get_template_params(self) -> Dict[str, Any]:
        return {"min_items": self.min_items}


class MaxItemsRule(CollectionValidationRule):
    """Validates maximum array length"""

    KIND = RuleKind.MAX_ITEMS

    def __init__(self, field_name: str, max_items: int, message: Optional[str] = None, legacy: bool = False, language: str = "cs"):
        super().__init__(field_name, message, legacy, language)
        self.max_items = max_items

    def get_template_params(self) -> Dict[str, Any]:
        return {"max_items": self.max_items}


class UniqueItemsRule(CollectionValidationRule):
    """Validates that array items are distinct"""

    KIND = RuleKind.UNIQUE_ITEMS

    def get_template_params(self) -> Dict[str, Any]:
        return {}


class MultipleOfRule(ValidationRule):
    """Validates multiple of a number"""

    KIND = RuleKind.MULTIPLE_OF

    def __init__(self, field_name: str, multiple: float, message: Optional[str] = None, language: str = "cs"):
        super().__init__(field_name, message, language)
        self.multiple = multiple

    def get_template_params(self) -> Dict[str, Any]:
        return {"multiple": format_number(self.multiple)}


class EnumMembershipRule(ValidationRule):
    """Validates that a value is one of the allowed enum values"""

    KIND = RuleKind.ENUM_MEMBERSHIP

    def __init__(
        self,
        field_name: str,
        enum_values: List[Any],
        enum_type_name: Optional[str] = None,
        constants_class_name: Optional[str] = None,
        message: Optional[str] = None,
        language: str = "cs",
    ):
        super().__init__(field_name, message, language)
        self.enum_values = enum_values
        self.enum_type_name = enum_type_name
        self.constants_class_name = constants_class_name

    @property
    def variant(self) -> EnumVariant:
        if self.enum_type_name:
            return EnumVariant.ENUM_TYPE
        if self.constants_class_name:
            return EnumVariant.CONSTANTS
        return EnumVariant.FALLBACK

    def template_section(self) -> Dict[str, Any]:
        section = super().template_section()
        return {**section, **section[self.variant.value]}

    def get_template_params(self) -> Dict[str, Any]:
        return {
            "enum_type_name": self.enum_type_name or "",
            "enum_values": ", ".join(f'"{value}"' for value in self.enum_values),
        }


def escape_string(text: str) -> str:
    """Escape text for a regular double-quoted string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')
