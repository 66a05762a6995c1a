"""
IR (Intermediate Representation) node definitions.

These nodes represent the analyzed schema, ready for rendering: every
class has its final name, every property its final type, its effective
constraints and its ordered validation rules. The IR is target-language
neutral; backends translate TypeRef into concrete type names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ...utils import to_pascal_case
from ...validation_rules import ValidationRule


class TypeKind(Enum):
    """Kind of type in the IR."""

    PRIMITIVE = "primitive"  # int32, int64, float, decimal, datetime, string, boolean
    CLASS = "class"  # A generated DTO class
    ARRAY = "array"  # list of T
    ENUM = "enum"  # A generated integer enum
    ANY = "any"  # Untyped object
    OVERRIDE = "override"  # Type name taken verbatim from a modifier rule


@dataclass
class TypeRef:
    """A resolved property type."""

    kind: TypeKind = TypeKind.ANY
    name: str = ""  # Semantic primitive name, class/enum name or override text

    # For arrays
    item: TypeRef | None = None

    # Nullable marker (nullable reference types mode)
    is_nullable: bool = False

    @staticmethod
    def primitive(name: str) -> TypeRef:
        return TypeRef(kind=TypeKind.PRIMITIVE, name=name)

    @staticmethod
    def any() -> TypeRef:
        return TypeRef(kind=TypeKind.ANY, name="object")

    @staticmethod
    def array_of(item: TypeRef) -> TypeRef:
        return TypeRef(kind=TypeKind.ARRAY, name="list", item=item)

    @property
    def is_string(self) -> bool:
        return self.kind == TypeKind.PRIMITIVE and self.name == "string"

    @property
    def is_boolean(self) -> bool:
        return self.kind == TypeKind.PRIMITIVE and self.name == "boolean"


@dataclass
class PropertyModel:
    """A property of a generated class."""

    name: str = ""  # PascalCase property name
    json_name: str = ""  # Original schema key
    type: TypeRef = field(default_factory=TypeRef.any)
    description: str = ""

    is_required: bool = False
    is_nullable: bool = False

    # Constraint mirrors (effective values)
    min_length: int | None = None
    max_length: int | None = None
    pattern: str = ""
    minimum: float | None = None
    maximum: float | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool | None = None
    min_properties: int | None = None
    max_properties: int | None = None
    multiple_of: float | None = None
    enum_values: list[Any] = field(default_factory=list)

    # Generated enum / constants bindings
    enum_type_name: str | None = None
    constants_class_name: str | None = None

    # Already formatted for the target language
    default_value: str | None = None

    validation_rules: list[ValidationRule] = field(default_factory=list)

    @property
    def is_enum(self) -> bool:
        return bool(self.enum_values)

    @property
    def has_string_length(self) -> bool:
        return self.min_length is not None or self.max_length is not None


@dataclass
class ClassModel:
    """A generated DTO class."""

    class_name: str = ""  # Formatted name (prefix/suffix applied)
    original_name: str = ""  # Definition key
    namespace: str = ""
    description: str = ""
    properties: list[PropertyModel] = field(default_factory=list)

    # allOf $ref branches, kept for renderers that model inheritance
    base_types: list[str] = field(default_factory=list)

    @property
    def validator_name(self) -> str:
        """Validator class name, derived from the unformatted definition name."""
        return f"{to_pascal_case(self.original_name)}Validator"


@dataclass
class EnumValueInfo:
    """A member of a generated integer enum."""

    name: str = ""
    value: Any = None
    description: str = ""


@dataclass
class EnumInfo:
    """A generated integer enum."""

    enum_name: str = ""
    namespace: str = ""
    description: str = ""
    values: list[EnumValueInfo] = field(default_factory=list)


@dataclass
class ConstantInfo:
    """A member of a generated constants class."""

    name: str = ""
    value: str = ""
    description: str = ""


@dataclass
class ConstantsInfo:
    """A generated static class of string constants."""

    class_name: str = ""
    namespace: str = ""
    description: str = ""
    constants: list[ConstantInfo] = field(default_factory=list)


@dataclass
class GenerationModel:
    """Everything one generation run produces before rendering."""

    namespace: str = ""
    classes: list[ClassModel] = field(default_factory=list)
    enums: dict[str, EnumInfo] = field(default_factory=dict)
    constants: dict[str, ConstantsInfo] = field(default_factory=dict)

    def get_class(self, original_name: str) -> ClassModel | None:
        for class_model in self.classes:
            if class_model.original_name == original_name:
                return class_model
        return None
