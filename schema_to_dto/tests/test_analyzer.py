"""
Tests for the analyzer: class model building, property mapping, enum
collection and modifier rules.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from schema_to_dto.pipeline import CodeGeneratorConfig
from schema_to_dto.pipeline.analyzer import SchemaAnalyzer, TypeKind
from schema_to_dto.pipeline.modifiers import (
    GlobalSettings,
    ModifierConfiguration,
    PropertyRule,
    PropertyValidation,
    loader,
)
from schema_to_dto.pipeline.schema_ast import SchemaDirectoryMerger, SchemaParser, load_swagger_file
from schema_to_dto.validation_rules import EnumVariant, RuleKind

TEST_DATA = Path(__file__).parent / "test_data"


def _document(definitions):
    return SchemaParser().parse_document(
        {"swagger": "2.0", "info": {"title": "Test", "version": "1"}, "definitions": definitions}
    )


def _analyze(definitions, modifier_config=None, **config):
    return SchemaAnalyzer(CodeGeneratorConfig(**config), modifier_config).analyze(_document(definitions))


def _property(class_model, json_name):
    for prop in class_model.properties:
        if prop.json_name == json_name:
            return prop
    raise KeyError(json_name)


def _kinds(prop):
    return [rule.kind for rule in prop.validation_rules]


PET_DEFINITIONS = {
    "Pet": {"properties": {"id": {"type": "integer"}}, "required": []},
    "NewPet": {"properties": {"name": {"type": "string"}, "tag": {"type": "string"}}, "required": ["name"]},
}


class TestClassModels:
    def test_end_to_end_without_configuration(self):
        model = _analyze(PET_DEFINITIONS)

        assert [c.class_name for c in model.classes] == ["Pet", "NewPet"]
        assert RuleKind.NOT_EMPTY not in _kinds(_property(model.get_class("Pet"), "id"))

        new_pet = model.get_class("NewPet")
        assert _kinds(_property(new_pet, "name")) == [RuleKind.NOT_EMPTY]
        assert _kinds(_property(new_pet, "tag")) == []

    def test_property_order_follows_schema(self):
        model = _analyze({"A": {"properties": {"z": {}, "b": {}, "m": {}}}})
        assert [p.json_name for p in model.classes[0].properties] == ["z", "b", "m"]
        assert [p.name for p in model.classes[0].properties] == ["Z", "B", "M"]

    def test_generation_is_deterministic(self):
        document = load_swagger_file(TEST_DATA / "petstore.json")
        config = loader.load(TEST_DATA / "configs" / "petstore.yaml")

        first = SchemaAnalyzer(CodeGeneratorConfig(), config).analyze(document)
        second = SchemaAnalyzer(CodeGeneratorConfig(), config).analyze(document)

        assert first == second

    def test_description_override(self):
        config = ModifierConfiguration(rules={"A": PropertyRule(description="Overridden")})
        model = _analyze({"A": {"description": "Original", "properties": {}}}, config)
        assert model.classes[0].description == "Overridden"

    def test_empty_description_override_is_ignored(self):
        config = ModifierConfiguration(rules={"A": PropertyRule(description="")})
        model = _analyze({"A": {"description": "Original", "properties": {}}}, config)
        assert model.classes[0].description == "Original"

    def test_include_descriptions_false(self):
        config = ModifierConfiguration(global_settings=GlobalSettings(include_descriptions=False))
        model = _analyze({"A": {"description": "Original", "properties": {"x": {"description": "X"}}}}, config)
        assert model.classes[0].description == ""
        assert model.classes[0].properties[0].description == ""

    def test_namespace_precedence(self):
        assert _analyze({"A": {}}, namespace="From.Config").namespace == "From.Config"
        config = ModifierConfiguration(global_settings=GlobalSettings(namespace="From.Modifiers"))
        model = _analyze({"A": {}}, config, namespace="From.Config")
        assert model.namespace == "From.Modifiers"
        assert model.classes[0].namespace == "From.Modifiers"


class TestInclusion:
    def test_excluded_property(self):
        config = ModifierConfiguration(rules={"User.password": PropertyRule(include=False)})
        model = _analyze({"User": {"properties": {"name": {}, "password": {}}}}, config)
        assert [p.json_name for p in model.classes[0].properties] == ["name"]

    def test_excluded_definition(self):
        config = ModifierConfiguration(rules={"Error": PropertyRule(include=False)})
        model = _analyze({"Error": {"properties": {"code": {}}}, "User": {}}, config)
        assert [c.original_name for c in model.classes] == ["User"]
        assert model.get_class("Error") is None

    def test_default_include_false(self):
        config = ModifierConfiguration(
            global_settings=GlobalSettings(default_include=False),
            rules={"User": PropertyRule(include=True), "User.name": PropertyRule(include=True)},
        )
        model = _analyze({"User": {"properties": {"name": {}, "email": {}}}, "Other": {}}, config)
        assert [c.original_name for c in model.classes] == ["User"]
        assert [p.json_name for p in model.classes[0].properties] == ["name"]

    def test_wildcard_rules_are_not_applied(self):
        config = ModifierConfiguration(rules={"*.id": PropertyRule(include=False)})
        model = _analyze({"User": {"properties": {"id": {}}}}, config)
        assert [p.json_name for p in model.classes[0].properties] == ["id"]


class TestAllOf:
    DEFINITIONS = {
        "Base": {"properties": {"a": {"type": "string"}, "c": {"type": "string"}}, "required": ["a"]},
        "Derived": {
            "required": ["b"],
            "allOf": [
                {"$ref": "#/definitions/Base"},
                {"properties": {"b": {"type": "string"}, "d": {"type": "string"}}},
            ],
        },
    }

    def test_required_union(self):
        derived = _analyze(self.DEFINITIONS).get_class("Derived")

        assert [p.json_name for p in derived.properties] == ["a", "c", "b", "d"]
        assert _property(derived, "a").is_required
        assert _property(derived, "b").is_required
        assert not _property(derived, "c").is_required
        assert not _property(derived, "d").is_required

    def test_composing_required_applies_to_referenced_properties(self):
        definitions = {
            "Base": {"properties": {"a": {}, "c": {}}, "required": ["a"]},
            "Derived": {"required": ["c"], "allOf": [{"$ref": "#/definitions/Base"}]},
        }
        derived = _analyze(definitions).get_class("Derived")
        assert _property(derived, "c").is_required

    def test_inline_branch_required(self):
        definitions = {
            "Base": {"properties": {"a": {}}},
            "Derived": {"allOf": [{"$ref": "#/definitions/Base"}, {"required": ["a", "x"], "properties": {"x": {}}}]},
        }
        derived = _analyze(definitions).get_class("Derived")
        assert _property(derived, "a").is_required
        assert _property(derived, "x").is_required

    def test_base_types(self):
        config = ModifierConfiguration(global_settings=GlobalSettings(type_name_prefix="Api"))
        derived = _analyze(self.DEFINITIONS, config).get_class("Derived")
        assert derived.base_types == ["ApiBase"]

    def test_allof_property_paths(self):
        config = ModifierConfiguration(rules={"Derived.c": PropertyRule(include=False)})
        derived = _analyze(self.DEFINITIONS, config).get_class("Derived")
        assert "c" not in [p.json_name for p in derived.properties]
        assert "c" in [p.json_name for p in _analyze(self.DEFINITIONS, config).get_class("Base").properties]

    def test_petstore_pet(self):
        document = load_swagger_file(TEST_DATA / "petstore.json")
        pet = SchemaAnalyzer().analyze(document).get_class("Pet")
        assert [(p.json_name, p.is_required) for p in pet.properties] == [("name", True), ("tag", False), ("id", True)]


class TestTypes:
    @pytest.mark.parametrize(
        "schema,kind,name",
        [
            ({"type": "integer"}, TypeKind.PRIMITIVE, "int32"),
            ({"type": "integer", "format": "int64"}, TypeKind.PRIMITIVE, "int64"),
            ({"type": "number"}, TypeKind.PRIMITIVE, "decimal"),
            ({"type": "number", "format": "float"}, TypeKind.PRIMITIVE, "float"),
            ({"type": "string"}, TypeKind.PRIMITIVE, "string"),
            ({"type": "string", "format": "date-time"}, TypeKind.PRIMITIVE, "datetime"),
            ({"type": "boolean"}, TypeKind.PRIMITIVE, "boolean"),
            ({"type": "object"}, TypeKind.ANY, "object"),
            ({}, TypeKind.ANY, "object"),
            ({"$ref": "#/definitions/Other"}, TypeKind.CLASS, "Other"),
        ],
    )
    def test_type_mapping(self, schema, kind, name):
        model = _analyze({"A": {"properties": {"x": schema}}, "Other": {}})
        prop_type = model.get_class("A").properties[0].type
        assert prop_type.kind == kind
        assert prop_type.name == name

    def test_array_type(self):
        model = _analyze({"A": {"properties": {"x": {"type": "array", "items": {"$ref": "#/definitions/B"}}}}, "B": {}})
        prop_type = model.get_class("A").properties[0].type
        assert prop_type.kind == TypeKind.ARRAY
        assert prop_type.item.kind == TypeKind.CLASS
        assert prop_type.item.name == "B"

    def test_prefix_applies_to_classes_and_references(self):
        config = ModifierConfiguration(global_settings=GlobalSettings(type_name_prefix="Api"))
        model = _analyze(
            {"User": {"properties": {"name": {}}}, "Team": {"properties": {"owner": {"$ref": "#/definitions/User"}}}},
            config,
        )
        assert model.get_class("User").class_name == "ApiUser"
        assert _property(model.get_class("Team"), "owner").type.name == "ApiUser"

    def test_validator_name_uses_original_name(self):
        config = ModifierConfiguration(global_settings=GlobalSettings(type_name_prefix="Api", type_name_suffix="Dto"))
        user = _analyze({"user": {}}, config).classes[0]
        assert user.class_name == "ApiUserDto"
        assert user.validator_name == "UserValidator"

    def test_type_override(self):
        config = ModifierConfiguration(rules={"A.status": PropertyRule(type="StatusCode")})
        model = _analyze({"A": {"properties": {"status": {"type": "integer", "enum": [1, 2]}}}}, config, generate_enum_types=True)
        prop = model.classes[0].properties[0]
        assert prop.type.kind == TypeKind.OVERRIDE
        assert prop.type.name == "StatusCode"
        assert prop.enum_type_name is None
        # Enum detection is skipped, membership falls back to the plain check
        assert prop.validation_rules[-1].variant == EnumVariant.FALLBACK

    def test_nullable_mode(self):
        model = _analyze(
            {
                "A": {
                    "required": ["id"],
                    "properties": {"id": {"type": "integer"}, "name": {"type": "string"}, "b": {"$ref": "#/definitions/B"}},
                },
                "B": {},
            },
            use_nullable_reference_types=True,
        )
        a = model.get_class("A")
        assert not _property(a, "id").is_nullable
        assert not _property(a, "id").type.is_nullable
        assert _property(a, "name").is_nullable
        assert _property(a, "name").type.is_nullable
        assert _property(a, "b").type.is_nullable

    def test_null_property_schema(self):
        document = _document({"A": {"properties": {}}})
        document.definitions["A"].properties["x"] = None
        model = SchemaAnalyzer().analyze(document)
        prop = model.classes[0].properties[0]
        assert prop.type.kind == TypeKind.ANY
        assert prop.validation_rules == []


class TestDefaults:
    @pytest.mark.parametrize(
        "schema,expected",
        [
            ({"type": "string", "default": "abc"}, '"abc"'),
            ({"type": "boolean", "default": False}, "false"),
            ({"type": "integer", "default": 3}, "3"),
            ({"type": "number", "default": 2.5}, "2.5"),
            ({"type": "string"}, None),
        ],
    )
    def test_schema_default(self, schema, expected):
        model = _analyze({"A": {"properties": {"x": schema}}})
        assert model.classes[0].properties[0].default_value == expected

    def test_rule_default_wins(self):
        config = ModifierConfiguration(rules={"A.x": PropertyRule(default="new")})
        model = _analyze({"A": {"properties": {"x": {"type": "string", "default": "old"}}}}, config)
        assert model.classes[0].properties[0].default_value == '"new"'

    def test_rule_default_formatted_against_override_type(self):
        config = ModifierConfiguration(rules={"A.x": PropertyRule(type="bool", default=True)})
        model = _analyze({"A": {"properties": {"x": {"type": "string"}}}}, config)
        assert model.classes[0].properties[0].default_value == "true"


class TestValidationOverrides:
    def test_constraint_overrides(self):
        config = ModifierConfiguration(
            rules={
                "A.name": PropertyRule(
                    validation=PropertyValidation(required=True, min_length=2, max_length=10, pattern="^x", message="Bad name")
                ),
                "A.age": PropertyRule(validation=PropertyValidation(minimum=18)),
            }
        )
        model = _analyze(
            {
                "A": {
                    "properties": {
                        "name": {"type": "string", "maxLength": 100},
                        "age": {"type": "integer", "minimum": 0, "maximum": 150},
                    }
                }
            },
            config,
        )
        name = _property(model.classes[0], "name")
        assert name.is_required
        assert (name.min_length, name.max_length, name.pattern) == (2, 10, "^x")
        assert _kinds(name) == [RuleKind.NOT_EMPTY, RuleKind.MIN_LENGTH, RuleKind.MAX_LENGTH, RuleKind.PATTERN]
        assert all(rule.message == "Bad name" for rule in name.validation_rules)

        age = _property(model.classes[0], "age")
        assert age.minimum == 18
        assert age.maximum == 150
        assert [rule.parameters for rule in age.validation_rules] == [["18"], ["150"]]

    def test_required_can_be_relaxed(self):
        config = ModifierConfiguration(rules={"A.x": PropertyRule(validation=PropertyValidation(required=False))})
        model = _analyze({"A": {"required": ["x"], "properties": {"x": {"type": "string"}}}}, config)
        prop = model.classes[0].properties[0]
        assert not prop.is_required
        assert prop.validation_rules == []

    def test_rule_order(self):
        model = _analyze(
            {
                "A": {
                    "required": ["x"],
                    "properties": {
                        "x": {
                            "type": "array",
                            "minLength": 1,
                            "maxLength": 2,
                            "pattern": "p",
                            "minimum": 0,
                            "maximum": 9,
                            "minItems": 1,
                            "maxItems": 3,
                            "uniqueItems": True,
                            "multipleOf": 2,
                            "enum": [2, 4],
                        }
                    },
                }
            }
        )
        assert _kinds(model.classes[0].properties[0]) == [
            RuleKind.NOT_EMPTY,
            RuleKind.MIN_LENGTH,
            RuleKind.MAX_LENGTH,
            RuleKind.PATTERN,
            RuleKind.MIN_VALUE,
            RuleKind.MAX_VALUE,
            RuleKind.MIN_ITEMS,
            RuleKind.MAX_ITEMS,
            RuleKind.UNIQUE_ITEMS,
            RuleKind.MULTIPLE_OF,
            RuleKind.ENUM_MEMBERSHIP,
        ]

    def test_legacy_phrasing_without_configuration(self):
        definitions = {"A": {"properties": {"x": {"type": "array", "minItems": 1}}}}
        legacy = _analyze(definitions).classes[0].properties[0].validation_rules[0]
        guarded = _analyze(definitions, ModifierConfiguration()).classes[0].properties[0].validation_rules[0]

        assert legacy.parameters == ["x => x.Count >= 1"]
        assert guarded.parameters == ["x => x == null || x.Count() >= 1"]


class TestEnums:
    DEFINITIONS = {
        "Order": {
            "properties": {
                "status": {"type": "string", "enum": ["placed", "in-progress"]},
                "priority": {"type": "integer", "enum": [1, 2]},
            }
        }
    }

    def test_enum_and_constants_collection(self):
        model = _analyze(self.DEFINITIONS, generate_enum_types=True, namespace="Shop")

        assert list(model.enums) == ["OrderPriority"]
        priority = model.enums["OrderPriority"]
        assert priority.namespace == "Shop"
        assert priority.description == "Enum values for Order.priority"
        assert [(v.name, v.value, v.description) for v in priority.values] == [
            ("Value1", 1, "Value: 1"),
            ("Value2", 2, "Value: 2"),
        ]

        assert list(model.constants) == ["OrderStatusConstants"]
        status = model.constants["OrderStatusConstants"]
        assert status.description == "Constants for Order.status"
        assert [(c.name, c.value) for c in status.constants] == [("PLACED", "placed"), ("IN_PROGRESS", "in-progress")]

    def test_enum_binding(self):
        order = _analyze(self.DEFINITIONS, generate_enum_types=True).classes[0]

        priority = _property(order, "priority")
        assert priority.type.kind == TypeKind.ENUM
        assert priority.type.name == "OrderPriority"
        assert priority.enum_type_name == "OrderPriority"
        assert priority.validation_rules[-1].variant == EnumVariant.ENUM_TYPE

        status = _property(order, "status")
        assert status.type.name == "string"
        assert status.constants_class_name == "OrderStatusConstants"
        assert status.validation_rules[-1].variant == EnumVariant.CONSTANTS

    def test_no_enum_types_by_default(self):
        model = _analyze(self.DEFINITIONS)
        assert model.enums == {}
        assert model.constants == {}
        status = _property(model.classes[0], "status")
        assert status.constants_class_name is None
        assert status.validation_rules[-1].variant == EnumVariant.FALLBACK

    def test_modifier_setting_enables_enum_types(self):
        config = ModifierConfiguration(global_settings=GlobalSettings(generate_enum_types=True))
        assert list(_analyze(self.DEFINITIONS, config).enums) == ["OrderPriority"]

        config = ModifierConfiguration(global_settings=GlobalSettings(generate_enum_types=False))
        assert _analyze(self.DEFINITIONS, config, generate_enum_types=True).enums == {}

    def test_enum_dedup(self):
        definitions = {
            "Foo": {"properties": {"bar": {"type": "integer", "enum": [1, 2]}}},
            "foo": {"properties": {"bar": {"type": "integer", "enum": [7]}}},
        }
        model = _analyze(definitions, generate_enum_types=True)

        assert list(model.enums) == ["FooBar"]
        assert [v.value for v in model.enums["FooBar"].values] == [1, 2]
        assert all(_property(c, "bar").enum_type_name == "FooBar" for c in model.classes)

    def test_affixes_on_enum_names(self):
        config = ModifierConfiguration(global_settings=GlobalSettings(type_name_prefix="Api", type_name_suffix="Dto"))
        model = _analyze(self.DEFINITIONS, config, generate_enum_types=True)
        assert list(model.enums) == ["ApiOrderPriorityDto"]
        assert list(model.constants) == ["ApiOrderStatusConstantsDto"]

    def test_enums_through_all_of(self):
        definitions = {
            "Base": {"properties": {"kind": {"type": "integer", "enum": [1]}}},
            "Derived": {
                "allOf": [
                    {"$ref": "#/definitions/Base"},
                    {"properties": {"mode": {"type": "string", "enum": ["a"]}}},
                ]
            },
        }
        model = _analyze(definitions, generate_enum_types=True)
        assert list(model.enums) == ["BaseKind"]
        assert list(model.constants) == ["DerivedModeConstants"]


class TestSampleConfigurations:
    def test_petstore(self):
        document = load_swagger_file(TEST_DATA / "petstore.json")
        config = loader.load(TEST_DATA / "configs" / "petstore.yaml")
        model = SchemaAnalyzer(CodeGeneratorConfig(), config).analyze(document)

        assert model.namespace == "PetStore.Api"
        assert [c.class_name for c in model.classes] == ["ApiPet", "ApiNewPet", "ApiOrder"]

        order = model.get_class("Order")
        assert "id" not in [p.json_name for p in order.properties]
        assert _property(order, "status").description == "Current order status"
        assert _property(order, "status").default_value == '"placed"'
        assert _property(order, "priority").type.name == "ApiOrderPriority"
        assert _property(order, "pet").type.name == "ApiPet"

        quantity = _property(order, "quantity")
        assert quantity.maximum == 50
        assert [rule.message for rule in quantity.validation_rules] == ["Quantity must be between 1 and 50"] * 3

        tag = _property(model.get_class("NewPet"), "tag")
        assert tag.is_required
        assert tag.max_length == 16

    def test_customer_directory(self):
        document = SchemaDirectoryMerger().merge(TEST_DATA / "schemas")
        config = loader.load(TEST_DATA / "configs" / "customer.json")
        model = SchemaAnalyzer(CodeGeneratorConfig(), config).analyze(document)

        assert [c.class_name for c in model.classes] == ["AddressDto", "CountryDto", "CustomerDto", "OrderLineDto"]

        customer = model.get_class("Customer")
        assert [p.json_name for p in customer.properties] == ["id", "email", "address", "tier"]
        assert _property(customer, "address").type.name == "AddressDto"

        email = _property(customer, "email")
        assert email.type.kind == TypeKind.OVERRIDE
        assert email.type.name == "EmailAddress"
        assert email.max_length == 255
