import pytest

from schema_to_dto.pipeline.analyzer import TypeKind, TypeNameFormatter
from schema_to_dto.pipeline.schema_ast import Schema


@pytest.mark.parametrize(
    "prefix,suffix,expected",
    [
        ("", "", "User"),
        ("Api", "", "ApiUser"),
        ("", "Dto", "UserDto"),
        ("Api", "Dto", "ApiUserDto"),
        (None, None, "User"),
    ],
)
def test_format(prefix, suffix, expected):
    assert TypeNameFormatter(prefix, suffix).format("User") == expected


def test_generated_names():
    formatter = TypeNameFormatter("Api")
    assert formatter.class_name("new_pet") == "ApiNewPet"
    assert formatter.enum_name("order", "priority") == "ApiOrderPriority"
    assert formatter.constants_name("Order", "ship_status") == "ApiOrderShipStatusConstants"


def test_reference_uses_formatted_class_name():
    formatter = TypeNameFormatter("Api", "Dto")
    type_ref = formatter.map_type(Schema(ref="#/definitions/user"))
    assert type_ref.kind == TypeKind.CLASS
    assert type_ref.name == "ApiUserDto"
    assert not type_ref.is_nullable


def test_nullable_references():
    formatter = TypeNameFormatter(nullable_references=True)
    assert formatter.map_type(Schema(ref="#/definitions/User")).is_nullable
    assert not formatter.map_type(Schema(type="string")).is_nullable


def test_nested_arrays():
    formatter = TypeNameFormatter()
    type_ref = formatter.map_type(Schema(type="array", items=Schema(type="array", items=Schema(type="integer"))))
    assert type_ref.kind == TypeKind.ARRAY
    assert type_ref.item.kind == TypeKind.ARRAY
    assert type_ref.item.item.name == "int32"


def test_array_without_items():
    type_ref = TypeNameFormatter().map_type(Schema(type="array"))
    assert type_ref.item.kind == TypeKind.ANY


def test_none_schema():
    assert TypeNameFormatter().map_type(None).kind == TypeKind.ANY
