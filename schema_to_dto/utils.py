"""
Naming utilities for the schema to DTO generator.
"""

import re

_SEPARATORS = re.compile(r"[_\- ]+")
_NON_IDENTIFIER = re.compile(r"[^a-zA-Z0-9_]")
_NON_CONSTANT = re.compile(r"[^A-Z0-9_]")


def to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case or space-separated text to PascalCase.

    Text that already starts with an uppercase letter is returned unchanged so
    existing PascalCase names survive untouched.

    Examples:
        "NewPet" -> "NewPet"
        "pet" -> "Pet"
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FIRST_NAME"
        "order-line item" -> "OrderLineItem"
        "firstName" -> "FirstName"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return text

    if text[0].isupper():
        return text

    words = [word for word in _SEPARATORS.split(text) if word]
    if len(words) <= 1:
        return text[0].upper() + text[1:]

    return "".join(word[0].upper() + word[1:].lower() for word in words)


def to_enum_member_name(value) -> str:
    """Build an enum member identifier from an enum literal."""
    name = to_pascal_case(str(value))
    if name and name[0].isdigit():
        name = "Value" + name
    name = _NON_IDENTIFIER.sub("", name)
    return name or "Unknown"


def to_constant_name(value) -> str:
    """Build an UPPER_CASE constant identifier from a string enum literal."""
    name = str(value).replace("-", "_").replace(" ", "_").upper()
    if name and name[0].isdigit():
        name = "VALUE_" + name
    name = _NON_CONSTANT.sub("", name)
    return name or "UNKNOWN"


def format_number(value) -> str:
    """Render a JSON number the way it was written (10 stays 10, 1.5 stays 1.5)."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
