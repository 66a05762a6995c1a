"""
Modifier configuration module.

Contains the rule table model, its YAML/JSON loader and the property path
validator.
"""

from __future__ import annotations

from . import loader
from .modifier_configuration import GlobalSettings, ModifierConfiguration, PropertyRule, PropertyValidation
from .path_validator import PathValidationError, SchemaPathValidator

__all__ = [
    "GlobalSettings",
    "ModifierConfiguration",
    "PropertyRule",
    "PropertyValidation",
    "PathValidationError",
    "SchemaPathValidator",
    "loader",
]
