"""
Modifier configuration model.

A modifier configuration is a table of rules keyed by dotted property
paths ("Order.Details.Product.Name") plus a few global settings. Rules can
exclude properties or whole definitions, override types, descriptions and
default values, and tighten or relax validation constraints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PropertyValidation:
    """Validation overrides for a single property. None means "use the schema value"."""

    required: bool | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    minimum: float | None = None
    maximum: float | None = None
    message: str | None = None


@dataclass
class PropertyRule:
    """A rule applied to one property path (or a whole definition)."""

    # None means included
    include: bool | None = None
    format: str | None = None
    validation: PropertyValidation | None = None
    description: str | None = None
    type: str | None = None
    default: Any = None

    @property
    def is_included(self) -> bool:
        return self.include if self.include is not None else True


@dataclass
class GlobalSettings:
    """Settings that apply to the whole generation run."""

    namespace: str | None = None
    generate_enum_types: bool | None = None
    default_include: bool = True
    include_descriptions: bool = True
    max_depth: int = 10
    type_name_prefix: str | None = None
    type_name_suffix: str | None = None


@dataclass
class ModifierConfiguration:
    """Property-path keyed rule table plus global settings."""

    global_settings: GlobalSettings | None = None
    rules: dict[str, PropertyRule] = field(default_factory=dict)

    def get_rule(self, property_path: str) -> PropertyRule | None:
        """Exact lookup of the rule for a property path."""
        return self.rules.get(property_path)

    def is_included(self, property_path: str) -> bool:
        """
        Check whether a property path should be generated.

        Args:
            property_path: Dotted path, e.g. "User.password" or "User"

        Returns:
            The rule's include flag if a rule exists, else the global
            default inclusion policy (True unless configured otherwise)
        """
        rule = self.get_rule(property_path)
        if rule is not None:
            return rule.is_included
        if self.global_settings is not None:
            return self.global_settings.default_include
        return True

    def get_child_rules(self, parent_path: str) -> dict[str, PropertyRule]:
        """Return all rules below a parent path (case-insensitive prefix match)."""
        prefix = (parent_path + ".").lower()
        return {path: rule for path, rule in self.rules.items() if path.lower().startswith(prefix)}

    @property
    def type_name_prefix(self) -> str:
        if self.global_settings is None:
            return ""
        return self.global_settings.type_name_prefix or ""

    @property
    def type_name_suffix(self) -> str:
        if self.global_settings is None:
            return ""
        return self.global_settings.type_name_suffix or ""
