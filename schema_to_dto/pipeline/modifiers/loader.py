"""
Loading and saving of modifier configurations.

Configurations are YAML (.yml / .yaml) or JSON (.json) documents with
camelCase keys:

    global:
      namespace: MyApi.Models
      typeNamePrefix: Api
    rules:
      User.password:
        include: false
      User.email:
        validation:
          required: true
          maxLength: 255
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ...errors import ConfigurationParseError, SchemaFileNotFound, UnsupportedConfigurationFormat
from .modifier_configuration import GlobalSettings, ModifierConfiguration, PropertyRule, PropertyValidation

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = (".yml", ".yaml")
JSON_EXTENSIONS = (".json",)

# camelCase document key -> dataclass attribute
GLOBAL_KEYS = {
    "namespace": "namespace",
    "generateEnumTypes": "generate_enum_types",
    "defaultInclude": "default_include",
    "includeDescriptions": "include_descriptions",
    "maxDepth": "max_depth",
    "typeNamePrefix": "type_name_prefix",
    "typeNameSuffix": "type_name_suffix",
}

RULE_KEYS = {
    "include": "include",
    "format": "format",
    "description": "description",
    "type": "type",
    "default": "default",
}

VALIDATION_KEYS = {
    "required": "required",
    "minLength": "min_length",
    "maxLength": "max_length",
    "pattern": "pattern",
    "minimum": "minimum",
    "maximum": "maximum",
    "message": "message",
}

# Expected value type per key; keys not listed (default) accept any value
BOOL_KEYS = {"generateEnumTypes", "defaultInclude", "includeDescriptions", "include", "required"}
INT_KEYS = {"maxDepth", "minLength", "maxLength"}
NUMBER_KEYS = {"minimum", "maximum"}
STRING_KEYS = {"namespace", "typeNamePrefix", "typeNameSuffix", "format", "description", "type", "pattern", "message"}


def load(path: str | Path) -> ModifierConfiguration:
    """
    Load a configuration file, choosing the format from its extension.

    Args:
        path: Path to a .yml, .yaml or .json file

    Returns:
        The loaded configuration

    Raises:
        SchemaFileNotFound: if the file does not exist
        UnsupportedConfigurationFormat: for any other extension
        ConfigurationParseError: if the content cannot be parsed
    """
    path = Path(path)
    if not path.is_file():
        raise SchemaFileNotFound(str(path), kind="Configuration file")

    extension = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        text = f.read()

    logger.info("Loading modifier configuration %s", path)
    if extension in YAML_EXTENSIONS:
        return load_from_yaml(text)
    if extension in JSON_EXTENSIONS:
        return load_from_json(text)
    raise UnsupportedConfigurationFormat(extension)


def load_from_yaml(text: str) -> ModifierConfiguration:
    """Parse a YAML configuration string. Blank input yields an empty configuration."""
    if not text or not text.strip():
        return ModifierConfiguration()

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationParseError(f"Failed to parse YAML configuration: {e}") from e

    return _from_document(data, "YAML")


def load_from_json(text: str) -> ModifierConfiguration:
    """Parse a JSON configuration string. Blank input yields an empty configuration."""
    if not text or not text.strip():
        return ModifierConfiguration()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationParseError(f"Failed to parse JSON configuration: {e}") from e

    return _from_document(data, "JSON")


def to_yaml(config: ModifierConfiguration) -> str:
    """Serialize a configuration to YAML (camelCase keys, unset fields omitted)."""
    return yaml.safe_dump(to_document(config), sort_keys=False, allow_unicode=True)


def to_json(config: ModifierConfiguration) -> str:
    """Serialize a configuration to indented JSON (camelCase keys, unset fields omitted)."""
    return json.dumps(to_document(config), indent=2, ensure_ascii=False)


def save(config: ModifierConfiguration, path: str | Path) -> None:
    """Write a configuration to a file, choosing the format from its extension."""
    path = Path(path)
    extension = path.suffix.lower()
    if extension in YAML_EXTENSIONS:
        content = to_yaml(config)
    elif extension in JSON_EXTENSIONS:
        content = to_json(config)
    else:
        raise UnsupportedConfigurationFormat(extension)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def _from_document(data: Any, format_name: str) -> ModifierConfiguration:
    """Build a ModifierConfiguration from a decoded YAML/JSON document."""
    if data is None:
        return ModifierConfiguration()
    if not isinstance(data, dict):
        raise ConfigurationParseError(f"Failed to parse {format_name} configuration: top-level value must be a mapping")

    config = ModifierConfiguration()

    global_data = data.get("global")
    if global_data is not None:
        config.global_settings = _build(GlobalSettings, global_data, GLOBAL_KEYS, "global", format_name)

    rules_data = data.get("rules") or {}
    if not isinstance(rules_data, dict):
        raise ConfigurationParseError(f"Failed to parse {format_name} configuration: 'rules' must be a mapping")

    for path, rule_data in rules_data.items():
        rule = _build(PropertyRule, rule_data or {}, RULE_KEYS, f"rules.{path}", format_name)
        validation_data = (rule_data or {}).get("validation")
        if validation_data is not None:
            rule.validation = _build(PropertyValidation, validation_data, VALIDATION_KEYS, f"rules.{path}.validation", format_name)
        config.rules[str(path)] = rule

    return config


def _build(cls, data: Any, keys: dict[str, str], location: str, format_name: str):
    """Instantiate a settings dataclass from a mapping, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ConfigurationParseError(f"Failed to parse {format_name} configuration: '{location}' must be a mapping")

    instance = cls()
    for key, attr in keys.items():
        if key in data and data[key] is not None:
            _check_value(key, data[key], location, format_name)
            setattr(instance, attr, data[key])
    return instance


def _check_value(key: str, value: Any, location: str, format_name: str) -> None:
    # bool is an int subclass, so it is excluded from the numeric checks
    if key in BOOL_KEYS:
        valid, expected = isinstance(value, bool), "a boolean"
    elif key in INT_KEYS:
        valid, expected = isinstance(value, int) and not isinstance(value, bool), "an integer"
    elif key in NUMBER_KEYS:
        valid, expected = isinstance(value, (int, float)) and not isinstance(value, bool), "a number"
    elif key in STRING_KEYS:
        valid, expected = isinstance(value, str), "a string"
    else:
        return

    if not valid:
        raise ConfigurationParseError(
            f"Failed to parse {format_name} configuration: '{location}.{key}' must be {expected}, got {value!r}"
        )


def to_document(config: ModifierConfiguration) -> dict[str, Any]:
    """Convert a configuration to a plain dict with camelCase keys."""
    document: dict[str, Any] = {}

    if config.global_settings is not None:
        document["global"] = _dump(config.global_settings, GLOBAL_KEYS)

    rules: dict[str, Any] = {}
    for path, rule in config.rules.items():
        rule_doc = _dump(rule, RULE_KEYS)
        if rule.validation is not None:
            rule_doc["validation"] = _dump(rule.validation, VALIDATION_KEYS)
        rules[path] = rule_doc
    document["rules"] = rules

    return document


def _dump(instance, keys: dict[str, str]) -> dict[str, Any]:
    return {key: getattr(instance, attr) for key, attr in keys.items() if getattr(instance, attr) is not None}
