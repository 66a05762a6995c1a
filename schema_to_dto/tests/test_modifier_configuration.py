"""
Tests for the modifier configuration model and its YAML / JSON loader.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from schema_to_dto.errors import ConfigurationParseError, SchemaFileNotFound, UnsupportedConfigurationFormat
from schema_to_dto.pipeline.modifiers import (
    GlobalSettings,
    ModifierConfiguration,
    PropertyRule,
    PropertyValidation,
    loader,
)

TEST_DATA = Path(__file__).parent / "test_data"

SAMPLE_YAML = """
global:
  namespace: MyApi.Models
  generateEnumTypes: true
  defaultInclude: true
  includeDescriptions: false
  maxDepth: 5
  typeNamePrefix: Api
  typeNameSuffix: Dto
rules:
  User.password:
    include: false
  User.email:
    description: Primary e-mail address
    format: email
    validation:
      required: true
      maxLength: 255
      pattern: ^[^@]+@[^@]+$
      message: Invalid e-mail
  Order.total:
    type: decimal
    default: 0
    validation:
      minimum: 0
      maximum: 1000000.5
"""


class TestModifierConfiguration:
    def test_is_included_defaults_to_true(self):
        config = ModifierConfiguration()
        assert config.is_included("User.name")
        assert config.is_included("User")

    def test_is_included_follows_rule(self):
        config = ModifierConfiguration(rules={"User.password": PropertyRule(include=False), "User.name": PropertyRule()})
        assert not config.is_included("User.password")
        assert config.is_included("User.name")
        assert config.is_included("User.email")

    def test_is_included_honours_default_include(self):
        config = ModifierConfiguration(
            global_settings=GlobalSettings(default_include=False),
            rules={"User.name": PropertyRule(include=True)},
        )
        assert config.is_included("User.name")
        assert not config.is_included("User.email")

    def test_get_rule_is_exact(self):
        rule = PropertyRule(description="x")
        config = ModifierConfiguration(rules={"User.name": rule, "*.name": PropertyRule(include=False)})
        assert config.get_rule("User.name") is rule
        assert config.get_rule("user.name") is None
        assert config.get_rule("Order.name") is None

    def test_get_child_rules(self):
        config = ModifierConfiguration(
            rules={
                "User": PropertyRule(),
                "User.name": PropertyRule(),
                "user.address.city": PropertyRule(),
                "UserGroup.name": PropertyRule(),
            }
        )
        assert set(config.get_child_rules("User")) == {"User.name", "user.address.city"}

    def test_type_name_affixes(self):
        assert ModifierConfiguration().type_name_prefix == ""
        config = ModifierConfiguration(global_settings=GlobalSettings(type_name_prefix="Api"))
        assert config.type_name_prefix == "Api"
        assert config.type_name_suffix == ""


class TestLoader:
    def test_load_from_yaml(self):
        config = loader.load_from_yaml(SAMPLE_YAML)

        settings = config.global_settings
        assert settings.namespace == "MyApi.Models"
        assert settings.generate_enum_types is True
        assert settings.include_descriptions is False
        assert settings.max_depth == 5
        assert settings.type_name_prefix == "Api"
        assert settings.type_name_suffix == "Dto"

        assert list(config.rules) == ["User.password", "User.email", "Order.total"]
        assert config.rules["User.password"].include is False

        email = config.rules["User.email"]
        assert email.description == "Primary e-mail address"
        assert email.format == "email"
        assert email.validation == PropertyValidation(
            required=True, max_length=255, pattern="^[^@]+@[^@]+$", message="Invalid e-mail"
        )

        total = config.rules["Order.total"]
        assert total.type == "decimal"
        assert total.default == 0
        assert total.validation.maximum == 1000000.5

    def test_load_from_json_matches_yaml(self):
        data = yaml.safe_load(SAMPLE_YAML)
        assert loader.load_from_json(json.dumps(data)) == loader.load_from_yaml(SAMPLE_YAML)

    @pytest.mark.parametrize("text", ["", "   \n", None])
    def test_blank_input(self, text):
        assert loader.load_from_yaml(text) == ModifierConfiguration()
        assert loader.load_from_json(text) == ModifierConfiguration()

    def test_yaml_without_rules(self):
        config = loader.load_from_yaml("global:\n  namespace: X\n")
        assert config.rules == {}
        assert config.global_settings.namespace == "X"

    def test_yaml_parse_error(self):
        with pytest.raises(ConfigurationParseError) as exc_info:
            loader.load_from_yaml("rules: [unclosed")
        assert str(exc_info.value).startswith("Failed to parse YAML configuration:")
        assert exc_info.value.__cause__ is not None

    def test_json_parse_error(self):
        with pytest.raises(ConfigurationParseError) as exc_info:
            loader.load_from_json("{")
        assert str(exc_info.value).startswith("Failed to parse JSON configuration:")

    def test_rules_must_be_mappings(self):
        with pytest.raises(ConfigurationParseError):
            loader.load_from_yaml("rules:\n  User.name: [1, 2]\n")

    @pytest.mark.parametrize(
        "text,location",
        [
            ('rules:\n  User.password:\n    include: "false"\n', "rules.User.password.include"),
            ("rules:\n  User.email:\n    validation:\n      required: yes please\n", "rules.User.email.validation.required"),
            ("rules:\n  User.email:\n    validation:\n      maxLength: '255'\n", "rules.User.email.validation.maxLength"),
            ("rules:\n  User.email:\n    validation:\n      minLength: true\n", "rules.User.email.validation.minLength"),
            ("rules:\n  Order.total:\n    validation:\n      minimum: zero\n", "rules.Order.total.validation.minimum"),
            ("global:\n  defaultInclude: 'no'\n", "global.defaultInclude"),
            ("global:\n  maxDepth: 2.5\n", "global.maxDepth"),
            ("global:\n  namespace: 42\n", "global.namespace"),
        ],
    )
    def test_values_are_type_checked(self, text, location):
        with pytest.raises(ConfigurationParseError) as exc_info:
            loader.load_from_yaml(text)
        assert f"'{location}' must be" in str(exc_info.value)

    def test_rules_section_must_be_a_mapping(self):
        with pytest.raises(ConfigurationParseError):
            loader.load_from_json(json.dumps({"rules": ["User.password"]}))

    def test_round_trip_yaml(self):
        config = loader.load_from_yaml(SAMPLE_YAML)
        assert loader.load_from_yaml(loader.to_yaml(config)) == config

    def test_round_trip_json(self):
        config = loader.load_from_yaml(SAMPLE_YAML)
        assert loader.load_from_json(loader.to_json(config)) == config

    def test_serialization_omits_unset_fields(self):
        config = ModifierConfiguration(rules={"User.name": PropertyRule(validation=PropertyValidation(max_length=10))})
        document = json.loads(loader.to_json(config))
        assert document == {"rules": {"User.name": {"validation": {"maxLength": 10}}}}

    @pytest.mark.parametrize("name", ["petstore.yaml", "customer.json"])
    def test_load_file(self, name):
        config = loader.load(TEST_DATA / "configs" / name)
        assert config.global_settings is not None
        assert config.rules

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(SchemaFileNotFound):
            loader.load(tmp_path / "missing.yaml")

    def test_load_unsupported_extension(self):
        with pytest.raises(UnsupportedConfigurationFormat) as exc_info:
            loader.load(TEST_DATA / "configs" / "settings.toml")
        assert ".toml" in str(exc_info.value)

    def test_load_broken_file(self):
        with pytest.raises(ConfigurationParseError):
            loader.load(TEST_DATA / "configs" / "broken.yaml")

    @pytest.mark.parametrize("name", ["config.yml", "config.yaml", "config.json"])
    def test_save_and_load(self, tmp_path, name):
        config = loader.load_from_yaml(SAMPLE_YAML)
        path = tmp_path / name
        loader.save(config, path)
        assert loader.load(path) == config

    def test_save_unsupported_extension(self, tmp_path):
        with pytest.raises(UnsupportedConfigurationFormat):
            loader.save(ModifierConfiguration(), tmp_path / "config.ini")
