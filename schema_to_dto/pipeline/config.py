"""
Configuration for the code generator pipeline.

These are the generation options (namespace, enum generation, C# flavour,
templates, output handling). Per-property customisation lives in the
modifier configuration (see pipeline.modifiers).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Namespace of generated types (a modifier configuration may override it)
    namespace: str = "Generated"

    # Generate C# enums for integer enums and constants classes for string enums
    generate_enum_types: bool = False

    # Mark optional properties (and references) as nullable: string?, Pet?
    use_nullable_reference_types: bool = False

    # Use the C# 11 `required` keyword instead of the [Required] attribute
    use_required_keyword: bool = False

    # Emit System.Text.Json attributes instead of Newtonsoft.Json ones
    use_system_text_json: bool = False

    # Directory with custom templates (empty = packaged templates)
    template_dir: str = ""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # What to do with existing output files
    output_mode: OutputMode = OutputMode.ERROR_IF_EXISTS

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        if not isinstance(config.output_mode, OutputMode):
            config.output_mode = OutputMode(config.output_mode)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "namespace": self.namespace,
            "generate_enum_types": self.generate_enum_types,
            "use_nullable_reference_types": self.use_nullable_reference_types,
            "use_required_keyword": self.use_required_keyword,
            "use_system_text_json": self.use_system_text_json,
            "template_dir": self.template_dir,
            "add_generation_comment": self.add_generation_comment,
            "output_mode": self.output_mode.value,
        }
