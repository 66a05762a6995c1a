"""
Base class for code generation backends.

A backend renders the IR with four Jinja2 templates: dto, validator, enum
and constants. Templates come from the packaged templates directory or from
a user-supplied one. A template may start with a YAML front matter block
choosing the extension of the files it produces:

    ---
    extension: proto
    description: Protocol buffer messages
    ---
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2
import yaml

from ...errors import TemplateNotFound
from ...validation_rules import escape_string
from ..analyzer.ir_nodes import ClassModel, ConstantsInfo, EnumInfo, PropertyModel, TypeRef
from ..config import CodeGeneratorConfig

logger = logging.getLogger(__name__)

REQUIRED_TEMPLATES = ("dto", "validator", "enum", "constants")

FRONT_MATTER_DELIMITER = "---"


@dataclass
class LoadedTemplate:
    """A compiled template and the metadata of its front matter."""

    template: jinja2.Template
    extension: str
    description: str = ""


def split_front_matter(source: str, default_extension: str) -> tuple[dict[str, Any], str]:
    """
    Separate an optional YAML front matter block from a template.

    Args:
        source: Raw template text
        default_extension: Extension used when the front matter does not set one

    Returns:
        (metadata, body) - metadata always holds an 'extension' key
    """
    metadata: dict[str, Any] = {"extension": default_extension}
    lines = source.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return metadata, source

    for index in range(1, len(lines)):
        if lines[index].strip() == FRONT_MATTER_DELIMITER:
            header = yaml.safe_load("".join(lines[1:index])) or {}
            if isinstance(header, dict):
                metadata.update({k: v for k, v in header.items() if v is not None})
            metadata["extension"] = str(metadata["extension"]).lstrip(".")
            return metadata, "".join(lines[index + 1 :])

    # No closing delimiter: not front matter
    return metadata, source


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Semantic type name -> language type
    TYPE_MAP: dict[str, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # Default file extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self.templates: dict[str, LoadedTemplate] = {}
        self._setup_templates()

    @property
    def template_dir(self) -> Path:
        if self.config.template_dir:
            return Path(self.config.template_dir)
        return Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = self.template_dir
        missing = [f"{name}.jinja2" for name in REQUIRED_TEMPLATES if not (template_dir / f"{name}.jinja2").is_file()]
        if missing:
            raise TemplateNotFound(str(template_dir), missing)

        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        # Add custom filters
        self.jinja_env.filters["type_name"] = self.translate_type
        self.jinja_env.filters["string_literal"] = escape_string
        self.jinja_env.filters["doc_lines"] = self._doc_lines

        for name in REQUIRED_TEMPLATES:
            with open(template_dir / f"{name}.jinja2", encoding="utf-8") as f:
                metadata, body = split_front_matter(f.read(), self.FILE_EXTENSION)
            self.templates[name] = LoadedTemplate(
                template=self.jinja_env.from_string(body),
                extension=metadata["extension"],
                description=metadata.get("description") or "",
            )
        logger.debug("Loaded templates from %s", template_dir)

    def extension(self, template_name: str) -> str:
        """File extension of the files produced by a template."""
        return self.templates[template_name].extension

    def render_dto(self, class_model: ClassModel, generation_comment: str = "") -> str:
        return self.templates["dto"].template.render(self._prepare_class_context(class_model, generation_comment))

    def render_validator(self, class_model: ClassModel, generation_comment: str = "") -> str:
        return self.templates["validator"].template.render(self._prepare_class_context(class_model, generation_comment))

    def render_enum(self, enum_info: EnumInfo, generation_comment: str = "") -> str:
        return self.templates["enum"].template.render(
            generation_comment=generation_comment,
            namespace=enum_info.namespace,
            enum_name=enum_info.enum_name,
            description=enum_info.description,
            values=enum_info.values,
        )

    def render_constants(self, constants_info: ConstantsInfo, generation_comment: str = "") -> str:
        return self.templates["constants"].template.render(
            generation_comment=generation_comment,
            namespace=constants_info.namespace,
            class_name=constants_info.class_name,
            description=constants_info.description,
            constants=constants_info.constants,
        )

    @abstractmethod
    def translate_type(self, type_ref: TypeRef) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            type_ref: The type reference

        Returns:
            Language-specific type string
        """

    def _doc_lines(self, text: str | None) -> list[str]:
        """Split a description into lines for doc comments."""
        if not text:
            return [""]
        return [line.rstrip() for line in str(text).splitlines()] or [""]

    def _prepare_class_context(self, class_model: ClassModel, generation_comment: str) -> dict[str, Any]:
        """
        Prepare the template context for a class.

        Args:
            class_model: The class model
            generation_comment: Comment placed at the top of the file ("" for none)

        Returns:
            Dictionary of template variables
        """
        return {
            "generation_comment": generation_comment,
            "namespace": class_model.namespace,
            "class_name": class_model.class_name,
            "original_name": class_model.original_name,
            "validator_name": class_model.validator_name,
            "description": class_model.description,
            "base_types": class_model.base_types,
            "properties": [self._prepare_property_context(prop) for prop in class_model.properties],
            "use_required_keyword": self.config.use_required_keyword,
            "use_system_text_json": self.config.use_system_text_json,
            "use_nullable_reference_types": self.config.use_nullable_reference_types,
        }

    def _prepare_property_context(self, prop: PropertyModel) -> dict[str, Any]:
        """
        Prepare the template context for a property.

        Args:
            prop: The property model

        Returns:
            Dictionary of template variables
        """
        return {
            "name": prop.name,
            "json_name": prop.json_name,
            "type": self.translate_type(prop.type),
            "description": prop.description,
            "is_required": prop.is_required,
            "is_nullable": prop.is_nullable,
            "min_length": prop.min_length,
            "max_length": prop.max_length,
            "has_string_length": prop.has_string_length,
            "default_value": prop.default_value,
            "enum_type_name": prop.enum_type_name,
            "constants_class_name": prop.constants_class_name,
            "rules": [rule.generate_code() for rule in prop.validation_rules],
            "model": prop,
        }
