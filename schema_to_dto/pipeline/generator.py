"""
Pipeline generator.

Orchestrates the phases of a generation run:

1. Load: a Swagger 2.0 file, or a directory of JSON Schema files merged into one document
2. Validate: check modifier configuration paths against the document (advisory)
3. Analyze: sweep enums, build one ClassModel per included definition
4. Render: DTOs, validators, enums and constants classes through the backend templates
5. Write: atomically, into Models/, Validators/, Enums/ and Constants/
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .. import __version__
from ..cli_utils import reconstruct_command_line
from ..errors import OutputCollisionError
from .analyzer import SchemaAnalyzer
from .analyzer.ir_nodes import ClassModel, ConstantsInfo, EnumInfo, GenerationModel
from .backends import CodeBackend, CSharpBackend
from .config import CodeGeneratorConfig
from .modifiers import ModifierConfiguration, PathValidationError, SchemaPathValidator
from .schema_ast import SchemaDirectoryMerger, SwaggerDocument, load_swagger_file
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Rendered output of one generation run.

    dto_classes and validators are keyed by the original definition name,
    enum_types and constant_classes by the generated type name.
    """

    dto_classes: dict[str, str] = field(default_factory=dict)
    validators: dict[str, str] = field(default_factory=dict)
    enum_types: dict[str, str] = field(default_factory=dict)
    constant_classes: dict[str, str] = field(default_factory=dict)

    class_models: list[ClassModel] = field(default_factory=list)
    enums: dict[str, EnumInfo] = field(default_factory=dict)
    constants: dict[str, ConstantsInfo] = field(default_factory=dict)

    # Advisory problems found in the modifier configuration
    path_errors: list[PathValidationError] = field(default_factory=list)


def load_document(input_path: str | Path) -> SwaggerDocument:
    """
    Load a schema input.

    Args:
        input_path: A Swagger 2.0 JSON file or a directory of JSON Schema files

    Returns:
        The (merged) document
    """
    input_path = Path(input_path)
    if input_path.is_dir():
        return SchemaDirectoryMerger().merge(input_path)
    return load_swagger_file(input_path)


class PipelineGenerator:
    """Generates DTOs and validators from a schema document."""

    def __init__(
        self,
        config: CodeGeneratorConfig | None = None,
        modifier_config: ModifierConfiguration | None = None,
        backend: CodeBackend | None = None,
    ):
        """
        Initialize the generator.

        Args:
            config: Code generation configuration
            modifier_config: Optional modifier configuration
            backend: Rendering backend (C# by default)
        """
        self.config = config or CodeGeneratorConfig()
        self.modifier_config = modifier_config
        self.backend = backend or CSharpBackend(self.config)

    def validate_configuration(self, document: SwaggerDocument) -> list[PathValidationError]:
        """Check the modifier configuration paths against the document."""
        if self.modifier_config is None:
            return []
        return SchemaPathValidator().validate(self.modifier_config, document)

    def build_model(self, document: SwaggerDocument) -> GenerationModel:
        """Run the analysis phase only."""
        return SchemaAnalyzer(self.config, self.modifier_config).analyze(document)

    def generate(self, document: SwaggerDocument) -> GenerationResult:
        """
        Generate code for a document.

        Args:
            document: The schema document

        Returns:
            GenerationResult with rendered text and the underlying models
        """
        result = GenerationResult(path_errors=self.validate_configuration(document))
        model = self.build_model(document)
        comment = self._generate_command_comment()

        result.class_models = model.classes
        result.enums = model.enums
        result.constants = model.constants

        for enum_info in model.enums.values():
            result.enum_types[enum_info.enum_name] = self.backend.render_enum(enum_info, comment)

        for constants_info in model.constants.values():
            result.constant_classes[constants_info.class_name] = self.backend.render_constants(constants_info, comment)

        for class_model in model.classes:
            result.dto_classes[class_model.original_name] = self.backend.render_dto(class_model, comment)
            result.validators[class_model.original_name] = self.backend.render_validator(class_model, comment)

        logger.info(
            "Generated %d DTOs, %d validators, %d enums, %d constants classes",
            len(result.dto_classes),
            len(result.validators),
            len(result.enum_types),
            len(result.constant_classes),
        )
        return result

    def write(self, result: GenerationResult, output_dir: str | Path) -> list[Path]:
        """
        Write a generation result to disk.

        Every target path is checked against the output mode before the
        first file is written.

        Args:
            result: The generation result
            output_dir: Root output directory

        Returns:
            Written file paths
        """
        output_dir = Path(output_dir)
        writer = AtomicWriter(self.config.output_mode)
        files = self.output_files(result, output_dir)

        for path in files:
            writer.check(path)

        for path, content in files.items():
            writer.write(path, content)
            logger.info("Wrote %s", path)

        return list(files)

    def output_files(self, result: GenerationResult, output_dir: Path) -> dict[Path, str]:
        """
        Map every rendered artifact to its output path.

        Raises:
            OutputCollisionError: if two artifacts map to the same file. Paths
                are compared case-insensitively so the layout stays valid on
                case-insensitive file systems.
        """
        files: dict[Path, str] = {}
        owners: dict[str, str] = {}

        def add(path: Path, content: str, owner: str) -> None:
            key = str(path).casefold()
            if key in owners:
                raise OutputCollisionError(str(path), owners[key], owner)
            owners[key] = owner
            files[path] = content

        models = {model.original_name: model for model in result.class_models}
        dto_ext = self.backend.extension("dto")
        validator_ext = self.backend.extension("validator")

        for name, content in result.dto_classes.items():
            class_name = models[name].class_name if name in models else name
            add(output_dir / "Models" / f"{class_name}.{dto_ext}", content, name)

        for name, content in result.validators.items():
            validator_name = models[name].validator_name if name in models else f"{name}Validator"
            add(output_dir / "Validators" / f"{validator_name}.{validator_ext}", content, name)

        enum_ext = self.backend.extension("enum")
        for name, content in result.enum_types.items():
            add(output_dir / "Enums" / f"{name}.{enum_ext}", content, name)

        constants_ext = self.backend.extension("constants")
        for name, content in result.constant_classes.items():
            add(output_dir / "Constants" / f"{name}.{constants_ext}", content, name)

        return files

    def _generate_command_comment(self) -> str:
        """Generate a command line comment for the generated files"""
        if not self.config.add_generation_comment:
            return ""

        try:
            from ..schema_to_dto import schema_to_dto as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "schema_to_dto"

        return f"// Generated by schema_to_dto v{__version__} : {command_line}"
