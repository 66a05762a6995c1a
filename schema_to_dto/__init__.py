"""Swagger / JSON Schema to DTO Generator

A Python package for generating C# DTO classes and FluentValidation
validators from Swagger 2.0 documents or directories of JSON Schema files,
with an optional modifier configuration to include, exclude and override
properties.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    GenerationResult,
    ModifierConfiguration,
    OutputMode,
    PipelineGenerator,
    load_document,
)

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "ModifierConfiguration",
    "OutputMode",
    "AtomicWriter",
    "load_document",
]
