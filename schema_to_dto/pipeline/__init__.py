"""
Pipeline - Swagger / JSON Schema to DTO generator.

This module provides a multi-phase architecture for generating DTO and
validator classes:

1. Phase 1 (Schema AST): Parse a Swagger document or merge a JSON Schema directory
2. Phase 2 (Modifiers): Load and validate the optional modifier configuration
3. Phase 3 (Analyzer): Collect enums, build class models and validation rules
4. Phase 4 (Backend): Render class models with Jinja2 templates
5. Phase 5 (Writer): Atomically write the generated files
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputMode
from .generator import GenerationResult, PipelineGenerator, load_document
from .modifiers import ModifierConfiguration
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "ModifierConfiguration",
    "OutputMode",
    "AtomicWriter",
    "load_document",
]
