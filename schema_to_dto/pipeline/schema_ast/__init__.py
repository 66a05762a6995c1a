"""
Schema model module.

Contains the Swagger / JSON Schema nodes, the parser and the directory merger.
"""

from __future__ import annotations

from .directory_merger import SchemaDirectoryMerger, schemas_semantically_equal
from .nodes import (
    AnyExtra,
    ConstrainedExtra,
    InlineBranch,
    Info,
    NoExtra,
    RefBranch,
    Schema,
    SwaggerDocument,
)
from .parser import SchemaParser, load_swagger_file, parse_swagger, summarize, validate_swagger_document

__all__ = [
    "AnyExtra",
    "ConstrainedExtra",
    "InlineBranch",
    "Info",
    "NoExtra",
    "RefBranch",
    "Schema",
    "SwaggerDocument",
    "SchemaParser",
    "SchemaDirectoryMerger",
    "schemas_semantically_equal",
    "load_swagger_file",
    "parse_swagger",
    "summarize",
    "validate_swagger_document",
]
