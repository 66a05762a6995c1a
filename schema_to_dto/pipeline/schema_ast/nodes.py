"""
Schema model node definitions.

These nodes represent a parsed Swagger 2.0 document or JSON Schema before
any reference resolution or class model building. They are plain data:
the parser fills them in and nothing mutates them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFINITIONS_PREFIX = "#/definitions/"


@dataclass(frozen=True)
class NoExtra:
    """additionalProperties: false - no extra properties allowed."""


@dataclass(frozen=True)
class AnyExtra:
    """additionalProperties: true - extra properties are unconstrained."""


@dataclass(frozen=True)
class ConstrainedExtra:
    """additionalProperties: {...} - extra properties must match a schema."""

    schema: Schema


# Absent additionalProperties is represented by None on the Schema
AdditionalProperties = NoExtra | AnyExtra | ConstrainedExtra


@dataclass(frozen=True)
class RefBranch:
    """An allOf entry that references another definition."""

    name: str
    ref: str
    schema: Schema


@dataclass(frozen=True)
class InlineBranch:
    """An allOf entry that declares its own properties."""

    schema: Schema


AllOfBranch = RefBranch | InlineBranch


@dataclass
class Schema:
    """A Swagger 2.0 / JSON Schema schema object."""

    ref: str = ""
    type: str = ""
    format: str = ""
    title: str = ""
    description: str = ""

    default: Any = None
    example: Any = None

    # Numeric constraints
    multiple_of: float | None = None
    maximum: float | None = None
    exclusive_maximum: bool | None = None
    minimum: float | None = None
    exclusive_minimum: bool | None = None

    # String constraints
    max_length: int | None = None
    min_length: int | None = None
    pattern: str = ""

    # Array constraints
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool | None = None

    # Object constraints
    max_properties: int | None = None
    min_properties: int | None = None

    required: list[str] = field(default_factory=list)
    enum: list[Any] = field(default_factory=list)
    items: Schema | None = None
    all_of: list[Schema] = field(default_factory=list)
    properties: dict[str, Schema] = field(default_factory=dict)
    additional_properties: AdditionalProperties | None = None

    # Carried for completeness, not used by code generation
    discriminator: str = ""
    read_only: bool | None = None
    xml: dict[str, Any] | None = None
    external_docs: dict[str, Any] | None = None

    @property
    def ref_name(self) -> str:
        """The definition name a $ref points to ("" when there is no $ref)."""
        return ref_to_name(self.ref)

    def all_of_branches(self, definitions: dict[str, Schema]) -> list[AllOfBranch]:
        """
        Classify allOf entries into reference and inline branches.

        A $ref entry whose target is not in definitions is dropped; the
        directory merger rejects such documents earlier, and single Swagger
        files with dangling references simply contribute nothing.

        Args:
            definitions: All definitions of the document

        Returns:
            Branches in declaration order
        """
        branches: list[AllOfBranch] = []
        for entry in self.all_of:
            if entry.ref:
                target = definitions.get(entry.ref_name)
                if target is not None:
                    branches.append(RefBranch(name=entry.ref_name, ref=entry.ref, schema=target))
            else:
                branches.append(InlineBranch(schema=entry))
        return branches


@dataclass
class Info:
    """The info block of a Swagger document."""

    title: str = ""
    version: str = ""
    description: str = ""
    terms_of_service: str = ""
    contact: dict[str, Any] | None = None
    license: dict[str, Any] | None = None


@dataclass
class SwaggerDocument:
    """A Swagger 2.0 document, or the equivalent produced by merging JSON Schema files."""

    swagger: str = ""
    info: Info | None = field(default_factory=Info)
    host: str = ""
    base_path: str = ""
    schemes: list[str] = field(default_factory=list)
    consumes: list[str] = field(default_factory=list)
    produces: list[str] = field(default_factory=list)

    # Kept raw: operations are not part of DTO generation
    paths: dict[str, Any] = field(default_factory=dict)
    parameters: dict[str, Any] = field(default_factory=dict)
    responses: dict[str, Any] = field(default_factory=dict)

    definitions: dict[str, Schema] = field(default_factory=dict)


def ref_to_name(ref: str) -> str:
    """Extract the definition name from a $ref such as "#/definitions/Pet"."""
    if not ref:
        return ""
    if ref.startswith(DEFINITIONS_PREFIX):
        return ref[len(DEFINITIONS_PREFIX) :]
    return ref
