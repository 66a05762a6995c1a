"""
Property path validation.

Checks that every rule path of a modifier configuration points at
something that exists in the document. Problems are returned as a list,
never raised: the caller decides whether to carry on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..schema_ast.nodes import SwaggerDocument
from .modifier_configuration import ModifierConfiguration

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass(frozen=True)
class PathValidationError:
    """An unresolvable rule path."""

    path: str
    message: str

    def __str__(self) -> str:
        return self.message


class SchemaPathValidator:
    """Validates modifier configuration rule paths against a document."""

    def validate(self, config: ModifierConfiguration, document: SwaggerDocument) -> list[PathValidationError]:
        """
        Validate every non-wildcard rule path.

        Args:
            config: The modifier configuration
            document: The schema document the configuration targets

        Returns:
            One error per unresolvable path, in rule order
        """
        errors = []
        for path in config.rules:
            if WILDCARD in path:
                continue
            error = self.validate_path(path, document)
            if error is not None:
                logger.warning("%s", error.message)
                errors.append(error)
        return errors

    def validate_path(self, path: str, document: SwaggerDocument) -> PathValidationError | None:
        """Check a single dotted path, following $ref at each step."""
        segments = path.split(".")
        root = segments[0]

        def not_found(detail: str) -> PathValidationError:
            return PathValidationError(path, f"Property path '{path}' was not found in the Swagger definition: {detail}")

        schema = document.definitions.get(root)
        if schema is None:
            return not_found(f"root type '{root}' does not exist")

        walked = root
        for segment in segments[1:]:
            prop = schema.properties.get(segment)
            if prop is None:
                return not_found(f"property '{segment}' does not exist on '{walked}'")

            walked = f"{walked}.{segment}"
            if prop.ref:
                target = document.definitions.get(prop.ref_name)
                if target is None:
                    return not_found(f"reference '{prop.ref}' at '{walked}' cannot be resolved")
                schema = target
            else:
                schema = prop

        return None
