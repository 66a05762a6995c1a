"""
Code generation backends.

Render the IR to target-language source with Jinja2 templates.
"""

from __future__ import annotations

from .base import REQUIRED_TEMPLATES, CodeBackend, LoadedTemplate, split_front_matter
from .csharp_backend import CSharpBackend

__all__ = [
    "CodeBackend",
    "CSharpBackend",
    "LoadedTemplate",
    "REQUIRED_TEMPLATES",
    "split_front_matter",
]
