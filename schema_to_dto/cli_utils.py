"""
Rebuilds the invoking command line for the header of generated files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

PROGRAM_NAME = "schema_to_dto"

# Options that change console output only, never the generated code
IGNORED_OPTIONS = frozenset({"verbose"})


def _display_value(value: Any) -> str:
    """Existing paths are shown by their file name."""
    if isinstance(value, (str, Path)) and Path(str(value)).exists():
        return Path(str(value)).name
    return str(value)


def _option_tokens(option: click.Option, value: Any) -> list[str]:
    if option.name in IGNORED_OPTIONS or value == option.default:
        return []
    switch = option.opts[0] if option.opts else f"--{option.name}"
    return [switch] if option.is_flag else [switch, _display_value(value)]


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Describe the running invocation of a command.

    Positional arguments come first, then every option whose value differs
    from its default. Outside a Click context only the program name is
    returned.

    Args:
        click_command: The command whose parameters are inspected

    Returns:
        A single-line command string
    """
    ctx = click.get_current_context(silent=True)
    params = ctx.params if ctx is not None else {}

    positional: list[str] = []
    switches: list[str] = []
    for param in click_command.params:
        value = params.get(param.name)
        if not value:
            continue
        if isinstance(param, click.Argument):
            positional.append(_display_value(value))
        elif isinstance(param, click.Option):
            switches.extend(_option_tokens(param, value))

    return " ".join([PROGRAM_NAME, *positional, *switches])
