"""
Atomic file writer for generated code.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written file behind.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ..errors import OutputExistsError
from .config import OutputMode

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes honouring the output mode.

    Writes go to a temporary file in the target directory which then
    replaces the target file.
    """

    def __init__(self, mode: OutputMode = OutputMode.ERROR_IF_EXISTS):
        """Initialize the atomic writer.

        Args:
            mode: What to do when a target file already exists
        """
        self.mode = mode

    def check(self, path: Path) -> None:
        """Raise if writing to path is not allowed by the output mode.

        Raises:
            OutputExistsError: If the file exists and the mode is ERROR_IF_EXISTS
        """
        if self.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise OutputExistsError(str(path))

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OutputExistsError: If the file exists and overwriting is not allowed
            OSError: If file operations fail
        """
        self.check(path)

        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory keeps the rename on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

        logger.debug("Wrote %s", path)
