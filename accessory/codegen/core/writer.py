"""
Output file writing.

The generated file is written to a temporary sibling first and moved into
place, so a failed run never leaves a partial file behind.
"""

import os
import tempfile
from pathlib import Path
from typing import Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class WriterError(Exception):
    """Exception raised when the generated file cannot be written."""

    pass


def write_output(path: Union[str, Path], content: str) -> Path:
    """
    Atomically write ``content`` to ``path``.

    Returns:
        The path written

    Raises:
        WriterError: If the directory is missing or the write fails
    """
    path = Path(path)
    directory = path.parent

    if not directory.is_dir():
        raise WriterError(f"Output directory does not exist: {directory}")

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriterError(f"Failed to write {path}: {e}") from e

    logger.info("Wrote %s", path)
    return path
