"""Blocking file primitives used when reconciling the target directory."""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class FileOperationError(Exception):
    """Custom exception for file operation errors."""

    pass


def file_size(path: Path) -> int:
    """Return the size of a file in bytes.

    Raises:
        FileOperationError: If the file cannot be stat'ed
    """
    try:
        return path.stat().st_size
    except OSError as e:
        raise FileOperationError(f"unable to read size of {path}: {e}") from e


def delete_file(path: Path) -> None:
    """Delete a single file.

    Raises:
        FileOperationError: If the file cannot be removed
    """
    try:
        path.unlink()
    except OSError as e:
        raise FileOperationError(f"failed to delete {path}: {e}") from e


def copy_file(source: Path, destination: Path) -> None:
    """Copy file contents to destination, replacing any existing file.

    Raises:
        FileOperationError: If the copy fails
    """
    try:
        shutil.copyfile(source, destination)
    except OSError as e:
        raise FileOperationError(f"failed to copy {destination}: {e}") from e
