"""Scanner for the flat target directory.

Lists the files directly inside the target directory and keeps only those
whose extension the sync manages. Subdirectories and other files are left
alone and reported as ignored.
"""

import logging
import os
from pathlib import Path
from typing import AbstractSet, Optional

from ...config import RECOGNIZED_EXTENSIONS
from ...models.models import ObservedFiles
from .file_operations import FileOperationError

logger = logging.getLogger(__name__)


def get_extension(filename: str) -> str:
    """Return the lowercase extension of a filename without the dot."""
    _, dot, ext = filename.rpartition(".")
    if not dot:
        return ""
    return ext.lower()


class TargetScanner:
    """Builds the set of managed files currently in the target directory."""

    def __init__(self, recognized_extensions: Optional[AbstractSet[str]] = None):
        """Initialize target scanner.

        Args:
            recognized_extensions: Lowercase extensions (without dot) that
                belong to the sync. Defaults to m3u, mp3 and m4a.
        """
        self.recognized_extensions = frozenset(
            recognized_extensions
            if recognized_extensions is not None
            else RECOGNIZED_EXTENSIONS
        )

    def is_recognized(self, filename: str) -> bool:
        """Check whether a filename has a managed extension."""
        ext = get_extension(filename)
        return bool(ext) and ext in self.recognized_extensions

    def scan(self, target_dir: Path) -> ObservedFiles:
        """Scan the target directory, non-recursively.

        Args:
            target_dir: Directory to scan

        Returns:
            ObservedFiles with recognized filenames and ignored entries

        Raises:
            FileOperationError: If the directory cannot be listed
        """
        observed = ObservedFiles()

        try:
            with os.scandir(target_dir) as entries:
                for entry in entries:
                    if entry.is_dir():
                        logger.info("ignoring directory %s", entry.name)
                        observed.ignored_directories.append(entry.name)
                    elif not self.is_recognized(entry.name):
                        logger.info("ignoring file %s", entry.name)
                        observed.ignored_files.append(entry.name)
                    else:
                        observed.filenames.add(entry.name)
        except OSError as e:
            raise FileOperationError(
                f"error finding files in {target_dir}: {e}"
            ) from e

        logger.debug(
            "Scanned %s: %d managed files, %d ignored",
            target_dir,
            len(observed.filenames),
            len(observed.ignored_files) + len(observed.ignored_directories),
        )
        return observed
