"""Filesystem module.

Handles scanning the target directory and the copy/delete primitives.
"""

from .file_operations import FileOperationError, copy_file, delete_file, file_size
from .target_scanner import TargetScanner, get_extension

__all__ = [
    "TargetScanner",
    "FileOperationError",
    "get_extension",
    "copy_file",
    "delete_file",
    "file_size",
]
