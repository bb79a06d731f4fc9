"""Reconciles the target directory against the desired set of files.

A file in the target directory is kept only if some requested playlist
references a file of the same name. Missing files are copied, and files whose
size differs from their source are copied again. Deletions run before copies
so a stale file is never held twice on a nearly full drive.
"""

import logging
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from pathlib import Path
from typing import AbstractSet, Dict, Iterable, List, Mapping, Set

from ...models.models import ObservedFiles
from ..filesystem.file_operations import copy_file, delete_file, file_size

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """Files touched by one reconciliation."""

    deleted: List[str] = dataclass_field(default_factory=list)
    copied: List[str] = dataclass_field(default_factory=list)
    dry_run: bool = False

    @property
    def changed(self) -> bool:
        """Whether anything was (or would be) deleted or copied."""
        return bool(self.deleted or self.copied)

    def get_summary(self) -> Dict[str, int]:
        """Get summary statistics."""
        return {
            "deleted": len(self.deleted),
            "copied": len(self.copied),
        }


class Reconciler:
    """Computes and applies the delete and copy sets for a target directory."""

    def __init__(self, target_dir: Path, dry_run: bool = False) -> None:
        """Initialize reconciler.

        Args:
            target_dir: Flat directory being synchronized
            dry_run: If True, log what would change without touching files
        """
        self.target_dir = Path(target_dir)
        self.dry_run = dry_run

    def compute_deletions(
        self,
        observed: ObservedFiles,
        desired: Mapping[str, Path],
        keep: AbstractSet[str] = frozenset(),
    ) -> Set[str]:
        """Return the observed filenames that are no longer wanted.

        Args:
            observed: Managed files currently in the target directory
            desired: Target filename to source path mapping
            keep: Extra filenames to leave in place, such as playlist
                files that are about to be rewritten

        Returns:
            Filenames to delete
        """
        return {
            filename
            for filename in observed.filenames
            if filename not in desired and filename not in keep
        }

    def compute_copies(
        self,
        observed: ObservedFiles,
        desired: Mapping[str, Path],
    ) -> Dict[str, Path]:
        """Return the desired files that are missing or stale.

        A file already on the target counts as stale when its byte length
        differs from its source. Modification times are not compared.

        Raises:
            FileOperationError: If a file size cannot be read
        """
        copies: Dict[str, Path] = {}
        for filename, source_path in desired.items():
            if filename not in observed.filenames:
                copies[filename] = source_path
            elif file_size(self.target_dir / filename) != file_size(source_path):
                logger.debug("size mismatch for %s", filename)
                copies[filename] = source_path
        return copies

    def delete_files(self, filenames: Iterable[str]) -> List[str]:
        """Delete files from the target directory.

        Stops at the first failure.

        Raises:
            FileOperationError: If a file cannot be deleted
        """
        deleted: List[str] = []
        for filename in filenames:
            path = self.target_dir / filename
            if self.dry_run:
                logger.info("would delete %s", path)
            else:
                delete_file(path)
                logger.info("deleted %s", path)
            deleted.append(filename)
        return deleted

    def copy_files(self, copies: Mapping[str, Path]) -> List[str]:
        """Copy source files into the target directory, overwriting.

        Stops at the first failure.

        Raises:
            FileOperationError: If a file cannot be copied
        """
        copied: List[str] = []
        for filename, source_path in copies.items():
            destination = self.target_dir / filename
            if self.dry_run:
                logger.info("would copy %s", destination)
            else:
                copy_file(source_path, destination)
                logger.info("copied %s", destination)
            copied.append(filename)
        return copied

    def reconcile(
        self,
        observed: ObservedFiles,
        desired: Mapping[str, Path],
        keep: AbstractSet[str] = frozenset(),
    ) -> ReconcileResult:
        """Bring the target directory in line with the desired files.

        Args:
            observed: Managed files currently in the target directory
            desired: Target filename to source path mapping
            keep: Filenames to protect from deletion

        Returns:
            ReconcileResult listing deleted and copied filenames

        Raises:
            FileOperationError: On the first failed stat, delete or copy
        """
        # Sizes are read up front so a missing source aborts before any change
        copies = self.compute_copies(observed, desired)
        deletions = self.compute_deletions(observed, desired, keep)

        logger.debug("%d files to delete, %d to copy", len(deletions), len(copies))

        result = ReconcileResult(dry_run=self.dry_run)
        result.deleted = sorted(self.delete_files(deletions))
        result.copied = sorted(self.copy_files(copies))
        return result
