"""Sync orchestrator for coordinating one run over a target directory.

This module provides the SyncOrchestrator that coordinates:
- PlaylistSource: Reads the requested playlists from the library
- TargetScanner: Lists the managed files in the target directory
- Reconciler: Deletes unreferenced files, copies missing or stale ones
- PlaylistWriter: Writes an .m3u file for each playlist
"""

import logging
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, List

from ...models.models import LibrarySnapshot, ObservedFiles, SortMode
from ..filesystem.target_scanner import TargetScanner
from ..library.itunes_library import PlaylistSource
from .playlist_writer import PlaylistWriter, playlist_filename
from .reconciler import Reconciler, ReconcileResult

logger = logging.getLogger(__name__)


class SyncStage(str, Enum):
    """Ordered stages of a sync run."""

    FETCH = "fetch"
    SCAN = "scan"
    RECONCILE = "reconcile"
    WRITE = "write"


@dataclass
class SyncResult:
    """Result of a complete sync run."""

    snapshot: LibrarySnapshot | None = None
    observed: ObservedFiles | None = None
    reconcile: ReconcileResult | None = None
    playlists_written: List[Path] = dataclass_field(default_factory=list)
    dry_run: bool = False

    def get_summary(self) -> dict[str, Any]:
        """Get summary of sync run."""
        summary: dict[str, Any] = {"dry_run": self.dry_run}

        if self.snapshot:
            summary["library"] = {
                "playlists": len(self.snapshot.playlists),
                "tracks": self.snapshot.track_count,
                "files": len(self.snapshot.desired_files),
            }

        if self.observed:
            summary["target"] = {
                "files_found": len(self.observed.filenames),
                "ignored": len(self.observed.ignored_files)
                + len(self.observed.ignored_directories),
            }

        if self.reconcile:
            summary["reconcile"] = self.reconcile.get_summary()

        summary["playlists_written"] = len(self.playlists_written)
        return summary


class SyncOrchestrator:
    """Runs the full sync pipeline against one target directory.

    Every run reads the library and the target from scratch:
    1. Fetch the requested playlists from the library
    2. Scan the target directory
    3. Delete unreferenced files, then copy missing or stale ones
    4. Write one playlist file per playlist
    """

    def __init__(
        self,
        target_dir: Path,
        source: PlaylistSource,
        sort_mode: SortMode = SortMode.PLAY_ORDER,
        scanner: TargetScanner | None = None,
        dry_run: bool = False,
    ):
        """Initialize sync orchestrator.

        Args:
            target_dir: Flat directory being synchronized
            source: Where playlists and track locations come from
            sort_mode: Track ordering for written playlists
            scanner: Optional target scanner (defaults to the standard one)
            dry_run: If True, don't make actual changes
        """
        self.target_dir = Path(target_dir)
        self.source = source
        self.dry_run = dry_run

        self.scanner = scanner or TargetScanner()
        self.reconciler = Reconciler(self.target_dir, dry_run=dry_run)
        self.writer = PlaylistWriter(
            self.target_dir, sort_mode=sort_mode, dry_run=dry_run
        )

    def run(self, playlist_names: Iterable[str]) -> SyncResult:
        """Execute a complete sync run.

        Args:
            playlist_names: Names of the library playlists to sync

        Returns:
            SyncResult with details of the run

        Raises:
            LibraryError: If the library cannot be read
            FileOperationError: If the target cannot be listed or a file
                cannot be deleted or copied
            PlaylistWriteError: If a playlist file cannot be written
        """
        result = SyncResult(dry_run=self.dry_run)

        logger.debug("Stage: %s", SyncStage.FETCH.value)
        result.snapshot = self.source.get_playlists(playlist_names)

        logger.debug("Stage: %s", SyncStage.SCAN.value)
        result.observed = self.scanner.scan(self.target_dir)

        logger.debug("Stage: %s", SyncStage.RECONCILE.value)
        # Playlist files about to be rewritten are not deleted first
        keep = {playlist_filename(name) for name in result.snapshot.playlists}
        result.reconcile = self.reconciler.reconcile(
            result.observed, result.snapshot.desired_files, keep=keep
        )

        logger.debug("Stage: %s", SyncStage.WRITE.value)
        result.playlists_written = self.writer.write_playlists(
            result.snapshot.playlists.values()
        )

        logger.debug("Sync finished: %s", result.get_summary())
        return result
