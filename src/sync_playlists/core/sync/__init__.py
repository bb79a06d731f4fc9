"""Synchronization module.

Handles reconciliation of the target directory, playlist file output, and
orchestration of a full run.
"""

from .orchestrator import SyncOrchestrator, SyncResult, SyncStage
from .playlist_writer import (
    PlaylistWriteError,
    PlaylistWriter,
    ascii_lower,
    name_sort_key,
    playlist_filename,
    strip_article,
    strip_track_number,
)
from .reconciler import Reconciler, ReconcileResult

__all__ = [
    # Reconciler
    "Reconciler",
    "ReconcileResult",
    # Playlist writer
    "PlaylistWriter",
    "PlaylistWriteError",
    "ascii_lower",
    "name_sort_key",
    "playlist_filename",
    "strip_article",
    "strip_track_number",
    # Orchestrator
    "SyncOrchestrator",
    "SyncResult",
    "SyncStage",
]
