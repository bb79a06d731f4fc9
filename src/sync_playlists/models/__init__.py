"""Data models for the playlist sync application."""

from .models import LibrarySnapshot, ObservedFiles, Playlist, SortMode, Track

__all__ = ["Track", "Playlist", "LibrarySnapshot", "ObservedFiles", "SortMode"]
