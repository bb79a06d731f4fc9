"""Playlist sync tool.

Copies music files referenced by library playlists to a flat target directory
(such as a USB drive), deletes files that are no longer referenced, and writes
an .m3u playlist file for each playlist.
"""

__version__ = "1.0.0"
__author__ = "Bailey Brown"
__copyright__ = "Copyright (C) 2020 Bailey Brown"

from .config import Config
from .models import LibrarySnapshot, ObservedFiles, Playlist, SortMode, Track

__all__ = [
    "Track",
    "Playlist",
    "LibrarySnapshot",
    "ObservedFiles",
    "SortMode",
    "Config",
]
