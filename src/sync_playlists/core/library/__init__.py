"""Library module.

Reads playlists and track locations from the media library.
"""

from .itunes_library import (
    ItunesLibrarySource,
    LibraryError,
    PlaylistSource,
    is_user_playlist,
    location_to_filename,
    location_to_path,
)

__all__ = [
    "PlaylistSource",
    "ItunesLibrarySource",
    "LibraryError",
    "is_user_playlist",
    "location_to_filename",
    "location_to_path",
]
