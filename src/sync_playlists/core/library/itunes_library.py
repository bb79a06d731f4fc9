"""Playlist source backed by the iTunes / Apple Music library XML export.

The library application can export (or continuously share) its database as a
property list, usually ``iTunes Music Library.xml``. This module reads the
requested playlists out of that file and turns them into a LibrarySnapshot.
"""

import logging
import plistlib
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname
from xml.parsers.expat import ExpatError

from pydantic import ValidationError

from ...config import PLAYLIST_EXTENSION, PROTECTED_EXTENSION, RECOGNIZED_EXTENSIONS
from ...models.models import LibrarySnapshot, Track

logger = logging.getLogger(__name__)


class LibraryError(Exception):
    """Custom exception for failures reading the media library."""

    pass


class PlaylistSource(Protocol):
    """Anything that can resolve playlist names to tracks."""

    def get_playlists(self, names: Iterable[str]) -> LibrarySnapshot:
        """Return the requested playlists and the files they reference."""
        ...  # pragma: no cover - protocol definition


# Playlist keys marking library-managed (non user) playlists
_SYSTEM_PLAYLIST_KEYS = ("Master", "Distinguished Kind")

# Media extensions a track may have; playlist files are written, never copied
_TRACK_EXTENSIONS = RECOGNIZED_EXTENSIONS - {PLAYLIST_EXTENSION}


def location_to_path(location: str) -> Path:
    """Convert a library ``Location`` value to a local filesystem path."""
    parsed = urlparse(location)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    return Path(unquote(location))


def location_to_filename(location: str) -> str:
    """Return the base filename of a library ``Location`` value.

    The name is the last segment of the decoded URL path, split on forward
    slashes only. Backslashes are ordinary characters and stay in the name.
    """
    parsed = urlparse(location)
    path = unquote(parsed.path if parsed.scheme else location)
    return path.rstrip("/").rsplit("/", 1)[-1]


def is_user_playlist(playlist: Dict[str, Any]) -> bool:
    """Check whether a playlist was created by the user."""
    if any(playlist.get(key) for key in _SYSTEM_PLAYLIST_KEYS):
        return False
    return playlist.get("Visible", True) is not False


class ItunesLibrarySource:
    """Reads playlists from an iTunes Library XML file."""

    def __init__(self, library_path: Path) -> None:
        """Initialize the library source.

        Args:
            library_path: Path to the exported library XML file
        """
        self.library_path = Path(library_path)

    def get_playlists(self, names: Iterable[str]) -> LibrarySnapshot:
        """Load the requested playlists from the library.

        Args:
            names: Playlist names to load. Duplicates are ignored.

        Returns:
            LibrarySnapshot with one entry per user playlist requested and the
            aggregate filename to source path mapping

        Raises:
            LibraryError: If the library cannot be read or a playlist or
                track cannot be resolved
        """
        library = self._load_library()

        tracks = library.get("Tracks")
        if not isinstance(tracks, dict):
            raise LibraryError("failed to get tracks from library")

        playlists = library.get("Playlists")
        if not isinstance(playlists, list):
            raise LibraryError("failed to get playlists")

        by_name: Dict[str, Dict[str, Any]] = {}
        for playlist in playlists:
            name = playlist.get("Name")
            # First playlist wins when names collide, as a name lookup would
            if name is not None and name not in by_name:
                by_name[name] = playlist

        snapshot = LibrarySnapshot()
        for name in dict.fromkeys(names):
            playlist = by_name.get(name)
            if playlist is None:
                raise LibraryError(f"failed to get playlist {name}")

            if not is_user_playlist(playlist):
                logger.info("skipping non-user playlist %s", name)
                continue

            snapshot.add_playlist(name)
            for track in self._read_tracks(name, playlist, tracks):
                snapshot.add_track(name, track)

        logger.debug(
            "Loaded %d playlists with %d tracks (%d distinct files)",
            len(snapshot.playlists),
            snapshot.track_count,
            len(snapshot.desired_files),
        )
        return snapshot

    def _load_library(self) -> Dict[str, Any]:
        """Parse the library file."""
        try:
            with open(self.library_path, "rb") as f:
                library = plistlib.load(f)
        except (OSError, plistlib.InvalidFileException, ExpatError, ValueError) as e:
            raise LibraryError(
                f"failed to read library {self.library_path}: {e}"
            ) from e

        if not isinstance(library, dict):
            raise LibraryError(f"failed to read library {self.library_path}")
        return library

    def _read_tracks(
        self,
        playlist_name: str,
        playlist: Dict[str, Any],
        tracks: Dict[str, Any],
    ) -> List[Track]:
        """Resolve the items of one playlist to local file tracks."""
        result: List[Track] = []

        for index, item in enumerate(playlist.get("Playlist Items", [])):
            info = self._lookup_track(tracks, item)
            if info is None:
                raise LibraryError(f"failed to get item {index} in {playlist_name}")

            if info.get("Track Type", "File") != "File":
                continue

            display_name: Optional[str] = info.get("Name")

            location = info.get("Location")
            if not location:
                song = display_name or f"at index {index}"
                raise LibraryError(
                    f"failed to get location for song {song} "
                    f"in playlist {playlist_name}"
                )

            filename = location_to_filename(location)
            if not filename:
                raise LibraryError(
                    f"failed to get filename from location {location} "
                    f"in playlist {playlist_name}"
                )
            extension = filename.rpartition(".")[2].lower() if "." in filename else ""
            if extension == PROTECTED_EXTENSION:
                logger.warning("skipping protected file %s", filename)
                continue
            if extension not in _TRACK_EXTENSIONS:
                logger.warning("skipping unsupported file %s", filename)
                continue

            try:
                track = Track(
                    display_name=display_name,
                    target_filename=filename,
                    source_path=location_to_path(location),
                    # Play order is the 1-based position in the playlist
                    play_order=index + 1,
                )
            except ValidationError as e:
                raise LibraryError(
                    f"invalid filename {filename} in playlist {playlist_name}"
                ) from e
            result.append(track)

        return result

    @staticmethod
    def _lookup_track(
        tracks: Dict[str, Any], item: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Find the track dictionary referenced by a playlist item."""
        track_id = item.get("Track ID") if isinstance(item, dict) else None
        if track_id is None:
            return None
        # Track dictionary keys are the IDs as strings
        return tracks.get(str(track_id))
