"""Writes .m3u playlist files into the target directory.

Each playlist is written as plain UTF-8 filenames, one per line, terminated
by CRLF whatever the host platform. There is no ``#EXTM3U`` header and no
extended metadata, so every line is a file next to the playlist.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from ...config import PLAYLIST_EXTENSION
from ...models.models import Playlist, SortMode, Track

logger = logging.getLogger(__name__)

LINE_TERMINATOR = b"\r\n"

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


class PlaylistWriteError(Exception):
    """Custom exception for playlist file write errors."""

    pass


def ascii_lower(s: str) -> str:
    """Lowercase ASCII letters only, ignoring locale."""
    return s.translate(_ASCII_LOWER)


def _is_ascii_digit(c: str) -> bool:
    return "0" <= c <= "9"


def strip_track_number(s: str) -> str:
    """Strip a leading ``NN `` or ``NN-NN `` track number prefix.

    >>> strip_track_number("02 Song")
    'Song'
    >>> strip_track_number("2 Song")
    '2 Song'
    """
    word, space, rest = s.partition(" ")
    if not space:
        return s
    if len(word) == 2 and all(_is_ascii_digit(c) for c in word):
        return rest
    if (
        len(word) == 5
        and word[2] == "-"
        and all(_is_ascii_digit(c) for c in word[:2] + word[3:])
    ):
        return rest
    return s


def strip_article(s: str) -> str:
    """Strip a leading ``A `` or ``The `` (any case)."""
    word, space, rest = s.partition(" ")
    if not space:
        return s
    if ascii_lower(word) in ("a", "the"):
        return rest
    return s


def name_sort_key(track: Track) -> str:
    """Sort key used in name mode.

    Uses the display name when present, otherwise the filename. A track
    number prefix and then an article are each stripped once from whichever
    of the two is used, so a display name such as ``"03 The Song"`` sorts
    as ``"song"``.
    """
    name = track.display_name or track.target_filename
    return ascii_lower(strip_article(strip_track_number(name)))


def playlist_filename(name: str) -> str:
    """Return the file name used for a playlist."""
    return f"{name}.{PLAYLIST_EXTENSION}"


class PlaylistWriter:
    """Orders playlist tracks and writes them as .m3u files."""

    def __init__(
        self,
        target_dir: Path,
        sort_mode: SortMode = SortMode.PLAY_ORDER,
        dry_run: bool = False,
    ) -> None:
        """Initialize playlist writer.

        Args:
            target_dir: Directory the playlist files are written to
            sort_mode: How tracks are ordered in each playlist
            dry_run: If True, log the playlist paths without writing
        """
        self.target_dir = Path(target_dir)
        self.sort_mode = SortMode(sort_mode)
        self.dry_run = dry_run

    @staticmethod
    def dedupe_tracks(tracks: Iterable[Track]) -> List[Track]:
        """Keep one track per target filename.

        The last track seen for a filename wins, at the position where the
        filename first appeared.
        """
        unique: Dict[str, Track] = {}
        for track in tracks:
            unique[track.target_filename] = track
        return list(unique.values())

    def order_tracks(self, tracks: Sequence[Track]) -> List[Track]:
        """Sort deduplicated tracks according to the sort mode."""
        if self.sort_mode is SortMode.NAME:

            def key(track: Track) -> Tuple[str, str]:
                return name_sort_key(track), ascii_lower(track.target_filename)

            return sorted(tracks, key=key)

        return sorted(tracks, key=lambda track: track.play_order)

    def write_playlist(self, name: str, tracks: Iterable[Track]) -> Path:
        """Write a single playlist file.

        Args:
            name: Playlist name, used as the file stem
            tracks: Tracks in library order; duplicates are allowed

        Returns:
            Path of the playlist file

        Raises:
            PlaylistWriteError: If the file cannot be opened, a filename
                cannot be encoded, or a write comes up short
        """
        ordered = self.order_tracks(self.dedupe_tracks(tracks))
        path = self.target_dir / playlist_filename(name)

        lines: List[bytes] = []
        for track in ordered:
            try:
                encoded = track.target_filename.encode("utf-8")
            except UnicodeEncodeError as e:
                raise PlaylistWriteError(
                    f"cannot convert filename {track.target_filename!r} to utf8"
                ) from e
            lines.append(encoded + LINE_TERMINATOR)

        if self.dry_run:
            logger.info("would write %s", path)
            return path

        try:
            f = open(path, "wb")
        except OSError as e:
            raise PlaylistWriteError(f"unable to open {path} for writing") from e

        try:
            with f:
                for line in lines:
                    if f.write(line) != len(line):
                        raise PlaylistWriteError(
                            f"did not write correct number of bytes to {path}"
                        )
        except OSError as e:
            raise PlaylistWriteError(
                f"did not write correct number of bytes to {path}"
            ) from e

        logger.info("wrote %s", path)
        return path

    def write_playlists(self, playlists: Iterable[Playlist]) -> List[Path]:
        """Write every playlist in turn."""
        return [
            self.write_playlist(playlist.name, playlist.tracks)
            for playlist in playlists
        ]
