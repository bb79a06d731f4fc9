"""Data models for the playlist sync application."""

import os
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from enum import Enum
from pathlib import Path, PurePath
from typing import Dict, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SortMode(str, Enum):
    """Ordering applied to tracks when writing a playlist file."""

    PLAY_ORDER = "play_order"
    NAME = "name"


class Track(BaseModel):
    """A library track referenced by a playlist."""

    display_name: Optional[str] = None
    target_filename: str
    source_path: Path
    play_order: int

    @classmethod
    def from_source(
        cls,
        source_path: Union[str, Path],
        play_order: int,
        display_name: Optional[str] = None,
    ) -> "Track":
        """Build a track whose target filename is the source's base name."""
        return cls(
            display_name=display_name,
            target_filename=PurePath(source_path).name,
            source_path=Path(source_path),
            play_order=play_order,
        )

    @field_validator("target_filename")
    @classmethod
    def validate_target_filename(cls, v: str) -> str:
        """Target filenames are bare names inside the flat target directory."""
        if not v or v in (".", ".."):
            raise ValueError("target filename must not be empty")
        if any(sep and sep in v for sep in ("/", os.sep, os.altsep)):
            raise ValueError(f"target filename must not contain a path: {v}")
        return v

    @field_validator("source_path", mode="before")
    @classmethod
    def validate_source_path(cls, v: Union[str, Path]) -> Path:
        """Validate source path."""
        return Path(v)

    model_config = ConfigDict(arbitrary_types_allowed=True)


class Playlist(BaseModel):
    """A named, ordered list of tracks as reported by the library."""

    name: str
    tracks: List[Track] = Field(default_factory=list)

    @property
    def track_count(self) -> int:
        """Get number of tracks in playlist."""
        return len(self.tracks)


class LibrarySnapshot(BaseModel):
    """Desired state read from the library for one run.

    ``desired_files`` maps every target filename referenced by any requested
    playlist to the source file it is copied from. When two source files share
    a filename the one added last wins.
    """

    playlists: Dict[str, Playlist] = Field(default_factory=dict)
    desired_files: Dict[str, Path] = Field(default_factory=dict)

    def add_playlist(self, name: str) -> Playlist:
        """Register a playlist, returning the existing one if already present."""
        if name not in self.playlists:
            self.playlists[name] = Playlist(name=name)
        return self.playlists[name]

    def add_track(self, playlist_name: str, track: Track) -> None:
        """Append a track to a playlist and record its file as desired."""
        self.add_playlist(playlist_name).tracks.append(track)
        self.desired_files[track.target_filename] = track.source_path

    @property
    def track_count(self) -> int:
        """Total number of playlist entries across all playlists."""
        return sum(playlist.track_count for playlist in self.playlists.values())


@dataclass
class ObservedFiles:
    """Files found directly inside the target directory.

    Attributes:
        filenames: Recognized media and playlist files, by bare name
        ignored_files: Files skipped because of their extension
        ignored_directories: Subdirectories, which are never synced
    """

    filenames: Set[str] = dataclass_field(default_factory=set)
    ignored_files: List[str] = dataclass_field(default_factory=list)
    ignored_directories: List[str] = dataclass_field(default_factory=list)
