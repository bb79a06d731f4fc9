"""Configuration management for the playlist sync application."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .models.models import SortMode

logger = logging.getLogger(__name__)

# Load .env file from config directory or project root
_config_env = Path(__file__).parent.parent.parent / "config" / ".env"
if _config_env.exists():
    load_dotenv(_config_env)
else:
    load_dotenv()

# Extensions (lowercase, no dot) that the sync owns inside the target directory
RECOGNIZED_EXTENSIONS = frozenset({"m3u", "mp3", "m4a"})

PLAYLIST_EXTENSION = "m3u"

# DRM-protected AAC, cannot be played outside the library application
PROTECTED_EXTENSION = "m4p"

DEFAULT_LIBRARY_XML = Path.home() / "Music" / "iTunes" / "iTunes Music Library.xml"


class Config:
    """Application configuration."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Library export to read playlists from
        self.library_xml = Path(
            os.getenv("SYNC_PLAYLISTS_LIBRARY_XML", str(DEFAULT_LIBRARY_XML))
        ).expanduser()

        # Playlist ordering
        self.sort_mode = self._parse_sort_mode(
            os.getenv("SYNC_PLAYLISTS_SORT_MODE", SortMode.PLAY_ORDER.value)
        )

        # Logging
        self.log_level = os.getenv("SYNC_PLAYLISTS_LOG_LEVEL", "INFO").upper()
        log_file = os.getenv("SYNC_PLAYLISTS_LOG_FILE")
        self.log_file: Optional[Path] = Path(log_file).expanduser() if log_file else None

    @staticmethod
    def _parse_sort_mode(value: str) -> SortMode:
        """Parse a sort mode name, falling back to play order."""
        try:
            return SortMode(value.strip().lower())
        except ValueError:
            logger.warning(
                "Unknown sort mode %r, using %s", value, SortMode.PLAY_ORDER.value
            )
            return SortMode.PLAY_ORDER


def get_config() -> Config:
    """Get application configuration."""
    return Config()
