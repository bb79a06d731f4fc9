"""Command-line interface for the playlist sync application.

Usage: sync-playlists TARGET_DIR PLAYLIST [PLAYLIST ...]
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Tuple

import click

from .. import __copyright__, __version__
from ..config import get_config
from ..core.filesystem import FileOperationError
from ..core.library import ItunesLibrarySource, LibraryError
from ..core.sync import PlaylistWriteError, SyncOrchestrator
from ..models.models import SortMode
from ..utils.logging_config import configure_third_party_loggers, setup_logging
from .display import display_sync_summary

logger = logging.getLogger(__name__)

PRODUCT_NAME = "sync-playlists"

# Shortest accepted target directory argument, e.g. "e:\"
MIN_TARGET_DIR_LENGTH = 3

ENCODING_FALLBACK_MESSAGE = "error: unable to convert message to UTF-8"


class TargetDirectoryError(Exception):
    """Raised when the target directory is missing or not a directory."""

    pass


KNOWN_ERRORS = (
    LibraryError,
    FileOperationError,
    PlaylistWriteError,
    TargetDirectoryError,
)


def normalize_target_dir(target_dir: str) -> str:
    """Return the target directory with a trailing path separator."""
    if target_dir and not target_dir.endswith((os.sep, "/")):
        return target_dir + os.sep
    return target_dir


def validate_target_dir(target_dir: str) -> Path:
    """Check that the target directory exists and is a directory.

    Raises:
        TargetDirectoryError: If the path is missing or not a directory
    """
    path = Path(target_dir)
    if not path.exists():
        raise TargetDirectoryError(f"{target_dir} does not exist")
    if not path.is_dir():
        raise TargetDirectoryError(f"{target_dir} is not a directory")
    return path


def _echo_err(message: str) -> None:
    """Print one line to stderr, degrading if it cannot be encoded."""
    try:
        message.encode("utf-8")
    except UnicodeEncodeError:
        message = ENCODING_FALLBACK_MESSAGE
    click.echo(message, err=True)


def _print_usage(program: str) -> None:
    _echo_err(f"{PRODUCT_NAME} version {__version__} {__copyright__}")
    _echo_err(f"usage: {program} usbrootdir playlist1 playlist2...")
    _echo_err("example:")
    _echo_err(f"{program} e:\\ EDM Rap Rock Pop")


def run_sync(
    target_dir: str,
    playlists: Tuple[str, ...],
    library: Path,
    sort_mode: SortMode,
    dry_run: bool = False,
    summary: bool = False,
) -> int:
    """Run a sync and map failures to one diagnostic line.

    Returns:
        Process exit code, 0 on success and 1 on any failure
    """
    try:
        validate_target_dir(target_dir)
        root = normalize_target_dir(target_dir)
        logger.debug("Syncing %s to %s", ", ".join(playlists), root)

        orchestrator = SyncOrchestrator(
            Path(root),
            ItunesLibrarySource(library),
            sort_mode=sort_mode,
            dry_run=dry_run,
        )
        result = orchestrator.run(playlists)
    except MemoryError:
        _echo_err("memory allocation error")
        return 1
    except KNOWN_ERRORS as e:
        logger.debug("Sync failed", exc_info=True)
        _echo_err(str(e))
        return 1
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        _echo_err(f"unknown exception: {e!r}")
        return 1

    if summary:
        display_sync_summary(result)
    return 0


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("target_dir", required=False)
@click.argument("playlists", nargs=-1)
@click.option(
    "--library",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Library XML file (default: $SYNC_PLAYLISTS_LIBRARY_XML)",
)
@click.option(
    "--sort-mode",
    type=click.Choice([mode.value for mode in SortMode]),
    help="Order tracks by library play order or by name",
)
@click.option("--dry-run", is_flag=True, help="Show changes without making them")
@click.option("--summary", is_flag=True, help="Print a summary table when done")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Set logging level",
)
@click.option("--log-file", type=click.Path(path_type=Path), help="Log to file")
@click.version_option(
    __version__,
    prog_name=PRODUCT_NAME,
    message=f"%(prog)s version %(version)s {__copyright__}",
)
@click.pass_context
def cli(
    ctx: Any,
    target_dir: Optional[str],
    playlists: Tuple[str, ...],
    library: Optional[Path],
    sort_mode: Optional[str],
    dry_run: bool,
    summary: bool,
    log_level: Optional[str],
    log_file: Optional[Path],
) -> None:
    """Sync library playlists to TARGET_DIR.

    Copies the music files of each PLAYLIST into TARGET_DIR, deletes music
    and .m3u files that no playlist references, and writes PLAYLIST.m3u.
    """
    if not playlists or target_dir is None or len(target_dir) < MIN_TARGET_DIR_LENGTH:
        _print_usage(ctx.find_root().info_name or PRODUCT_NAME)
        ctx.exit(1)

    config = get_config()

    setup_logging(
        log_level=log_level or config.log_level,
        log_file=log_file or config.log_file,
    )
    configure_third_party_loggers()

    exit_code = run_sync(
        target_dir,
        playlists,
        library=library or config.library_xml,
        sort_mode=SortMode(sort_mode) if sort_mode else config.sort_mode,
        dry_run=dry_run,
        summary=summary,
    )
    ctx.exit(exit_code)


if __name__ == "__main__":
    cli()
