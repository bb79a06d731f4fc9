"""Display formatters and UI helpers for CLI."""

import logging
from typing import Optional

from rich.console import Console
from rich.table import Table

from ...core.sync import SyncResult

console = Console()
logger = logging.getLogger(__name__)


def display_sync_summary(
    result: SyncResult, output: Optional[Console] = None
) -> None:
    """Display a summary table of a sync run.

    Args:
        result: Result returned by the orchestrator
        output: Console to print to (defaults to stdout)
    """
    out = output or console
    summary = result.get_summary()

    title = "📊 Sync Summary"
    if result.dry_run:
        title += " (dry run)"
    out.print(f"\n[bold green]{title}[/bold green]")

    table = Table(show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    library = summary.get("library", {})
    table.add_row("Playlists", str(library.get("playlists", 0)))
    table.add_row("Tracks", str(library.get("tracks", 0)))
    table.add_row("Distinct Files", str(library.get("files", 0)))

    target = summary.get("target", {})
    table.add_row("Files On Target", str(target.get("files_found", 0)))
    if target.get("ignored"):
        table.add_row("Ignored Entries", f"[dim]{target['ignored']}[/dim]")

    reconcile = summary.get("reconcile", {})
    table.add_row("Files Deleted", str(reconcile.get("deleted", 0)))
    table.add_row("Files Copied", str(reconcile.get("copied", 0)))
    table.add_row("Playlists Written", str(summary["playlists_written"]))

    out.print(table)

    if result.dry_run:
        out.print("[yellow]⚠️  DRY RUN - No changes were made[/yellow]")
