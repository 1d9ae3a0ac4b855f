"""
Terminal display for the Crestora data sync.

Uses Rich library for terminal output.
"""

from typing import TYPE_CHECKING, Dict, Mapping

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from .ranking import RankSummary

console = Console(highlight=False)


def display_sync_start(base_url: str) -> None:
    console.print(f"Syncing from [cyan]{base_url}[/cyan]")


def display_fetch_counts(counts: Mapping[str, int]) -> None:
    """Display collection sizes after the top-level fetch."""
    parts = ", ".join(f"{name}={count}" for name, count in counts.items())
    console.print(f"Fetched: {parts}")


def display_team_statuses(status_counts: Mapping[str, int]) -> None:
    """Display how many teams are in each lifecycle status."""
    parts = "  ".join(
        f"{status.lower()}: {count}" for status, count in status_counts.items() if count
    )
    if parts:
        console.print(f"[dim]Teams by status  {parts}[/dim]")


def display_progress_tick() -> None:
    """One marker per finished team score fetch."""
    console.print(".", end="")


def display_progress_done() -> None:
    console.print()


def display_team_score_warning(team_id: str, error: Exception) -> None:
    console.print()
    display_warning(f"failed to fetch scores for {team_id}: {error}")


def display_warning(message: str) -> None:
    """Display a warning message."""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def display_written(path: str, size: int) -> None:
    console.print(f"Wrote {path} ({size} bytes)")


def display_files_table(written: Dict[str, int], title: str = "Sync complete") -> None:
    """Display the final byte count for each file written."""
    table = Table(title=title, show_header=True)
    table.add_column("File", style="cyan")
    table.add_column("Bytes", justify="right")

    for path, size in written.items():
        table.add_row(path, f"{size:,}")

    console.print()
    console.print(table)
    console.print()


def display_rank_summary(path: str, summary: "RankSummary") -> None:
    """Display the outcome of a round rank recalculation."""
    table = Table(title="Round ranks updated", show_header=False, box=None, padding=(0, 2))
    table.add_column("", style="dim")
    table.add_column("", justify="right")

    table.add_row("Rounds ranked", str(summary.rounds_ranked))
    table.add_row("Scores ranked", str(summary.scores_ranked))
    table.add_row("Scores not ranked (<= 0)", str(summary.scores_skipped))
    table.add_row("Ranks changed", str(summary.ranks_changed))
    if summary.bytes_written is not None:
        table.add_row("Bytes written", f"{summary.bytes_written:,}")

    console.print()
    console.print(table)
    console.print(f"Successfully updated round ranks in [cyan]{path}[/cyan]")
    console.print()


def display_error(message: str) -> None:
    """Display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")
