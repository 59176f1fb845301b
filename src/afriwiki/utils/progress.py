"""Rich progress bar and summary table utilities."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

console = Console()


def create_progress() -> Progress:
    """Return a Rich Progress bar for batch runs.

    Usage::

        with create_progress() as progress:
            task = progress.add_task("Linking pages", total=len(paths))
            for path in paths:
                link(path)
                progress.advance(task)
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def log_summary(processed: int, errors: int, links: int) -> None:
    """Print a summary table of a batch run.

    Args:
        processed: Number of files written.
        errors: Number of files that failed.
        links: Number of auto-links inserted across all files.
    """
    table = Table(title="Linking Summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Files processed", f"[green]{processed}[/green]")
    table.add_row("Errors", f"[red]{errors}[/red]" if errors else f"{errors}")
    table.add_row("Links inserted", f"{links}")
    table.add_row("Total files", f"[bold]{processed + errors}[/bold]")

    console.print()
    console.print(table)
    console.print()
