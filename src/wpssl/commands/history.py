"""Past setup runs from the journal."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from wpssl_common.config import get_config

from wpssl.journal import recent_runs

console = Console()

_STATUS_STYLE = {"completed": "green", "failed": "red", "running": "yellow"}


def history(
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of runs to show."),
) -> None:
    """List recent setup runs and the step each failed at."""
    rows = recent_runs(get_config(), limit)
    if not rows:
        console.print("No setup runs recorded yet.")
        return

    table = Table(title="Setup Runs")
    table.add_column("Started", style="cyan")
    table.add_column("Domain")
    table.add_column("Directory")
    table.add_column("Distro")
    table.add_column("Status")
    table.add_column("Failed step")

    for row in rows:
        style = _STATUS_STYLE.get(row["status"], "white")
        failed = f"{row['failed_step']}. {row['failed_title']}" if row["failed_step"] else "-"
        table.add_row(
            row["started_at"][:19].replace("T", " "),
            row["domain"],
            row["site_dir"],
            row["distro"],
            f"[{style}]{row['status']}[/{style}]",
            failed,
        )

    console.print(table)
