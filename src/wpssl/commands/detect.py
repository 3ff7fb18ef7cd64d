"""Host distribution report."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from wpssl_common.config import get_config

from wpssl.errors import UnsupportedPlatformError
from wpssl.services import distro, packages

console = Console()


def _support(builder, dist) -> str:
    try:
        builder(dist)
    except UnsupportedPlatformError:
        return "[yellow]manual[/yellow]"
    return "[green]automatic[/green]"


def detect() -> None:
    """Show the detected distribution and how dependencies would be installed."""
    cfg = get_config()
    dist = distro.detect(cfg.host_root)

    table = Table(title="Host Distribution")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("ID", dist.id)
    table.add_row("Version", dist.version or "-")
    table.add_row("Family", dist.family.value)
    table.add_row("Docker install", _support(packages.docker_install_commands, dist))
    table.add_row("Certbot install", _support(packages.certbot_install_commands, dist))

    console.print(table)
