"""Root Typer application for the wpssl CLI."""

from __future__ import annotations

import typer

from wpssl.commands import detect, history, setup

app = typer.Typer(
    name="wpssl",
    help="Provision WordPress in Docker with a Let's Encrypt certificate.",
)

app.command(name="setup")(setup.setup)
app.command(name="detect")(detect.detect)
app.command(name="history")(history.history)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Run the interactive setup when no subcommand is given."""
    if ctx.invoked_subcommand is None:
        setup.setup()


if __name__ == "__main__":
    app()
