"""Main Typer application — imports and registers all CLI commands.

Entry point: ``buildcast`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from buildcast.cli.commands.demo import demo_cmd
from buildcast.cli.commands.replay import replay_cmd
from buildcast.config import config

app = typer.Typer(
    name="buildcast",
    help="buildcast: build status coordination and live broadcast.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Override BUILDCAST_LOG_LEVEL for this run."
    ),
) -> None:
    """Configure logging once for every command."""
    level = (log_level or config.effective_log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="replay", help="Replay an event script through a coordinator.")(replay_cmd)
app.command(name="demo", help="Run the built-in server-error demo scenario.")(demo_cmd)


@app.command(name="config", help="Show the effective settings.")
def config_cmd() -> None:
    """Print the settings resolved from the environment and .env."""
    console = Console()

    table = Table(title="buildcast settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in config.model_dump().items():
        table.add_row(name, "[dim]unset[/dim]" if value is None else str(value))
    table.add_row("is_production", str(config.is_production))
    console.print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
