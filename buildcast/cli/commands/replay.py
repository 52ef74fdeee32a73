"""``buildcast replay SCRIPT`` — drive a coordinator from an event script.

Every broadcast is printed as it happens (unless ``--quiet``) and can be
mirrored to a JSON-lines file.  Listeners joined by the script are
summarized at the end together with the final coordinator snapshot.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from buildcast.config import config
from buildcast.core.replay import ScriptRunner
from buildcast.listeners import Listener
from buildcast.listeners.console import ConsoleListener
from buildcast.listeners.jsonl_file import JsonlFileListener
from buildcast.listeners.memory import MemoryListener
from buildcast.models.script import EventScript, ScriptValidationError
from buildcast.monitor.renderer import StatusRenderer

console = Console()


def replay_cmd(
    script_path: Path = typer.Argument(
        ...,
        help="Path to a JSON event script.",
    ),
    jsonl: Path = typer.Option(
        None,
        "--jsonl",
        "-j",
        help="Also write every broadcast to this JSON-lines file.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Do not print broadcasts as they happen.",
    ),
) -> None:
    """Replay an event script through a fresh coordinator."""
    if not script_path.exists():
        console.print(f"[bold red]Script not found:[/bold red] {escape(str(script_path))}")
        raise typer.Exit(code=1)

    try:
        script = EventScript.load(script_path)
    except ScriptValidationError as exc:
        console.print(f"[bold red]Invalid script:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    listeners: list[Listener] = []
    if config.console_listener and not quiet:
        listeners.append(ConsoleListener(console=console))
    jsonl_path = jsonl or config.event_log_path
    if jsonl_path is not None:
        listeners.append(JsonlFileListener(jsonl_path))

    runner = ScriptRunner(listeners=listeners)
    joined = runner.run(script)
    snapshot = runner.coordinator.snapshot()
    # Release file handles even if the script never shut down
    runner.coordinator.shutdown()

    console.print()
    if joined:
        print_joined(joined)
    StatusRenderer(console=console).print_snapshot(snapshot)
    if jsonl_path is not None:
        console.print(f"[dim]Broadcasts written to {jsonl_path}[/dim]")


def print_joined(joined: dict[str, MemoryListener]) -> None:
    """Show how many messages each script-joined listener received."""
    table = Table(title="Joined listeners")
    table.add_column("Listener", style="cyan")
    table.add_column("Messages", justify="right")
    table.add_column("Last action")
    for name, listener in joined.items():
        decoded = listener.decoded()
        last = decoded[-1] if decoded else None
        action = last.get("action", "publish") if isinstance(last, dict) else "-"
        table.add_row(name, str(len(decoded)), action if last is not None else "-")
    console.print(table)
