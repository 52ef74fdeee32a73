"""Rich terminal renderer for buildcast.

Turns status messages and ``CoordinatorSnapshot``s into Rich renderables.

Color scheme
------------
- yellow    : building
- green     : built / sync without errors
- red       : built / sync with errors
- cyan      : published (non-status) payloads
"""

from __future__ import annotations

from typing import Any

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from buildcast.models.coordinator import CoordinatorSnapshot, VisibleState
from buildcast.models.status import StatusAction, StatusMessage

# ---------------------------------------------------------------------------
# State -> Rich style mapping
# ---------------------------------------------------------------------------

_VISIBLE_STYLES: dict[VisibleState, str] = {
    VisibleState.IDLE: "dim",
    VisibleState.BUILDING: "bold yellow",
    VisibleState.BUILT: "bold green",
    VisibleState.SERVER_ERROR: "bold red",
}

_ACTION_LABELS: dict[StatusAction, str] = {
    StatusAction.BUILDING: "[yellow]BUILDING[/yellow]",
    StatusAction.BUILT: "[green]BUILT[/green]",
    StatusAction.SYNC: "[blue]SYNC[/blue]",
}


def parse_status(payload: Any) -> StatusMessage | None:
    """Return *payload* as a ``StatusMessage`` if it looks like one."""
    if isinstance(payload, StatusMessage):
        return payload
    if isinstance(payload, dict) and payload.get("action") in {a.value for a in StatusAction}:
        try:
            return StatusMessage.model_validate(payload)
        except ValueError:
            return None
    return None


def _hash_cell(value: str | None) -> Text:
    return Text(value) if value else Text("-", style="dim")


class StatusRenderer:
    """Renders status messages and snapshots as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Status messages
    # ------------------------------------------------------------------

    def render_message(self, payload: Any, *, source: str = "") -> Text:
        """Render one received message as a single line (plus diagnostics)."""
        text = Text()
        if source:
            text.append(f"{source} ", style="dim")
        status = parse_status(payload)
        if status is None:
            text.append("PUBLISH ", style="cyan")
            text.append(repr(payload))
            return text

        text.append_text(Text.from_markup(_ACTION_LABELS[status.action]))
        if status.hash:
            text.append(f" {status.hash}", style="bold")
        if status.errors:
            text.append(f" {len(status.errors)} error(s)", style="red")
        if status.warnings:
            text.append(f" {len(status.warnings)} warning(s)", style="yellow")

        for error in status.errors:
            text.append(f"\n  error: {error}", style="red")
        for warning in status.warnings:
            text.append(f"\n  warning: {warning}", style="yellow")
        return text

    def print_message(self, payload: Any, *, source: str = "") -> None:
        self.console.print(self.render_message(payload, source=source))

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def render_snapshot(self, snapshot: CoordinatorSnapshot) -> Panel:
        """Render a coordinator snapshot as a Rich Panel."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Field", style="bold")
        table.add_column("Value")

        style = _VISIBLE_STYLES[snapshot.visible]
        table.add_row("Status", Text(snapshot.visible.value.upper(), style=style))
        table.add_row("Latest hash", _hash_cell(snapshot.latest_hash))
        table.add_row("Client hash", _hash_cell(snapshot.client_hash))
        table.add_row(
            "Errors / warnings",
            f"{snapshot.latest_error_count} / {snapshot.latest_warning_count}",
        )
        table.add_row(
            "Server error",
            "[bold red]yes[/bold red]" if snapshot.server_has_error else "[green]no[/green]",
        )
        table.add_row("Listeners", str(snapshot.listener_count))
        table.add_row("Broadcasts", str(snapshot.broadcast_count))

        footer = (
            "[bold red]CLOSED[/bold red]" if snapshot.closed else "[green]accepting events[/green]"
        )
        return Panel(
            Group(table, Text(""), Text.from_markup(footer)),
            title="[bold]buildcast[/bold]",
            border_style=style,
        )

    def print_snapshot(self, snapshot: CoordinatorSnapshot) -> None:
        self.console.print(self.render_snapshot(snapshot))
