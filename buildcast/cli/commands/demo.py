"""``buildcast demo`` — run the built-in server-error scenario.

Walks a coordinator through a client rebuild, a failing server build
that masks the client, a late-joining listener catching up, and the
server recovering, printing every broadcast along the way.
"""

from __future__ import annotations

import time

import typer
from rich.console import Console
from rich.panel import Panel

from buildcast.core.replay import ScriptRunner
from buildcast.listeners.console import ConsoleListener
from buildcast.models.script import EventScript, ScriptStep, StepKind
from buildcast.models.status import CompilationResult
from buildcast.monitor.renderer import StatusRenderer

console = Console()

DEMO_SCRIPT = EventScript(
    steps=[
        ScriptStep(kind=StepKind.CLIENT_INVALID),
        ScriptStep(
            kind=StepKind.CLIENT_DONE,
            result=CompilationResult(hash="a1b2c3", warnings=["unused import 'os'"]),
        ),
        ScriptStep(
            kind=StepKind.SERVER_DONE,
            result=CompilationResult(
                hash="a1b2c3", errors=["Module not found: 'server-only'"]
            ),
        ),
        ScriptStep(kind=StepKind.CLIENT_INVALID),
        ScriptStep(kind=StepKind.JOIN, listener="late"),
        ScriptStep(kind=StepKind.SERVER_INVALID),
        ScriptStep(kind=StepKind.PUBLISH, payload={"event": "reload-page"}),
    ]
)

_NARRATION: dict[int, str] = {
    0: "Client target invalidated",
    1: "Client build finished",
    2: "Server build failed",
    3: "Client invalidated again (masked by server error)",
    4: "Listener 'late' joins and catches up",
    5: "Server target invalidated (error cleared)",
    6: "Application payload published",
}


def demo_cmd(
    delay: float = typer.Option(
        0.3,
        "--delay",
        "-d",
        help="Delay in seconds between events for visual effect.",
    ),
) -> None:
    """Run the demo scenario with a console listener attached."""
    console.print()
    console.print(
        Panel(
            "[bold]buildcast demo[/bold]\n\n"
            "A client/server pipeline emitting events to one live listener.",
            border_style="cyan",
            padding=(1, 2),
        )
    )
    console.print()

    runner = ScriptRunner(listeners=[ConsoleListener(console=console, name="live")])
    for index, step in enumerate(DEMO_SCRIPT.steps):
        console.print(f"[bold cyan]>[/bold cyan] {_NARRATION[index]}")
        runner.apply(step)
        if delay > 0:
            time.sleep(delay)

    late = runner.joined["late"]
    console.print()
    console.print("[bold]Listener 'late' received:[/bold]")
    renderer = StatusRenderer(console=console)
    for message in late.decoded():
        renderer.print_message(message, source="late")

    console.print()
    renderer.print_snapshot(runner.coordinator.snapshot())
    runner.coordinator.shutdown()
