"""buildcast CLI — Typer-based command-line interface.

Provides the ``buildcast`` command with subcommands for replaying event
scripts, running the built-in demo and showing the effective settings.

All output uses Rich for formatted terminal display.
"""
