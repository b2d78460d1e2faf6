"""
skillver log - Hook log access commands.

Usage:
    skillver log tail
    skillver log tail -n 50
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from skillver.audit import HookLogger
from skillver.cli.output import console, print_error, print_warning
from skillver.config import ConfigurationError, load_config

app = typer.Typer(
    name="log",
    help="Hook log access.",
)


@app.command()
def tail(
    lines: Annotated[
        int,
        typer.Option(
            "--lines",
            "-n",
            help="Number of events to show.",
        ),
    ] = 20,
) -> None:
    """View recent hook events."""
    try:
        config = load_config()
    except ConfigurationError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    hook_logger = HookLogger.from_config(config)
    events = hook_logger.read_events(limit=lines)

    if not events:
        print_warning("No hook events logged yet.")
        console.print(f"[dim]Log file: {hook_logger.log_path}[/dim]")
        return

    table = Table(title="Recent Hook Events")
    table.add_column("Time", style="dim")
    table.add_column("Event", style="cyan")
    table.add_column("Skill")
    table.add_column("Message")

    for event in events:
        table.add_row(
            str(event.get("timestamp", "")),
            str(event.get("event_type", "")),
            str(event.get("skill", "")),
            escape(str(event.get("message", ""))),
        )

    console.print(table)
