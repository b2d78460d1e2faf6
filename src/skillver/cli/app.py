"""
Main Typer application for skillver CLI.

This module defines the root CLI application and registers all commands.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from skillver import __version__
from skillver.cli.commands import hook, log, migrate, snapshot
from skillver.cli.output import error_console, print_info

# Create the main Typer app
app = typer.Typer(
    name="skillver",
    help="Automatic versioning, archiving and changelogs for SKILL.md files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"skillver version [green]{__version__}[/green]")
        raise typer.Exit()


# noinspection PyUnusedLocal
@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log diagnostics to stderr.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]skillver[/bold blue] - SKILL.md versioning

    Archives a dated snapshot of every versioned SKILL.md edit under
    [bold]releases/[/bold] and keeps each skill's [bold]CHANGELOG.md[/bold] current.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=error_console, show_path=False)],
        )


# Register commands
app.command(name="hook")(hook.hook)
app.command(name="snapshot")(snapshot.snapshot)
app.command(name="migrate")(migrate.migrate)
app.add_typer(log.app, name="log")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
