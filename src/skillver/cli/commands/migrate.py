"""
skillver migrate - Put existing skills under version control.

Usage:
    skillver migrate
    skillver migrate --skills-dir ./plugins/my-plugin/skills
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from skillver.cli.output import console, print_error, print_warning
from skillver.config import ConfigurationError, load_config
from skillver.exceptions import MigrationError
from skillver.storage import get_default_skills_dir
from skillver.versioning import SkillMigrator


def migrate(
    skills_dir: Annotated[
        Path | None,
        typer.Option(
            "--skills-dir",
            "-d",
            help="Skills directory (default: <project>/.claude/skills).",
        ),
    ] = None,
) -> None:
    """Create releases/, version headers, changelogs and snapshots for every skill."""
    try:
        config = load_config()
    except ConfigurationError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    target = skills_dir or get_default_skills_dir(config.resolve_project_dir())
    console.print(f"[bold]Starting skill versioning migration[/bold] in {target}\n")

    current = {"name": None}

    def progress(name: str, message: str) -> None:
        if current["name"] != name:
            console.print(f"\n[cyan]{name}[/cyan]")
            current["name"] = name
        style = "red" if message.startswith("Error") else "dim"
        console.print(f"  [{style}]{escape(message)}[/{style}]", highlight=False)

    try:
        report = SkillMigrator(config).migrate(target, progress)
    except MigrationError as e:
        print_error(escape(str(e)))
        console.print("[dim]Make sure you're running this from your project root.[/dim]")
        raise typer.Exit(1)

    if report.total == 0:
        print_warning("No skills found to migrate.")
        return

    table = Table(title="Migration Summary")
    table.add_column("Item")
    table.add_column("Count", justify="right", style="cyan")
    table.add_row("Skills processed", f"{report.processed}/{report.total}")
    table.add_row("releases/ folders created", str(report.releases_created))
    table.add_row("Changelogs created", str(report.changelogs_created))
    table.add_row("Version headers added", str(report.headers_added))
    table.add_row("Backups migrated", str(report.backups_migrated))
    table.add_row("Snapshots created", str(report.backups_created))

    console.print()
    console.print(table)

    if report.errors:
        raise typer.Exit(1)
