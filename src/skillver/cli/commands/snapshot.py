"""
skillver snapshot - Version a SKILL.md on demand.

Usage:
    skillver snapshot .claude/skills/my-skill/SKILL.md
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from skillver.cli.output import console, print_error, print_info, print_success
from skillver.config import ConfigurationError, load_config
from skillver.versioning import StepStatus, classify_path, list_archives, snapshot_file


def snapshot(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path to the SKILL.md to archive.",
        ),
    ],
) -> None:
    """Archive a SKILL.md as if it had just been edited."""
    try:
        config = load_config()
    except ConfigurationError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    if classify_path(str(path), config.hook) is None:
        print_error(escape(f"Not a tracked {config.hook.document_filename}: {path}"))
        raise typer.Exit(1)

    result = snapshot_file(path, config)
    if not result.message:
        print_info("Nothing to do.")
        return

    if result.archive_status == StepStatus.FAILED:
        print_error(escape(result.message))
        raise typer.Exit(1)

    if result.archive_status == StepStatus.SUCCESS:
        print_success(escape(result.message))
    else:
        console.print(result.message, markup=False)

    archives = list_archives(path, config.hook.archive_dir)
    if archives:
        print_info(f"{len(archives)} snapshot(s) in {escape(str(archives[0].parent))}")
