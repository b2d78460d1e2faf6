"""CLI command modules."""

from skillver.cli.commands import hook, log, migrate, snapshot

__all__ = ["hook", "log", "migrate", "snapshot"]
