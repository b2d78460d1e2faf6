"""Command line interface for Skillver."""

from skillver.cli.app import app

__all__ = ["app"]
