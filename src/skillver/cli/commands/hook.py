"""
skillver hook - PostToolUse hook entry point.

Usage:
    echo '{"tool_name": "Write", "tool_input": {"file_path": "..."}}' | skillver hook

Reads one JSON payload from stdin and writes one JSON result to stdout.
The command always exits 0 and always answers ``"continue": true``.
"""

import json
import logging
import sys

import typer

from skillver.config import ConfigurationError, load_config
from skillver.config.schema import Config
from skillver.versioning import HOOK_NAME, EventDispatcher, HookResult

logger = logging.getLogger(__name__)


def hook() -> None:
    """Version a SKILL.md after an edit (reads hook JSON from stdin)."""
    try:
        config = load_config()
    except ConfigurationError as e:
        # A broken config must not block the host; fall back to defaults
        logger.warning(f"Using default configuration: {e}")
        config = Config()

    try:
        # Undecodable bytes come back as an error advisory, not an exception
        result = EventDispatcher(config).handle_raw(sys.stdin.buffer.read())
    except Exception as e:
        logger.exception("Hook failed before dispatch")
        result = HookResult(message=f"[{HOOK_NAME}] Error: {e}")

    typer.echo(json.dumps(result.to_output()))
