"""
Hook logging for Skillver.

This package provides the append-only side-channel log written by the
versioning hook.
"""

from skillver.audit.logger import HookEventType, HookLogger

__all__ = ["HookEventType", "HookLogger"]
