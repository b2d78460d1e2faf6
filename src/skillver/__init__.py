"""
Skillver - SKILL.md versioning hook.

Archives dated snapshots of SKILL.md documents and maintains their
changelogs whenever an editing tool writes to them.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skillver")
except PackageNotFoundError:
    __version__ = "1.1.0"

__all__ = [
    "__version__",
]
