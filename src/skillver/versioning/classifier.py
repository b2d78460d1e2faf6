"""
Path classification for edited files.

Decides whether an edited path names a tracked SKILL.md document and, if
so, which skill it belongs to.
"""

import posixpath
from pathlib import Path

from skillver.config.schema import HookConfig
from skillver.versioning.models import DocumentTarget


def normalize_path(file_path: str) -> str:
    """Normalize separators to forward slashes and collapse the path."""
    return posixpath.normpath(file_path.replace("\\", "/"))


def _directly_under(segments: list[str], root: str) -> bool:
    """Check that the document directory sits directly inside ``root``."""
    root_segments = [s for s in root.replace("\\", "/").split("/") if s]
    size = len(root_segments)
    if size == 0 or len(segments) < size + 2:
        return False
    return segments[-2 - size : -2] == root_segments


def classify_path(file_path: str, hook: HookConfig | None = None) -> DocumentTarget | None:
    """Classify an edited path.

    A path is a tracked document when:
    - its final segment is the document filename,
    - its directory sits directly inside a managed skills root or a skills
      collection directory (``skills/<name>/SKILL.md``),
    - no segment is the archive directory.

    Args:
        file_path: Absolute or relative path of the edited file.
        hook: Hook settings (defaults apply when omitted).

    Returns:
        The document target, or None when the path is not tracked.
    """
    hook = hook or HookConfig()
    if not file_path:
        return None

    segments = [s for s in normalize_path(file_path).split("/") if s]
    if len(segments) < 2 or segments[-1] != hook.document_filename:
        return None

    # Snapshots inside the archive are never themselves archived
    if hook.archive_dir in segments[:-1]:
        return None

    in_managed_root = any(_directly_under(segments, root) for root in hook.managed_roots)
    in_collection = len(segments) >= 3 and segments[-3] == hook.collection_dir

    if not (in_managed_root or in_collection):
        return None

    return DocumentTarget(path=Path(file_path), name=segments[-2])
