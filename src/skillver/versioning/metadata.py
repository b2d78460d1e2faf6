"""
Metadata patching for SKILL.md documents.

Keeps the "Last Updated" field current and, for migrations, inserts a
version header into documents that lack one.
"""

import re

LAST_UPDATED_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\*\*Last Updated\*\*:\s*)(\d{4}-\d{2}-\d{2})", re.IGNORECASE),
    re.compile(r"(Last Updated:\s*)(\d{4}-\d{2}-\d{2})", re.IGNORECASE),
)

# Optional YAML frontmatter followed by the first level-one heading
_FIRST_HEADING = re.compile(r"^(---[\s\S]*?---\n+)?# .+$", re.MULTILINE)


def update_last_updated(content: str, new_date: str) -> str:
    """Replace the date of the first "Last Updated" field.

    Only the date is rewritten; everything else stays byte-for-byte the
    same. A document without the field is returned unchanged.

    Args:
        content: Document text.
        new_date: Date in YYYY-MM-DD form.

    Returns:
        The patched text.
    """
    for pattern in LAST_UPDATED_PATTERNS:
        if pattern.search(content):
            return pattern.sub(lambda m: m.group(1) + new_date, content, count=1)
    return content


def add_version_header(content: str, version: str, date: str) -> str:
    """Insert a version header after the document's first heading.

    Args:
        content: Document text.
        version: Version to declare.
        date: Initial "Last Updated" date.

    Returns:
        The text with a header, or the original text when it has no
        heading or already carries a version header there.
    """
    heading = _FIRST_HEADING.search(content)
    if not heading:
        return content

    before = content[: heading.end()]
    after = content[heading.end() :]
    if after.strip().startswith("**Version**"):
        return content

    return f"{before}\n\n**Version**: {version}\n**Last Updated**: {date}{after}"
