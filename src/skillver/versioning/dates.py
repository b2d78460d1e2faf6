"""Date helpers shared by the versioning pipeline."""

from collections.abc import Callable
from datetime import date, datetime, timezone

# Returns the date stamped onto archives and changelog entries
Clock = Callable[[], date]


def utc_today() -> date:
    """Get the current date at the UTC day boundary."""
    return datetime.now(timezone.utc).date()


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.isoformat()
