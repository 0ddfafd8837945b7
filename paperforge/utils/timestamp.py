"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Compact timestamp for directory names (e.g., "20251114_123456")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def parse_timestamp(value) -> datetime:
    """
    Parse an ISO 8601 string into a naive local datetime.

    Datetimes pass through unchanged so callers can hand over either form.
    Offset-aware values are converted to local time and stripped of their
    offset, so they compare with ``datetime.now()``.

    Raises:
        ValueError: If the string is not ISO 8601
    """
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
