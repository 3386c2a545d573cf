"""ISO-8601 date helpers.

Delta transfers exchange their start date as an ISO-8601 string with
millisecond precision and an explicit UTC offset, e.g.
``2015-06-01T10:15:30.000+00:00``.
"""

from __future__ import annotations

from datetime import datetime, timezone


def get_iso_string_from_date(date: datetime) -> str:
    """Format a datetime as an ISO-8601 string.

    Naive datetimes are assumed to be UTC.

    Args:
        date: The datetime to format.

    Returns:
        ISO-8601 string with milliseconds and UTC offset.
    """
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return date.isoformat(timespec="milliseconds")


def get_date_from_iso_string(value: str) -> datetime:
    """Parse an ISO-8601 string into an aware datetime.

    Args:
        value: ISO-8601 string (a trailing "Z" is accepted).

    Returns:
        Timezone-aware datetime (UTC when the string has no offset).

    Raises:
        ValueError: If the string is not valid ISO-8601.
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    date = datetime.fromisoformat(value)
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return date
