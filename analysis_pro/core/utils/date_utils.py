"""
Date utility functions.
"""

from datetime import UTC, date, datetime


def utcnow() -> datetime:
    """
    Return timezone-aware UTC datetime.

    Replaces deprecated datetime.utcnow() which is scheduled for removal in Python 3.14.
    See: https://docs.python.org/3/library/datetime.html#datetime.datetime.utcnow
    """
    return datetime.now(UTC)


def iso_date(moment: datetime | None = None) -> str:
    """
    Format a moment as an ISO calendar date (YYYY-MM-DD).

    Aware datetimes are converted to UTC first; naive ones are taken as-is.

    Args:
        moment: Datetime to format (defaults to now, UTC)

    Returns:
        Date string, e.g. "2025-10-05"
    """
    if moment is None:
        moment = utcnow()
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    day: date = moment.date()
    return day.isoformat()
