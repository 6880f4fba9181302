"""
Timestamp parsing and formatting.

Entries are typed as "DDHHMM", or "HHMM" when the day is the same as the
previous entry. Only the day of month is entered, so the year and month
come from a fixed reference calendar.
"""

from datetime import datetime
from typing import Optional


DEFAULT_YEAR = 2024
DEFAULT_MONTH = 1  # 31 days, so every day-of-month is representable


def parse_timestamp(
    text: str,
    last_day: int = 1,
    year: int = DEFAULT_YEAR,
    month: int = DEFAULT_MONTH
) -> Optional[datetime]:
    """Parse "DDHHMM" or "HHMM" entry text into a datetime.

    Input shorter than six digits is left-padded with zeros, so "0930"
    becomes day 00, which means "same day as the last entry".

    Args:
        text: Raw form text
        last_day: Day of month inherited when the day is omitted
        year: Reference year
        month: Reference month

    Returns:
        Parsed datetime, or None if the text is not a valid time
    """
    text = text.strip()
    if not text or len(text) > 6 or not (text.isascii() and text.isdigit()):
        return None

    padded = text.zfill(6)
    day = int(padded[0:2])
    hour = int(padded[2:4])
    minute = int(padded[4:6])

    if day == 0:
        day = last_day

    if day < 1 or day > 31 or hour >= 24 or minute >= 60:
        return None

    try:
        return datetime(year, month, day, hour, minute)
    except ValueError:
        # Day does not exist in the reference month
        return None


def format_timestamp(dt: datetime) -> str:
    """Format for display, e.g. "5d 09:07"."""
    return f"{dt.day}d {dt.hour:02d}:{dt.minute:02d}"


def format_for_input(dt: datetime) -> str:
    """Format back into entry text, e.g. "50907".

    The day is not zero-padded; parse_timestamp pads it again.
    """
    return f"{dt.day}{dt.hour:02d}{dt.minute:02d}"
