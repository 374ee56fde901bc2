"""Prompt field formatting.

Every helper is total: None renders as a sentinel or the empty string.
"""

from datetime import date, datetime

PRESENT = "Present"
NEVER = "never"


def iso_date(value: date | datetime | None) -> str:
    """Render a date or datetime as YYYY-MM-DD ("" when missing)."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def format_period(start: date | datetime | None, end: date | datetime | None) -> str:
    """Render a start/end pair as "2020-01-01 to Present"."""
    return f"{iso_date(start)} to {iso_date(end) or PRESENT}"


def format_years(start: date | datetime | None, end: date | datetime | None) -> str:
    """Render a start/end pair as "2018-Present"."""
    start_year = str(start.year) if start else ""
    end_year = str(end.year) if end else PRESENT
    return f"{start_year}-{end_year}"


def last_updated(value: date | datetime | None) -> str:
    """Render a last-updated timestamp, or "never" if nothing was recorded."""
    return iso_date(value) or NEVER
