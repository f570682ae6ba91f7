"""
Tracura - Date Helpers

Snapshots store ISO dates; submitted project documents use dd/MM/yyyy.
"""
import calendar
from datetime import date, datetime

SUBMISSION_DATE_FORMAT = "%d/%m/%Y"


def parse_date(value: date | datetime | str | None) -> date | None:
    """
    Parse a stored date.

    Accepts date/datetime objects, ISO strings ("2025-01-31", with or without
    a time part) and submission strings ("31/01/2025").

    Raises:
        ValueError: If a non-empty string matches neither format
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    if "/" in text:
        return datetime.strptime(text, SUBMISSION_DATE_FORMAT).date()
    return datetime.fromisoformat(text).date()


def format_submission_date(value: date) -> str:
    return value.strftime(SUBMISSION_DATE_FORMAT)


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
