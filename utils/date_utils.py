"""
Date helpers shared by the allocator, calculator and routes.

Booking counts are keyed by ISO date strings (yyyy-MM-dd) with no time part.
All datetimes are naive, in the boutique's local time.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterator, Union

from exceptions import InvalidDateInputError

DATE_FORMAT = "%Y-%m-%d"


def date_key(value: Union[date, datetime]) -> str:
    """Format a date or datetime as a booking-counts key."""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(DATE_FORMAT)


def start_of_day(value: Union[date, datetime]) -> datetime:
    """Midnight at the start of the given day."""
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def at_hour(value: date, hour: int) -> datetime:
    """The given day at a whole hour."""
    return datetime.combine(value, time(hour=hour))


def hours_between(later: datetime, earlier: datetime) -> int:
    """
    Whole hours from earlier to later.

    Truncates toward zero, so 35h59m counts as 35 and -0h30m counts as 0.
    """
    return int((later - earlier).total_seconds() / 3600)


def date_range(start: date, days: int) -> Iterator[date]:
    """Yield `days` consecutive dates beginning at start."""
    for offset in range(days):
        yield start + timedelta(days=offset)


def parse_date(value: Union[str, date, datetime, None], field: str = "date") -> date:
    """
    Parse a date input.

    Accepts date/datetime objects, ISO dates (2025-03-10) and ISO datetimes
    (2025-03-10T15:42:00, with or without a trailing Z).

    Raises:
        InvalidDateInputError: If the value is empty or unparseable
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise InvalidDateInputError(field, value)

    text = value.strip()
    try:
        if len(text) == 10:
            return datetime.strptime(text, DATE_FORMAT).date()
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidDateInputError(field, value)
