"""Date parsing and calendar month utilities."""

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DateLike = Union[str, date, datetime]

MONTH_NAMES_PT_BR = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

MONTH_ABBREVIATIONS_PT_BR = (
    "jan",
    "fev",
    "mar",
    "abr",
    "mai",
    "jun",
    "jul",
    "ago",
    "set",
    "out",
    "nov",
    "dez",
)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        today: Anchor for relative dates (defaults to the current date)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def to_datetime(value: DateLike) -> datetime:
    """Normalize a timestamp into a naive local datetime.

    Accepts ISO 8601 strings, ``date`` and ``datetime`` values. Timezone-aware
    values are converted to local time before the tzinfo is dropped, so every
    timestamp the engine compares lives on the same clock.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    elif isinstance(value, str):
        if not value.strip():
            raise ValueError("Empty date string")
        try:
            dt = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            try:
                dt = date_parser.parse(value.strip())
            except (ValueError, TypeError, OverflowError) as e:
                raise ValueError(f"Could not parse date '{value}': {e}")
    else:
        raise ValueError(f"Unsupported date value: {value!r}")

    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def resolve_reference(reference: Optional[DateLike] = None) -> datetime:
    """Return the reference instant, defaulting to now."""
    if reference is None:
        return datetime.now()
    return to_datetime(reference)


def start_of_month(value: datetime) -> datetime:
    """First instant of the month containing ``value``."""
    return datetime(value.year, value.month, 1)


def add_months(value: datetime, months: int) -> datetime:
    """Shift a timestamp by whole calendar months, clamping the day."""
    return value + relativedelta(months=months)


def month_bounds(value: datetime, offset: int = 0) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` interval of the month ``offset`` months away."""
    start = add_months(start_of_month(value), offset)
    return start, add_months(start, 1)


def in_month(value: datetime, bounds: tuple[datetime, datetime]) -> bool:
    """Check whether ``value`` falls inside half-open month bounds."""
    start, end = bounds
    return start <= value < end


def month_key(value: datetime) -> str:
    """Return the ``YYYY-MM`` key of a timestamp."""
    return value.strftime("%Y-%m")


def short_month_label(value: datetime) -> str:
    """Short pt-BR month label such as ``"out 26"``."""
    return f"{MONTH_ABBREVIATIONS_PT_BR[value.month - 1]} {value.year % 100:02d}"


def full_month_name(value: datetime) -> str:
    """Full pt-BR month name such as ``"outubro"``."""
    return MONTH_NAMES_PT_BR[value.month - 1]


def months_between(end: datetime, start: datetime) -> int:
    """Whole calendar months from ``start`` to ``end``, truncated towards zero."""
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months
