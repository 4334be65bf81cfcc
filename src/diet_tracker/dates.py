"""Calendar helpers built around canonical ``YYYY-MM-DD`` date keys.

Every daily record and weight entry is identified by its date key, so all
functions here accept either a ``date``/``datetime`` or a date key string and
work in local calendar time. Weeks start on Monday.
"""

from datetime import date, datetime, timedelta

from diet_tracker.domain.models import Weekday
from diet_tracker.errors import InvalidDateError

DATE_KEY_FORMAT = "%Y-%m-%d"
DAYS_PER_WEEK = 7

DateLike = date | datetime | str

_MONTH_ABBREVS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def parse_date_key(value: DateLike) -> date:
    """Return the calendar date for a date-like value."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Unsupported date value: {value!r}")
    try:
        return datetime.strptime(value.strip(), DATE_KEY_FORMAT).date()
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date key: {value!r}") from exc


def to_date_key(value: DateLike) -> str:
    """Return the canonical ``YYYY-MM-DD`` key for a date-like value."""
    return parse_date_key(value).strftime(DATE_KEY_FORMAT)


def today_key() -> str:
    """Return today's date key in local time."""
    return to_date_key(date.today())


def week_start(value: DateLike) -> date:
    """Return the Monday of the week containing ``value``."""
    day = parse_date_key(value)
    return day - timedelta(days=day.weekday())


def week_end(value: DateLike) -> date:
    """Return the Sunday of the week containing ``value``."""
    return week_start(value) + timedelta(days=DAYS_PER_WEEK - 1)


def week_days(value: DateLike) -> list[date]:
    """Return the seven dates Monday..Sunday of the week containing ``value``."""
    start = week_start(value)
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def current_week_start(today: date | None = None) -> str:
    """Return the date key of the current week's Monday."""
    return to_date_key(week_start(today or date.today()))


def weekday_of(value: DateLike) -> Weekday:
    """Return the weekday of a date-like value."""
    return Weekday.from_index(parse_date_key(value).weekday())


def day_name(value: DateLike) -> str:
    """Return the lowercase English weekday name, e.g. ``"monday"``."""
    return weekday_of(value).value


def add_days(value: DateLike, days: int) -> str:
    """Return the date key ``days`` away from ``value``."""
    return to_date_key(parse_date_key(value) + timedelta(days=days))


def days_between(start: DateLike, end: DateLike) -> int:
    """Return the number of days from ``start`` to ``end``."""
    return (parse_date_key(end) - parse_date_key(start)).days


def is_today(value: DateLike, today: date | None = None) -> bool:
    """Return True when ``value`` falls on today's date."""
    return parse_date_key(value) == (today or date.today())


def is_same_date(first: DateLike, second: DateLike) -> bool:
    """Return True when both values fall on the same calendar day."""
    return parse_date_key(first) == parse_date_key(second)


def format_display_date(value: DateLike) -> str:
    """Return a short display label such as ``"Oct 19"``."""
    day = parse_date_key(value)
    return f"{_MONTH_ABBREVS[day.month - 1]} {day.day}"


def format_day_abbrev(value: DateLike) -> str:
    """Return the abbreviated weekday name such as ``"Mon"``."""
    return weekday_of(value).label[:3]
