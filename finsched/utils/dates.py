"""
Calendar arithmetic shared by the period and recurrence calculators.

All helpers keep the tzinfo of the instant they are given; none of them
reads the system clock.
"""
import calendar
import math
from datetime import date, datetime, time, timedelta


ONE_DAY = timedelta(days=1)


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, n: int) -> date:
    """Shift a date by n months, clipping the day to the target month's end.

    Works for datetime too (time and tzinfo are kept).
    """
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = min(d.day, last_day_of_month(year, month))
    return d.replace(year=year, month=month, day=day)


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=23, minute=59, second=59, microsecond=999999)


def at_midnight(d: date, like: datetime) -> datetime:
    """Midnight of a calendar date, in the time zone of `like`."""
    if isinstance(d, datetime):
        d = d.date()
    return datetime.combine(d, time.min, tzinfo=like.tzinfo)


def sunday_weekday(dt: date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday."""
    return dt.isoweekday() % 7


def ceil_days(delta: timedelta) -> int:
    """Number of days in a signed interval, rounded up."""
    return math.ceil(delta / ONE_DAY)
