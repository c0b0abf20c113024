"""Time arithmetic shared by validation, schedule and report logic.

Shift endpoints are absolute instants; availability endpoints are
time-of-day values. Everything here uses half-open ``[start, end)``
semantics: ranges that only touch at a boundary do not overlap.
"""
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Tuple, Union

from dateutil.relativedelta import relativedelta, MO


MINUTES_PER_DAY = 24 * 60


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage(value: datetime) -> datetime:
    """Return the naive UTC form used by the database columns."""
    return as_utc(value).replace(tzinfo=None)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    """Convert an instant to wall-clock time in the given zone."""
    return as_utc(value).astimezone(tz)


def minutes_of_day(value: Union[time, datetime]) -> int:
    """Minutes since midnight, in [0, 1439]."""
    return value.hour * 60 + value.minute


def day_of_week(value: Union[date, datetime]) -> int:
    """Weekday number with 0 = Sunday and 6 = Saturday."""
    return value.isoweekday() % 7


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Check whether two minute-of-day ranges overlap on a circular day.

    A range whose end is not after its start wraps past midnight. Both
    ranges are unrolled onto a 48 hour line and compared unshifted and
    with either one moved a full day forward, so a wrapped range also
    meets the early-morning part of the other.
    """
    if end_a <= start_a:
        end_a += MINUTES_PER_DAY
    if end_b <= start_b:
        end_b += MINUTES_PER_DAY

    def _overlaps(a0: int, a1: int, b0: int, b1: int) -> bool:
        return a0 < b1 and b0 < a1

    return (
        _overlaps(start_a, end_a, start_b, end_b)
        or _overlaps(start_a, end_a, start_b + MINUTES_PER_DAY, end_b + MINUTES_PER_DAY)
        or _overlaps(start_a + MINUTES_PER_DAY, end_a + MINUTES_PER_DAY, start_b, end_b)
    )


def instants_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open overlap test for two absolute intervals."""
    return as_utc(start_a) < as_utc(end_b) and as_utc(end_a) > as_utc(start_b)


def duration_hours(start: datetime, end: datetime) -> float:
    """Length of ``[start, end)`` in hours."""
    return (as_utc(end) - as_utc(start)).total_seconds() / 3600


def roll_over_midnight(start: datetime, end: datetime) -> Tuple[datetime, datetime]:
    """Reinterpret a window whose end is not after its start as ending a day later.

    Returns:
        (start, end) as aware UTC datetimes with end strictly after start
        for any input whose end lies less than a day before its start
    """
    start = as_utc(start)
    end = as_utc(end)
    if end <= start:
        end = end + timedelta(days=1)
    return start, end


def week_start_for(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day + relativedelta(weekday=MO(-1))


def local_midnight(day: date, tz: tzinfo) -> datetime:
    """Aware datetime for the start of ``day`` in the given zone."""
    return datetime(day.year, day.month, day.day, tzinfo=tz)


def day_bounds(day: date, tz: tzinfo) -> Tuple[datetime, datetime]:
    """UTC instants bounding the local calendar day ``[day, day + 1)``."""
    start = local_midnight(day, tz)
    end = local_midnight(day + timedelta(days=1), tz)
    return as_utc(start), as_utc(end)


def week_bounds(value: Union[date, datetime], tz: tzinfo) -> Tuple[date, datetime, datetime]:
    """Anchor ``value`` to its Monday-based week in the given zone.

    Args:
        value: A calendar date, or an instant which is first converted
            to the local date
        tz: Business timezone

    Returns:
        (monday, week_start_utc, week_end_utc) where the UTC instants
        bound ``[monday, monday + 7 days)`` in local time
    """
    if isinstance(value, datetime):
        value = to_local(value, tz).date()
    monday = week_start_for(value)
    start = as_utc(local_midnight(monday, tz))
    end = as_utc(local_midnight(monday + timedelta(days=7), tz))
    return monday, start, end


def shift_by_days(value: datetime, days: int, tz: tzinfo) -> datetime:
    """Move an instant by whole local days, keeping its wall-clock time."""
    local = to_local(value, tz)
    moved = datetime.combine(local.date() + timedelta(days=days), local.time(), tzinfo=tz)
    return as_utc(moved)
