"""Calendar-day helpers."""

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo


def as_aware(moment: datetime, tz: ZoneInfo) -> datetime:
    """Interpret naive datetimes in ``tz``; leave aware ones untouched."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment


def day_bounds(day: date | datetime, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return ``[start, end)`` of the calendar day in ``tz`` containing ``day``.

    Raises ``OverflowError`` when the following day cannot be represented.
    """
    if isinstance(day, datetime):
        local_day = as_aware(day, tz).astimezone(tz).date()
    else:
        local_day = day
    start = datetime.combine(local_day, time.min, tzinfo=tz)
    end = datetime.combine(local_day + timedelta(days=1), time.min, tzinfo=tz)
    return start, end
