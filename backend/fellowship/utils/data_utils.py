from datetime import date, datetime, time, timedelta, timezone
from typing import Optional


def as_utc(value: datetime) -> datetime:
    """Stored timestamps are UTC; SQLite hands them back without tzinfo."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_date(value: datetime) -> date:
    """Calendar date of a timestamp in server local time."""
    return as_utc(value).astimezone().date()


def local_today(now: Optional[datetime] = None) -> date:
    if now is None:
        return datetime.now().astimezone().date()
    return local_date(now)


def start_of_week(now: Optional[datetime] = None) -> datetime:
    """Most recent Sunday 00:00 server local time, returned in UTC."""
    today = local_today(now)
    # weekday(): Monday=0 .. Sunday=6
    days_since_sunday = (today.weekday() + 1) % 7
    sunday = today - timedelta(days=days_since_sunday)
    local_midnight = datetime.combine(sunday, time.min).astimezone()
    return local_midnight.astimezone(timezone.utc)


def month_bounds(year: int, month: int):
    """First and last calendar day of a month."""
    first = date(year, month, 1)
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def total_pages(total: int, limit: int) -> int:
    return -(-total // limit) if limit else 0
