from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo


def is_weekday(day: date) -> bool:
    return day.weekday() < 5


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def as_local_date(moment: datetime, tz: tzinfo) -> date:
    """Calendar date of ``moment`` in ``tz``. Naive values are read as UTC (SQLite drops the offset)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz).date()


class Clock:
    """Source of "now" and "today" for the household timezone."""

    def __init__(self, tz: str | tzinfo = "UTC"):
        self.tz = ZoneInfo(tz) if isinstance(tz, str) else tz

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return as_local_date(self.now(), self.tz)

    def local_date(self, moment: datetime) -> date:
        return as_local_date(moment, self.tz)
