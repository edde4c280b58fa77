"""Timezone-aware calendar helpers.

Every day boundary is computed in the organization's timezone, never in
server-local time or UTC, so a check-in made near midnight lands on the
organization's calendar day.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Iterator, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..common.datetime_utils import utc_now
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import WeekDay

logger = logging.getLogger(__name__)

DayLike = Union[date, datetime]

# date.weekday(): Monday == 0
_WEEKDAYS = (
    WeekDay.MON,
    WeekDay.TUE,
    WeekDay.WED,
    WeekDay.THU,
    WeekDay.FRI,
    WeekDay.SAT,
    WeekDay.SUN,
)


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar dates."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return max((self.end - self.start).days + 1, 0)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def previous(self) -> "DateRange":
        """The immediately preceding range of equal length."""
        prev_end = self.start - timedelta(days=1)
        return DateRange(start=prev_end - timedelta(days=self.days - 1), end=prev_end)

    def __iter__(self) -> Iterator[date]:
        return iter_days(self.start, self.end)


def resolve_timezone(name: Optional[str]) -> ZoneInfo:
    """Organization timezone, falling back to the default when unset or unknown."""
    if not name:
        return ZoneInfo(DEFAULT_TIMEZONE)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to %s", name, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


def to_local(instant: datetime, tz: ZoneInfo) -> datetime:
    # Naive timestamps are stored as UTC.
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(tz)


def local_date(value: DayLike, tz: ZoneInfo) -> date:
    """Calendar day of an instant in the given timezone; plain dates pass through."""
    if isinstance(value, datetime):
        return to_local(value, tz).date()
    return value


def start_of_day(value: DayLike, tz: ZoneInfo) -> datetime:
    return datetime.combine(local_date(value, tz), time.min, tzinfo=tz)


def end_of_day(value: DayLike, tz: ZoneInfo) -> datetime:
    return datetime.combine(local_date(value, tz), time.max, tzinfo=tz)


def day_of_week(value: DayLike, tz: ZoneInfo) -> WeekDay:
    return _WEEKDAYS[local_date(value, tz).weekday()]


def parse_work_days(value: Union[str, Iterable[str], None]) -> frozenset[WeekDay]:
    """Parse 'MON,TUE,...' (or an iterable of codes) into weekday codes.

    Unknown codes are ignored rather than rejected.
    """
    if value is None:
        return frozenset()
    parts = value.split(",") if isinstance(value, str) else value
    result = set()
    for part in parts:
        code = str(part.value if isinstance(part, WeekDay) else part).strip().upper()
        if code in WeekDay.__members__:
            result.add(WeekDay[code])
    return frozenset(result)


def is_work_day(value: DayLike, work_days: Iterable[WeekDay], tz: ZoneInfo) -> bool:
    return day_of_week(value, tz) in frozenset(work_days)


def today(tz: ZoneInfo, now: Optional[datetime] = None) -> date:
    return local_date(now or utc_now(), tz)


def today_range(tz: ZoneInfo, now: Optional[datetime] = None) -> DateRange:
    day = today(tz, now)
    return DateRange(start=day, end=day)


def last_n_days_range(days: int, tz: ZoneInfo, now: Optional[datetime] = None) -> DateRange:
    """The last `days` calendar days ending today, inclusive (7 -> today-6 .. today)."""
    end = today(tz, now)
    return DateRange(start=end - timedelta(days=max(days, 1) - 1), end=end)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Walk a window day by day without materializing it."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def count_work_days(start: date, end: date, work_days: Iterable[WeekDay]) -> int:
    allowed = frozenset(work_days)
    return sum(1 for day in iter_days(start, end) if _WEEKDAYS[day.weekday()] in allowed)
