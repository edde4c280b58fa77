from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Optional

from ..common.datetime_utils import try_parse_iso_date
from ..core.constants import DEFAULT_OVERVIEW_DAYS, MAX_REPORT_DAYS
from ..core.exceptions import RangeTooLargeError
from .resolver import DateRange


class Period(str, Enum):
    TODAY = "today"
    LAST_7_DAYS = "7days"
    LAST_14_DAYS = "14days"
    LAST_30_DAYS = "30days"
    ALL_TIME = "alltime"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: object) -> "Period":
        """Unknown values clamp to TODAY: this is a read path, not a mutation."""
        if isinstance(value, Period):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.TODAY


_ROLLING_DAYS = {
    Period.LAST_7_DAYS: 7,
    Period.LAST_14_DAYS: 14,
    Period.LAST_30_DAYS: 30,
}


def parse_days(value: object, default: int = DEFAULT_OVERVIEW_DAYS) -> int:
    """Lenient day count for rolling windows.

    Missing means `default`; garbage or a non-positive count clamps to one day.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        days = int(str(value).strip())
    except ValueError:
        return 1
    return max(days, 1)


def resolve_period(
    period: object,
    *,
    today: date,
    team_created: Optional[date] = None,
    custom_start: object = None,
    custom_end: object = None,
    max_days: int = MAX_REPORT_DAYS,
) -> DateRange:
    """Turn a period selector into an inclusive date window.

    Garbage input falls back to today. The window never starts before the
    team existed, and a window longer than `max_days` is rejected.
    """
    kind = Period.parse(period)
    start = end = today

    if kind in _ROLLING_DAYS:
        start = today - timedelta(days=_ROLLING_DAYS[kind] - 1)
    elif kind == Period.ALL_TIME:
        start = team_created or today
    elif kind == Period.CUSTOM:
        cs = try_parse_iso_date(custom_start)
        ce = try_parse_iso_date(custom_end)
        if cs and ce and cs <= ce:
            start, end = cs, ce

    if team_created and team_created > start:
        start = team_created
    if start > end:
        # Window lies entirely before the team existed.
        start = end = today

    window = DateRange(start=start, end=end)
    if window.days > max_days:
        raise RangeTooLargeError(f"Requested range of {window.days} days exceeds the maximum of {max_days}")
    return window
