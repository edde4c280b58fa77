from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from ..dates.resolver import to_local
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.excused_strategy import ExcusedStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_day(
        self,
        *,
        checkin_time: Optional[datetime],
        work_date: date,
        shift_start: time,
        grace_minutes: int,
        is_excused: bool,
        tz: ZoneInfo,
    ) -> AttendanceStrategy:
        # A check-in always wins over an exemption.
        if checkin_time is None:
            return ExcusedStrategy() if is_excused else AbsentStrategy()

        deadline = datetime.combine(work_date, shift_start, tzinfo=tz) + timedelta(minutes=grace_minutes)
        if to_local(checkin_time, tz) <= deadline:
            return OnTimeStrategy()
        return LateStrategy()
