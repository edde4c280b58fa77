from __future__ import annotations

from ...core.constants import ATTENDANCE_POINTS_ABSENT
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No check-in on a past work day."""

    def decide(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT, points=ATTENDANCE_POINTS_ABSENT)
