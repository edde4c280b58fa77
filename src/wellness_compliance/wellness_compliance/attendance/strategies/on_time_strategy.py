from __future__ import annotations

from ...core.constants import ATTENDANCE_POINTS_GREEN
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Checked in at or before shift start plus grace."""

    def decide(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.GREEN, points=ATTENDANCE_POINTS_GREEN)
