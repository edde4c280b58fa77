from __future__ import annotations

from ...core.constants import ATTENDANCE_POINTS_YELLOW
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Checked in after the grace window."""

    def decide(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.YELLOW, points=ATTENDANCE_POINTS_YELLOW)
