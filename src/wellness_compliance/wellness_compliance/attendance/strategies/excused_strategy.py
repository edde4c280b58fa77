from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class ExcusedStrategy(AttendanceStrategy):
    """Covered by an exemption with no check-in. Not counted."""

    def decide(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EXCUSED, points=None)
