from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    # None means the day is not counted toward the performance score.
    points: Optional[int]


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how one member-day is scored."""

    @abstractmethod
    def decide(self) -> StatusDecision:
        raise NotImplementedError
