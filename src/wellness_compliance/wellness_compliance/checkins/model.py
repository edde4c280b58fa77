from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import ReadinessStatus
from .readiness import calculate_readiness


@dataclass(frozen=True)
class CheckIn:
    """Domain entity: one wellness check-in. Immutable once created."""

    checkin_id: str
    member_id: str
    organization_id: str
    created_at: datetime
    mood: float
    stress: float
    sleep: float
    physical_health: float
    readiness_score: int
    readiness_status: ReadinessStatus

    @classmethod
    def create(
        cls,
        *,
        checkin_id: str,
        member_id: str,
        organization_id: str,
        created_at: datetime,
        mood: float,
        stress: float,
        sleep: float,
        physical_health: float,
    ) -> "CheckIn":
        result = calculate_readiness(mood, stress, sleep, physical_health)
        return cls(
            checkin_id=checkin_id,
            member_id=member_id,
            organization_id=organization_id,
            created_at=created_at,
            mood=mood,
            stress=stress,
            sleep=sleep,
            physical_health=physical_health,
            readiness_score=result.score,
            readiness_status=result.status,
        )
