from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..core.enums import ExemptionStatus
from ..core.exceptions import InvalidTransitionError

_TRANSITIONS = {
    ExemptionStatus.PENDING: frozenset({ExemptionStatus.APPROVED, ExemptionStatus.REJECTED}),
    ExemptionStatus.APPROVED: frozenset({ExemptionStatus.ENDED_EARLY}),
}

# Statuses whose date range suppresses attendance expectation.
EFFECTIVE_STATUSES = frozenset({ExemptionStatus.APPROVED, ExemptionStatus.ENDED_EARLY})


@dataclass(frozen=True)
class Exemption:
    """Leave or exemption for one member.

    `end_date` is the last covered day (inclusive); None means open-ended.
    """

    exemption_id: str
    member_id: str
    exemption_type: str
    status: ExemptionStatus
    start_date: date
    end_date: Optional[date] = None
    team_id: Optional[str] = None
    organization_id: Optional[str] = None
    reviewed_by: Optional[str] = None
    review_note: Optional[str] = None

    @property
    def is_effective(self) -> bool:
        return self.status in EFFECTIVE_STATUSES

    def covers(self, day: date) -> bool:
        if day < self.start_date:
            return False
        # end < start yields an empty range
        return self.end_date is None or day <= self.end_date

    def can_transition(self, target: ExemptionStatus) -> bool:
        return target in _TRANSITIONS.get(self.status, frozenset())

    def to_dict(self) -> dict:
        return {
            "exemption_id": self.exemption_id,
            "member_id": self.member_id,
            "type": self.exemption_type,
            "status": self.status.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "reviewed_by": self.reviewed_by,
            "review_note": self.review_note,
        }

    def transition(self, target: ExemptionStatus, **changes) -> "Exemption":
        if not self.can_transition(target):
            raise InvalidTransitionError(f"Cannot move exemption from {self.status.value} to {target.value}")
        return replace(self, status=target, **changes)
