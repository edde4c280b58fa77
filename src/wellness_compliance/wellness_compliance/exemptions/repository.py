from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ExemptionStatus
from .model import Exemption


class ExemptionRepository(Protocol):
    def get(self, *, exemption_id: str) -> Optional[Exemption]:
        raise NotImplementedError

    def list_for_team(self, *, team_id: str, start: date, end: date) -> Sequence[Exemption]:
        """Exemptions of the team's members overlapping [start, end], any status."""

        raise NotImplementedError

    def save_review(
        self,
        *,
        exemption_id: str,
        status: ExemptionStatus,
        reviewed_by: str,
        review_note: Optional[str],
        end_date: Optional[date],
    ) -> bool:
        raise NotImplementedError
