from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from ..core.enums import ExemptionStatus
from ..core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from ..summaries.service import DailySummaryService
from .model import Exemption
from .repository import ExemptionRepository

logger = logging.getLogger(__name__)


class ExemptionService:
    """Review workflow for exemptions.

    Every successful change schedules a summary recompute for the covered
    days up to today; the recompute never fails the review itself.
    """

    def __init__(self, exemptions: ExemptionRepository, summaries: DailySummaryService):
        self._exemptions = exemptions
        self._summaries = summaries

    def _get(self, exemption_id: str) -> Exemption:
        exemption = self._exemptions.get(exemption_id=exemption_id)
        if not exemption:
            raise NotFoundError(f"Exemption {exemption_id} not found")
        return exemption

    def _save(self, updated: Exemption) -> Exemption:
        self._exemptions.save_review(
            exemption_id=updated.exemption_id,
            status=updated.status,
            reviewed_by=updated.reviewed_by or "",
            review_note=updated.review_note,
            end_date=updated.end_date,
        )
        return updated

    def _schedule(self, exemption: Exemption, *, today: date) -> None:
        if not exemption.team_id or not exemption.organization_id:
            logger.warning("Exemption %s has no team, skipping summary recompute", exemption.exemption_id)
            return
        end = min(exemption.end_date or today, today)
        if exemption.start_date > end:
            return
        self._summaries.schedule_recalculation(
            organization_id=exemption.organization_id,
            team_id=exemption.team_id,
            start=exemption.start_date,
            end=end,
        )

    def list_for_team(
        self, team_id: str, *, start: date, end: date, status: Optional[ExemptionStatus] = None
    ) -> List[Exemption]:
        """Exemptions overlapping [start, end], optionally narrowed to one status."""
        if start > end:
            raise ValidationError("Start date must not be after end date")
        exemptions = self._exemptions.list_for_team(team_id=team_id, start=start, end=end)
        return [e for e in exemptions if status is None or e.status == status]

    def approve(
        self,
        exemption_id: str,
        *,
        reviewer_id: str,
        today: date,
        end_date: Optional[date] = None,
        note: str = "",
    ) -> Exemption:
        exemption = self._get(exemption_id)
        new_end = end_date or exemption.end_date
        if new_end is not None and new_end < exemption.start_date:
            raise ValidationError("End date must not be before the start date")

        updated = exemption.transition(
            ExemptionStatus.APPROVED,
            end_date=new_end,
            reviewed_by=reviewer_id,
            review_note=note.strip() or None,
        )
        self._save(updated)
        logger.info("Exemption %s approved by %s", exemption_id, reviewer_id)
        self._schedule(updated, today=today)
        return updated

    def reject(self, exemption_id: str, *, reviewer_id: str, today: date, note: str = "") -> Exemption:
        exemption = self._get(exemption_id)
        updated = exemption.transition(
            ExemptionStatus.REJECTED,
            reviewed_by=reviewer_id,
            review_note=note.strip() or None,
        )
        self._save(updated)
        logger.info("Exemption %s rejected by %s", exemption_id, reviewer_id)
        self._schedule(updated, today=today)
        return updated

    def end_early(self, exemption_id: str, *, reviewer_id: str, today: date, note: str = "") -> Exemption:
        """Truncate an approved exemption so that today is its last covered day."""
        exemption = self._get(exemption_id)
        if exemption.status != ExemptionStatus.APPROVED:
            raise InvalidTransitionError("Only approved exemptions can be ended early")
        if exemption.end_date is not None and exemption.end_date <= today:
            raise ValidationError("Exemption already ends on or before today")

        updated = exemption.transition(
            ExemptionStatus.ENDED_EARLY,
            end_date=today,
            reviewed_by=reviewer_id,
            review_note=note.strip() or exemption.review_note,
        )
        self._save(updated)
        logger.info("Exemption %s ended early by %s", exemption_id, reviewer_id)
        self._schedule(updated, today=today)
        return updated
