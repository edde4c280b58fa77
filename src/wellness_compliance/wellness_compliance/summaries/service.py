from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Protocol

from ..compliance.daily import DailySummary, aggregate_day, aggregate_range
from ..compliance.snapshot import SnapshotSource
from ..core.constants import MAX_REPORT_DAYS
from ..core.exceptions import RangeTooLargeError, ValidationError
from ..dates.resolver import DateRange
from .repository import DailySummaryRepository

logger = logging.getLogger(__name__)


class RecalculationDispatcher(Protocol):
    def dispatch(self, *, organization_id: str, team_id: str, start: date, end: date) -> None:
        raise NotImplementedError


class InlineDispatcher:
    """Runs the recompute in the caller's thread (tests, CLI scripts)."""

    def __init__(self, service: "DailySummaryService"):
        self._service = service

    def dispatch(self, *, organization_id: str, team_id: str, start: date, end: date) -> None:
        self._service.recalculate_range(organization_id, team_id, start=start, end=end)


class DailySummaryService:
    """Maintains the DailySummary cache.

    Rows are rebuilt with the same `aggregate_day` the reports use, so the
    cache can always be dropped and regenerated.
    """

    def __init__(
        self,
        snapshots: SnapshotSource,
        summaries: DailySummaryRepository,
        *,
        dispatcher: Optional[RecalculationDispatcher] = None,
        max_days: int = MAX_REPORT_DAYS,
    ):
        self._snapshots = snapshots
        self._summaries = summaries
        self._dispatcher = dispatcher or InlineDispatcher(self)
        self._max_days = max_days

    def set_dispatcher(self, dispatcher: RecalculationDispatcher) -> None:
        self._dispatcher = dispatcher

    def recalculate(self, organization_id: str, team_id: str, day: date) -> Optional[DailySummary]:
        snapshot = self._snapshots.load(
            organization_id=organization_id, start=day, end=day, team_ids=[team_id], include_inactive=True
        )
        team = snapshot.team(team_id)
        if snapshot.team_window(team, DateRange(start=day, end=day)) is None:
            return None
        summary = aggregate_day(snapshot, team, day)
        self._summaries.upsert(summary)
        return summary

    def recalculate_range(self, organization_id: str, team_id: str, *, start: date, end: date) -> int:
        """Rebuild every row in [start, end]; returns how many rows were written."""
        if start > end:
            raise ValidationError("Start date must not be after end date")
        requested = DateRange(start=start, end=end)
        if requested.days > self._max_days:
            raise RangeTooLargeError(f"Requested range of {requested.days} days exceeds the maximum of {self._max_days}")

        logger.debug("Recalculating summaries for team %s from %s to %s", team_id, start, end)
        snapshot = self._snapshots.load(
            organization_id=organization_id, start=start, end=end, team_ids=[team_id], include_inactive=True
        )
        team = snapshot.team(team_id)
        window = snapshot.team_window(team, requested)
        if window is None:
            return 0

        written = 0
        for summary in aggregate_range(snapshot, team, window):
            self._summaries.upsert(summary)
            written += 1
        logger.info("Recalculated %d daily summaries for team %s", written, team_id)
        return written

    def cached_range(self, team_id: str, *, start: date, end: date) -> List[DailySummary]:
        """Materialized rows in [start, end], oldest first. Days never computed are absent."""
        if start > end:
            raise ValidationError("Start date must not be after end date")
        requested = DateRange(start=start, end=end)
        if requested.days > self._max_days:
            raise RangeTooLargeError(f"Requested range of {requested.days} days exceeds the maximum of {self._max_days}")
        return list(self._summaries.list_range(team_id=team_id, start=start, end=end))

    def recalculate_all_teams_for_date(self, organization_id: str, day: date) -> int:
        snapshot = self._snapshots.load(organization_id=organization_id, start=day, end=day)
        written = 0
        for team in snapshot.teams.values():
            if not team.is_active:
                continue
            if snapshot.team_window(team, DateRange(start=day, end=day)) is None:
                continue
            self._summaries.upsert(aggregate_day(snapshot, team, day))
            written += 1
        logger.info("Recalculated %s for %d teams in organization %s", day, written, organization_id)
        return written

    def schedule_recalculation(self, *, organization_id: str, team_id: str, start: date, end: date) -> None:
        """Hand a recompute to the dispatcher. Failures are logged and dropped."""
        try:
            self._dispatcher.dispatch(organization_id=organization_id, team_id=team_id, start=start, end=end)
        except Exception:
            logger.exception(
                "Summary recompute failed for team %s (%s..%s)",
                team_id,
                start,
                end,
                extra={"team_id": team_id, "organization_id": organization_id},
            )
