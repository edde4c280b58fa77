from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from ..common.math_utils import round1
from ..compliance.daily import aggregate_day, aggregate_range
from ..compliance.expected import calculate_expected_set
from ..compliance.period import PeriodReducer, collect_readings, summarize_period
from ..compliance.snapshot import Snapshot, SnapshotSource
from ..core.constants import (
    DEFAULT_OVERVIEW_DAYS,
    MAX_REPORT_DAYS,
    MEMBER_AT_RISK_READINESS,
    READINESS_GREEN_MIN,
    SUDDEN_CHANGE_HISTORY_DAYS,
)
from ..core.exceptions import RangeTooLargeError
from ..dates.periods import resolve_period
from ..dates.resolver import DateRange, last_n_days_range, local_date, resolve_timezone, today as local_today
from ..grading.calculator.base import GradeCalculator
from ..grading.calculator.weighted_calculator import WeightedGradeCalculator
from ..teams.model import Team
from .attention import average_metrics, detect_sudden_changes, members_needing_attention, top_reasons
from .model import OverviewReport, PeriodReport, TeamOverviewRow, TrendPoint
from .overview import classify_trend, reduce_overview

logger = logging.getLogger(__name__)


class TeamReportService:
    """Period report for one team, every figure routed through the engine."""

    def __init__(
        self,
        snapshots: SnapshotSource,
        *,
        calculator: Optional[GradeCalculator] = None,
        reducer: Optional[PeriodReducer] = None,
        max_days: int = MAX_REPORT_DAYS,
    ):
        self._snapshots = snapshots
        self._calculator = calculator or WeightedGradeCalculator()
        self._reducer = reducer or PeriodReducer()
        self._max_days = max_days

    def build_team_report(
        self,
        organization_id: str,
        team_id: str,
        *,
        period: object = "today",
        custom_start: object = None,
        custom_end: object = None,
        now: Optional[datetime] = None,
    ) -> PeriodReport:
        organization, team = self._snapshots.team_context(organization_id=organization_id, team_id=team_id)
        tz = resolve_timezone(organization.timezone)
        today = local_today(tz, now)
        window = resolve_period(
            period,
            today=today,
            team_created=local_date(team.created_at, tz),
            custom_start=custom_start,
            custom_end=custom_end,
            max_days=self._max_days,
        )

        history_start = today - timedelta(days=SUDDEN_CHANGE_HISTORY_DAYS)
        snapshot = self._snapshots.load(
            organization_id=organization_id,
            start=min(window.start, history_start),
            end=max(window.end, today),
            team_ids=[team_id],
            include_inactive=True,
        )
        team = snapshot.team(team_id)

        summaries = list(aggregate_range(snapshot, team, window))
        lifetime = {m.member_id: m.total_checkins for m in snapshot.workers(team_id)}
        stats = self._reducer.reduce(summaries, collect_readings(snapshot, team, window), lifetime)
        grade = self._calculator.grade(stats.avg_readiness, stats.compliance_rate) if stats.checkin_count else None

        window_checkins = [c for day in window for c in snapshot.team_checkins(team_id, day)]
        todays = snapshot.team_checkins(team_id, today)
        history = self._history_scores(snapshot, team_id, start=history_start, end=today - timedelta(days=1))

        logger.debug(
            "Built report for team %s (%s..%s): compliance=%s readiness=%s",
            team_id,
            window.start,
            window.end,
            stats.compliance_rate,
            stats.avg_readiness,
        )
        return PeriodReport(
            team_id=team.team_id,
            team_name=team.name,
            start_date=window.start,
            end_date=window.end,
            expected_total=stats.expected_total,
            checked_in_total=stats.checked_in_total,
            compliance_rate=stats.compliance_rate,
            avg_readiness=round1(stats.avg_readiness) if stats.avg_readiness is not None else None,
            status_histogram=stats.status_histogram,
            grade=grade,
            onboarding_count=stats.onboarding_count,
            included_member_count=stats.included_member_count,
            trend_series=[
                TrendPoint(
                    date=s.date,
                    compliance_rate=s.compliance_rate,
                    avg_readiness=s.avg_readiness,
                    checked_in=s.checked_in_count,
                    expected=s.expected_count,
                )
                for s in summaries
            ],
            today=aggregate_day(snapshot, team, today) if window.contains(today) else None,
            top_reasons=top_reasons(window_checkins),
            avg_metrics=average_metrics(window_checkins),
            members_needing_attention=members_needing_attention(
                calculate_expected_set(snapshot, team, today),
                {c.member_id: c for c in todays},
            ),
            sudden_changes=detect_sudden_changes(todays, history),
        )

    @staticmethod
    def _history_scores(snapshot: Snapshot, team_id: str, *, start: date, end: date) -> Dict[str, List[int]]:
        scores: Dict[str, List[int]] = defaultdict(list)
        for day in DateRange(start=start, end=end):
            for checkin in snapshot.team_checkins(team_id, day):
                scores[checkin.member_id].append(checkin.readiness_score)
        return dict(scores)


class OverviewService:
    """Executive overview: one row per team, compared with the preceding period."""

    def __init__(
        self,
        snapshots: SnapshotSource,
        *,
        calculator: Optional[GradeCalculator] = None,
        reducer: Optional[PeriodReducer] = None,
        max_days: int = MAX_REPORT_DAYS,
    ):
        self._snapshots = snapshots
        self._calculator = calculator or WeightedGradeCalculator()
        self._reducer = reducer or PeriodReducer()
        self._max_days = max_days

    def build_overview(
        self,
        organization_id: str,
        *,
        days: int = DEFAULT_OVERVIEW_DAYS,
        now: Optional[datetime] = None,
        team_ids: Optional[Sequence[str]] = None,
        include_inactive: bool = False,
    ) -> OverviewReport:
        organization = self._snapshots.organization(organization_id=organization_id)
        tz = resolve_timezone(organization.timezone)
        window = last_n_days_range(days, tz, now)
        if window.days > self._max_days:
            raise RangeTooLargeError(f"Requested range of {window.days} days exceeds the maximum of {self._max_days}")
        previous = window.previous()

        snapshot = self._snapshots.load(
            organization_id=organization_id,
            start=previous.start,
            end=window.end,
            team_ids=team_ids,
            include_inactive=include_inactive,
        )

        rows = [
            self._team_row(snapshot, team, window, previous)
            for team in snapshot.teams.values()
            if include_inactive or team.is_active
        ]
        rows.sort(key=lambda r: (r.score is None, r.score if r.score is not None else 0, r.name))

        summary = reduce_overview(rows)
        logger.info(
            "Overview for organization %s: %d teams, avg score %s",
            organization_id,
            summary.team_count,
            summary.avg_score,
        )
        return OverviewReport(start_date=window.start, end_date=window.end, summary=summary, per_team=rows)

    def _score(self, snapshot: Snapshot, team: Team, date_range: DateRange):
        clamped = snapshot.team_window(team, date_range)
        if clamped is None:
            return None, None
        stats = summarize_period(snapshot, team, clamped, reducer=self._reducer)
        if not stats.checkin_count:
            return None, stats
        return self._calculator.composite(stats.avg_readiness, stats.compliance_rate), stats

    def _team_row(self, snapshot: Snapshot, team: Team, window: DateRange, previous: DateRange) -> TeamOverviewRow:
        score, stats = self._score(snapshot, team, window)
        previous_score, _ = self._score(snapshot, team, previous)
        member_averages = stats.member_averages.values() if stats else ()

        return TeamOverviewRow(
            team_id=team.team_id,
            name=team.name,
            member_count=len(snapshot.workers(team.team_id)),
            score=score,
            grade=self._calculator.grade(stats.avg_readiness, stats.compliance_rate) if score is not None else None,
            compliance_rate=stats.compliance_rate if stats else None,
            avg_readiness=round1(stats.avg_readiness) if stats and stats.avg_readiness is not None else None,
            previous_score=previous_score,
            trend=classify_trend(score, previous_score),
            score_delta=score - previous_score if score is not None and previous_score is not None else None,
            at_risk_members=sum(1 for avg in member_averages if avg < MEMBER_AT_RISK_READINESS),
            members_needing_attention=sum(1 for avg in member_averages if avg < READINESS_GREEN_MIN),
            onboarding_count=stats.onboarding_count if stats else 0,
            included_member_count=stats.included_member_count if stats else 0,
            leader_id=team.leader_id,
        )
