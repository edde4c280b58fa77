from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Tuple

from ..common.math_utils import mean, round1
from ..compliance.expected import effective_start
from ..compliance.snapshot import Snapshot, SnapshotSource
from ..core.constants import DEFAULT_OVERVIEW_DAYS, MAX_REPORT_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, RangeTooLargeError
from ..dates.resolver import DateRange, is_work_day, last_n_days_range, resolve_timezone, today as local_today
from ..teams.model import Member
from .factory import AttendanceStrategyFactory
from .model import DailyAttendanceRecord, MemberAttendanceReport, PerformanceScore

logger = logging.getLogger(__name__)

_PERFORMANCE_BANDS = (
    (90, "A", "Excellent"),
    (80, "B", "Good"),
    (70, "C", "Fair"),
)


def performance_grade(score: float) -> Tuple[str, str]:
    for minimum, letter, label in _PERFORMANCE_BANDS:
        if score >= minimum:
            return letter, label
    return "D", "Poor"


class AttendanceService:
    """Per-member attendance classification over an already loaded snapshot."""

    def __init__(self, snapshot: Snapshot, *, factory: Optional[AttendanceStrategyFactory] = None):
        self._snapshot = snapshot
        self._factory = factory or AttendanceStrategyFactory()

    def _member(self, member_id: str) -> Member:
        member = self._snapshot.members.get(member_id)
        if not member or not member.team_id:
            raise NotFoundError(f"Member {member_id} not found")
        return member

    def classify(self, member: Member, day: date, *, today: date) -> Optional[DailyAttendanceRecord]:
        """Attendance for one member-day, or None when the day is not scored."""
        snapshot = self._snapshot
        team = snapshot.team(member.team_id)
        if not is_work_day(day, team.work_days, snapshot.tz) or snapshot.is_holiday(day):
            return None
        if day < effective_start(member, snapshot):
            return None

        checkin = snapshot.checkin_for(member.member_id, day)
        # Today is still open until the member checks in.
        if checkin is None and day >= today:
            return None

        exemption = snapshot.exemptions.exemption_for(member.member_id, day)
        strategy = self._factory.for_day(
            checkin_time=checkin.created_at if checkin else None,
            work_date=day,
            shift_start=team.shift_start,
            grace_minutes=team.grace_minutes,
            is_excused=exemption is not None,
            tz=snapshot.tz,
        )
        decision = strategy.decide()
        return DailyAttendanceRecord(
            member_id=member.member_id,
            date=day,
            status=decision.status,
            score=decision.points,
            checkin_time=checkin.created_at if checkin else None,
            readiness_score=checkin.readiness_score if checkin else None,
            exemption_id=exemption.exemption_id if exemption and not checkin else None,
        )

    def history(self, member_id: str, date_range: DateRange, *, today: date) -> List[DailyAttendanceRecord]:
        """Scored days in the window, newest first. Future days are skipped."""
        member = self._member(member_id)
        records = []
        for day in date_range:
            if day > today:
                break
            record = self.classify(member, day, today=today)
            if record is not None:
                records.append(record)
        records.reverse()
        return records

    def performance(self, member_id: str, date_range: DateRange, *, today: date) -> PerformanceScore:
        records = self.history(member_id, date_range, today=today)
        statuses = [r.status for r in records]
        counted = [r.score for r in records if r.is_counted]
        average = mean(counted)
        team = self._snapshot.team(self._member(member_id).team_id)
        work_days = sum(
            1
            for day in date_range
            if day <= today and is_work_day(day, team.work_days, self._snapshot.tz) and not self._snapshot.is_holiday(day)
        )
        score = round1(average) if average is not None else 0.0
        letter, label = performance_grade(score)
        return PerformanceScore(
            score=score,
            counted_days=len(counted),
            work_days=work_days,
            grade=letter,
            label=label,
            green=statuses.count(AttendanceStatus.GREEN),
            yellow=statuses.count(AttendanceStatus.YELLOW),
            absent=statuses.count(AttendanceStatus.ABSENT),
            excused=statuses.count(AttendanceStatus.EXCUSED),
        )


def _status_filter(value: object) -> Optional[AttendanceStatus]:
    # Unknown values mean "no filter" on this read path.
    try:
        return AttendanceStatus(str(value).strip().upper()) if value else None
    except ValueError:
        return None


class MemberAttendanceService:
    """Attendance history and performance for one member over the last N days."""

    def __init__(
        self,
        snapshots: SnapshotSource,
        *,
        factory: Optional[AttendanceStrategyFactory] = None,
        max_days: int = MAX_REPORT_DAYS,
    ):
        self._snapshots = snapshots
        self._factory = factory or AttendanceStrategyFactory()
        self._max_days = max_days

    def build_member_report(
        self,
        organization_id: str,
        team_id: str,
        member_id: str,
        *,
        days: int = DEFAULT_OVERVIEW_DAYS,
        status: object = None,
        now: Optional[datetime] = None,
    ) -> MemberAttendanceReport:
        organization, _ = self._snapshots.team_context(organization_id=organization_id, team_id=team_id)
        tz = resolve_timezone(organization.timezone)
        window = last_n_days_range(days, tz, now)
        if window.days > self._max_days:
            raise RangeTooLargeError(f"Requested range of {window.days} days exceeds the maximum of {self._max_days}")

        snapshot = self._snapshots.load(
            organization_id=organization_id,
            start=window.start,
            end=window.end,
            team_ids=[team_id],
            include_inactive=True,
        )
        member = snapshot.members.get(member_id)
        if member is None or member.team_id != team_id:
            raise NotFoundError(f"Member {member_id} not found in team {team_id}")

        today = local_today(tz, now)
        attendance = AttendanceService(snapshot, factory=self._factory)
        records = attendance.history(member_id, window, today=today)
        wanted = _status_filter(status)
        if wanted is not None:
            records = [r for r in records if r.status == wanted]

        logger.debug("Built attendance for member %s (%s..%s)", member_id, window.start, window.end)
        return MemberAttendanceReport(
            member_id=member_id,
            team_id=team_id,
            start_date=window.start,
            end_date=window.end,
            records=records,
            performance=attendance.performance(member_id, window, today=today),
        )
