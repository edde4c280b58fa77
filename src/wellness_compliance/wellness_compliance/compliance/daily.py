from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterator, Optional

from ..common.math_utils import mean, percent, round1
from ..core.enums import ReadinessStatus
from ..dates.resolver import DateRange
from ..teams.model import Team
from .expected import calculate_expected_set
from .snapshot import Snapshot


@dataclass(frozen=True)
class DailySummary:
    """Per-team, per-day rollup. A cache row: safe to delete and rebuild."""

    team_id: str
    organization_id: str
    date: date
    is_work_day: bool
    is_holiday: bool
    total_members: int
    on_leave_count: int
    expected_count: int
    checked_in_count: int
    not_checked_in_count: int
    green_count: int
    yellow_count: int
    red_count: int
    avg_readiness: Optional[float]
    compliance_rate: Optional[int]

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data


def aggregate_day(snapshot: Snapshot, team: Team, day: date) -> DailySummary:
    expected = calculate_expected_set(snapshot, team, day)
    checkins = snapshot.team_checkins(team.team_id, day)

    statuses = [c.readiness_status for c in checkins]
    avg = mean(c.readiness_score for c in checkins)

    return DailySummary(
        team_id=team.team_id,
        organization_id=team.organization_id,
        date=day,
        is_work_day=expected.is_work_day,
        is_holiday=expected.is_holiday,
        total_members=len(snapshot.workers(team.team_id)),
        on_leave_count=len(expected.exempted) + len(expected.exempted_checked_in),
        expected_count=expected.expected_count,
        checked_in_count=expected.checked_in_count,
        not_checked_in_count=expected.expected_count - expected.checked_in_count,
        green_count=statuses.count(ReadinessStatus.GREEN),
        yellow_count=statuses.count(ReadinessStatus.YELLOW),
        red_count=statuses.count(ReadinessStatus.RED),
        avg_readiness=round1(avg) if avg is not None else None,
        compliance_rate=percent(expected.checked_in_count, expected.expected_count),
    )


def aggregate_range(snapshot: Snapshot, team: Team, date_range: DateRange) -> Iterator[DailySummary]:
    for day in date_range:
        yield aggregate_day(snapshot, team, day)
