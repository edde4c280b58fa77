from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..common.math_utils import mean, percent
from ..core.constants import ONBOARDING_THRESHOLD
from ..dates.resolver import DateRange
from ..teams.model import Team
from .daily import DailySummary, aggregate_range
from .expected import calculate_expected_set
from .snapshot import Snapshot


@dataclass(frozen=True)
class PeriodStats:
    expected_total: int
    checked_in_total: int
    compliance_rate: Optional[int]
    avg_readiness: Optional[float]
    green_count: int
    yellow_count: int
    red_count: int
    work_days: int
    days_with_data: int
    included_member_count: int
    onboarding_count: int
    member_averages: Mapping[str, float] = field(default_factory=dict)

    @property
    def checkin_count(self) -> int:
        return self.green_count + self.yellow_count + self.red_count

    @property
    def status_histogram(self) -> Dict[str, int]:
        return {"GREEN": self.green_count, "YELLOW": self.yellow_count, "RED": self.red_count}


def collect_readings(snapshot: Snapshot, team: Team, date_range: DateRange) -> Dict[str, List[int]]:
    """Readiness scores per member, taken from counted days only.

    Both regular check-ins and check-ins made while exempted are included.
    """
    readings: Dict[str, List[int]] = defaultdict(list)
    for day in date_range:
        expected = calculate_expected_set(snapshot, team, day)
        if not expected.is_counted:
            continue
        for member in expected.checked_in + expected.exempted_checked_in:
            checkin = snapshot.checkin_for(member.member_id, day)
            if checkin is not None:
                readings[member.member_id].append(checkin.readiness_score)
    return dict(readings)


class PeriodReducer:
    """Reduce daily summaries over a window into one set of period figures."""

    def __init__(self, onboarding_threshold: int = ONBOARDING_THRESHOLD):
        self._threshold = onboarding_threshold

    def reduce(
        self,
        summaries: Iterable[DailySummary],
        readings: Mapping[str, Sequence[int]],
        lifetime_checkins: Mapping[str, int],
    ) -> PeriodStats:
        expected_total = checked_in_total = 0
        green = yellow = red = 0
        work_days = days_with_data = 0

        for summary in summaries:
            if summary.is_work_day and not summary.is_holiday:
                work_days += 1
            # Sum of counts, not an average of daily rates.
            if summary.expected_count > 0:
                expected_total += summary.expected_count
                checked_in_total += summary.checked_in_count
            green += summary.green_count
            yellow += summary.yellow_count
            red += summary.red_count
            if summary.avg_readiness is not None:
                days_with_data += 1

        member_averages = {}
        onboarding = 0
        for member_id, scores in readings.items():
            if not scores:
                continue
            if lifetime_checkins.get(member_id, 0) < self._threshold:
                onboarding += 1
                continue
            member_averages[member_id] = sum(scores) / len(scores)

        avg_readiness = mean(member_averages.values())

        return PeriodStats(
            expected_total=expected_total,
            checked_in_total=checked_in_total,
            compliance_rate=percent(checked_in_total, expected_total),
            avg_readiness=avg_readiness,
            green_count=green,
            yellow_count=yellow,
            red_count=red,
            work_days=work_days,
            days_with_data=days_with_data,
            included_member_count=len(member_averages),
            onboarding_count=onboarding,
            member_averages=member_averages,
        )


def summarize_period(
    snapshot: Snapshot,
    team: Team,
    date_range: DateRange,
    *,
    reducer: Optional[PeriodReducer] = None,
) -> PeriodStats:
    """Daily aggregation plus period reduction for one team and window."""
    reducer = reducer or PeriodReducer()
    lifetime = {m.member_id: m.total_checkins for m in snapshot.workers(team.team_id)}
    return reducer.reduce(
        aggregate_range(snapshot, team, date_range),
        collect_readings(snapshot, team, date_range),
        lifetime,
    )
