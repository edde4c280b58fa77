from __future__ import annotations

from typing import Iterable, Optional

from ..common.math_utils import mean, round_half_up
from ..core.constants import TEAM_AT_RISK_SCORE, TEAM_CRITICAL_SCORE, TREND_THRESHOLD
from ..core.enums import Trend
from ..grading.grades import simple_grade
from .model import OverviewSummary, TeamOverviewRow


def classify_trend(current: Optional[float], previous: Optional[float]) -> Trend:
    if current is None or previous is None:
        return Trend.STABLE
    delta = current - previous
    if delta >= TREND_THRESHOLD:
        return Trend.IMPROVING
    if delta <= -TREND_THRESHOLD:
        return Trend.DECLINING
    return Trend.STABLE


def reduce_overview(rows: Iterable[TeamOverviewRow]) -> OverviewSummary:
    """Roll team rows into the executive headline figures.

    Teams without a score still count toward team and member totals.
    """
    rows = list(rows)
    scores = [r.score for r in rows if r.score is not None]
    average = mean(scores)
    avg_score = round_half_up(average) if average is not None else None
    return OverviewSummary(
        team_count=len(rows),
        member_count=sum(r.member_count for r in rows),
        avg_score=avg_score,
        avg_grade=simple_grade(avg_score),
        at_risk_count=sum(1 for s in scores if s < TEAM_AT_RISK_SCORE),
        critical_count=sum(1 for s in scores if s < TEAM_CRITICAL_SCORE),
        improving_count=sum(1 for r in rows if r.trend == Trend.IMPROVING),
        declining_count=sum(1 for r in rows if r.trend == Trend.DECLINING),
    )
