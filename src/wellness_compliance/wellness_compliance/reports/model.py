from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from ..compliance.daily import DailySummary
from ..core.enums import Trend
from ..grading.grades import Grade
from .attention import AttentionItem, SuddenChange


@dataclass(frozen=True)
class TrendPoint:
    date: date
    compliance_rate: Optional[int]
    avg_readiness: Optional[float]
    checked_in: int
    expected: int

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "compliance_rate": self.compliance_rate,
            "avg_readiness": self.avg_readiness,
            "checked_in": self.checked_in,
            "expected": self.expected,
        }


@dataclass(frozen=True)
class PeriodReport:
    team_id: str
    team_name: str
    start_date: date
    end_date: date
    expected_total: int
    checked_in_total: int
    compliance_rate: Optional[int]
    avg_readiness: Optional[float]
    status_histogram: Dict[str, int]
    grade: Optional[Grade]
    onboarding_count: int
    included_member_count: int
    trend_series: List[TrendPoint] = field(default_factory=list)
    today: Optional[DailySummary] = None
    top_reasons: List[dict] = field(default_factory=list)
    avg_metrics: Dict[str, Optional[float]] = field(default_factory=dict)
    members_needing_attention: List[AttentionItem] = field(default_factory=list)
    sudden_changes: List[SuddenChange] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "team_name": self.team_name,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "expected_total": self.expected_total,
            "checked_in_total": self.checked_in_total,
            "compliance_rate": self.compliance_rate,
            "avg_readiness": self.avg_readiness,
            "status_histogram": dict(self.status_histogram),
            "grade": self.grade.to_dict() if self.grade else None,
            "onboarding_count": self.onboarding_count,
            "included_member_count": self.included_member_count,
            "trend_series": [p.to_dict() for p in self.trend_series],
            "today": self.today.to_dict() if self.today else None,
            "top_reasons": list(self.top_reasons),
            "avg_metrics": dict(self.avg_metrics),
            "members_needing_attention": [m.to_dict() for m in self.members_needing_attention],
            "sudden_changes": [c.to_dict() for c in self.sudden_changes],
        }


@dataclass(frozen=True)
class TeamOverviewRow:
    team_id: str
    name: str
    member_count: int
    score: Optional[int]
    grade: Optional[Grade]
    compliance_rate: Optional[int]
    avg_readiness: Optional[float]
    previous_score: Optional[int]
    trend: Trend
    score_delta: Optional[int]
    at_risk_members: int = 0
    members_needing_attention: int = 0
    onboarding_count: int = 0
    included_member_count: int = 0
    leader_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "name": self.name,
            "member_count": self.member_count,
            "score": self.score,
            "grade": self.grade.to_dict() if self.grade else None,
            "compliance_rate": self.compliance_rate,
            "avg_readiness": self.avg_readiness,
            "previous_score": self.previous_score,
            "trend": self.trend.value,
            "score_delta": self.score_delta,
            "at_risk_members": self.at_risk_members,
            "members_needing_attention": self.members_needing_attention,
            "onboarding_count": self.onboarding_count,
            "included_member_count": self.included_member_count,
            "leader_id": self.leader_id,
        }


@dataclass(frozen=True)
class OverviewSummary:
    team_count: int
    member_count: int
    avg_score: Optional[int]
    avg_grade: str
    at_risk_count: int
    critical_count: int
    improving_count: int
    declining_count: int


@dataclass(frozen=True)
class OverviewReport:
    start_date: date
    end_date: date
    summary: OverviewSummary
    per_team: List[TeamOverviewRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        s = self.summary
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "team_count": s.team_count,
            "member_count": s.member_count,
            "avg_score": s.avg_score,
            "avg_grade": s.avg_grade,
            "at_risk_count": s.at_risk_count,
            "critical_count": s.critical_count,
            "improving_count": s.improving_count,
            "declining_count": s.declining_count,
            "per_team": [row.to_dict() for row in self.per_team],
        }
