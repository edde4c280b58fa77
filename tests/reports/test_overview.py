import pytest

from wellness_compliance.core.enums import Trend
from wellness_compliance.grading.grades import grade_info
from wellness_compliance.reports.model import TeamOverviewRow
from wellness_compliance.reports.overview import classify_trend, reduce_overview
from wellness_compliance.reports.service import OverviewService

from fakes import NOW
from scenario import build_source


def _row(name, score, trend=Trend.STABLE, members=1):
    return TeamOverviewRow(
        team_id=name,
        name=name,
        member_count=members,
        score=score,
        grade=grade_info(score) if score is not None else None,
        compliance_rate=None,
        avg_readiness=None,
        previous_score=None,
        trend=trend,
        score_delta=None,
    )


@pytest.mark.parametrize(
    "current, previous, trend",
    [
        (80, 77, Trend.IMPROVING),
        (80, 78, Trend.STABLE),
        (77, 80, Trend.DECLINING),
        (78, 80, Trend.STABLE),
        (80, None, Trend.STABLE),
        (None, 80, Trend.STABLE),
    ],
)
def test_classify_trend(current, previous, trend):
    assert classify_trend(current, previous) == trend


def test_reduce_overview_counts():
    summary = reduce_overview(
        [_row("a", 92, Trend.IMPROVING, members=4), _row("b", 65), _row("c", 55, Trend.DECLINING), _row("d", None)]
    )

    assert summary.team_count == 4
    assert summary.member_count == 7
    assert summary.avg_score == 71
    assert summary.avg_grade == "C"
    assert summary.at_risk_count == 2
    assert summary.critical_count == 1
    assert (summary.improving_count, summary.declining_count) == (1, 1)


def test_reduce_overview_without_scores():
    summary = reduce_overview([_row("a", None)])

    assert summary.avg_score is None
    assert summary.avg_grade == "N/A"


def test_overview_service_compares_with_previous_period():
    source = build_source()

    report = OverviewService(source).build_overview("org-1", days=7, now=NOW)

    assert [r.name for r in report.per_team] == ["Beta", "Alpha", "Empty"]
    beta, alpha, empty = report.per_team
    # cy: 15 readiness at full compliance now, 80 readiness before.
    assert (beta.score, beta.previous_score, beta.trend) == (49, 88, Trend.DECLINING)
    assert beta.at_risk_members == 1
    assert (alpha.score, alpha.previous_score, alpha.trend) == (77, 68, Trend.IMPROVING)
    assert empty.score is None and empty.trend == Trend.STABLE

    summary = report.summary
    assert summary.team_count == 3
    assert summary.member_count == 4
    assert summary.avg_score == 63
    assert (summary.at_risk_count, summary.critical_count) == (1, 1)
    assert (summary.improving_count, summary.declining_count) == (1, 1)


def test_overview_can_include_inactive_teams():
    report = OverviewService(build_source()).build_overview("org-1", days=7, now=NOW, include_inactive=True)

    assert report.summary.team_count == 4


def test_overview_can_filter_teams():
    report = OverviewService(build_source()).build_overview("org-1", days=7, now=NOW, team_ids=["team-2"])

    assert [r.team_id for r in report.per_team] == ["team-2"]
