from datetime import date

import pytest

from wellness_compliance.core.exceptions import NotFoundError, RangeTooLargeError
from wellness_compliance.reports.service import TeamReportService

from fakes import NOW, TODAY, InMemorySnapshotSource, make_checkin, make_member, make_team, manila
from scenario import build_source


@pytest.fixture
def source():
    return build_source()


def test_seven_day_report(source):
    report = TeamReportService(source).build_team_report("org-1", "team-1", period="7days", now=NOW)

    assert (report.start_date, report.end_date) == (date(2026, 3, 7), TODAY)
    assert (report.expected_total, report.checked_in_total) == (10, 10)
    assert report.compliance_rate == 100
    # ana averages 80, ben (4 * 50 + 15) / 5 == 43
    assert report.avg_readiness == 61.5
    assert report.grade.score == 77
    assert report.grade.letter == "C+"
    assert report.status_histogram == {"GREEN": 5, "YELLOW": 4, "RED": 1}
    assert len(report.trend_series) == 7
    assert source.loads and len(source.loads) == 1


def test_today_block_and_attention(source):
    report = TeamReportService(source).build_team_report("org-1", "team-1", period="today", now=NOW)

    assert report.today.date == TODAY
    assert [(m.member_id, m.reason) for m in report.members_needing_attention] == [("ben", "RED_STATUS")]
    assert [r["reason"] for r in report.top_reasons] == ["HIGH_STRESS", "LOW_MOOD", "LOW_PHYSICAL", "POOR_SLEEP"]
    [change] = report.sudden_changes
    assert change.member_id == "ben"
    assert change.severity == "CRITICAL"


def test_longer_periods_never_count_fewer_expected_or_checked_in(source):
    svc = TeamReportService(source)

    reports = [
        svc.build_team_report("org-1", "team-1", period=p, now=NOW)
        for p in ("today", "7days", "14days", "30days", "alltime")
    ]
    expected = [r.expected_total for r in reports]
    checked_in = [r.checked_in_total for r in reports]

    assert expected == sorted(expected)
    assert checked_in == sorted(checked_in)
    assert checked_in[0] == 2
    assert checked_in[-1] == 15


def test_garbage_period_falls_back_to_today(source):
    report = TeamReportService(source).build_team_report("org-1", "team-1", period="???", now=NOW)

    assert report.start_date == report.end_date == TODAY


def test_oversized_window_is_rejected(source):
    svc = TeamReportService(source, max_days=30)

    with pytest.raises(RangeTooLargeError):
        svc.build_team_report("org-1", "team-1", period="alltime", now=NOW)


def test_unknown_team(source):
    with pytest.raises(NotFoundError):
        TeamReportService(source).build_team_report("org-1", "nope", now=NOW)


def test_report_serializes(source):
    data = TeamReportService(source).build_team_report("org-1", "team-1", period="7days", now=NOW).to_dict()

    assert data["start_date"] == "2026-03-07"
    assert data["grade"]["letter"] == "C+"
    assert data["today"]["compliance_rate"] == 100


def test_onboarding_scores_never_grade_the_team():
    source = InMemorySnapshotSource(
        teams=[make_team()],
        members=[make_member("vet", total_checkins=40), make_member("new", total_checkins=1)],
        checkins=[make_checkin("new", manila(2026, 3, 12), mood=1, stress=9, sleep=2, physical=2)],
    )

    report = TeamReportService(source).build_team_report("org-1", "team-1", period="7days", now=NOW)

    assert report.avg_readiness is None
    assert report.grade is None
    assert (report.included_member_count, report.onboarding_count) == (0, 1)
    assert report.status_histogram["RED"] == 1
