import logging
from datetime import date, datetime, timezone

import pytest

from wellness_compliance.core.exceptions import RangeTooLargeError
from wellness_compliance.summaries.service import DailySummaryService

from fakes import (
    TODAY,
    InMemorySnapshotSource,
    InMemorySummaries,
    RecordingDispatcher,
    make_checkin,
    make_member,
    make_team,
    manila,
)


@pytest.fixture
def source():
    return InMemorySnapshotSource(
        teams=[make_team(), make_team("team-2", name="Beta", created_at=datetime(2026, 3, 11, tzinfo=timezone.utc))],
        members=[make_member("ana"), make_member("ben"), make_member("cy", team_id="team-2")],
        checkins=[make_checkin("ana", manila(2026, 3, d)) for d in (9, 10, 11, 12, 13)],
    )


def test_recalculate_range_writes_one_row_per_day(source):
    repo = InMemorySummaries()
    svc = DailySummaryService(source, repo)

    written = svc.recalculate_range("org-1", "team-1", start=date(2026, 3, 9), end=TODAY)

    assert written == 5
    assert repo.get(team_id="team-1", day=TODAY).compliance_rate == 50
    assert len(source.loads) == 1


def test_recalculation_is_idempotent(source):
    repo = InMemorySummaries()
    svc = DailySummaryService(source, repo)

    svc.recalculate_range("org-1", "team-1", start=date(2026, 3, 9), end=TODAY)
    first = dict(repo.rows)
    svc.recalculate_range("org-1", "team-1", start=date(2026, 3, 9), end=TODAY)

    assert repo.rows == first


def test_days_before_team_creation_are_skipped(source):
    repo = InMemorySummaries()

    written = DailySummaryService(source, repo).recalculate_range("org-1", "team-2", start=date(2026, 3, 9), end=TODAY)

    assert written == 3
    assert repo.get(team_id="team-2", day=date(2026, 3, 10)) is None


def test_recalculate_single_day(source):
    repo = InMemorySummaries()

    summary = DailySummaryService(source, repo).recalculate("org-1", "team-1", TODAY)

    assert summary.checked_in_count == 1
    assert repo.get(team_id="team-1", day=TODAY) == summary


def test_recalculate_all_teams_for_date(source):
    repo = InMemorySummaries()

    assert DailySummaryService(source, repo).recalculate_all_teams_for_date("org-1", TODAY) == 2
    assert repo.get(team_id="team-2", day=TODAY).expected_count == 1


def test_range_limit(source):
    svc = DailySummaryService(source, InMemorySummaries(), max_days=10)

    with pytest.raises(RangeTooLargeError):
        svc.recalculate_range("org-1", "team-1", start=date(2026, 1, 1), end=TODAY)


def test_inline_dispatch_by_default(source):
    repo = InMemorySummaries()

    DailySummaryService(source, repo).schedule_recalculation(
        organization_id="org-1", team_id="team-1", start=TODAY, end=TODAY
    )

    assert repo.writes == 1


def test_scheduled_failures_are_logged_not_raised(source, caplog):
    dispatcher = RecordingDispatcher(error=RuntimeError("boom"))
    svc = DailySummaryService(source, InMemorySummaries(), dispatcher=dispatcher)

    with caplog.at_level(logging.ERROR):
        svc.schedule_recalculation(organization_id="org-1", team_id="team-1", start=TODAY, end=TODAY)

    assert len(dispatcher.calls) == 1
    assert "Summary recompute failed for team team-1" in caplog.text


def test_cached_range_reads_materialized_rows_only(source):
    repo = InMemorySummaries()
    svc = DailySummaryService(source, repo, max_days=10)
    svc.recalculate_range("org-1", "team-1", start=date(2026, 3, 11), end=TODAY)

    rows = svc.cached_range("team-1", start=date(2026, 3, 9), end=TODAY)

    assert [r.date.day for r in rows] == [11, 12, 13]
    with pytest.raises(RangeTooLargeError):
        svc.cached_range("team-1", start=date(2026, 1, 1), end=TODAY)
