from datetime import date

import pytest

from wellness_compliance.container import wire
from wellness_compliance.core.enums import ExemptionStatus
from wellness_compliance.main import create_app

from fakes import InMemoryExemptions, InMemorySummaries, make_exemption
from scenario import build_source


@pytest.fixture
def summaries():
    return InMemorySummaries()


@pytest.fixture
def exemptions():
    return InMemoryExemptions(
        [make_exemption("ben", date(2026, 3, 12), date(2026, 3, 13), status=ExemptionStatus.PENDING, exemption_id="ex-1")]
    )


@pytest.fixture
def client(monkeypatch, summaries, exemptions):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire(
        snapshot_repo=build_source(),
        summaries_repo=summaries,
        exemptions_repo=exemptions,
        max_report_days=60,
    )
    app = create_app(container=container)
    app.config["TESTING"] = True
    return app.test_client()


def test_team_report_endpoint(client):
    resp = client.get("/api/organizations/org-1/teams/team-1/report?period=7days")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["team_id"] == "team-1"
    assert len(body["trend_series"]) == 7


def test_unknown_team_is_404(client):
    resp = client.get("/api/organizations/org-1/teams/nope/report")

    assert resp.status_code == 404
    assert "nope" in resp.get_json()["error"]


def test_oversized_range_is_400(client):
    resp = client.get("/api/organizations/org-1/teams/team-1/report?period=custom&start=2026-01-01&end=2026-12-31")

    assert resp.status_code == 400


def test_overview_endpoint(client):
    resp = client.get("/api/organizations/org-1/overview?days=7&include_inactive=true")

    assert resp.status_code == 200
    names = {row["name"] for row in resp.get_json()["per_team"]}
    assert "Retired" in names


@pytest.mark.parametrize("days", ["abc", "-3", "0"])
def test_overview_clamps_garbage_days_to_today(client, days):
    resp = client.get(f"/api/organizations/org-1/overview?days={days}")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["start_date"] == body["end_date"]


def test_recalculate_is_accepted_and_runs_inline(client, summaries):
    resp = client.post("/api/organizations/org-1/teams/team-1/summaries/recalculate?start=2026-03-09&end=2026-03-13")

    assert resp.status_code == 202
    assert resp.get_json()["status"] == "scheduled"
    assert summaries.get(team_id="team-1", day=date(2026, 3, 13)).expected_count == 2


def test_recalculate_requires_dates(client):
    resp = client.post("/api/organizations/org-1/teams/team-1/summaries/recalculate?start=yesterday&end=2026-03-13")

    assert resp.status_code == 400


def test_exemption_review_flow(client, exemptions):
    approved = client.post("/api/organizations/org-1/exemptions/ex-1/approve", json={"reviewer_id": "lead-1"})
    assert approved.status_code == 200
    assert approved.get_json()["status"] == "APPROVED"
    assert exemptions.get(exemption_id="ex-1").reviewed_by == "lead-1"

    again = client.post("/api/organizations/org-1/exemptions/ex-1/reject", json={"reviewer_id": "lead-1"})
    assert again.status_code == 409


def test_exemption_review_requires_reviewer(client):
    resp = client.post("/api/organizations/org-1/exemptions/ex-1/approve", json={})

    assert resp.status_code == 400


def test_unknown_exemption_is_404(client):
    resp = client.post("/api/organizations/org-1/exemptions/missing/approve", json={"reviewer_id": "lead-1"})

    assert resp.status_code == 404


def test_member_attendance_endpoint(client):
    resp = client.get("/api/organizations/org-1/teams/team-1/members/ana/attendance?days=14")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["member_id"] == "ana"
    assert body["performance"]["grade"] in {"A", "B", "C", "D"}


def test_member_attendance_unknown_member_is_404(client):
    resp = client.get("/api/organizations/org-1/teams/team-1/members/cy/attendance")

    assert resp.status_code == 404


def test_team_exemptions_endpoint(client):
    resp = client.get("/api/organizations/org-1/teams/team-1/exemptions?start=2026-03-01&end=2026-03-31")

    assert resp.status_code == 200
    assert [e["exemption_id"] for e in resp.get_json()["exemptions"]] == ["ex-1"]

    approved_only = client.get(
        "/api/organizations/org-1/teams/team-1/exemptions?start=2026-03-01&end=2026-03-31&status=approved"
    )
    assert approved_only.get_json()["exemptions"] == []


def test_team_exemptions_garbage_dates_mean_today(client):
    body = client.get("/api/organizations/org-1/teams/team-1/exemptions?start=soon").get_json()

    assert body["start_date"] == body["end_date"]


def test_team_exemptions_unknown_team_is_404(client):
    assert client.get("/api/organizations/org-1/teams/nope/exemptions").status_code == 404


def test_cached_summaries_endpoint(client):
    client.post("/api/organizations/org-1/teams/team-1/summaries/recalculate?start=2026-03-09&end=2026-03-13")

    resp = client.get("/api/organizations/org-1/teams/team-1/summaries?start=2026-03-01&end=2026-03-13")

    assert resp.status_code == 200
    assert [row["date"] for row in resp.get_json()["summaries"]] == [
        "2026-03-09",
        "2026-03-10",
        "2026-03-11",
        "2026-03-12",
        "2026-03-13",
    ]


def test_cached_summaries_range_limit(client):
    resp = client.get("/api/organizations/org-1/teams/team-1/summaries?start=2026-01-01&end=2026-12-31")

    assert resp.status_code == 400
