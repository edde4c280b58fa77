from wellness_compliance.compliance.expected import ExpectedSet
from wellness_compliance.reports.attention import (
    average_metrics,
    detect_sudden_changes,
    members_needing_attention,
    top_reasons,
)

from fakes import NOW, TODAY, make_checkin, make_member


def test_top_reasons_counts_each_threshold():
    checkins = [
        make_checkin("ana", NOW, stress=7, sleep=4),
        make_checkin("ben", NOW, stress=7),
        make_checkin("cy", NOW, stress=6, mood=5, physical=4),
    ]

    assert top_reasons(checkins) == [
        {"reason": "HIGH_STRESS", "label": "High Stress", "count": 2},
        {"reason": "LOW_PHYSICAL", "label": "Low Physical Health", "count": 1},
        {"reason": "POOR_SLEEP", "label": "Poor Sleep", "count": 1},
    ]


def test_average_metrics():
    metrics = average_metrics([make_checkin("ana", NOW, mood=7), make_checkin("ben", NOW, mood=8)])

    assert metrics["mood"] == 7.5
    assert metrics["stress"] == 2
    assert average_metrics([])["sleep"] is None


def test_members_needing_attention_lists_red_then_missing():
    ana, ben, cy = make_member("ana"), make_member("ben"), make_member("cy")
    expected = ExpectedSet(
        team_id="team-1", date=TODAY, is_work_day=True, is_holiday=False, expected=(ana, ben, cy), checked_in=(ana, cy)
    )
    today = {
        "ana": make_checkin("ana", NOW),
        "cy": make_checkin("cy", NOW, mood=0, stress=10, sleep=0, physical=0),
    }

    items = members_needing_attention(expected, today)

    assert [(i.member_id, i.reason) for i in items] == [("cy", "RED_STATUS"), ("ben", "NO_CHECKIN")]
    assert items[0].readiness_score == 0


def test_sudden_change_severity_bands():
    history = {"ana": [80, 80, 80], "ben": [80, 80, 80], "cy": [80, 80, 80], "dee": [80, 80, 80]}
    today = [
        make_checkin("ana", NOW, mood=4, stress=2, sleep=8, physical=8),  # 70: -10
        make_checkin("ben", NOW, mood=2, stress=4, sleep=6, physical=6),  # 50: -30
        make_checkin("cy", NOW, mood=7, stress=2, sleep=8, physical=8),  # 78: -2
        make_checkin("dee", NOW, mood=4, stress=6, sleep=6, physical=8),  # 55: -25
    ]

    changes = {c.member_id: c.severity for c in detect_sudden_changes(today, history)}

    assert changes == {"ana": "NOTABLE", "ben": "CRITICAL", "dee": "SIGNIFICANT"}


def test_sudden_change_needs_enough_history():
    today = [make_checkin("ana", NOW, mood=0, stress=10, sleep=0, physical=0)]

    assert detect_sudden_changes(today, {"ana": [90, 90]}) == []
