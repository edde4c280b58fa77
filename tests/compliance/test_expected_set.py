from datetime import date, datetime, timezone

from wellness_compliance.compliance.expected import calculate_expected_set
from wellness_compliance.core.enums import Role

from fakes import TODAY, build_snapshot, holiday, make_checkin, make_exemption, make_member, make_team, manila

TEAM = make_team()


def _ids(members):
    return sorted(m.member_id for m in members)


def test_member_who_joined_today_is_expected_from_tomorrow():
    snapshot = build_snapshot(
        members=[
            make_member("new", joined=manila(2026, 3, 13, 10, 0)),
            make_member("yesterday", joined=manila(2026, 3, 12, 23, 0)),
        ]
    )

    expected = calculate_expected_set(snapshot, TEAM, TODAY)

    assert _ids(expected.expected) == ["yesterday"]
    assert calculate_expected_set(snapshot, TEAM, date(2026, 3, 16)).expected_count == 2


def test_exempted_member_who_checks_in_counts_on_both_sides():
    snapshot = build_snapshot(
        members=[make_member("ana"), make_member("ben")],
        checkins=[make_checkin("ana", manila(2026, 3, 13))],
        exemptions=[make_exemption("ana", date(2026, 3, 9), None)],
    )

    expected = calculate_expected_set(snapshot, TEAM, TODAY)

    assert _ids(expected.exempted_checked_in) == ["ana"]
    assert _ids(expected.expected) == ["ben"]
    assert expected.expected_count == 2
    assert expected.checked_in_count == 1
    assert _ids(expected.missing) == ["ben"]


def test_everyone_exempted_means_nobody_expected():
    snapshot = build_snapshot(
        members=[make_member("ana"), make_member("ben")],
        exemptions=[make_exemption("ana", date(2026, 3, 1), None), make_exemption("ben", date(2026, 3, 1), None)],
    )

    expected = calculate_expected_set(snapshot, TEAM, TODAY)

    assert expected.is_counted
    assert expected.expected_count == 0
    assert _ids(expected.exempted) == ["ana", "ben"]


def test_holiday_and_weekend_are_not_counted():
    snapshot = build_snapshot(members=[make_member("ana")], holidays=[holiday(TODAY)])

    on_holiday = calculate_expected_set(snapshot, TEAM, TODAY)
    on_saturday = calculate_expected_set(snapshot, TEAM, date(2026, 3, 14))

    assert not on_holiday.is_counted and on_holiday.is_holiday
    assert on_holiday.expected_count == 0
    assert not on_saturday.is_counted and not on_saturday.is_work_day


def test_team_work_days_decide_the_schedule():
    weekend_team = make_team(work_days="SAT,SUN")
    snapshot = build_snapshot(teams=[weekend_team], members=[make_member("ana")])

    assert calculate_expected_set(snapshot, weekend_team, date(2026, 3, 14)).expected_count == 1
    assert calculate_expected_set(snapshot, weekend_team, TODAY).expected_count == 0


def test_leaders_and_inactive_members_are_never_expected():
    snapshot = build_snapshot(
        members=[
            make_member("ana"),
            make_member("lead", role=Role.TEAM_LEAD),
            make_member("gone", is_active=False),
            make_member("other", team_id="team-2"),
        ]
    )

    assert _ids(calculate_expected_set(snapshot, TEAM, TODAY).expected) == ["ana"]


def test_check_in_near_midnight_counts_for_local_day():
    # 23:50 Manila on the 12th is 15:50 UTC.
    snapshot = build_snapshot(
        members=[make_member("ana")],
        checkins=[make_checkin("ana", datetime(2026, 3, 12, 15, 50, tzinfo=timezone.utc))],
    )

    assert calculate_expected_set(snapshot, TEAM, date(2026, 3, 12)).checked_in_count == 1
    assert calculate_expected_set(snapshot, TEAM, TODAY).checked_in_count == 0
