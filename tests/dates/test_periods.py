from datetime import date

import pytest

from wellness_compliance.core.exceptions import RangeTooLargeError
from wellness_compliance.dates.periods import Period, parse_days, resolve_period

from fakes import TODAY


def test_garbage_period_clamps_to_today():
    r = resolve_period("last-fortnight", today=TODAY)

    assert (r.start, r.end) == (TODAY, TODAY)
    assert Period.parse(None) == Period.TODAY


@pytest.mark.parametrize(
    "period, start",
    [
        ("today", date(2026, 3, 13)),
        ("7days", date(2026, 3, 7)),
        ("14days", date(2026, 2, 28)),
        ("30days", date(2026, 2, 12)),
    ],
)
def test_rolling_periods(period, start):
    r = resolve_period(period, today=TODAY)

    assert r.start == start
    assert r.end == TODAY


def test_start_is_clamped_to_team_creation():
    r = resolve_period("30days", today=TODAY, team_created=date(2026, 3, 10))

    assert r.start == date(2026, 3, 10)


def test_alltime_starts_at_team_creation():
    r = resolve_period("alltime", today=TODAY, team_created=date(2026, 1, 1))

    assert r.start == date(2026, 1, 1)
    assert r.end == TODAY


def test_custom_range_is_used_when_valid():
    r = resolve_period("custom", today=TODAY, custom_start="2026-02-01", custom_end="2026-02-10")

    assert (r.start, r.end) == (date(2026, 2, 1), date(2026, 2, 10))


@pytest.mark.parametrize(
    "start, end",
    [("2026-02-10", "2026-02-01"), ("not-a-date", "2026-02-01"), (None, None)],
)
def test_bad_custom_range_clamps_to_today(start, end):
    r = resolve_period("custom", today=TODAY, custom_start=start, custom_end=end)

    assert (r.start, r.end) == (TODAY, TODAY)


def test_custom_window_before_team_existed_falls_back_to_today():
    r = resolve_period(
        "custom", today=TODAY, team_created=date(2026, 3, 1), custom_start="2026-01-01", custom_end="2026-01-31"
    )

    assert (r.start, r.end) == (TODAY, TODAY)


def test_oversized_range_is_rejected():
    with pytest.raises(RangeTooLargeError):
        resolve_period("alltime", today=TODAY, team_created=date(2010, 1, 1), max_days=1830)


@pytest.mark.parametrize(
    "value, days",
    [(None, 30), ("", 30), ("7", 7), (" 14 ", 14), ("abc", 1), ("-3", 1), ("0", 1), ("2.5", 1)],
)
def test_parse_days_never_raises(value, days):
    assert parse_days(value) == days
