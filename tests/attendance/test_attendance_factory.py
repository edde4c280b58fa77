from datetime import date, datetime, time, timezone

from wellness_compliance.attendance.factory import AttendanceStrategyFactory
from wellness_compliance.attendance.strategies.absent_strategy import AbsentStrategy
from wellness_compliance.attendance.strategies.excused_strategy import ExcusedStrategy
from wellness_compliance.attendance.strategies.late_strategy import LateStrategy
from wellness_compliance.attendance.strategies.on_time_strategy import OnTimeStrategy
from wellness_compliance.core.enums import AttendanceStatus

from fakes import MANILA, manila

DAY = date(2026, 3, 13)


def _pick(checkin_time, *, is_excused=False):
    return AttendanceStrategyFactory().for_day(
        checkin_time=checkin_time,
        work_date=DAY,
        shift_start=time(8, 0),
        grace_minutes=5,
        is_excused=is_excused,
        tz=MANILA,
    )


def test_checkin_within_grace_is_on_time():
    strategy = _pick(manila(2026, 3, 13, 8, 5))

    assert isinstance(strategy, OnTimeStrategy)
    decision = strategy.decide()
    assert (decision.status, decision.points) == (AttendanceStatus.GREEN, 100)


def test_checkin_after_grace_is_late():
    strategy = _pick(datetime(2026, 3, 13, 8, 5, 1, tzinfo=MANILA))

    assert isinstance(strategy, LateStrategy)
    decision = strategy.decide()
    assert (decision.status, decision.points) == (AttendanceStatus.YELLOW, 75)


def test_shift_start_is_compared_in_local_time():
    # 00:04 UTC == 08:04 Manila
    assert isinstance(_pick(datetime(2026, 3, 13, 0, 4, tzinfo=timezone.utc)), OnTimeStrategy)


def test_missing_checkin_is_absent_unless_excused():
    assert isinstance(_pick(None), AbsentStrategy)
    assert _pick(None).decide().points == 0

    excused = _pick(None, is_excused=True)
    assert isinstance(excused, ExcusedStrategy)
    assert excused.decide().points is None


def test_checkin_wins_over_exemption():
    assert isinstance(_pick(manila(2026, 3, 13, 7, 50), is_excused=True), OnTimeStrategy)
