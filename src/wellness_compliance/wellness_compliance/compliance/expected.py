from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Tuple

from ..dates.resolver import is_work_day, local_date
from ..teams.model import Member, Team
from .snapshot import Snapshot


@dataclass(frozen=True)
class ExpectedSet:
    """Who was expected to check in for one team on one day."""

    team_id: str
    date: date
    is_work_day: bool
    is_holiday: bool
    expected: Tuple[Member, ...] = ()
    exempted: Tuple[Member, ...] = ()
    exempted_checked_in: Tuple[Member, ...] = ()
    checked_in: Tuple[Member, ...] = ()
    eligible_count: int = 0

    @property
    def is_counted(self) -> bool:
        return self.is_work_day and not self.is_holiday

    @property
    def expected_count(self) -> int:
        return len(self.expected) + len(self.exempted_checked_in)

    @property
    def checked_in_count(self) -> int:
        return len(self.checked_in) + len(self.exempted_checked_in)

    @property
    def missing(self) -> Tuple[Member, ...]:
        done = {m.member_id for m in self.checked_in}
        return tuple(m for m in self.expected if m.member_id not in done)


def effective_start(member: Member, snapshot: Snapshot) -> date:
    """First day a member is expected: the day after they joined the team."""
    return local_date(member.joined_at, snapshot.tz) + timedelta(days=1)


def calculate_expected_set(snapshot: Snapshot, team: Team, day: date) -> ExpectedSet:
    work_day = is_work_day(day, team.work_days, snapshot.tz)
    holiday = snapshot.is_holiday(day)
    if not work_day or holiday:
        return ExpectedSet(team_id=team.team_id, date=day, is_work_day=work_day, is_holiday=holiday)

    expected, exempted, exempted_checked_in, checked_in = [], [], [], []
    eligible = 0
    for member in snapshot.workers(team.team_id):
        if effective_start(member, snapshot) > day:
            continue
        eligible += 1
        has_checkin = snapshot.checkin_for(member.member_id, day) is not None
        if snapshot.exemptions.is_exempted(member.member_id, day):
            (exempted_checked_in if has_checkin else exempted).append(member)
            continue
        expected.append(member)
        if has_checkin:
            checked_in.append(member)

    return ExpectedSet(
        team_id=team.team_id,
        date=day,
        is_work_day=True,
        is_holiday=False,
        expected=tuple(expected),
        exempted=tuple(exempted),
        exempted_checked_in=tuple(exempted_checked_in),
        checked_in=tuple(checked_in),
        eligible_count=eligible,
    )
