"""Read-only inputs for one report request, indexed once.

Every engine function reads from a `Snapshot`; none of them performs I/O.
Callers fetch a snapshot through a `SnapshotSource` so that all numbers in a
response come from a single consistent read.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Protocol, Sequence, Tuple
from zoneinfo import ZoneInfo

from ..checkins.model import CheckIn
from ..core.exceptions import NotFoundError
from ..dates.resolver import DateRange, local_date, resolve_timezone
from ..exemptions.index import ExemptionIndex
from ..exemptions.model import Exemption
from ..teams.model import Holiday, Member, Organization, Team


@dataclass(frozen=True)
class Snapshot:
    organization: Organization
    tz: ZoneInfo
    teams: Mapping[str, Team]
    members: Mapping[str, Member]
    workers_by_team: Mapping[str, Tuple[Member, ...]]
    checkin_by_member_day: Mapping[Tuple[str, date], CheckIn]
    checkins_by_day: Mapping[date, Tuple[CheckIn, ...]]
    holidays: FrozenSet[date] = field(default_factory=frozenset)
    exemptions: ExemptionIndex = field(default_factory=ExemptionIndex)

    @classmethod
    def build(
        cls,
        *,
        organization: Organization,
        teams: Iterable[Team],
        members: Iterable[Member],
        checkins: Iterable[CheckIn],
        exemptions: Iterable[Exemption] = (),
        holidays: Iterable[Holiday] = (),
    ) -> "Snapshot":
        tz = resolve_timezone(organization.timezone)
        members_by_id = {m.member_id: m for m in members}

        workers: Dict[str, list] = defaultdict(list)
        for member in members_by_id.values():
            if member.team_id and member.counts_toward_attendance:
                workers[member.team_id].append(member)

        # One check-in per member-day; the latest one wins.
        latest: Dict[Tuple[str, date], CheckIn] = {}
        for checkin in checkins:
            key = (checkin.member_id, local_date(checkin.created_at, tz))
            current = latest.get(key)
            if current is None or checkin.created_at >= current.created_at:
                latest[key] = checkin

        by_day: Dict[date, list] = defaultdict(list)
        for (_, day), checkin in latest.items():
            by_day[day].append(checkin)

        return cls(
            organization=organization,
            tz=tz,
            teams={t.team_id: t for t in teams},
            members=members_by_id,
            workers_by_team={
                team_id: tuple(sorted(items, key=lambda m: m.member_id)) for team_id, items in workers.items()
            },
            checkin_by_member_day=latest,
            checkins_by_day={
                day: tuple(sorted(items, key=lambda c: c.member_id)) for day, items in by_day.items()
            },
            holidays=frozenset(h.date for h in holidays if h.organization_id == organization.organization_id),
            exemptions=ExemptionIndex.build(exemptions, tz),
        )

    def team(self, team_id: str) -> Team:
        team = self.teams.get(team_id)
        if not team:
            raise NotFoundError(f"Team {team_id} not found")
        return team

    def workers(self, team_id: str) -> Tuple[Member, ...]:
        return self.workers_by_team.get(team_id, ())

    def checkin_for(self, member_id: str, day: date) -> Optional[CheckIn]:
        return self.checkin_by_member_day.get((member_id, day))

    def team_checkins(self, team_id: str, day: date) -> Tuple[CheckIn, ...]:
        """Check-ins on `day` by the team's active worker members."""
        ids = {m.member_id for m in self.workers(team_id)}
        return tuple(c for c in self.checkins_by_day.get(day, ()) if c.member_id in ids)

    def is_holiday(self, day: date) -> bool:
        return day in self.holidays

    def team_window(self, team: Team, date_range: DateRange) -> Optional[DateRange]:
        """The part of the window after the team was created, or None."""
        created = local_date(team.created_at, self.tz)
        if created > date_range.end:
            return None
        return DateRange(start=max(date_range.start, created), end=date_range.end)


class SnapshotSource(Protocol):
    def organization(self, *, organization_id: str) -> Organization:
        """Raises NotFoundError for an unknown organization."""

        raise NotImplementedError

    def team_context(self, *, organization_id: str, team_id: str) -> Tuple[Organization, Team]:
        """Organization and team configuration, needed to resolve a window before loading it."""

        raise NotImplementedError

    def load(
        self,
        *,
        organization_id: str,
        start: date,
        end: date,
        team_ids: Optional[Sequence[str]] = None,
        include_inactive: bool = False,
    ) -> Snapshot:
        """Fetch every input for the window in one consistent read.

        Raises NotFoundError when the organization does not exist.
        """

        raise NotImplementedError
