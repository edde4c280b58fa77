from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from ..core.constants import DEFAULT_GRACE_MINUTES
from ..core.enums import Role, WeekDay


@dataclass(frozen=True)
class Organization:
    organization_id: str
    name: str = ""
    timezone: Optional[str] = None


@dataclass(frozen=True)
class Team:
    """Domain entity: a team with its weekly schedule.

    Note: pure data object, no data access code here.
    """

    team_id: str
    organization_id: str
    name: str
    work_days: frozenset[WeekDay]
    shift_start: time
    shift_end: time
    created_at: datetime
    grace_minutes: int = DEFAULT_GRACE_MINUTES
    is_active: bool = True
    deactivated_at: Optional[datetime] = None
    leader_id: Optional[str] = None


@dataclass(frozen=True)
class Member:
    member_id: str
    team_id: Optional[str]
    role: Role
    created_at: datetime
    team_joined_at: Optional[datetime] = None
    is_active: bool = True
    total_checkins: int = 0
    full_name: str = ""

    @property
    def counts_toward_attendance(self) -> bool:
        return self.is_active and self.role.is_worker

    @property
    def joined_at(self) -> datetime:
        return self.team_joined_at or self.created_at


@dataclass(frozen=True)
class Holiday:
    organization_id: str
    date: date
    name: str = field(default="")
