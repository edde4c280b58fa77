from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles known to the engine. Only worker-class roles are expected to check in."""

    WORKER = "WORKER"
    MEMBER = "MEMBER"
    TEAM_LEAD = "TEAM_LEAD"
    SUPERVISOR = "SUPERVISOR"
    EXECUTIVE = "EXECUTIVE"
    ADMIN = "ADMIN"

    @property
    def is_worker(self) -> bool:
        return self in (Role.WORKER, Role.MEMBER)


class WeekDay(str, Enum):
    SUN = "SUN"
    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"
    SAT = "SAT"


class ReadinessStatus(str, Enum):
    """Tri-state wellness status derived from a readiness score."""

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


class AttendanceStatus(str, Enum):
    """Attendance classification of one member on one work day."""

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    ABSENT = "ABSENT"
    EXCUSED = "EXCUSED"


class ExemptionStatus(str, Enum):
    """Leave/exemption approval state."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    ENDED_EARLY = "ENDED_EARLY"


class Trend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
