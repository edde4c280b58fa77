from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class DailyAttendanceRecord:
    member_id: str
    date: date
    status: AttendanceStatus
    score: Optional[int]
    checkin_time: Optional[datetime] = None
    readiness_score: Optional[int] = None
    exemption_id: Optional[str] = None

    @property
    def is_counted(self) -> bool:
        return self.score is not None

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "date": self.date.isoformat(),
            "status": self.status.value,
            "score": self.score,
            "checkin_time": self.checkin_time.isoformat() if self.checkin_time else None,
            "readiness_score": self.readiness_score,
            "exemption_id": self.exemption_id,
        }


@dataclass(frozen=True)
class PerformanceScore:
    score: float
    counted_days: int
    work_days: int
    grade: str
    label: str
    green: int = 0
    yellow: int = 0
    absent: int = 0
    excused: int = 0

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "counted_days": self.counted_days,
            "work_days": self.work_days,
            "grade": self.grade,
            "label": self.label,
            "breakdown": {
                "green": self.green,
                "yellow": self.yellow,
                "absent": self.absent,
                "excused": self.excused,
            },
        }


@dataclass(frozen=True)
class MemberAttendanceReport:
    member_id: str
    team_id: str
    start_date: date
    end_date: date
    records: List[DailyAttendanceRecord] = field(default_factory=list)
    performance: Optional[PerformanceScore] = None

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "team_id": self.team_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "records": [r.to_dict() for r in self.records],
            "performance": self.performance.to_dict() if self.performance else None,
        }
