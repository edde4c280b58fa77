"""Threshold checks layered on engine outputs."""
from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..checkins.model import CheckIn
from ..common.math_utils import mean, round1
from ..compliance.expected import ExpectedSet
from ..core.constants import (
    MOOD_LOW,
    PHYSICAL_LOW,
    SLEEP_LOW,
    STRESS_HIGH,
    SUDDEN_CHANGE_DROP,
    SUDDEN_CHANGE_MIN_HISTORY,
)
from ..core.enums import ReadinessStatus

REASON_LABELS = {
    "HIGH_STRESS": "High Stress",
    "POOR_SLEEP": "Poor Sleep",
    "LOW_MOOD": "Low Mood",
    "LOW_PHYSICAL": "Low Physical Health",
}


@dataclass(frozen=True)
class AttentionItem:
    member_id: str
    name: str
    reason: str
    readiness_score: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SuddenChange:
    member_id: str
    today_score: int
    average_score: float
    change: float
    severity: str

    def to_dict(self) -> dict:
        return asdict(self)


def _reasons(checkin: CheckIn) -> List[str]:
    found = []
    if checkin.stress > STRESS_HIGH:
        found.append("HIGH_STRESS")
    if checkin.sleep < SLEEP_LOW:
        found.append("POOR_SLEEP")
    if checkin.mood < MOOD_LOW:
        found.append("LOW_MOOD")
    if checkin.physical_health < PHYSICAL_LOW:
        found.append("LOW_PHYSICAL")
    return found


def top_reasons(checkins: Iterable[CheckIn]) -> List[dict]:
    counts = Counter(reason for checkin in checkins for reason in _reasons(checkin))
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [{"reason": code, "label": REASON_LABELS[code], "count": count} for code, count in ordered]


def average_metrics(checkins: Sequence[CheckIn]) -> Dict[str, Optional[float]]:
    result = {}
    for name in ("mood", "stress", "sleep", "physical_health"):
        value = mean(getattr(c, name) for c in checkins)
        result[name] = round1(value) if value is not None else None
    return result


def members_needing_attention(expected: ExpectedSet, checkins_today: Mapping[str, CheckIn]) -> List[AttentionItem]:
    items = []
    for member in expected.expected + expected.exempted_checked_in:
        checkin = checkins_today.get(member.member_id)
        if checkin is None:
            items.append(AttentionItem(member_id=member.member_id, name=member.full_name, reason="NO_CHECKIN"))
        elif checkin.readiness_status == ReadinessStatus.RED:
            items.append(
                AttentionItem(
                    member_id=member.member_id,
                    name=member.full_name,
                    reason="RED_STATUS",
                    readiness_score=checkin.readiness_score,
                )
            )
    # RED first, then by name.
    items.sort(key=lambda item: (item.reason != "RED_STATUS", item.name, item.member_id))
    return items


def _severity(change: float) -> str:
    if change <= -30:
        return "CRITICAL"
    if change <= -20:
        return "SIGNIFICANT"
    return "NOTABLE"


def detect_sudden_changes(
    today_checkins: Iterable[CheckIn],
    history: Mapping[str, Sequence[int]],
) -> List[SuddenChange]:
    """Flag members whose score today dropped well below their own average."""
    changes = []
    for checkin in today_checkins:
        scores = history.get(checkin.member_id, ())
        if len(scores) < SUDDEN_CHANGE_MIN_HISTORY:
            continue
        average = sum(scores) / len(scores)
        change = checkin.readiness_score - average
        if change > SUDDEN_CHANGE_DROP:
            continue
        changes.append(
            SuddenChange(
                member_id=checkin.member_id,
                today_score=checkin.readiness_score,
                average_score=round1(average),
                change=round1(change),
                severity=_severity(change),
            )
        )
    changes.sort(key=lambda c: (c.change, c.member_id))
    return changes
