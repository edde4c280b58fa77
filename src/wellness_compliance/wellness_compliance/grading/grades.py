from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

GREEN = "GREEN"
YELLOW = "YELLOW"
ORANGE = "ORANGE"
RED = "RED"

# (minimum score, letter, label, color), highest first.
GRADE_TABLE = (
    (97, "A+", "Outstanding", GREEN),
    (93, "A", "Excellent", GREEN),
    (90, "A-", "Excellent", GREEN),
    (87, "B+", "Very Good", GREEN),
    (83, "B", "Good", GREEN),
    (80, "B-", "Good", YELLOW),
    (77, "C+", "Satisfactory", YELLOW),
    (73, "C", "Satisfactory", YELLOW),
    (70, "C-", "Satisfactory", YELLOW),
    (67, "D+", "Needs Improvement", ORANGE),
    (63, "D", "Needs Improvement", ORANGE),
    (60, "D-", "Needs Improvement", ORANGE),
)
FAILING = ("F", "Critical", RED)


@dataclass(frozen=True)
class Grade:
    score: int
    letter: str
    label: str
    color: str

    def to_dict(self) -> dict:
        return asdict(self)


def grade_info(score: int) -> Grade:
    for minimum, letter, label, color in GRADE_TABLE:
        if score >= minimum:
            return Grade(score=score, letter=letter, label=label, color=color)
    letter, label, color = FAILING
    return Grade(score=score, letter=letter, label=label, color=color)


def simple_grade(score: Optional[float]) -> str:
    """Four-band letter used on the executive overview."""
    if score is None:
        return "N/A"
    if score >= 90:
        return "A"
    if score >= 80:
        return "B"
    if score >= 70:
        return "C"
    return "D"
