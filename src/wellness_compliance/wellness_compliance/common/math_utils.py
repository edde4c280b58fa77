from __future__ import annotations

import math
from typing import Iterable, Optional


def round_half_up(value: float) -> int:
    """Round halves toward +inf, so 2.5 -> 3 and -2.5 -> -2 (the builtin round() is banker's rounding).

    Every score passed in is non-negative.
    """
    return int(math.floor(value + 0.5))


def round1(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def mean(values: Iterable[float]) -> Optional[float]:
    items = list(values)
    if not items:
        return None
    return sum(items) / len(items)


def percent(part: int, whole: int) -> Optional[int]:
    """Capped integer percentage, None when there is nothing to divide by."""
    if whole <= 0:
        return None
    return round_half_up(min(100.0, part / whole * 100))
