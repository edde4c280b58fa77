from __future__ import annotations

from dataclasses import dataclass

from ..common.math_utils import round_half_up
from ..common.validators import require_metric
from ..core.constants import READINESS_GREEN_MIN, READINESS_YELLOW_MIN
from ..core.enums import ReadinessStatus


@dataclass(frozen=True)
class ReadinessResult:
    score: int
    status: ReadinessStatus


def readiness_status(score: float) -> ReadinessStatus:
    if score >= READINESS_GREEN_MIN:
        return ReadinessStatus.GREEN
    if score >= READINESS_YELLOW_MIN:
        return ReadinessStatus.YELLOW
    return ReadinessStatus.RED


def calculate_readiness(mood: float, stress: float, sleep: float, physical_health: float) -> ReadinessResult:
    """Equal-weight blend of the four metrics on a 0-100 scale.

    Stress is the only "higher is worse" input, so it is inverted first.
    """
    mood = require_metric(mood, "mood")
    stress = require_metric(stress, "stress")
    sleep = require_metric(sleep, "sleep")
    physical_health = require_metric(physical_health, "physical_health")

    score = round_half_up((mood + (10 - stress) + sleep + physical_health) / 4 * 10)
    return ReadinessResult(score=score, status=readiness_status(score))
