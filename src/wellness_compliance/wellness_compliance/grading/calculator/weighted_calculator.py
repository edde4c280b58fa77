from __future__ import annotations

from typing import Optional

from ...common.math_utils import round_half_up
from ...core.constants import COMPLIANCE_WEIGHT, READINESS_WEIGHT
from .base import GradeCalculator


class WeightedGradeCalculator(GradeCalculator):
    """Standard rule: readiness * 0.6 + compliance * 0.4, rounded half up."""

    def __init__(self, readiness_weight: float = READINESS_WEIGHT, compliance_weight: float = COMPLIANCE_WEIGHT):
        self._readiness_weight = readiness_weight
        self._compliance_weight = compliance_weight

    def composite(self, readiness: Optional[float], compliance: Optional[float]) -> Optional[int]:
        if readiness is None:
            return None
        if compliance is None:
            return round_half_up(readiness)
        return round_half_up(readiness * self._readiness_weight + compliance * self._compliance_weight)
