from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..grades import Grade, grade_info


class GradeCalculator(ABC):
    """Calculator interface (Strategy Pattern for team grading)."""

    @abstractmethod
    def composite(self, readiness: Optional[float], compliance: Optional[float]) -> Optional[int]:
        raise NotImplementedError

    def grade(self, readiness: Optional[float], compliance: Optional[float]) -> Optional[Grade]:
        score = self.composite(readiness, compliance)
        if score is None:
            return None
        return grade_info(score)
