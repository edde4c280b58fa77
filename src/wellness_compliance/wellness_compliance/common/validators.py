from __future__ import annotations

from numbers import Real

from ..core.constants import METRIC_MAX, METRIC_MIN
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_metric(value: object, field_name: str) -> float:
    """Wellness metrics are bounded to the 0-10 scale."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{field_name} must be a number")
    if value < METRIC_MIN or value > METRIC_MAX:
        raise ValidationError(f"{field_name} must be between {METRIC_MIN} and {METRIC_MAX}")
    return float(value)
