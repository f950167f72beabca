"""Numeric coercion helpers shared by the metrics model and the estimator."""

import math
from typing import Any, Optional


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return min(max(value, lower), upper)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (22.5 -> 23)."""
    return int(math.floor(value + 0.5))


def coerce_number(value: Any) -> Optional[float]:
    """
    Interpret value as a float, or return None when it is not numeric.

    Numeric strings are accepted. Booleans and NaN are rejected. Integers
    beyond float range map to signed infinity.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # int too large for a float
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number
