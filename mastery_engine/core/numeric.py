"""Small numeric helpers shared across components."""

from __future__ import annotations

import math


def clamp(value: float, lower: float, upper: float) -> float:
    """Limit value to [lower, upper]."""
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (2.5 -> 3)."""
    return math.floor(value + 0.5)
