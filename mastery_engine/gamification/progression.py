"""Level progression from accumulated points."""

from __future__ import annotations

import math

from mastery_engine.exceptions import require_non_negative

POINTS_PER_LEVEL_UNIT = 100


def level_for_points(points: float) -> int:
    """
    Level reached with the given points.

    Formula: floor(sqrt(points / 100)) + 1, so levels need 0, 100, 400, 900, ...
    """
    points = require_non_negative("points", points)
    return math.floor(math.sqrt(points / POINTS_PER_LEVEL_UNIT)) + 1


def points_to_next_level(points: float) -> float:
    """Points still missing for the next level."""
    level = level_for_points(points)
    return level**2 * POINTS_PER_LEVEL_UNIT - points
