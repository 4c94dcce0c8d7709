"""
Temporal Weighting.

Exponential recency weighting shared by mastery and confidence calculations.

Formula:
    mean = Σ correct·e^(-λ·d) / Σ e^(-λ·d)

Where:
    d = age of the sample in days
    λ = decay rate per day
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import UTC, date, datetime

from mastery_engine.exceptions import (
    InvalidArgumentError,
    require_bool,
    require_number,
    require_positive,
)


def recency_weight(days_ago: float, decay_rate: float) -> float:
    """
    Weight of a sample that is days_ago days old.

    Args:
        days_ago: Age of the sample in days
        decay_rate: Decay per day (λ > 0)

    Returns:
        e^(-λ·days_ago)
    """
    return math.exp(-decay_rate * days_ago)


def weighted_recency_mean(
    samples: Iterable[tuple[bool, float]],
    decay_rate: float,
) -> float:
    """
    Recency-weighted mean of boolean outcomes.

    Weights are taken relative to the youngest sample. Scaling every weight by
    the same constant leaves the mean unchanged, and it keeps a history made
    only of very old samples from underflowing to an all-zero weight sum.

    Args:
        samples: (correct, days_ago) pairs
        decay_rate: Decay per day (λ > 0)

    Returns:
        Weighted mean in [0, 1]; 0.0 for no samples

    Raises:
        InvalidArgumentError: If decay_rate <= 0, an outcome is not a bool
            or an age is not a number
    """
    decay_rate = require_positive("decay_rate", decay_rate)
    pairs = [
        (require_bool("correct", correct), require_number("days_ago", days_ago))
        for correct, days_ago in samples
    ]
    if not pairs:
        return 0.0

    youngest = min(days_ago for _, days_ago in pairs)
    weighted_sum = 0.0
    weight_sum = 0.0
    for correct, days_ago in pairs:
        weight = recency_weight(days_ago - youngest, decay_rate)
        weight_sum += weight
        if correct:
            weighted_sum += weight

    return weighted_sum / weight_sum if weight_sum > 0 else 0.0


def as_utc(moment: datetime, name: str = "timestamp") -> datetime:
    """Attach UTC to naive datetimes; leave aware ones untouched."""
    if not isinstance(moment, datetime):
        raise InvalidArgumentError(name, f"expected a datetime, got {type(moment).__name__}")
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def days_between(earlier: datetime, later: datetime) -> int:
    """
    Whole days elapsed from earlier to later.

    Partial days are dropped, so anything under 24 hours old is 0 days old.
    Naive datetimes are treated as UTC.

    Returns:
        Elapsed whole days (negative when earlier is after later)
    """
    seconds = (as_utc(later, "now") - as_utc(earlier)).total_seconds()
    return int(seconds // 86400) if seconds >= 0 else -int(-seconds // 86400)


def calendar_day(moment: date | datetime, name: str = "now") -> date:
    """
    Truncate a moment to its calendar day.

    Aware datetimes keep their own offset, so the caller decides which local
    day a completion belongs to by the timezone it attaches.
    """
    if isinstance(moment, datetime):
        return moment.date()
    if isinstance(moment, date):
        return moment
    raise InvalidArgumentError(name, f"expected a date or datetime, got {type(moment).__name__}")
