"""
Core Mastery Module.

Converts a learner's attempt history into a 0-1 mastery score.

Design:
- MasteryEstimator: recency-weighted accuracy over the whole history
- AttemptSummary: totals, accuracy, timing and a signed recency confidence

Older evidence counts less but is never discarded.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from loguru import logger

from mastery_engine.core.models import AttemptRecord, MasteryLevel, check_attempt
from mastery_engine.core.numeric import clamp
from mastery_engine.core.temporal import as_utc, days_between, recency_weight, weighted_recency_mean
from mastery_engine.exceptions import require_positive

DEFAULT_DECAY_RATE = 0.05


def _resolve_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(UTC)
    return as_utc(now, "now")


def attempt_age_days(attempt: AttemptRecord, now: datetime) -> int:
    """
    Age of an attempt in whole days.

    A timestamp later than now (clock skew between servers) counts as today.
    """
    return max(0, days_between(attempt.timestamp, now))


class MasteryEstimator:
    """
    Recency-weighted mastery estimator.

    Formula: mastery = Σ correct·e^(-λ·days_ago) / Σ e^(-λ·days_ago)

    An empty history yields 0.0, meaning "treat as never attempted".
    """

    def __init__(self, decay_rate: float = DEFAULT_DECAY_RATE):
        """
        Initialize estimator.

        Args:
            decay_rate: Decay per day (default 0.05)

        Raises:
            InvalidArgumentError: If decay_rate <= 0
        """
        self.decay_rate = require_positive("decay_rate", decay_rate)

    def estimate(
        self,
        attempts: Sequence[AttemptRecord],
        now: datetime | None = None,
    ) -> float:
        """
        Estimate mastery from an attempt history.

        Args:
            attempts: Attempt records in any order
            now: Reference time (defaults to UTC now)

        Returns:
            Mastery between 0 and 1

        Raises:
            InvalidArgumentError: On a malformed attempt record or now
        """
        for attempt in attempts:
            check_attempt(attempt)
        if not attempts:
            return 0.0

        now = _resolve_now(now)
        samples = [(a.is_correct, attempt_age_days(a, now)) for a in attempts]
        mastery = weighted_recency_mean(samples, self.decay_rate)

        logger.debug(f"Mastery {mastery:.3f} from {len(attempts)} attempts (λ={self.decay_rate})")
        return mastery

    def level(
        self,
        attempts: Sequence[AttemptRecord],
        now: datetime | None = None,
    ) -> MasteryLevel:
        """Mastery band for an attempt history."""
        return MasteryLevel.from_score(self.estimate(attempts, now))


# ============================================================================
# Attempt Summary
# ============================================================================


@dataclass(frozen=True)
class AttemptSummary:
    """Aggregate performance over an attempt history."""

    total_attempts: int = 0
    correct_attempts: int = 0
    accuracy: float = 0.0
    average_time: float = 0.0
    recency_confidence: float = 0.0

    @property
    def incorrect_attempts(self) -> int:
        return self.total_attempts - self.correct_attempts


def summarize_attempts(
    attempts: Sequence[AttemptRecord],
    now: datetime | None = None,
    decay_rate: float = DEFAULT_DECAY_RATE,
) -> AttemptSummary:
    """
    Summarize an attempt history.

    recency_confidence averages +e^(-λ·d) for correct and -e^(-λ·d) for
    incorrect attempts, then maps the [-1, 1] result onto [0, 1]. Unlike
    mastery it is not weight-normalized, so old evidence pulls it towards 0.5.

    Args:
        attempts: Attempt records in any order
        now: Reference time (defaults to UTC now)
        decay_rate: Decay per day for the recency confidence

    Returns:
        AttemptSummary (all zeros for an empty history)

    Raises:
        InvalidArgumentError: On a malformed attempt record or decay_rate <= 0
    """
    decay_rate = require_positive("decay_rate", decay_rate)
    for attempt in attempts:
        check_attempt(attempt)
    if not attempts:
        return AttemptSummary()

    now = _resolve_now(now)
    total = len(attempts)
    correct = sum(1 for a in attempts if a.is_correct)

    timed = [a.time_spent for a in attempts if a.time_spent is not None]
    average_time = sum(timed) / len(timed) if timed else 0.0

    signed = 0.0
    for attempt in attempts:
        weight = recency_weight(attempt_age_days(attempt, now), decay_rate)
        signed += weight if attempt.is_correct else -weight
    signed /= total

    return AttemptSummary(
        total_attempts=total,
        correct_attempts=correct,
        accuracy=correct / total,
        average_time=average_time,
        recency_confidence=clamp((signed + 1) / 2, 0.0, 1.0),
    )
