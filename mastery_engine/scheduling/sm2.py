"""
SM-2 Spaced Repetition Scheduler.

Implements the SuperMemo 2 interval / ease-factor update over a continuous
performance signal in [0, 1] instead of the discrete 0-5 grade.
performance × 5 reconstructs the grade scale:

SM-2 Grade Scale:
0 - Complete blackout, wrong response
1 - Incorrect, but upon seeing answer remembered
2 - Incorrect, but answer seemed easy to recall
3 - Correct, but with significant difficulty
4 - Correct, with some hesitation
5 - Correct, with perfect recall
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from loguru import logger

from mastery_engine.core.models import SchedulableItem
from mastery_engine.core.numeric import round_half_up
from mastery_engine.exceptions import (
    InvalidArgumentError,
    require_non_negative,
    require_number,
    require_unit_interval,
)

# =============================================================================
# SM-2 Algorithm
# =============================================================================


@dataclass(frozen=True)
class SM2Config:
    """Configuration for SM-2 algorithm."""

    initial_easiness: float = 2.5
    minimum_easiness: float = 1.3
    recall_threshold: float = 0.6  # Performance counted as a successful recall
    first_interval: int = 1  # Days for first review
    second_interval: int = 6  # Days for second review
    max_interval: int = 3650  # Upper bound in days (about 10 years)


class SM2Scheduler:
    """
    Implements the SM-2 spaced repetition algorithm.

    Each item has:
    - Easiness Factor (EF): How easy the item is (2.5 default, min 1.3)
    - Interval: Days until next review
    - Repetitions: Consecutive correct recalls

    A failed review resets repetitions and interval but keeps the ease
    factor; only the regular EF update lowers it.
    """

    def __init__(self, config: SM2Config | None = None):
        """
        Initialize SM-2 scheduler.

        Args:
            config: Custom configuration (uses defaults if None)
        """
        self.config = config or SM2Config()

    def new_item(self) -> SchedulableItem:
        """State for an item that has never been reviewed."""
        return SchedulableItem(ease_factor=self.config.initial_easiness)

    def next_ease_factor(self, ease_factor: float, performance: float) -> float:
        """
        EF' = max(1.3, EF + (0.1 - q × (0.08 + q × 0.02)))

        where q = 5 - performance × 5 is the distance from a perfect grade.
        """
        q = 5 - performance * 5
        ef_delta = 0.1 - q * (0.08 + q * 0.02)
        return max(self.config.minimum_easiness, ease_factor + ef_delta)

    def schedule(
        self,
        item: SchedulableItem,
        performance: float,
        today: date | None = None,
    ) -> SchedulableItem:
        """
        Calculate the next review for an item.

        Args:
            item: Current scheduling state
            performance: Review quality (0-1); >= recall_threshold is a recall
            today: Review date (defaults to date.today())

        Returns:
            New SchedulableItem with updated interval, ease and due date

        Raises:
            InvalidArgumentError: If performance is outside [0, 1] or the
                item state is malformed
        """
        performance = require_unit_interval("performance", performance)
        self._check_item(item)
        today = today or date.today()

        if performance >= self.config.recall_threshold:
            # Passed - advance
            if item.repetitions == 0:
                new_interval = self.config.first_interval
            elif item.repetitions == 1:
                new_interval = self.config.second_interval
            else:
                new_interval = round_half_up(item.interval_days * item.ease_factor)
            new_repetitions = item.repetitions + 1
        else:
            # Failed - reset to beginning
            new_interval = self.config.first_interval
            new_repetitions = 0

        new_interval = min(max(new_interval, 1), self.config.max_interval)
        new_ef = self.next_ease_factor(item.ease_factor, performance)

        logger.debug(
            f"SM-2 review: performance={performance:.2f}, "
            f"interval={item.interval_days}d->{new_interval}d, "
            f"reps={item.repetitions}->{new_repetitions}, ef={item.ease_factor:.3f}->{new_ef:.3f}"
        )

        return SchedulableItem(
            interval_days=new_interval,
            repetitions=new_repetitions,
            ease_factor=new_ef,
            due_date=today + timedelta(days=new_interval),
            last_reviewed=today,
        )

    def _check_item(self, item: SchedulableItem) -> None:
        for name in ("interval_days", "repetitions"):
            value = getattr(item, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidArgumentError(name, f"must be a non-negative integer, got {value!r}")
        ease = require_number("ease_factor", item.ease_factor)
        if ease < self.config.minimum_easiness:
            raise InvalidArgumentError(
                "ease_factor", f"must be at least {self.config.minimum_easiness}, got {ease!r}"
            )


def performance_from_response(
    is_correct: bool,
    response_ms: float,
    expected_ms: float = 10000,
) -> float:
    """
    Convert a timed response into a performance score.

    Maps onto the SM-2 grade scale, then divides by 5:
    quick and correct is a perfect 5, a quick miss is a near-recall 2.

    Args:
        is_correct: Whether the answer was correct
        response_ms: Time taken to respond
        expected_ms: Expected response time

    Returns:
        Performance 0-1
    """
    response_ms = require_non_negative("response_ms", response_ms)
    expected_ms = require_non_negative("expected_ms", expected_ms)

    if not is_correct:
        # Incorrect responses: 0-2
        if response_ms < expected_ms * 0.5:
            grade = 2  # Quick wrong = almost knew it
        elif response_ms < expected_ms:
            grade = 1  # Wrong but remembered when shown
        else:
            grade = 0  # Complete blackout
    elif response_ms < expected_ms * 0.5:
        grade = 5  # Quick and correct = perfect recall
    elif response_ms < expected_ms:
        grade = 4  # Correct with some hesitation
    else:
        grade = 3  # Correct but struggled

    return grade / 5
