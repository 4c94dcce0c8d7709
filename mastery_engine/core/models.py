"""
Core Data Models.

Plain records exchanged between the engine and its caller. The caller owns
every one of them (one row per learner, or per learner x item); the engine
receives the current value and returns a new one, never mutating the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from mastery_engine.exceptions import InvalidArgumentError, require_bool, require_non_negative


class MasteryLevel(str, Enum):
    """
    Mastery level categorization.

    Aligned with learning science research on skill acquisition stages.
    """

    NOT_STARTED = "not_started"  # 0%
    NOVICE = "novice"  # 1-39%
    DEVELOPING = "developing"  # 40-69%
    PROFICIENT = "proficient"  # 70-89%
    MASTERED = "mastered"  # 90-100%

    @classmethod
    def from_score(cls, score: float) -> MasteryLevel:
        """
        Convert a 0-1 mastery score to a level.

        Args:
            score: Mastery score between 0 and 1

        Returns:
            Corresponding MasteryLevel
        """
        if score <= 0:
            return cls.NOT_STARTED
        elif score < 0.4:
            return cls.NOVICE
        elif score < 0.7:
            return cls.DEVELOPING
        elif score < 0.9:
            return cls.PROFICIENT
        else:
            return cls.MASTERED

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.replace("_", " ").title()


class Trend(str, Enum):
    """Direction of recent performance."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class AttemptRecord:
    """A single answered question."""

    is_correct: bool
    timestamp: datetime
    time_spent: float | None = None  # Seconds, when the caller tracks it


def check_attempt(attempt: AttemptRecord) -> AttemptRecord:
    """
    Validate an attempt record supplied by the caller.

    Raises:
        InvalidArgumentError: If is_correct is not a bool, timestamp is not a
            datetime or time_spent is negative or not a number
    """
    require_bool("is_correct", attempt.is_correct)
    if not isinstance(attempt.timestamp, datetime):
        raise InvalidArgumentError("timestamp", f"expected a datetime, got {type(attempt.timestamp).__name__}")
    if attempt.time_spent is not None:
        require_non_negative("time_spent", attempt.time_spent)
    return attempt


@dataclass(frozen=True)
class SchedulableItem:
    """SM-2 scheduling state for one learner x item pair."""

    interval_days: int = 0
    repetitions: int = 0  # Consecutive successful recalls
    ease_factor: float = 2.5
    due_date: date | None = None
    last_reviewed: date | None = None

    def is_due(self, today: date | None = None) -> bool:
        """Check if this item is due for review."""
        if self.due_date is None:
            return True  # Never reviewed = due
        return (today or date.today()) >= self.due_date

    def days_overdue(self, today: date | None = None) -> int:
        """Days past the scheduled review date."""
        if self.due_date is None:
            return 0
        delta = (today or date.today()) - self.due_date
        return max(0, delta.days)


@dataclass(frozen=True)
class DifficultyState:
    """Continuous difficulty level in [1, 5]."""

    level: float = 3.0


@dataclass(frozen=True)
class StreakState:
    """Daily completion streak for one learner."""

    current_streak: int = 0
    max_streak: int = 0
    last_completed_at: date | None = None


@dataclass(frozen=True)
class RankingCandidate:
    """
    A participant on a leaderboard.

    secondary_key breaks score ties: the lower key ranks higher, so passing
    the time of the last score change makes the earlier achiever win.
    """

    id: str
    score: float
    secondary_key: Any = 0

    def sort_key(self) -> tuple[float, Any]:
        """Key ordering candidates best-first."""
        return (-self.score, self.secondary_key)
