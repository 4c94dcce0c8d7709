"""
Adaptive Mastery & Scheduling Engine.

Stateless learner-model core for an education platform:
- estimate how well a learner knows a topic from time-decaying attempts
- schedule the next review of each item (SM-2)
- adapt item difficulty
- score answer confidence
- maintain streaks and rankings that gate badge awards

Every operation is a pure function over caller-owned records; persistence
and transactional boundaries stay with the caller.
"""

from mastery_engine.core.models import (
    AttemptRecord,
    DifficultyState,
    MasteryLevel,
    RankingCandidate,
    SchedulableItem,
    StreakState,
    Trend,
)
from mastery_engine.engine import (
    ReviewOutcome,
    adapt_difficulty,
    advance_streak,
    classify_trend,
    estimate_mastery,
    evaluate_badges,
    rank,
    review_item,
    schedule_next_review,
    score_confidence,
)
from mastery_engine.exceptions import EngineError, InvalidArgumentError
from mastery_engine.gamification.badges import AggregateStats
from mastery_engine.gamification.ranking import RankingResult, RankPosition

__version__ = "1.0.0"

__all__ = [
    # Boundary functions
    "estimate_mastery",
    "schedule_next_review",
    "adapt_difficulty",
    "score_confidence",
    "classify_trend",
    "advance_streak",
    "rank",
    "evaluate_badges",
    "review_item",
    # Records
    "AttemptRecord",
    "SchedulableItem",
    "DifficultyState",
    "StreakState",
    "RankingCandidate",
    "AggregateStats",
    "RankingResult",
    "RankPosition",
    "ReviewOutcome",
    "MasteryLevel",
    "Trend",
    # Errors
    "EngineError",
    "InvalidArgumentError",
]
