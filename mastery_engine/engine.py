"""
Engine Facade.

The function-call boundary the CRUD/API layer talks to. Every function is
pure: it reads its inputs and the (immutable) engine settings and returns a
new value for the caller to persist.

Flows:
- attempts -> mastery / confidence / trend -> difficulty -> next review
  (review_item runs the whole chain for one learner x item)
- completions -> streak -> ranking -> badges
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from datetime import date, datetime

from loguru import logger

from mastery_engine.adaptive.difficulty import DifficultyAdapter
from mastery_engine.config import EngineSettings, get_settings
from mastery_engine.core.confidence import ConfidenceScorer
from mastery_engine.core.mastery import MasteryEstimator, summarize_attempts
from mastery_engine.core.models import (
    AttemptRecord,
    MasteryLevel,
    RankingCandidate,
    SchedulableItem,
    StreakState,
    Trend,
)
from mastery_engine.core.trend import TrendClassifier
from mastery_engine.gamification.badges import AggregateStats, BadgeEvaluator
from mastery_engine.gamification.ranking import RankingEngine, RankingResult
from mastery_engine.gamification.streaks import StreakTracker
from mastery_engine.scheduling.sm2 import SM2Scheduler


def estimate_mastery(
    attempts: Sequence[AttemptRecord],
    decay_rate: float | None = None,
    now: datetime | None = None,
) -> float:
    """Recency-weighted mastery (0-1) of an attempt history."""
    settings = get_settings()
    rate = settings.mastery_decay_rate if decay_rate is None else decay_rate
    return MasteryEstimator(rate).estimate(attempts, now)


def schedule_next_review(
    item: SchedulableItem,
    performance: float,
    today: date | None = None,
) -> SchedulableItem:
    """Next SM-2 state for an item reviewed with the given performance."""
    return SM2Scheduler(get_settings().get_sm2_config()).schedule(item, performance, today)


def adapt_difficulty(level: float, performance: float) -> float:
    """Difficulty after one attempt."""
    return DifficultyAdapter(get_settings().get_difficulty_config()).adapt(level, performance)


def score_confidence(time_spent: float, avg_time: float, accuracy: float) -> float:
    """Confidence (0-1) in an answer."""
    return ConfidenceScorer(get_settings().confidence_time_weight).score(time_spent, avg_time, accuracy)


def classify_trend(
    attempts: Sequence[AttemptRecord],
    window_size: int | None = None,
) -> Trend:
    """Trend label of the most recent attempts."""
    return TrendClassifier(get_settings().get_trend_config()).classify(attempts, window_size)


def advance_streak(state: StreakState, now: date | datetime) -> StreakState:
    """Streak after a completion at `now`."""
    return StreakTracker().advance(state, now)


def rank(
    candidates: Sequence[RankingCandidate],
    target_id: str | None = None,
) -> RankingResult:
    """Ordered leaderboard plus the target's rank and percentile."""
    return RankingEngine().rank(candidates, target_id)


def evaluate_badges(
    stats: AggregateStats,
    held_badge_ids: Collection[str] = (),
) -> list[str]:
    """Badge ids newly earned with these stats."""
    return BadgeEvaluator(mastery_threshold=get_settings().mastery_threshold).evaluate(stats, held_badge_ids)


# =============================================================================
# Review Pipeline
# =============================================================================


@dataclass(frozen=True)
class ReviewOutcome:
    """Everything computed for one review, persisted together by the caller."""

    mastery: float
    mastery_level: MasteryLevel
    accuracy: float
    trend: Trend
    confidence: float
    difficulty: float
    item: SchedulableItem


def review_item(
    attempts: Sequence[AttemptRecord],
    item: SchedulableItem,
    difficulty: float,
    time_spent: float,
    avg_time: float,
    today: date | None = None,
    now: datetime | None = None,
    settings: EngineSettings | None = None,
) -> ReviewOutcome:
    """
    Run the attempt-driven flow for one learner x item.

    - mastery and historical accuracy come from the attempt history
    - confidence blends the latest response time with that accuracy
    - difficulty follows mastery, but stays put while the trend reports
      insufficient data
    - the next review is scheduled with confidence as the performance

    Args:
        attempts: The learner's history for this item, including the latest attempt
        item: Current scheduling state
        difficulty: Current difficulty level (1-5)
        time_spent: Seconds spent on the latest attempt
        avg_time: Average seconds for this item
        today: Review date (defaults to date.today())
        now: Reference time for recency weighting (defaults to UTC now)
        settings: Engine settings (defaults to get_settings())

    Returns:
        ReviewOutcome
    """
    settings = settings or get_settings()

    estimator = MasteryEstimator(settings.mastery_decay_rate)
    mastery = estimator.estimate(attempts, now)
    summary = summarize_attempts(attempts, now, settings.mastery_decay_rate)
    trend = TrendClassifier(settings.get_trend_config()).classify(attempts)
    confidence = ConfidenceScorer(settings.confidence_time_weight).score(time_spent, avg_time, summary.accuracy)

    adapter = DifficultyAdapter(settings.get_difficulty_config())
    if trend is Trend.INSUFFICIENT_DATA:
        new_difficulty = round(adapter.check_level(difficulty), 1)
    else:
        new_difficulty = adapter.adapt(difficulty, mastery)

    next_item = SM2Scheduler(settings.get_sm2_config()).schedule(item, confidence, today)

    logger.debug(
        f"Reviewed item: mastery={mastery:.2f} trend={trend.value} confidence={confidence:.2f} "
        f"difficulty={difficulty}->{new_difficulty} next_review={next_item.due_date}"
    )

    return ReviewOutcome(
        mastery=mastery,
        mastery_level=MasteryLevel.from_score(mastery),
        accuracy=summary.accuracy,
        trend=trend,
        confidence=confidence,
        difficulty=new_difficulty,
        item=next_item,
    )
