"""
Badge Evaluation.

Badges are declared in one threshold table; evaluation is a uniform pass over
it.

    stats + held badges -> newly earned badge ids

Re-evaluating with the same stats never re-emits a held badge.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field

from loguru import logger

from mastery_engine.exceptions import InvalidArgumentError, require_non_negative, require_unit_interval


class BadgeMetric:
    """Names of the aggregate metrics a badge rule can test."""

    COMPLETIONS = "completions"
    AVERAGE_SCORE = "average_score"
    MASTERED_TOPICS = "mastered_topics"
    STREAK = "streak"


@dataclass(frozen=True)
class BadgeRule:
    """Badge is earned once metric >= threshold."""

    badge_id: str
    metric: str
    threshold: float
    description: str = ""


BADGE_RULES: tuple[BadgeRule, ...] = (
    BadgeRule("decathlon", BadgeMetric.COMPLETIONS, 10, "Complete 10 tests"),
    BadgeRule("marathon", BadgeMetric.COMPLETIONS, 50, "Complete 50 tests"),
    BadgeRule("centurion", BadgeMetric.COMPLETIONS, 100, "Complete 100 tests"),
    BadgeRule("top-scorer", BadgeMetric.AVERAGE_SCORE, 90, "Average score of 90 or more"),
    BadgeRule("triple-mastery", BadgeMetric.MASTERED_TOPICS, 3, "Master 3 topics"),
    BadgeRule("penta-mastery", BadgeMetric.MASTERED_TOPICS, 5, "Master 5 topics"),
    BadgeRule("week-streak", BadgeMetric.STREAK, 7, "Practice 7 days in a row"),
    BadgeRule("month-streak", BadgeMetric.STREAK, 30, "Practice 30 days in a row"),
)


@dataclass(frozen=True)
class AggregateStats:
    """A learner's aggregate achievements."""

    completed_count: int = 0
    average_score: float = 0.0  # 0-100
    topic_mastery: Mapping[str, float] = field(default_factory=dict)  # topic -> mastery 0-1
    streak_length: int = 0

    def mastered_topic_count(self, threshold: float = 0.9) -> int:
        """Topics at or above the mastery threshold."""
        return sum(1 for mastery in self.topic_mastery.values() if mastery >= threshold)


class BadgeEvaluator:
    """Evaluates the badge table against aggregate stats."""

    def __init__(
        self,
        rules: tuple[BadgeRule, ...] = BADGE_RULES,
        mastery_threshold: float = 0.9,
    ):
        self.rules = rules
        self.mastery_threshold = require_unit_interval("mastery_threshold", mastery_threshold)

        known = {
            BadgeMetric.COMPLETIONS,
            BadgeMetric.AVERAGE_SCORE,
            BadgeMetric.MASTERED_TOPICS,
            BadgeMetric.STREAK,
        }
        for rule in rules:
            if rule.metric not in known:
                raise InvalidArgumentError("rules", f"unknown metric {rule.metric!r} for badge {rule.badge_id!r}")

    def metrics(self, stats: AggregateStats) -> dict[str, float]:
        """Metric values the rule table is evaluated against."""
        for mastery in stats.topic_mastery.values():
            require_unit_interval("topic_mastery", mastery)
        return {
            BadgeMetric.COMPLETIONS: require_non_negative("completed_count", stats.completed_count),
            BadgeMetric.AVERAGE_SCORE: require_non_negative("average_score", stats.average_score),
            BadgeMetric.MASTERED_TOPICS: stats.mastered_topic_count(self.mastery_threshold),
            BadgeMetric.STREAK: require_non_negative("streak_length", stats.streak_length),
        }

    def evaluate(
        self,
        stats: AggregateStats,
        held_badge_ids: Collection[str] = (),
    ) -> list[str]:
        """
        Determine newly earned badges.

        Args:
            stats: Aggregate learner stats
            held_badge_ids: Badges the learner already has

        Returns:
            Earned badge ids not in held_badge_ids, in table order
        """
        held = set(held_badge_ids)
        values = self.metrics(stats)

        earned = [
            rule.badge_id
            for rule in self.rules
            if rule.badge_id not in held and values[rule.metric] >= rule.threshold
        ]
        if earned:
            logger.debug(f"Badges earned: {', '.join(earned)}")
        return earned
