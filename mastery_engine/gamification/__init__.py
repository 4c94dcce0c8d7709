"""
Gamification: streaks, leaderboards, badges and levels.

Components:
- StreakTracker: Daily completion streak transitions
- RankingEngine: Deterministic leaderboard ordering and percentiles
- BadgeEvaluator: Table-driven badge awards
- progression: Points -> level
"""

from .badges import BADGE_RULES, AggregateStats, BadgeEvaluator, BadgeMetric, BadgeRule
from .progression import level_for_points, points_to_next_level
from .ranking import LeaderboardEntry, RankingEngine, RankingResult, RankPosition, percentile, record_score
from .streaks import StreakTracker, rebuild_streak

__all__ = [
    # Streaks
    "StreakTracker",
    "rebuild_streak",
    # Ranking
    "RankingEngine",
    "RankingResult",
    "RankPosition",
    "LeaderboardEntry",
    "percentile",
    "record_score",
    # Badges
    "BADGE_RULES",
    "AggregateStats",
    "BadgeEvaluator",
    "BadgeMetric",
    "BadgeRule",
    # Levels
    "level_for_points",
    "points_to_next_level",
]
