"""
Core Module - Shared domain models and learner-model calculations.

Components:
- models: Caller-owned records (AttemptRecord, SchedulableItem, StreakState, ...)
- temporal: Exponential recency weighting
- mastery: Recency-weighted mastery estimation and attempt summaries
- confidence: Time/accuracy confidence blend
- trend: Recent performance trend labels

Design Principle:
Scheduling, adaptation and gamification modules import their shared
records from here rather than defining their own.
"""

from mastery_engine.core.confidence import ConfidenceScorer
from mastery_engine.core.mastery import AttemptSummary, MasteryEstimator, summarize_attempts
from mastery_engine.core.models import (
    AttemptRecord,
    DifficultyState,
    MasteryLevel,
    RankingCandidate,
    SchedulableItem,
    StreakState,
    Trend,
)
from mastery_engine.core.temporal import weighted_recency_mean
from mastery_engine.core.trend import TrendClassifier, TrendConfig

__all__ = [
    # Models
    "AttemptRecord",
    "SchedulableItem",
    "DifficultyState",
    "StreakState",
    "RankingCandidate",
    "MasteryLevel",
    "Trend",
    # Calculations
    "weighted_recency_mean",
    "MasteryEstimator",
    "AttemptSummary",
    "summarize_attempts",
    "ConfidenceScorer",
    "TrendClassifier",
    "TrendConfig",
]
