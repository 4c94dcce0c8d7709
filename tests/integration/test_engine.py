"""
Integration tests for the engine facade and the review pipeline.

These run several components together through the same functions the API
layer calls.
"""

import math
import sys
from datetime import date, timedelta

import pytest
from loguru import logger
from pydantic import ValidationError

import mastery_engine
from mastery_engine import (
    AggregateStats,
    AttemptRecord,
    MasteryLevel,
    RankingCandidate,
    SchedulableItem,
    StreakState,
    Trend,
    review_item,
)
from mastery_engine.config import EngineSettings
from mastery_engine.log import configure_logging


class TestFacade:
    """Tests for the boundary functions."""

    def test_estimate_mastery(self, make_attempt, now):
        attempts = [make_attempt(True, 0), make_attempt(True, 1), make_attempt(False, 2)]
        mastery = mastery_engine.estimate_mastery(attempts, now=now)
        weights = [1, math.exp(-0.05), math.exp(-0.1)]
        assert mastery == pytest.approx(sum(weights[:2]) / sum(weights))

    def test_estimate_mastery_decay_override(self, make_attempt, now):
        attempts = [make_attempt(True, 0), make_attempt(False, 10)]
        default = mastery_engine.estimate_mastery(attempts, now=now)
        steep = mastery_engine.estimate_mastery(attempts, decay_rate=1.0, now=now)
        assert steep > default

    def test_schedule_next_review(self, today):
        item = SchedulableItem(interval_days=6, repetitions=2, ease_factor=2.5)
        result = mastery_engine.schedule_next_review(item, 0.9, today)
        assert result.interval_days == 15
        assert result.due_date == today + timedelta(days=15)

    def test_settings_reach_the_facade(self, monkeypatch, today):
        monkeypatch.setenv("MASTERY_ENGINE_SM2_MAX_INTERVAL_DAYS", "10")
        item = SchedulableItem(interval_days=6, repetitions=2, ease_factor=2.5)
        assert mastery_engine.schedule_next_review(item, 0.9, today).interval_days == 10

    def test_adapt_difficulty(self):
        assert mastery_engine.adapt_difficulty(3.0, 0.85) == 3.5

    def test_score_confidence(self):
        assert mastery_engine.score_confidence(15, 10, 0.5) == pytest.approx(0.5)

    def test_classify_trend(self, make_attempt):
        attempts = [make_attempt(True, days) for days in range(5)]
        assert mastery_engine.classify_trend(attempts) is Trend.IMPROVING
        assert mastery_engine.classify_trend(attempts, window_size=6) is Trend.INSUFFICIENT_DATA

    def test_advance_streak(self):
        state = mastery_engine.advance_streak(StreakState(), date(2024, 6, 15))
        assert state.current_streak == 1

    def test_rank(self):
        result = mastery_engine.rank(
            [RankingCandidate("a", 10), RankingCandidate("b", 30), RankingCandidate("c", 20)],
            target_id="c",
        )
        assert result.rank_of.rank == 2
        assert result.rank_of.percentile == 50

    def test_evaluate_badges(self):
        stats = AggregateStats(completed_count=10, topic_mastery={"a": 0.9, "b": 0.95, "c": 0.99})
        assert mastery_engine.evaluate_badges(stats) == ["decathlon", "triple-mastery"]
        assert mastery_engine.evaluate_badges(stats, held_badge_ids={"decathlon"}) == ["triple-mastery"]

    def test_invalid_argument_surfaces(self):
        with pytest.raises(mastery_engine.InvalidArgumentError):
            mastery_engine.adapt_difficulty(3.0, 2.0)

    def test_string_outcome_is_not_counted_correct(self, now):
        with pytest.raises(mastery_engine.InvalidArgumentError):
            mastery_engine.estimate_mastery([AttemptRecord(is_correct="false", timestamp=now)], now=now)

    def test_ease_floor_cannot_be_configured_away(self, monkeypatch, today):
        monkeypatch.setenv("MASTERY_ENGINE_SM2_MINIMUM_EASE", "1.0")
        with pytest.raises(ValidationError):
            mastery_engine.schedule_next_review(SchedulableItem(1, 1, 1.3), 0.0, today)

    def test_incomparable_tie_keys_surface_as_invalid_argument(self, now):
        candidates = [RankingCandidate("a", 10, now), RankingCandidate("b", 10)]
        with pytest.raises(mastery_engine.InvalidArgumentError):
            mastery_engine.rank(candidates)


class TestReviewItem:
    """Tests for the attempt-driven pipeline."""

    def test_short_history_keeps_difficulty(self, make_attempt, now, today):
        attempts = [make_attempt(True, 1, time_spent=10), make_attempt(True, 0, time_spent=10)]
        outcome = review_item(attempts, SchedulableItem(), 3.0, time_spent=10, avg_time=10, today=today, now=now)

        assert outcome.trend is Trend.INSUFFICIENT_DATA
        assert outcome.difficulty == 3.0
        assert outcome.mastery == pytest.approx(1.0)
        assert outcome.mastery_level is MasteryLevel.MASTERED
        assert outcome.confidence == pytest.approx(1.0)
        assert outcome.item.repetitions == 1
        assert outcome.item.interval_days == 1
        assert outcome.item.due_date == today + timedelta(days=1)

    def test_strong_history_raises_difficulty(self, make_attempt, now, today):
        attempts = [make_attempt(True, days) for days in range(5)]
        outcome = review_item(attempts, SchedulableItem(), 3.0, time_spent=20, avg_time=10, today=today, now=now)

        assert outcome.trend is Trend.IMPROVING
        assert outcome.difficulty == 3.5
        assert outcome.accuracy == 1.0
        assert outcome.confidence == pytest.approx(0.7)
        assert outcome.item.repetitions == 1
        assert outcome.item.ease_factor == pytest.approx(2.435)

    def test_weak_history_lowers_difficulty_and_resets(self, make_attempt, now, today):
        attempts = [make_attempt(False, days) for days in range(5)]
        item = SchedulableItem(interval_days=15, repetitions=3, ease_factor=2.5)
        outcome = review_item(attempts, item, 3.0, time_spent=10, avg_time=10, today=today, now=now)

        assert outcome.trend is Trend.DECLINING
        assert outcome.mastery == 0.0
        assert outcome.mastery_level is MasteryLevel.NOT_STARTED
        assert outcome.difficulty == 2.5
        assert outcome.confidence == pytest.approx(0.3)
        assert outcome.item.repetitions == 0
        assert outcome.item.interval_days == 1

    def test_explicit_settings(self, make_attempt, now, today):
        settings = EngineSettings(_env_file=None, trend_window=2)
        attempts = [make_attempt(True, 1), make_attempt(True, 0)]
        outcome = review_item(
            attempts, SchedulableItem(), 3.0, time_spent=10, avg_time=10, today=today, now=now, settings=settings
        )
        assert outcome.trend is Trend.IMPROVING
        assert outcome.difficulty == 3.5

    def test_invalid_difficulty_rejected_on_short_history(self, now, today):
        attempt = AttemptRecord(is_correct=True, timestamp=now)
        with pytest.raises(mastery_engine.InvalidArgumentError):
            review_item([attempt], SchedulableItem(), 7.0, time_spent=10, avg_time=10, today=today, now=now)


class TestLogging:
    """Tests for loguru sink configuration."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        yield
        logger.remove()
        logger.add(sys.stderr)

    def test_file_sink(self, tmp_path, make_attempt, now):
        log_path = tmp_path / "engine.log"
        configure_logging(EngineSettings(_env_file=None, log_level="DEBUG", log_file=str(log_path)))

        mastery_engine.estimate_mastery([make_attempt(True)], now=now)
        logger.remove()

        content = log_path.read_text(encoding="utf-8")
        assert "Logging configured at DEBUG" in content
        assert "Mastery 1.000 from 1 attempts" in content

    def test_level_filters_debug(self, tmp_path, make_attempt, now):
        log_path = tmp_path / "engine.log"
        configure_logging(EngineSettings(_env_file=None, log_level="WARNING", log_file=str(log_path)))

        mastery_engine.estimate_mastery([make_attempt(True)], now=now)
        logger.remove()

        assert "Mastery" not in log_path.read_text(encoding="utf-8")
