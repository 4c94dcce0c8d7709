"""
Unit tests for trend classification.
"""

import random

import pytest

from mastery_engine.core.models import AttemptRecord, Trend
from mastery_engine.core.trend import TrendClassifier, TrendConfig
from mastery_engine.exceptions import InvalidArgumentError


class TestTrendClassifier:
    """Tests for classifying the latest window of attempts."""

    def setup_method(self):
        self.classifier = TrendClassifier()

    def _history(self, make_attempt, outcomes):
        """Oldest first: the last outcome is the most recent attempt."""
        count = len(outcomes)
        return [make_attempt(correct, days_ago=count - i) for i, correct in enumerate(outcomes)]

    def test_too_few_attempts(self, make_attempt):
        attempts = self._history(make_attempt, [True] * 4)
        assert self.classifier.classify(attempts) is Trend.INSUFFICIENT_DATA

    def test_empty_history(self):
        assert self.classifier.classify([]) is Trend.INSUFFICIENT_DATA

    @pytest.mark.parametrize(
        "outcomes,expected",
        [
            ([True] * 5, Trend.IMPROVING),
            ([True, True, True, True, False], Trend.IMPROVING),  # 0.8
            ([True, True, True, False, False], Trend.STABLE),  # 0.6
            ([True, True, False, False, False], Trend.STABLE),  # 0.4, not below
            ([True, False, False, False, False], Trend.DECLINING),  # 0.2
            ([False] * 5, Trend.DECLINING),
        ],
    )
    def test_thresholds(self, make_attempt, outcomes, expected):
        assert self.classifier.classify(self._history(make_attempt, outcomes)) is expected

    def test_exactly_improving_threshold_is_stable(self, make_attempt):
        outcomes = [True] * 7 + [False] * 3
        attempts = self._history(make_attempt, outcomes)
        assert self.classifier.classify(attempts, window_size=10) is Trend.STABLE

    def test_only_latest_window_counts(self, make_attempt):
        outcomes = [False] * 10 + [True] * 5
        attempts = self._history(make_attempt, outcomes)
        assert self.classifier.classify(attempts) is Trend.IMPROVING

    def test_window_chosen_by_timestamp_not_position(self, make_attempt):
        outcomes = [False] * 10 + [True] * 5
        attempts = self._history(make_attempt, outcomes)
        random.Random(7).shuffle(attempts)
        assert self.classifier.classify(attempts) is Trend.IMPROVING

    def test_window_override(self, make_attempt):
        attempts = self._history(make_attempt, [True, True, False])
        assert self.classifier.classify(attempts, window_size=3) is Trend.STABLE
        assert self.classifier.classify(attempts, window_size=1) is Trend.DECLINING

    def test_configured_window(self, make_attempt):
        classifier = TrendClassifier(TrendConfig(window_size=3))
        attempts = self._history(make_attempt, [True] * 3)
        assert classifier.classify(attempts) is Trend.IMPROVING

    @pytest.mark.parametrize("window_size", [0, -2, 2.5, True])
    def test_invalid_window(self, make_attempt, window_size):
        with pytest.raises(InvalidArgumentError):
            self.classifier.classify([make_attempt(True)], window_size=window_size)

    def test_invalid_configured_window(self):
        with pytest.raises(InvalidArgumentError):
            TrendClassifier(TrendConfig(window_size=0))

    def test_non_bool_outcome_rejected(self, make_attempt, now):
        attempts = self._history(make_attempt, [True] * 4) + [AttemptRecord(is_correct="false", timestamp=now)]
        with pytest.raises(InvalidArgumentError) as exc_info:
            self.classifier.classify(attempts)
        assert exc_info.value.argument == "is_correct"

    def test_malformed_record_rejected_on_short_history(self, now):
        with pytest.raises(InvalidArgumentError) as exc_info:
            self.classifier.classify([AttemptRecord(is_correct=True, timestamp="yesterday")])
        assert exc_info.value.argument == "timestamp"
