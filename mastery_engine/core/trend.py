"""
Performance Trend Classification.

Labels the most recent window of attempts as improving, declining or stable.
Too short a history is reported as Trend.INSUFFICIENT_DATA, an output value
the caller branches on rather than an error.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mastery_engine.core.models import AttemptRecord, Trend, check_attempt
from mastery_engine.core.temporal import as_utc
from mastery_engine.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class TrendConfig:
    """Configuration for trend classification."""

    window_size: int = 5
    improving_threshold: float = 0.7  # Accuracy strictly above -> improving
    declining_threshold: float = 0.4  # Accuracy strictly below -> declining


class TrendClassifier:
    """Classifies the accuracy of the last N attempts."""

    def __init__(self, config: TrendConfig | None = None):
        self.config = config or TrendConfig()
        _check_window(self.config.window_size)

    def classify(
        self,
        attempts: Sequence[AttemptRecord],
        window_size: int | None = None,
    ) -> Trend:
        """
        Classify recent performance.

        Args:
            attempts: Attempt history; the latest by timestamp form the window
            window_size: Override for the configured window

        Returns:
            Trend label

        Raises:
            InvalidArgumentError: On a bad window size or a malformed attempt record
        """
        window = self.config.window_size if window_size is None else window_size
        _check_window(window)
        for attempt in attempts:
            check_attempt(attempt)

        if len(attempts) < window:
            return Trend.INSUFFICIENT_DATA

        # sorted() is stable, so equal timestamps keep the caller's order
        recent = sorted(attempts, key=lambda a: as_utc(a.timestamp))[-window:]
        accuracy = sum(1 for a in recent if a.is_correct) / window

        if accuracy > self.config.improving_threshold:
            return Trend.IMPROVING
        if accuracy < self.config.declining_threshold:
            return Trend.DECLINING
        return Trend.STABLE


def _check_window(window_size: int) -> None:
    if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
        raise InvalidArgumentError("window_size", f"must be a positive integer, got {window_size!r}")
