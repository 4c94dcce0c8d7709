"""
Answer Confidence Scoring.

Blends time-on-task with the learner's track record. Both rushing and
dwelling lower the time factor.
"""

from __future__ import annotations

from mastery_engine.core.numeric import clamp
from mastery_engine.exceptions import require_non_negative, require_unit_interval


class ConfidenceScorer:
    """
    Confidence = w × time_factor + (1 - w) × accuracy

    time_factor = clamp(1 - |time_spent - avg_time| / max(avg_time, 1), 0, 1)
    """

    def __init__(self, time_weight: float = 0.3):
        self.time_weight = require_unit_interval("time_weight", time_weight)

    @staticmethod
    def time_factor(time_spent: float, avg_time: float) -> float:
        """
        Closeness of the response time to the item's average.

        An average of 0 (no history for the item) is treated as 1.
        """
        deviation = abs(time_spent - avg_time) / max(avg_time, 1.0)
        return clamp(1.0 - deviation, 0.0, 1.0)

    def score(self, time_spent: float, avg_time: float, accuracy: float) -> float:
        """
        Score confidence for an answer.

        Args:
            time_spent: Seconds spent on the question
            avg_time: Average seconds for this question
            accuracy: Learner's historical accuracy (0-1)

        Returns:
            Confidence between 0 and 1

        Raises:
            InvalidArgumentError: On negative times or accuracy outside [0, 1]
        """
        time_spent = require_non_negative("time_spent", time_spent)
        avg_time = require_non_negative("avg_time", avg_time)
        accuracy = require_unit_interval("accuracy", accuracy)

        blended = self.time_weight * self.time_factor(time_spent, avg_time) + (1 - self.time_weight) * accuracy
        # 0.3 + 0.7 can drift a hair past 1.0
        return clamp(blended, 0.0, 1.0)
