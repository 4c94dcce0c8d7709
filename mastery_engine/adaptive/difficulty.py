"""
Difficulty Adaptation.

Nudges a continuous difficulty level by fixed steps. Performance inside the
hysteresis band [lower, raise) leaves the level alone, so borderline results
do not flip the difficulty back and forth.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from mastery_engine.core.models import DifficultyState
from mastery_engine.core.numeric import clamp
from mastery_engine.exceptions import InvalidArgumentError, require_number, require_unit_interval


@dataclass(frozen=True)
class DifficultyConfig:
    """Configuration for difficulty adaptation."""

    minimum: float = 1.0
    maximum: float = 5.0
    step: float = 0.5
    raise_threshold: float = 0.8  # performance >= this -> harder
    lower_threshold: float = 0.4  # performance < this -> easier


class DifficultyAdapter:
    """Moves difficulty one step up or down based on performance."""

    def __init__(self, config: DifficultyConfig | None = None):
        self.config = config or DifficultyConfig()

    def check_level(self, level: float) -> float:
        """Validate a difficulty level against the configured range."""
        level = require_number("level", level)
        if not self.config.minimum <= level <= self.config.maximum:
            raise InvalidArgumentError(
                "level",
                f"must be within [{self.config.minimum}, {self.config.maximum}], got {level!r}",
            )
        return level

    def adapt(self, level: float, performance: float) -> float:
        """
        Calculate next difficulty level.

        Args:
            level: Current difficulty (1-5)
            performance: Performance score (0-1)

        Returns:
            New difficulty level, rounded to one decimal

        Raises:
            InvalidArgumentError: If level or performance is out of range
        """
        level = self.check_level(level)
        performance = require_unit_interval("performance", performance)

        if performance >= self.config.raise_threshold:
            new_level = clamp(level + self.config.step, self.config.minimum, self.config.maximum)
        elif performance < self.config.lower_threshold:
            new_level = clamp(level - self.config.step, self.config.minimum, self.config.maximum)
        else:
            new_level = level

        new_level = round(new_level, 1)
        if new_level != level:
            logger.debug(f"Difficulty {level} -> {new_level} (performance={performance:.2f})")
        return new_level

    def adapt_state(self, state: DifficultyState, performance: float) -> DifficultyState:
        """State-object form of adapt()."""
        return DifficultyState(level=self.adapt(state.level, performance))
