"""
Configuration settings for the mastery engine.

Uses Pydantic Settings for environment variable management with .env file support.
Every variable is prefixed with MASTERY_ENGINE_ (e.g. MASTERY_ENGINE_TREND_WINDOW=7).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mastery_engine.adaptive.difficulty import DifficultyConfig
from mastery_engine.core.trend import TrendConfig
from mastery_engine.scheduling.sm2 import SM2Config


class EngineSettings(BaseSettings):
    """Engine tuning parameters loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MASTERY_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Mastery
    # ========================================
    mastery_decay_rate: float = Field(
        default=0.05,
        gt=0,
        description="Exponential recency decay per day for mastery estimation",
    )
    mastery_threshold: float = Field(
        default=0.9,
        ge=0,
        le=1,
        description="Topic mastery needed to count towards mastery badges",
    )

    # ========================================
    # Spaced Repetition (SM-2)
    # ========================================
    sm2_initial_ease: float = Field(
        default=2.5,
        ge=1.3,
        description="Ease factor assigned to a never-reviewed item",
    )
    sm2_minimum_ease: float = Field(
        default=1.3,
        ge=1.3,
        description="Floor for the ease factor",
    )
    sm2_recall_threshold: float = Field(
        default=0.6,
        ge=0,
        le=1,
        description="Performance at or above which a review counts as recalled",
    )
    sm2_first_interval: int = Field(
        default=1,
        ge=1,
        description="Days until review after the first successful recall",
    )
    sm2_second_interval: int = Field(
        default=6,
        ge=1,
        description="Days until review after the second successful recall",
    )
    sm2_max_interval_days: int = Field(
        default=3650,
        ge=1,
        description="Upper bound on any review interval (days)",
    )

    # ========================================
    # Difficulty Adaptation
    # ========================================
    difficulty_min: float = Field(default=1.0, ge=1, le=5, description="Lowest difficulty level")
    difficulty_max: float = Field(default=5.0, ge=1, le=5, description="Highest difficulty level")
    difficulty_step: float = Field(
        default=0.5,
        gt=0,
        description="Amount a single adaptation moves the difficulty",
    )
    difficulty_raise_threshold: float = Field(
        default=0.8,
        ge=0,
        le=1,
        description="Performance at or above which difficulty goes up",
    )
    difficulty_lower_threshold: float = Field(
        default=0.4,
        ge=0,
        le=1,
        description="Performance below which difficulty goes down",
    )

    # ========================================
    # Confidence
    # ========================================
    confidence_time_weight: float = Field(
        default=0.3,
        ge=0,
        le=1,
        description="Share of the time factor in the confidence blend (rest is accuracy)",
    )

    # ========================================
    # Trend
    # ========================================
    trend_window: int = Field(
        default=5,
        ge=1,
        description="Number of recent attempts inspected by the trend classifier",
    )
    trend_improving_threshold: float = Field(
        default=0.7,
        ge=0,
        le=1,
        description="Window accuracy above which the trend is improving",
    )
    trend_declining_threshold: float = Field(
        default=0.4,
        ge=0,
        le=1,
        description="Window accuracy below which the trend is declining",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    @model_validator(mode="after")
    def check_orderings(self) -> EngineSettings:
        """Reject bounds and thresholds given in the wrong order."""
        if self.sm2_initial_ease < self.sm2_minimum_ease:
            raise ValueError("sm2_initial_ease must not be below sm2_minimum_ease")
        if self.sm2_second_interval > self.sm2_max_interval_days:
            raise ValueError("sm2_second_interval must not exceed sm2_max_interval_days")
        if self.difficulty_min >= self.difficulty_max:
            raise ValueError("difficulty_min must be below difficulty_max")
        if self.difficulty_lower_threshold > self.difficulty_raise_threshold:
            raise ValueError("difficulty_lower_threshold must not exceed difficulty_raise_threshold")
        if self.trend_declining_threshold > self.trend_improving_threshold:
            raise ValueError("trend_declining_threshold must not exceed trend_improving_threshold")
        return self

    def get_sm2_config(self) -> SM2Config:
        """Build the scheduler configuration."""
        return SM2Config(
            initial_easiness=self.sm2_initial_ease,
            minimum_easiness=self.sm2_minimum_ease,
            recall_threshold=self.sm2_recall_threshold,
            first_interval=self.sm2_first_interval,
            second_interval=self.sm2_second_interval,
            max_interval=self.sm2_max_interval_days,
        )

    def get_difficulty_config(self) -> DifficultyConfig:
        """Build the difficulty adapter configuration."""
        return DifficultyConfig(
            minimum=self.difficulty_min,
            maximum=self.difficulty_max,
            step=self.difficulty_step,
            raise_threshold=self.difficulty_raise_threshold,
            lower_threshold=self.difficulty_lower_threshold,
        )

    def get_trend_config(self) -> TrendConfig:
        """Build the trend classifier configuration."""
        return TrendConfig(
            window_size=self.trend_window,
            improving_threshold=self.trend_improving_threshold,
            declining_threshold=self.trend_declining_threshold,
        )


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
