"""
Adaptive Difficulty.

Components:
- DifficultyAdapter: Hysteresis-banded difficulty steps
"""
from mastery_engine.adaptive.difficulty import DifficultyAdapter, DifficultyConfig

__all__ = [
    "DifficultyAdapter",
    "DifficultyConfig",
]
