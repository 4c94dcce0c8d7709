"""
Spaced Repetition Scheduling.

Components:
- SM2Scheduler: SM-2 interval / ease-factor update
- performance_from_response: Timed response -> performance score
"""

from .sm2 import SM2Config, SM2Scheduler, performance_from_response

__all__ = [
    "SM2Config",
    "SM2Scheduler",
    "performance_from_response",
]
