"""
Daily Completion Streaks.

A streak is the number of consecutive calendar days with at least one
qualifying completion. Transitions (by calendar day of `now`):

- first completion ever        -> current = 1
- last completion yesterday    -> current + 1
- last completion 2+ days ago  -> current = 1 (reset)
- last completion today        -> unchanged (idempotent)

max_streak only ever grows. The caller serializes concurrent updates for the
same learner; the tracker holds no state of its own.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from loguru import logger

from mastery_engine.core.models import StreakState
from mastery_engine.core.temporal import calendar_day
from mastery_engine.exceptions import InvalidArgumentError


class StreakTracker:
    """Computes the next StreakState from (state, now)."""

    def advance(self, state: StreakState, now: date | datetime) -> StreakState:
        """
        Record a completion at `now`.

        Args:
            state: Current streak state
            now: Completion time; only its calendar day matters

        Returns:
            New StreakState with last_completed_at = today

        Raises:
            InvalidArgumentError: If now falls before last_completed_at
        """
        today = calendar_day(now)
        last = state.last_completed_at
        if isinstance(last, datetime):
            last = last.date()

        if last is None:
            current = 1
        elif today < last:
            raise InvalidArgumentError(
                "now", f"{today.isoformat()} is before last completion {last.isoformat()}"
            )
        elif today == last:
            return state
        elif today - last == timedelta(days=1):
            current = state.current_streak + 1
        else:
            logger.debug(f"Streak of {state.current_streak} broken after {(today - last).days} days")
            current = 1

        new_state = StreakState(
            current_streak=current,
            max_streak=max(state.max_streak, current),
            last_completed_at=today,
        )
        logger.debug(
            f"Streak advanced to {new_state.current_streak} (best {new_state.max_streak}) on {today.isoformat()}"
        )
        return new_state


def rebuild_streak(
    completion_days: Iterable[date | datetime],
    today: date | datetime,
) -> StreakState:
    """
    Recompute a streak from a full completion history.

    Used to repair a stored StreakState (e.g. after a lost update). Several
    completions on one day count once. The current streak is anchored on
    today if there was a completion today, otherwise on yesterday; anything
    older means the streak is broken.

    Args:
        completion_days: Completion dates or datetimes, any order
        today: Reference day

    Returns:
        StreakState with current and longest streak

    Raises:
        InvalidArgumentError: If a completion lies after today
    """
    today = calendar_day(today, "today")
    days = sorted({calendar_day(d, "completion_days") for d in completion_days})
    if not days:
        return StreakState()
    if days[-1] > today:
        raise InvalidArgumentError("completion_days", f"{days[-1].isoformat()} is after {today.isoformat()}")

    longest = run = 1
    for previous, current in zip(days, days[1:]):
        run = run + 1 if current - previous == timedelta(days=1) else 1
        longest = max(longest, run)

    active = set(days)
    anchor = today if today in active else today - timedelta(days=1)
    current_streak = 0
    while anchor in active:
        current_streak += 1
        anchor -= timedelta(days=1)

    return StreakState(
        current_streak=current_streak,
        max_streak=longest,
        last_completed_at=days[-1],
    )
