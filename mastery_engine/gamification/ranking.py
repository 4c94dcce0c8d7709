"""
Leaderboard Ranking.

Orders a bounded candidate snapshot by score, breaking ties with the
candidate's secondary key (lower wins, so the earlier achiever ranks higher).
The sort is stable, so unchanged input always yields the same ordering.

Also keeps the running per-participant aggregate a leaderboard row is built
from (test count, total score, rounded average).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime

from loguru import logger

from mastery_engine.core.models import RankingCandidate
from mastery_engine.core.numeric import round_half_up
from mastery_engine.exceptions import InvalidArgumentError, require_number


@dataclass(frozen=True)
class RankPosition:
    """One participant's standing."""

    rank: int  # 1-based
    percentile: int  # 0-100, 100 = top
    total: int


@dataclass(frozen=True)
class RankingResult:
    """Sorted leaderboard plus the optional target's standing."""

    ordered: list[RankingCandidate] = field(default_factory=list)
    ranks: dict[str, int] = field(default_factory=dict)
    rank_of: RankPosition | None = None

    def position(self, candidate_id: str) -> RankPosition | None:
        """Standing of any candidate in the result."""
        rank = self.ranks.get(candidate_id)
        if rank is None:
            return None
        total = len(self.ordered)
        return RankPosition(rank=rank, percentile=percentile(rank, total), total=total)


def percentile(rank: int, total: int) -> int:
    """
    Percentile for a 1-based rank: highest scorer = rank 1 = percentile 100.

    Formula: round((total - rank) / (total - 1) × 100), 100 when total <= 1
    """
    if total <= 1:
        return 100
    if not 1 <= rank <= total:
        raise InvalidArgumentError("rank", f"must be within [1, {total}], got {rank!r}")
    return round_half_up((total - rank) / (total - 1) * 100)


class RankingEngine:
    """Ranks a leaderboard snapshot."""

    def rank(
        self,
        candidates: Sequence[RankingCandidate],
        target_id: str | None = None,
    ) -> RankingResult:
        """
        Rank candidates.

        Args:
            candidates: Leaderboard snapshot
            target_id: Participant whose rank and percentile to report

        Returns:
            RankingResult; rank_of is None when target_id is absent

        Raises:
            InvalidArgumentError: On duplicate ids, non-numeric scores or
                secondary keys that cannot be compared
        """
        seen: set[str] = set()
        for candidate in candidates:
            require_number("score", candidate.score)
            if candidate.id in seen:
                raise InvalidArgumentError("candidates", f"duplicate candidate id {candidate.id!r}")
            seen.add(candidate.id)

        try:
            ordered = sorted(candidates, key=RankingCandidate.sort_key)
        except TypeError as exc:
            raise InvalidArgumentError("candidates", f"secondary keys are not mutually comparable: {exc}") from exc
        ranks = {candidate.id: index for index, candidate in enumerate(ordered, start=1)}
        result = RankingResult(ordered=ordered, ranks=ranks)
        if target_id is None:
            return result

        position = result.position(target_id)
        if position is None:
            logger.debug(f"Ranking target {target_id!r} not among {len(ordered)} candidates")
        return replace(result, rank_of=position)


# ============================================================================
# Leaderboard Entries
# ============================================================================


@dataclass(frozen=True)
class LeaderboardEntry:
    """Running score aggregate for one participant."""

    participant_id: str
    test_count: int = 0
    total_score: float = 0.0
    average_score: int = 0
    last_updated: datetime | None = None

    def to_candidate(self) -> RankingCandidate:
        """Rank on total score; the earlier last update wins ties."""
        return RankingCandidate(
            id=self.participant_id,
            score=self.total_score,
            secondary_key=(self.last_updated is not None, self.last_updated),
        )


def record_score(
    entry: LeaderboardEntry | None,
    score: float,
    now: datetime,
    participant_id: str | None = None,
) -> LeaderboardEntry:
    """
    Fold one completed test's score into a leaderboard entry.

    Args:
        entry: Current entry (None starts a new one)
        score: Test score (0-100)
        now: Completion time, stored as the tie-break key
        participant_id: Required when entry is None

    Returns:
        Updated LeaderboardEntry
    """
    score = require_number("score", score)
    if score < 0 or score > 100:
        raise InvalidArgumentError("score", f"must be within [0, 100], got {score!r}")

    if entry is None:
        if participant_id is None:
            raise InvalidArgumentError("participant_id", "required when starting a new entry")
        entry = LeaderboardEntry(participant_id=participant_id)

    test_count = entry.test_count + 1
    total_score = entry.total_score + score
    return LeaderboardEntry(
        participant_id=entry.participant_id,
        test_count=test_count,
        total_score=total_score,
        average_score=round_half_up(total_score / test_count),
        last_updated=now,
    )
