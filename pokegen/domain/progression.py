"""Collection score and trainer ranks."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from .creatures import Creature
from .economy import total_resell_value


@dataclass(slots=True, frozen=True)
class Rank:
    name: str
    min_score: int
    next_score: float = math.inf


RANKS: tuple[Rank, ...] = (
    Rank("Rookie", 0, 500),
    Rank("Trainer", 500, 2000),
    Rank("Collector", 2000, 5000),
    Rank("Ace", 5000, 12000),
    Rank("Elite", 12000, 25000),
    Rank("Champion", 25000, 50000),
    Rank("Master", 50000),
)


def collection_score(collection: Iterable[Creature]) -> int:
    return total_resell_value(collection)


def rank_for(score: float, ranks: Sequence[Rank] = RANKS) -> Rank:
    """Return the band containing ``score``; scores below the first band map to it."""
    for rank in ranks:
        if rank.min_score <= score < rank.next_score:
            return rank
    return ranks[0] if score < ranks[0].min_score else ranks[-1]


def progress_fraction(score: float, rank: Rank) -> float:
    if math.isinf(rank.next_score):
        return 1.0
    span = rank.next_score - rank.min_score
    return min(1.0, max(0.0, (score - rank.min_score) / span))


def next_rank(rank: Rank, ranks: Sequence[Rank] = RANKS) -> Rank | None:
    for candidate in ranks:
        if candidate.min_score == rank.next_score:
            return candidate
    return None


@dataclass(slots=True, frozen=True)
class ProgressReport:
    score: int
    rank: Rank
    progress: float
    next_rank: Rank | None


def progress_report(collection: Iterable[Creature], ranks: Sequence[Rank] = RANKS) -> ProgressReport:
    score = collection_score(collection)
    rank = rank_for(score, ranks)
    return ProgressReport(
        score=score,
        rank=rank,
        progress=progress_fraction(score, rank),
        next_rank=next_rank(rank, ranks),
    )
