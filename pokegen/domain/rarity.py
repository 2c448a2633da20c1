"""Rarity classification from base stats, experience and types."""

from __future__ import annotations

from typing import Iterable, Mapping

from .creatures import Rarity, Stats

DEFAULT_BASE_EXPERIENCE = 100
EXPERIENCE_WEIGHT = 1.2

TYPE_BONUSES: Mapping[str, int] = {
    "dragon": 40,
    "ghost": 25,
    "psychic": 25,
    "steel": 25,
    "fairy": 25,
    "fire": 15,
    "ice": 15,
    "electric": 15,
}

# Strict lower bounds, checked from the top tier down.
RARITY_THRESHOLDS: tuple[tuple[Rarity, float], ...] = (
    (Rarity.LEGENDARY, 800.0),
    (Rarity.EPIC, 600.0),
    (Rarity.RARE, 350.0),
)


def type_bonus(element_types: Iterable[str]) -> int:
    return max((TYPE_BONUSES.get(name, 0) for name in element_types), default=0)


def rarity_score(
    stats: Stats,
    base_experience: int | None = DEFAULT_BASE_EXPERIENCE,
    element_types: Iterable[str] = (),
) -> float:
    if base_experience is None:
        base_experience = DEFAULT_BASE_EXPERIENCE
    return stats.total + base_experience * EXPERIENCE_WEIGHT + type_bonus(element_types)


def rarity_for_score(score: float) -> Rarity:
    for rarity, threshold in RARITY_THRESHOLDS:
        if score > threshold:
            return rarity
    return Rarity.COMMON


def classify_rarity(
    stats: Stats,
    base_experience: int | None = DEFAULT_BASE_EXPERIENCE,
    element_types: Iterable[str] = (),
) -> Rarity:
    return rarity_for_score(rarity_score(stats, base_experience, element_types))
