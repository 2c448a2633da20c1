"""Creature domain models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def rank(self) -> int:
        return RARITY_ORDER.index(self)

    def at_least(self, other: "Rarity") -> bool:
        return self.rank >= other.rank


RARITY_ORDER: tuple[Rarity, ...] = (
    Rarity.COMMON,
    Rarity.RARE,
    Rarity.EPIC,
    Rarity.LEGENDARY,
)


class PersonalityState(str, Enum):
    UNREQUESTED = "unrequested"
    PENDING = "pending"
    FILLED = "filled"


@dataclass(slots=True, frozen=True)
class Stats:
    hp: int = 0
    attack: int = 0
    defense: int = 0
    speed: int = 0

    def __post_init__(self) -> None:
        for name in ("hp", "attack", "defense", "speed"):
            if getattr(self, name) < 0:
                raise ValueError(f"Stat '{name}' cannot be negative")

    @property
    def total(self) -> int:
        return self.hp + self.attack + self.defense + self.speed


@dataclass(slots=True, frozen=True)
class Creature:
    """A single owned creature.

    Records are immutable; changes produce a replacement through
    ``dataclasses.replace`` and are committed by the inventory store.
    """

    id: str
    species_id: int
    name: str
    image_ref: str
    element_types: tuple[str, ...]
    stats: Stats
    rarity: Rarity
    is_shiny: bool = False
    personality: str | None = None
    obtained_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.element_types or len(self.element_types) > 2:
            raise ValueError(f"Creature {self.id} must have one or two element types")

    @property
    def primary_type(self) -> str:
        return self.element_types[0]


@dataclass(slots=True, frozen=True)
class FusionTier:
    input_rarity: Rarity
    output_rarity: Rarity


FUSION_TIERS: tuple[FusionTier, ...] = (
    FusionTier(Rarity.COMMON, Rarity.RARE),
    FusionTier(Rarity.RARE, Rarity.EPIC),
    FusionTier(Rarity.EPIC, Rarity.LEGENDARY),
)


def fusion_tier_for(rarity: Rarity) -> FusionTier | None:
    """Return the tier consuming ``rarity``, or None when there is no next tier."""
    for tier in FUSION_TIERS:
        if tier.input_rarity is rarity:
            return tier
    return None


IdFactory = Callable[[], str]


def new_creature_id() -> str:
    return str(uuid.uuid4())
