"""Fusion: three creatures of one tier become one of the next tier."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Sequence

from .acquisition import AcquisitionService
from .creatures import Creature, FusionTier, IdFactory, Rarity, Stats, fusion_tier_for
from .economy import resell_value
from .events import EventBus
from .exceptions import InvalidFusionSelection, OperationInProgress
from .inventory import InventoryStore
from ..config import FusionConfig

logger = logging.getLogger(__name__)

FUSION_COMPLETED = "fusion.completed"
FUSION_SIZE = 3


@dataclass(slots=True, frozen=True)
class FusionDraw:
    creature: Creature
    attempts: int
    boosted: bool


@dataclass(slots=True, frozen=True)
class FusionResult:
    consumed: tuple[Creature, ...]
    tier: FusionTier
    creature: Creature
    attempts: int
    boosted: bool


def boost_creature(
    creature: Creature,
    min_rarity: Rarity,
    *,
    stat_boost: int,
    id_factory: IdFactory,
) -> Creature:
    """Raise attack and hp, force the rarity and issue a fresh id."""
    stats = creature.stats
    return replace(
        creature,
        id=id_factory(),
        stats=Stats(
            hp=stats.hp + stat_boost,
            attack=stats.attack + stat_boost,
            defense=stats.defense,
            speed=stats.speed,
        ),
        rarity=min_rarity,
    )


class FusionEngine:
    """Fuse creatures from the inventory store, one fusion at a time."""

    def __init__(
        self,
        store: InventoryStore,
        acquisition: AcquisitionService,
        config: FusionConfig,
        event_bus: EventBus,
    ) -> None:
        if config.max_attempts <= 0:
            raise ValueError("Fusion needs at least one attempt")
        self._store = store
        self._acquisition = acquisition
        self._config = config
        self._event_bus = event_bus
        self._fusing = False

    @property
    def is_fusing(self) -> bool:
        return self._fusing

    def validate_selection(self, creature_ids: Sequence[str]) -> FusionTier:
        """Return the tier for a valid selection or raise InvalidFusionSelection."""
        if len(creature_ids) != FUSION_SIZE:
            raise InvalidFusionSelection(
                f"Fusion needs exactly {FUSION_SIZE} creatures, got {len(creature_ids)}"
            )
        if len(set(creature_ids)) != FUSION_SIZE:
            raise InvalidFusionSelection("Fusion creatures must be distinct")

        creatures = []
        for creature_id in creature_ids:
            creature = self._store.get(creature_id)
            if creature is None:
                raise InvalidFusionSelection(f"Creature {creature_id} is not in the collection")
            if self._store.is_reserved(creature_id):
                raise InvalidFusionSelection(f"Creature {creature_id} is already being fused")
            creatures.append(creature)

        rarities = {creature.rarity for creature in creatures}
        if len(rarities) != 1:
            raise InvalidFusionSelection("Fusion creatures must share one rarity")
        (rarity,) = rarities
        tier = fusion_tier_for(rarity)
        if tier is None:
            raise InvalidFusionSelection(f"No fusion tier beyond {rarity.value}")
        return tier

    async def fuse(self, creature_ids: Sequence[str]) -> FusionResult:
        if self._fusing:
            raise OperationInProgress("A fusion is already in progress")
        tier = self.validate_selection(creature_ids)
        consumed = tuple(self._store.require(creature_id) for creature_id in creature_ids)

        self._fusing = True
        self._store.reserve(creature_ids)
        try:
            _, draw = await asyncio.gather(
                asyncio.sleep(self._config.min_fusion_seconds),
                self.acquire_with_min_rarity(tier.output_rarity),
            )
            await self._store.apply_fusion(creature_ids, draw.creature)
        finally:
            self._store.unreserve(creature_ids)
            self._fusing = False

        logger.info(
            "Fused %s %s creatures into %s after %s attempt(s)%s.",
            FUSION_SIZE,
            tier.input_rarity.value,
            draw.creature.rarity.value,
            draw.attempts,
            " with boost" if draw.boosted else "",
        )
        await self._event_bus.publish(
            FUSION_COMPLETED,
            {
                "consumed": list(creature_ids),
                "result": draw.creature.id,
                "rarity": draw.creature.rarity.value,
                "boosted": draw.boosted,
            },
        )
        return FusionResult(
            consumed=consumed,
            tier=tier,
            creature=draw.creature,
            attempts=draw.attempts,
            boosted=draw.boosted,
        )

    async def acquire_with_min_rarity(self, min_rarity: Rarity) -> FusionDraw:
        """Draw until a creature reaches ``min_rarity``, boosting the best miss otherwise."""
        misses: list[Creature] = []
        for attempt in range(1, self._config.max_attempts + 1):
            candidate = await self._acquisition.acquire_one()
            if candidate.rarity.at_least(min_rarity):
                return FusionDraw(creature=candidate, attempts=attempt, boosted=False)
            misses.append(candidate)

        # max keeps the earliest of equally valuable misses.
        best = max(misses, key=resell_value)
        logger.debug(
            "No natural %s draw in %s attempts; boosting.",
            min_rarity.value,
            self._config.max_attempts,
        )
        boosted = boost_creature(
            best,
            min_rarity,
            stat_boost=self._config.stat_boost,
            id_factory=self._acquisition.id_factory,
        )
        return FusionDraw(creature=boosted, attempts=self._config.max_attempts, boosted=True)
