"""Turn provider records into freshly acquired creatures."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from random import Random
from typing import Callable

from .creatures import Creature, IdFactory, Rarity, Stats, new_creature_id
from .rarity import classify_rarity
from ..config import ProviderConfig
from ..providers.base import ARTWORK_URL, CreatureDataProvider, ProviderFailure, ProviderPayload

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

FALLBACK_SPECIES_ID = 25


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def fallback_creature(creature_id: str, obtained_at: datetime) -> Creature:
    """The fixed low-tier creature handed out when the provider fails."""
    return Creature(
        id=creature_id,
        species_id=FALLBACK_SPECIES_ID,
        name="pikachu",
        image_ref=ARTWORK_URL.format(species_id=FALLBACK_SPECIES_ID),
        element_types=("electric",),
        stats=Stats(hp=35, attack=55, defense=40, speed=90),
        rarity=Rarity.RARE,
        is_shiny=False,
        obtained_at=obtained_at,
    )


class AcquisitionService:
    """Acquire random creatures from the data provider.

    ``acquire_one`` never raises for provider problems; any failure yields
    :func:`fallback_creature` instead.
    """

    def __init__(
        self,
        provider: CreatureDataProvider,
        config: ProviderConfig,
        *,
        rng: Random | None = None,
        id_factory: IdFactory = new_creature_id,
        clock: Clock = _utcnow,
    ) -> None:
        self._provider = provider
        self._config = config
        self._rng = rng or Random()
        self._id_factory = id_factory
        self._clock = clock

    @property
    def id_factory(self) -> IdFactory:
        return self._id_factory

    async def acquire_one(self) -> Creature:
        species_id = self._rng.randint(1, self._config.catalog_size)
        # The shiny roll is independent of the provider outcome.
        is_shiny = self._rng.random() < self._config.shiny_chance
        try:
            payload = await self._provider.fetch(species_id)
        except ProviderFailure as exc:
            logger.warning("Provider failed for species %s: %s", species_id, exc)
            return fallback_creature(self._id_factory(), self._clock())
        except Exception:  # pragma: no cover - safeguard for third-party providers
            logger.exception("Unexpected provider error for species %s.", species_id)
            return fallback_creature(self._id_factory(), self._clock())
        try:
            return self.build_creature(payload, is_shiny=is_shiny)
        except (ValueError, TypeError) as exc:
            logger.warning("Provider sent an unusable record for species %s: %s", species_id, exc)
            return fallback_creature(self._id_factory(), self._clock())

    async def acquire_batch(self, count: int) -> list[Creature]:
        if count <= 0:
            raise ValueError("Count must be positive")
        return list(await asyncio.gather(*(self.acquire_one() for _ in range(count))))

    def build_creature(self, payload: ProviderPayload, *, is_shiny: bool) -> Creature:
        stats = Stats(
            hp=payload.stats.get("hp", 0),
            attack=payload.stats.get("attack", 0),
            defense=payload.stats.get("defense", 0),
            speed=payload.stats.get("speed", 0),
        )
        image = payload.image or ARTWORK_URL.format(species_id=payload.species_id)
        if is_shiny and payload.shiny_image:
            image = payload.shiny_image
        return Creature(
            id=self._id_factory(),
            species_id=payload.species_id,
            name=payload.name,
            image_ref=image,
            element_types=payload.types,
            stats=stats,
            rarity=classify_rarity(stats, payload.base_experience, payload.types),
            is_shiny=is_shiny,
            obtained_at=self._clock(),
        )
