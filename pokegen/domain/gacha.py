"""Summoning: spend credits, acquire creatures."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Sequence

from .acquisition import AcquisitionService
from .creatures import Creature
from .events import EventBus
from .exceptions import InsufficientCredits, OperationInProgress
from .inventory import InventoryStore
from ..config import GachaConfig

logger = logging.getLogger(__name__)

PULL_COMPLETED = "gacha.pull.completed"


@dataclass(slots=True)
class PullResult:
    creatures: Sequence[Creature]
    cost: int
    credits_after: int


class GachaEngine:
    """Run pulls against the inventory store, one at a time."""

    def __init__(
        self,
        store: InventoryStore,
        acquisition: AcquisitionService,
        config: GachaConfig,
        event_bus: EventBus,
    ) -> None:
        self._store = store
        self._acquisition = acquisition
        self._config = config
        self._event_bus = event_bus
        self._pulling = False

    @property
    def is_pulling(self) -> bool:
        return self._pulling

    def cost_for(self, count: int) -> int:
        if count <= 0:
            raise ValueError("Count must be positive")
        return count * self._config.pull_cost

    def can_pull(self, count: int) -> bool:
        return not self._pulling and self._store.can_afford(self.cost_for(count))

    async def pull(self, count: int = 1) -> PullResult:
        """Debit the cost up front, then acquire ``count`` creatures.

        Accepted pulls are never refunded.
        """
        cost = self.cost_for(count)
        if self._pulling:
            raise OperationInProgress("A pull is already in progress")
        if not self._store.can_afford(cost):
            logger.info("Pull of %s rejected: %s credits available.", count, self._store.credits)
            raise InsufficientCredits(cost, self._store.credits)

        self._pulling = True
        try:
            await self._store.debit(cost)
            creatures, _ = await asyncio.gather(
                self._acquisition.acquire_batch(count),
                asyncio.sleep(self._config.min_pull_seconds),
            )
            await self._store.add_creatures(creatures)
        finally:
            self._pulling = False

        await self._event_bus.publish(
            PULL_COMPLETED,
            {
                "count": count,
                "cost": cost,
                "creatures": [creature.id for creature in creatures],
            },
        )
        return PullResult(creatures=tuple(creatures), cost=cost, credits_after=self._store.credits)
