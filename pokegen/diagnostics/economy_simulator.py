"""Economy simulation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ..app import GameApp
from ..domain.creatures import Creature, Rarity
from ..domain.economy import resell_value


@dataclass(slots=True)
class SimulationResult:
    pulls: int
    cost: int = 0
    rarities: Dict[Rarity, int] = field(default_factory=lambda: {rarity: 0 for rarity in Rarity})
    shinies: int = 0
    resell_total: int = 0

    def merge(self, creature: Creature) -> None:
        self.rarities[creature.rarity] += 1
        if creature.is_shiny:
            self.shinies += 1
        self.resell_total += resell_value(creature)

    @property
    def return_rate(self) -> float:
        """Resell credits recovered per credit spent."""
        return self.resell_total / self.cost if self.cost else 0.0


class EconomySimulator:
    """Monte-Carlo estimate of what pulls return, without touching the inventory."""

    def __init__(self, app: GameApp) -> None:
        self._app = app

    async def simulate(self, *, pulls: int = 100, batch_size: int = 10) -> SimulationResult:
        if pulls <= 0:
            raise ValueError("Pulls must be positive")
        result = SimulationResult(pulls=pulls, cost=pulls * self._app.config.gacha.pull_cost)
        remaining = pulls
        while remaining:
            size = min(batch_size, remaining)
            for creature in await self._app.acquisition.acquire_batch(size):
                result.merge(creature)
            remaining -= size
        return result
