"""PokeGen acquisition and progression engine public API."""

from .app import GameApp
from .config import PokeGenConfig
from .domain.creatures import Creature, Rarity, Stats
from .domain.inventory import InventoryStore, SortKey

__all__ = [
    "GameApp",
    "PokeGenConfig",
    "Creature",
    "Rarity",
    "Stats",
    "InventoryStore",
    "SortKey",
]
