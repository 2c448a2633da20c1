"""Credit balance and owned-creature collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Collection, Iterable, Iterator, Mapping, Sequence

from .creatures import Creature, Rarity
from .economy import Wallet, resell_value
from .events import EventBus
from .exceptions import CreatureLocked, CreatureNotFound
from .progression import ProgressReport, progress_report
from ..loaders.save_data import dump_collection, parse_collection, parse_credits
from ..storage.base import COLLECTION_SLOT, CREDITS_SLOT, GameStateStore

logger = logging.getLogger(__name__)

INVENTORY_CHANGED = "inventory.changed"
INVENTORY_RELEASED = "inventory.released"

PATCHABLE_FIELDS = frozenset({"personality"})


class SortKey(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    POKEDEX_ID_ASC = "pokedexIdAsc"
    POKEDEX_ID_DESC = "pokedexIdDesc"
    RARITY_DESC = "rarityDesc"
    RARITY_ASC = "rarityAsc"
    PRIMARY_TYPE_ASC = "primaryTypeAsc"


@dataclass(slots=True, frozen=True)
class SpeciesStack:
    """Identical instances of one species, newest first."""

    species_id: int
    name: str
    members: tuple[Creature, ...]

    @property
    def count(self) -> int:
        return len(self.members)


def filter_by_rarity(collection: Iterable[Creature], rarity: Rarity | None) -> list[Creature]:
    """``None`` selects every tier."""
    if rarity is None:
        return list(collection)
    return [creature for creature in collection if creature.rarity is rarity]


def sort_creatures(collection: Sequence[Creature], key: SortKey | str) -> list[Creature]:
    """Sort a newest-first collection; ties keep collection order.

    Rarity keys order by resell value, so a shiny creature can outrank a
    non-shiny creature of the next tier.
    """
    key = SortKey(key)
    if key is SortKey.NEWEST:
        return sorted(collection, key=lambda c: c.obtained_at, reverse=True)
    if key is SortKey.OLDEST:
        return sorted(reversed(collection), key=lambda c: c.obtained_at)
    if key is SortKey.POKEDEX_ID_ASC:
        return sorted(collection, key=lambda c: c.species_id)
    if key is SortKey.POKEDEX_ID_DESC:
        return sorted(collection, key=lambda c: -c.species_id)
    if key is SortKey.RARITY_DESC:
        return sorted(collection, key=lambda c: -resell_value(c))
    if key is SortKey.RARITY_ASC:
        return sorted(collection, key=resell_value)
    return sorted(collection, key=lambda c: c.primary_type)


def group_by_species(collection: Iterable[Creature]) -> list[SpeciesStack]:
    grouped: dict[int, list[Creature]] = {}
    for creature in collection:
        grouped.setdefault(creature.species_id, []).append(creature)
    return [
        SpeciesStack(species_id=species_id, name=members[0].name, members=tuple(members))
        for species_id, members in grouped.items()
    ]


class InventoryStore:
    """Process-wide game state.

    Every mutator applies its whole transition before the first suspension
    point, then persists both slots and publishes ``inventory.changed``.
    """

    def __init__(
        self,
        state_store: GameStateStore,
        event_bus: EventBus,
        *,
        starting_credits: int = 2000,
        bonus_credits: int = 500,
    ) -> None:
        if starting_credits < 0:
            raise ValueError("Starting credits cannot be negative")
        self._state_store = state_store
        self._event_bus = event_bus
        self._starting_credits = starting_credits
        self._bonus_credits = bonus_credits
        self._wallet = Wallet(balance=starting_credits)
        self._collection: list[Creature] = []
        self._reserved: set[str] = set()

    # -- loading -----------------------------------------------------------

    async def load(self) -> None:
        """Restore state from storage; malformed slots fall back to defaults."""
        raw_collection = await self._load_slot(COLLECTION_SLOT)
        raw_credits = await self._load_slot(CREDITS_SLOT)

        collection: list[Creature] = []
        if raw_collection is not None:
            try:
                collection = parse_collection(raw_collection)
            except (ValueError, TypeError, KeyError) as exc:
                logger.warning("Discarding stored collection: %s", exc)

        credits = self._starting_credits
        if raw_credits is not None:
            try:
                credits = parse_credits(raw_credits)
            except ValueError as exc:
                logger.warning("Resetting stored credits: %s", exc)

        self._collection = collection
        self._wallet = Wallet(balance=credits)
        self._reserved.clear()

    async def _load_slot(self, name: str) -> Any | None:
        try:
            return await self._state_store.load_slot(name)
        except ValueError as exc:
            logger.warning("Stored %s slot is unreadable: %s", name, exc)
            return None

    # -- read access -------------------------------------------------------

    @property
    def credits(self) -> int:
        return self._wallet.balance

    @property
    def collection(self) -> tuple[Creature, ...]:
        return tuple(self._collection)

    def __len__(self) -> int:
        return len(self._collection)

    def __iter__(self) -> Iterator[Creature]:
        return iter(tuple(self._collection))

    def __contains__(self, creature_id: object) -> bool:
        return any(creature.id == creature_id for creature in self._collection)

    def get(self, creature_id: str) -> Creature | None:
        for creature in self._collection:
            if creature.id == creature_id:
                return creature
        return None

    def require(self, creature_id: str) -> Creature:
        creature = self.get(creature_id)
        if creature is None:
            raise CreatureNotFound(creature_id)
        return creature

    def can_afford(self, amount: int) -> bool:
        return self._wallet.can_afford(amount)

    # -- mutations ---------------------------------------------------------

    async def add_creatures(self, creatures: Iterable[Creature]) -> None:
        batch = list(creatures)
        if not batch:
            return
        self._ensure_new_ids(batch)
        self._collection[:0] = batch
        await self._commit("add", added=[creature.id for creature in batch])

    async def remove_by_ids(self, creature_ids: Collection[str]) -> list[Creature]:
        ids = set(creature_ids)
        removed = [creature for creature in self._collection if creature.id in ids]
        if not removed:
            return []
        self._ensure_unreserved(ids)
        self._collection = [creature for creature in self._collection if creature.id not in ids]
        await self._commit("remove", removed=[creature.id for creature in removed])
        return removed

    async def update_by_id(self, creature_id: str, patch: Mapping[str, Any]) -> Creature | None:
        """Fill in a creature's personality; no-op when absent.

        Only ``personality`` can be patched, and only while it is still unset.
        """
        unknown = set(patch) - PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"Creature fields {', '.join(sorted(unknown))} cannot be patched")
        for index, creature in enumerate(self._collection):
            if creature.id != creature_id:
                continue
            self._ensure_unreserved([creature_id])
            personality = patch.get("personality", creature.personality)
            if creature.personality and personality != creature.personality:
                raise ValueError(f"Creature {creature_id} already has a personality")
            updated = replace(creature, **patch)
            self._collection[index] = updated
            await self._commit("update", updated=[creature_id])
            return updated
        return None

    async def credit(self, amount: int) -> int:
        self._wallet.credit(amount)
        if amount:
            await self._commit("credit", amount=amount)
        return self._wallet.balance

    async def debit(self, amount: int) -> int:
        """Withdraw credits, clamping the balance at zero; returns the amount taken."""
        taken = self._wallet.debit(amount)
        if taken != amount:
            logger.warning("Debit of %s clamped to %s.", amount, taken)
        if taken:
            await self._commit("debit", amount=taken)
        return taken

    async def grant_bonus_credits(self, amount: int | None = None) -> int:
        """Free top-up; defaults to the configured bonus."""
        amount = self._bonus_credits if amount is None else amount
        if amount <= 0:
            raise ValueError("Amount must be positive")
        return await self.credit(amount)

    async def release(self, creature_id: str) -> int:
        """Sell one creature back for its resell value."""
        creature = self.require(creature_id)
        self._ensure_unreserved([creature_id])
        value = resell_value(creature)
        self._collection = [c for c in self._collection if c.id != creature_id]
        self._wallet.credit(value)
        await self._commit("release", removed=[creature_id], amount=value)
        await self._event_bus.publish(
            INVENTORY_RELEASED, {"creature_ids": [creature_id], "credits": value}
        )
        return value

    async def release_many(self, creature_ids: Collection[str]) -> int:
        ids = set(creature_ids)
        matched = [creature for creature in self._collection if creature.id in ids]
        if not matched:
            return 0
        self._ensure_unreserved(ids)
        value = sum(resell_value(creature) for creature in matched)
        self._collection = [c for c in self._collection if c.id not in ids]
        self._wallet.credit(value)
        released = [creature.id for creature in matched]
        await self._commit("release", removed=released, amount=value)
        await self._event_bus.publish(
            INVENTORY_RELEASED, {"creature_ids": released, "credits": value}
        )
        return value

    async def apply_fusion(self, consumed_ids: Sequence[str], result: Creature) -> None:
        """Swap the consumed creatures for the fusion result in one transition."""
        missing = [cid for cid in consumed_ids if cid not in self]
        if missing:
            raise CreatureNotFound(missing[0])
        self._ensure_new_ids([result])
        consumed = set(consumed_ids)
        remaining = [c for c in self._collection if c.id not in consumed]
        self._collection = [result, *remaining]
        self._reserved.difference_update(consumed)
        await self._commit("fusion", removed=list(consumed_ids), added=[result.id])

    # -- fusion reservations ------------------------------------------------

    def reserve(self, creature_ids: Iterable[str]) -> None:
        self._reserved.update(creature_ids)

    def unreserve(self, creature_ids: Iterable[str]) -> None:
        self._reserved.difference_update(creature_ids)

    def is_reserved(self, creature_id: str) -> bool:
        return creature_id in self._reserved

    # -- derived views -----------------------------------------------------

    def filter_by_rarity(self, rarity: Rarity | None = None) -> list[Creature]:
        return filter_by_rarity(self._collection, rarity)

    def sort_by(self, key: SortKey | str = SortKey.NEWEST) -> list[Creature]:
        return sort_creatures(self._collection, key)

    def group_by_species(self) -> list[SpeciesStack]:
        return group_by_species(self._collection)

    def siblings_of(self, creature_id: str) -> list[Creature]:
        creature = self.require(creature_id)
        return [c for c in self._collection if c.species_id == creature.species_id]

    def progress(self) -> ProgressReport:
        return progress_report(self._collection)

    # -- internals ---------------------------------------------------------

    def _ensure_unreserved(self, creature_ids: Iterable[str]) -> None:
        locked = sorted(set(creature_ids) & self._reserved)
        if locked:
            raise CreatureLocked(f"Creatures {', '.join(locked)} are reserved for fusion")

    def _ensure_new_ids(self, creatures: Sequence[Creature]) -> None:
        existing = {creature.id for creature in self._collection}
        for creature in creatures:
            if creature.id in existing:
                raise ValueError(f"Creature id {creature.id} is already in the collection")
            existing.add(creature.id)

    async def _commit(self, action: str, **details: Any) -> None:
        await self._state_store.save_slot(COLLECTION_SLOT, dump_collection(self._collection))
        await self._state_store.save_slot(CREDITS_SLOT, self._wallet.balance)
        await self._event_bus.publish(
            INVENTORY_CHANGED,
            {
                "action": action,
                "credits": self._wallet.balance,
                "size": len(self._collection),
                **details,
            },
        )
