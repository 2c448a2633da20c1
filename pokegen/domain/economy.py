"""Economy primitives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from .creatures import Creature, Rarity

BASE_RESELL_VALUES: Mapping[Rarity, int] = {
    Rarity.COMMON: 10,
    Rarity.RARE: 50,
    Rarity.EPIC: 200,
    Rarity.LEGENDARY: 1000,
}

SHINY_MULTIPLIER = 2


def base_value_for_rarity(rarity: Rarity) -> int:
    return BASE_RESELL_VALUES[rarity]


def resell_value(subject: Creature | Rarity) -> int:
    """Credits refunded when a creature is released.

    A bare rarity yields the undoubled base value.
    """
    if isinstance(subject, Rarity):
        return base_value_for_rarity(subject)
    value = base_value_for_rarity(subject.rarity)
    if subject.is_shiny:
        value *= SHINY_MULTIPLIER
    return value


def total_resell_value(creatures: Iterable[Creature]) -> int:
    return sum(resell_value(creature) for creature in creatures)


@dataclass(slots=True)
class Wallet:
    """Mutable credit balance used by the inventory store."""

    balance: int = 0

    def credit(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot credit negative amount")
        self.balance += amount

    def debit(self, amount: int) -> int:
        """Withdraw up to ``amount`` and return what was actually taken.

        The balance never drops below zero.
        """
        if amount < 0:
            raise ValueError("Cannot debit negative amount")
        taken = min(amount, self.balance)
        self.balance -= taken
        return taken

    def can_afford(self, amount: int) -> bool:
        return self.balance >= amount
