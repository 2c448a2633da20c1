"""Exceptions raised by PokeGen domain services."""

from __future__ import annotations


class PokeGenError(RuntimeError):
    """Base class for domain exceptions."""


class PreconditionViolation(PokeGenError):
    """Raised when an operation is rejected before touching any state."""


class InsufficientCredits(PreconditionViolation):
    """Raised when the balance cannot cover a pull."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"Need {required} credits, have {available}")
        self.required = required
        self.available = available


class OperationInProgress(PreconditionViolation):
    """Raised when a pull or fusion is already running."""


class InvalidFusionSelection(PreconditionViolation):
    """Raised when the selected creatures cannot be fused."""


class CreatureLocked(PreconditionViolation):
    """Raised when a creature reserved by a running fusion is released."""


class CreatureNotFound(PokeGenError, KeyError):
    """Raised when an id does not refer to an owned creature."""

    def __init__(self, creature_id: str) -> None:
        super().__init__(f"Creature {creature_id} not found")
        self.creature_id = creature_id

    def __str__(self) -> str:
        return self.args[0]
