"""Storage backends for PokeGen."""

from .base import COLLECTION_SLOT, CREDITS_SLOT, GameStateStore
from .memory import InMemoryGameStore
from .sqlalchemy import AsyncSQLAlchemyGameStore, AsyncSQLAlchemyStorage

__all__ = [
    "COLLECTION_SLOT",
    "CREDITS_SLOT",
    "GameStateStore",
    "InMemoryGameStore",
    "AsyncSQLAlchemyGameStore",
    "AsyncSQLAlchemyStorage",
]
