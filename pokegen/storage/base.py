"""Storage abstractions used by the PokeGen services."""

from __future__ import annotations

from typing import Any, Protocol

COLLECTION_SLOT = "collection"
CREDITS_SLOT = "credits"


class GameStateStore(Protocol):
    """Named-slot key-value store holding JSON-compatible values."""

    async def load_slot(self, name: str) -> Any | None:
        ...

    async def save_slot(self, name: str, value: Any) -> None:
        ...

    async def clear(self) -> None:
        ...
