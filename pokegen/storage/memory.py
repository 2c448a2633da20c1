"""In-memory storage backend for PokeGen."""

from __future__ import annotations

import json
from typing import Any

from .base import GameStateStore


class InMemoryGameStore(GameStateStore):
    """Keeps slots as JSON text so callers never share mutable state with the store."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._slots: dict[str, str] = {}
        for name, value in (initial or {}).items():
            self._slots[name] = json.dumps(value)

    async def load_slot(self, name: str) -> Any | None:
        raw = self._slots.get(name)
        if raw is None:
            return None
        return json.loads(raw)

    async def save_slot(self, name: str, value: Any) -> None:
        self._slots[name] = json.dumps(value)

    async def clear(self) -> None:
        self._slots.clear()

    def dump(self) -> dict[str, Any]:
        return {name: json.loads(raw) for name, raw in self._slots.items()}
