"""In-process stand-ins for the external provider and text generator."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Callable, Deque, Iterable, Mapping, Sequence

from ..generators.base import ChatTurn
from ..providers.base import ProviderFailure, ProviderPayload


class StubProvider:
    """Serve payloads from a queue, a per-species mapping or a factory callable.

    Queued entries that are exceptions are raised instead of returned.
    """

    def __init__(
        self,
        payloads: Iterable[ProviderPayload | Exception] = (),
        *,
        by_species: Mapping[int, ProviderPayload] | None = None,
        factory: Callable[[int], ProviderPayload] | None = None,
    ) -> None:
        self._queue: Deque[ProviderPayload | Exception] = deque(payloads)
        self._by_species = dict(by_species or {})
        self._factory = factory
        self.requests: list[int] = []

    def queue(self, *payloads: ProviderPayload | Exception) -> None:
        self._queue.extend(payloads)

    async def fetch(self, species_id: int) -> ProviderPayload:
        self.requests.append(species_id)
        if self._queue:
            item = self._queue.popleft()
            if isinstance(item, Exception):
                raise item
            return item
        if species_id in self._by_species:
            return self._by_species[species_id]
        if self._factory is not None:
            return self._factory(species_id)
        raise ProviderFailure(f"No stub payload for species {species_id}")


class StubTextGenerator:
    """Return canned replies and record every call."""

    def __init__(self, replies: Iterable[str | Exception] = (), *, default: str = "") -> None:
        self._replies: Deque[str | Exception] = deque(replies)
        self._default = default
        self.calls: list[tuple[str, str | None, tuple[ChatTurn, ...]]] = []

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        history: Sequence[ChatTurn] = (),
    ) -> str:
        self.calls.append((prompt, system, tuple(history)))
        if self._replies:
            item = self._replies.popleft()
            if isinstance(item, Exception):
                raise item
            return item
        return self._default


class GatedProvider(StubProvider):
    """A :class:`StubProvider` whose fetches wait until ``gate`` is set."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.gate = asyncio.Event()

    async def fetch(self, species_id: int) -> ProviderPayload:
        self.requests.append(species_id)
        await self.gate.wait()
        self.requests.pop()
        return await super().fetch(species_id)
