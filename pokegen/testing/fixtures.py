"""Pytest fixtures for PokeGen."""

from __future__ import annotations

from itertools import count

import pytest

from ..app import GameApp
from ..config import PokeGenConfig, ProviderConfig
from .factory import PayloadFactory
from .stubs import StubProvider, StubTextGenerator


@pytest.fixture()
def memory_app() -> GameApp:
    return app_fixture()


def app_fixture(
    *,
    config: PokeGenConfig | None = None,
    provider: StubProvider | None = None,
    generator: StubTextGenerator | None = None,
) -> GameApp:
    """Build an offline app with deterministic ids; usable without pytest.

    The default config never rolls shinies, so resell values stay predictable.
    """
    config = config or PokeGenConfig(provider=ProviderConfig(shiny_chance=0.0), rng_seed=7)
    payloads = PayloadFactory()
    ids = count(1)
    return GameApp(
        config,
        provider=provider or StubProvider(factory=payloads.build),
        generator=generator or StubTextGenerator(default="A calm and curious companion."),
        id_factory=lambda: f"c{next(ids):04d}",
    )
