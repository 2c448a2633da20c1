"""Top level application object for PokeGen."""

from __future__ import annotations

from random import Random
from typing import Any

from .config import PokeGenConfig
from .domain.acquisition import AcquisitionService
from .domain.creatures import Creature, IdFactory, new_creature_id
from .domain.events import EventBus
from .domain.fusion import FusionEngine
from .domain.gacha import GachaEngine
from .domain.inventory import InventoryStore
from .domain.personality import ChatSession, PersonalityService
from .generators.anthropic_client import AnthropicTextGenerator
from .generators.base import TextGenerator
from .providers.base import CreatureDataProvider
from .providers.pokeapi import PokeApiProvider
from .storage.base import GameStateStore
from .storage.memory import InMemoryGameStore
from .storage.sqlalchemy import AsyncSQLAlchemyStorage


class GameApp:
    """Central dependency container used by presentation layers."""

    def __init__(
        self,
        config: PokeGenConfig,
        *,
        provider: CreatureDataProvider | None = None,
        generator: TextGenerator | None = None,
        state_store: GameStateStore | None = None,
        event_bus: EventBus | None = None,
        rng: Random | None = None,
        id_factory: IdFactory = new_creature_id,
    ) -> None:
        self.config = config
        self.event_bus = event_bus or EventBus()
        self._rng = rng or (Random(config.rng_seed) if config.rng_seed is not None else Random())

        self._sqlalchemy_storage: AsyncSQLAlchemyStorage | None = None
        self.state_store = state_store or self._wire_storage()

        self.provider = provider or PokeApiProvider(
            config.provider.base_url,
            timeout=config.provider.timeout_seconds,
        )
        self._generator = generator

        self.inventory = InventoryStore(
            self.state_store,
            self.event_bus,
            starting_credits=config.gacha.starting_credits,
            bonus_credits=config.gacha.bonus_credits,
        )
        self.acquisition = AcquisitionService(
            self.provider,
            config.provider,
            rng=self._rng,
            id_factory=id_factory,
        )
        self.gacha = GachaEngine(self.inventory, self.acquisition, config.gacha, self.event_bus)
        self.fusion = FusionEngine(self.inventory, self.acquisition, config.fusion, self.event_bus)
        self._personalities: PersonalityService | None = None

    def _wire_storage(self) -> GameStateStore:
        backend = self.config.storage.backend
        if backend == "memory":
            return InMemoryGameStore()
        if backend == "sqlalchemy":
            dsn = self.config.storage.resolve_dsn()
            if not dsn:
                raise ValueError("SQLAlchemy backend requires a DSN")
            storage = AsyncSQLAlchemyStorage(dsn, echo=self.config.storage.echo_sql)
            self._sqlalchemy_storage = storage
            return storage.game_store()
        raise ValueError(f"Unsupported storage backend {backend}")

    @property
    def generator(self) -> TextGenerator:
        """Text generator, created from config on first use."""
        if self._generator is None:
            settings = self.config.generator
            self._generator = AnthropicTextGenerator(
                settings.api_key,
                model=settings.model,
                max_tokens=settings.max_tokens,
            )
        return self._generator

    @property
    def personalities(self) -> PersonalityService:
        if self._personalities is None:
            self._personalities = PersonalityService(self.inventory, self.generator)
        return self._personalities

    def chat(self, creature: Creature | str) -> ChatSession:
        if isinstance(creature, str):
            creature = self.inventory.require(creature)
        return ChatSession(creature, self.generator)

    async def start(self) -> None:
        """Initialize storage resources and restore saved state."""
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.init_models()
        await self.inventory.load()

    async def close(self) -> None:
        if isinstance(self.provider, PokeApiProvider):
            await self.provider.aclose()
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.dispose()

    def snapshot(self) -> dict[str, Any]:
        """Export current state for debugging."""
        report = self.inventory.progress()
        return {
            "storage": self.config.storage.backend,
            "credits": self.inventory.credits,
            "collection": len(self.inventory),
            "score": report.score,
            "rank": report.rank.name,
            "pulling": self.gacha.is_pulling,
            "fusing": self.fusion.is_fusing,
        }
