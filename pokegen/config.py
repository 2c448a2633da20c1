"""Configuration models for PokeGen."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal


StorageBackend = Literal["memory", "sqlalchemy"]

_TRUTHY = {"1", "true", "yes"}


@dataclass(slots=True)
class StorageConfig:
    """Configure where credits and the collection are persisted."""

    backend: StorageBackend = "memory"
    dsn: str | None = None
    echo_sql: bool = False

    def resolve_dsn(self) -> str | None:
        if self.dsn:
            return self.dsn
        if self.backend == "sqlalchemy":
            return "sqlite+aiosqlite:///./pokegen.db"
        return None


@dataclass(slots=True)
class ProviderConfig:
    """Creature data provider settings."""

    base_url: str = "https://pokeapi.co/api/v2"
    catalog_size: int = 1025
    timeout_seconds: float = 10.0
    shiny_chance: float = 0.05


@dataclass(slots=True)
class GachaConfig:
    """Rules for summoning."""

    pull_cost: int = 100
    starting_credits: int = 2000
    bonus_credits: int = 500
    min_pull_seconds: float = 0.0


@dataclass(slots=True)
class FusionConfig:
    """Rules for fusing three creatures into one."""

    max_attempts: int = 5
    stat_boost: int = 100
    min_fusion_seconds: float = 0.0


@dataclass(slots=True)
class GeneratorConfig:
    """Personality/chat text generator settings."""

    api_key: str = ""
    model: str = "claude-3-5-haiku-latest"
    max_tokens: int = 256


@dataclass(slots=True)
class PokeGenConfig:
    """Top-level configuration container."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    gacha: GachaConfig = field(default_factory=GachaConfig)
    fusion: FusionConfig = field(default_factory=FusionConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    rng_seed: int | None = None

    @classmethod
    def from_env(cls) -> "PokeGenConfig":
        """Create config from environment variables prefixed with POKEGEN_."""
        prefix = "POKEGEN_"

        storage = StorageConfig(
            backend=_parse_backend(os.getenv(f"{prefix}STORAGE_BACKEND", "memory")),
            dsn=os.getenv(f"{prefix}STORAGE_DSN"),
            echo_sql=os.getenv(f"{prefix}STORAGE_ECHO_SQL", "false").lower() in _TRUTHY,
        )

        provider = ProviderConfig(
            base_url=os.getenv(f"{prefix}PROVIDER_URL", "https://pokeapi.co/api/v2").rstrip("/"),
            catalog_size=_positive_int(prefix, "CATALOG_SIZE", 1025),
            timeout_seconds=float(os.getenv(f"{prefix}PROVIDER_TIMEOUT", "10.0")),
            shiny_chance=_probability(os.getenv(f"{prefix}SHINY_CHANCE", "0.05")),
        )

        gacha = GachaConfig(
            pull_cost=_positive_int(prefix, "PULL_COST", 100),
            starting_credits=int(os.getenv(f"{prefix}STARTING_CREDITS", "2000")),
            bonus_credits=int(os.getenv(f"{prefix}BONUS_CREDITS", "500")),
            min_pull_seconds=float(os.getenv(f"{prefix}MIN_PULL_SECONDS", "0")),
        )

        fusion = FusionConfig(
            max_attempts=_positive_int(prefix, "FUSION_ATTEMPTS", 5),
            stat_boost=int(os.getenv(f"{prefix}FUSION_STAT_BOOST", "100")),
            min_fusion_seconds=float(os.getenv(f"{prefix}MIN_FUSION_SECONDS", "0")),
        )

        generator = GeneratorConfig(
            api_key=os.getenv(f"{prefix}GENERATOR_API_KEY", "")
            or os.getenv("ANTHROPIC_API_KEY", ""),
            model=os.getenv(f"{prefix}GENERATOR_MODEL", "claude-3-5-haiku-latest"),
            max_tokens=_positive_int(prefix, "GENERATOR_MAX_TOKENS", 256),
        )

        return cls(
            storage=storage,
            provider=provider,
            gacha=gacha,
            fusion=fusion,
            generator=generator,
            rng_seed=(
                int(os.getenv(f"{prefix}RNG_SEED")) if os.getenv(f"{prefix}RNG_SEED") else None
            ),
        )


def _parse_backend(raw: str) -> StorageBackend:
    value = raw.strip().lower()
    if value not in ("memory", "sqlalchemy"):
        raise ValueError(f"Unsupported POKEGEN_STORAGE_BACKEND '{raw}'")
    return value  # type: ignore[return-value]


def _positive_int(prefix: str, name: str, default: int) -> int:
    value = int(os.getenv(f"{prefix}{name}", str(default)))
    if value <= 0:
        raise ValueError(f"{prefix}{name} must be positive")
    return value


def _probability(raw: str) -> float:
    value = float(raw)
    if not 0.0 <= value <= 1.0:
        raise ValueError("POKEGEN_SHINY_CHANCE must be between 0 and 1")
    return value
