"""Creature data providers."""

from .base import (
    ARTWORK_URL,
    CreatureDataProvider,
    ProviderFailure,
    ProviderPayload,
    parse_pokemon_payload,
)
from .pokeapi import PokeApiProvider

__all__ = [
    "ARTWORK_URL",
    "CreatureDataProvider",
    "ProviderFailure",
    "ProviderPayload",
    "PokeApiProvider",
    "parse_pokemon_payload",
]
