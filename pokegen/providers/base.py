"""Creature data provider contract and payload schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from ..domain.exceptions import PokeGenError

ARTWORK_URL = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/"
    "other/official-artwork/{species_id}.png"
)


class ProviderFailure(PokeGenError):
    """Raised when the provider cannot produce a usable payload."""


@dataclass(slots=True, frozen=True)
class ProviderPayload:
    """Provider record for one species.

    ``species_id``, ``name``, ``stats`` and ``types`` are required;
    the remaining fields may be absent upstream.
    """

    species_id: int
    name: str
    stats: Mapping[str, int]
    types: tuple[str, ...]
    base_experience: int | None = None
    image: str | None = None
    shiny_image: str | None = None


class CreatureDataProvider(Protocol):
    async def fetch(self, species_id: int) -> ProviderPayload:
        ...


def parse_pokemon_payload(data: Any) -> ProviderPayload:
    """Map a PokeAPI ``/pokemon/{id}`` response, failing closed on shape errors."""
    if not isinstance(data, dict):
        raise ProviderFailure("Payload must be an object")

    species_id = data.get("id")
    if not isinstance(species_id, int) or isinstance(species_id, bool) or species_id <= 0:
        raise ProviderFailure(f"Payload has invalid 'id' {species_id!r}")

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ProviderFailure(f"Payload {species_id} has no 'name'")

    return ProviderPayload(
        species_id=species_id,
        name=name,
        stats=_parse_stats(species_id, data.get("stats")),
        types=_parse_types(species_id, data.get("types")),
        base_experience=_parse_base_experience(data.get("base_experience")),
        image=_artwork(data, "front_default"),
        shiny_image=_artwork(data, "front_shiny"),
    )


def _parse_stats(species_id: int, raw: Any) -> dict[str, int]:
    if not isinstance(raw, list):
        raise ProviderFailure(f"Payload {species_id} has no 'stats' list")
    stats: dict[str, int] = {}
    for entry in raw:
        try:
            stat_name = entry["stat"]["name"]
            base_stat = entry["base_stat"]
        except (KeyError, TypeError) as exc:
            raise ProviderFailure(f"Payload {species_id} has malformed stat entry") from exc
        if not isinstance(base_stat, int) or isinstance(base_stat, bool) or base_stat < 0:
            raise ProviderFailure(f"Payload {species_id} stat '{stat_name}' is not a count")
        stats[str(stat_name)] = base_stat
    return stats


def _parse_types(species_id: int, raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list) or not raw:
        raise ProviderFailure(f"Payload {species_id} has no 'types' list")
    try:
        ordered = sorted(raw, key=lambda entry: entry.get("slot", 0))
        types = tuple(str(entry["type"]["name"]) for entry in ordered)
    except (AttributeError, KeyError, TypeError) as exc:
        raise ProviderFailure(f"Payload {species_id} has malformed type entry") from exc
    if len(types) > 2:
        raise ProviderFailure(f"Payload {species_id} lists more than two types")
    return types


def _parse_base_experience(raw: Any) -> int | None:
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return raw
    return None


def _artwork(data: dict, key: str) -> str | None:
    sprites = data.get("sprites")
    if not isinstance(sprites, dict):
        return None
    other = sprites.get("other")
    if isinstance(other, dict):
        official = other.get("official-artwork")
        if isinstance(official, dict) and official.get(key):
            return str(official[key])
    if sprites.get(key):
        return str(sprites[key])
    return None
