"""Encode and decode persisted creature records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable

from ..domain.creatures import Creature, Rarity, Stats

STAT_NAMES = ("hp", "attack", "defense", "speed")


def dump_creature(creature: Creature) -> dict[str, Any]:
    """Return a JSON-compatible dict for a creature."""
    return {
        "id": creature.id,
        "speciesId": creature.species_id,
        "name": creature.name,
        "image": creature.image_ref,
        "types": list(creature.element_types),
        "stats": {name: getattr(creature.stats, name) for name in STAT_NAMES},
        "rarity": creature.rarity.value,
        "isShiny": creature.is_shiny,
        "personality": creature.personality,
        "obtainedAt": creature.obtained_at.isoformat(),
    }


def dump_collection(creatures: Iterable[Creature]) -> list[dict[str, Any]]:
    return [dump_creature(creature) for creature in creatures]


def parse_creature(entry: dict[str, Any]) -> Creature:
    stats_data = entry["stats"]
    obtained_at = datetime.fromisoformat(entry["obtainedAt"])
    if obtained_at.tzinfo is None or obtained_at.tzinfo.utcoffset(obtained_at) is None:
        obtained_at = obtained_at.replace(tzinfo=timezone.utc)
    return Creature(
        id=entry["id"],
        species_id=int(entry["speciesId"]),
        name=entry["name"],
        image_ref=entry["image"],
        element_types=tuple(map(str, entry["types"])),
        stats=Stats(**{name: int(stats_data.get(name, 0)) for name in STAT_NAMES}),
        rarity=Rarity(entry["rarity"]),
        is_shiny=bool(entry.get("isShiny", False)),
        personality=entry.get("personality") or None,
        obtained_at=obtained_at,
    )


def parse_collection(data: Any) -> list[Creature]:
    """Parse a stored collection slot, raising ValueError when it is malformed."""
    errors = validate_collection_data(data)
    if errors:
        raise ValueError(_format_errors("Collection validation failed", errors))
    return [parse_creature(entry) for entry in data]


def validate_collection_data(data: Any) -> list[str]:
    errors: list[str] = []
    if not isinstance(data, list):
        return ["Collection must be an array."]

    seen_ids: set[str] = set()
    for idx, entry in enumerate(data, start=1):
        if not isinstance(entry, dict):
            errors.append(f"Creature #{idx} must be an object.")
            continue
        creature_id = entry.get("id")
        if not isinstance(creature_id, str) or not creature_id.strip():
            errors.append(f"Creature #{idx} must define non-empty 'id'.")
            continue
        if creature_id in seen_ids:
            errors.append(f"Creature id '{creature_id}' stored multiple times.")
        seen_ids.add(creature_id)

        for field_name in ("name", "image"):
            value = entry.get(field_name)
            if not isinstance(value, str) or not value.strip():
                errors.append(f"Creature '{creature_id}' must define non-empty '{field_name}'.")

        species_id = entry.get("speciesId")
        if not isinstance(species_id, int) or isinstance(species_id, bool) or species_id <= 0:
            errors.append(f"Creature '{creature_id}' has invalid 'speciesId' value '{species_id}'.")

        types = entry.get("types")
        if (
            not isinstance(types, list)
            or not 1 <= len(types) <= 2
            or not all(isinstance(name, str) and name for name in types)
        ):
            errors.append(f"Creature '{creature_id}' must define one or two 'types'.")

        stats = entry.get("stats")
        if not isinstance(stats, dict):
            errors.append(f"Creature '{creature_id}' must define 'stats' object.")
        else:
            for name in STAT_NAMES:
                value = stats.get(name, 0)
                if not isinstance(value, int) or value < 0:
                    errors.append(
                        f"Creature '{creature_id}' stat '{name}' must be non-negative integer."
                    )

        rarity_value = entry.get("rarity")
        try:
            Rarity(rarity_value)
        except ValueError:
            errors.append(f"Creature '{creature_id}' has invalid rarity '{rarity_value}'.")

        personality = entry.get("personality")
        if personality is not None and not isinstance(personality, str):
            errors.append(f"Creature '{creature_id}' personality must be a string.")

        obtained_at = entry.get("obtainedAt")
        if not isinstance(obtained_at, str):
            errors.append(f"Creature '{creature_id}' must define 'obtainedAt' timestamp.")
        else:
            try:
                datetime.fromisoformat(obtained_at)
            except ValueError:
                errors.append(f"Creature '{creature_id}' has invalid 'obtainedAt' '{obtained_at}'.")

    return errors


def parse_credits(data: Any) -> int:
    if isinstance(data, bool) or not isinstance(data, int) or data < 0:
        raise ValueError(f"Stored credits '{data}' must be a non-negative integer")
    return data


def _format_errors(prefix: str, errors: Iterable[str]) -> str:
    formatted = "\n".join(f"- {err}" for err in errors)
    return f"{prefix}:\n{formatted}"
