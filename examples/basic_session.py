"""Example session: pull, inspect, fuse and release against the live PokeAPI."""

from __future__ import annotations

import asyncio
import logging

from pokegen import GameApp, PokeGenConfig, Rarity, SortKey
from pokegen.domain.exceptions import InvalidFusionSelection


async def on_change(payload) -> None:
    print(f"[{payload['action']}] credits={payload['credits']} size={payload['size']}")


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    app = GameApp(PokeGenConfig.from_env())
    app.event_bus.subscribe("inventory.changed", on_change)
    await app.start()
    try:
        result = await app.gacha.pull(10)
        for creature in result.creatures:
            print(f"  #{creature.species_id} {creature.name} ({creature.rarity.value})")

        commons = app.inventory.filter_by_rarity(Rarity.COMMON)[:3]
        try:
            fused = await app.fusion.fuse([creature.id for creature in commons])
            print(f"Fusion produced {fused.creature.name} ({fused.creature.rarity.value})")
        except InvalidFusionSelection as exc:
            print(f"Fusion skipped: {exc}")

        weakest = app.inventory.sort_by(SortKey.RARITY_ASC)[0]
        print(f"Released {weakest.name} for {await app.inventory.release(weakest.id)} credits")

        report = app.inventory.progress()
        print(f"Rank {report.rank.name}: score {report.score} ({report.progress:.0%})")
    finally:
        app.event_bus.unsubscribe("inventory.changed", on_change)
        await app.close()


if __name__ == "__main__":
    asyncio.run(main())
