import asyncio

import pytest

from pokegen.config import FusionConfig
from pokegen.domain import (
    CreatureLocked,
    InvalidFusionSelection,
    OperationInProgress,
    Rarity,
    Stats,
)
from pokegen.domain.fusion import FUSION_COMPLETED, FusionEngine
from pokegen.providers.base import ProviderFailure
from pokegen.testing import (
    CreatureFactory,
    GatedProvider,
    PayloadFactory,
    StubProvider,
    app_fixture,
)

payloads = PayloadFactory()


async def seeded_app(rarity=Rarity.COMMON, count=3):
    provider = StubProvider(factory=payloads.build)
    app = app_fixture(provider=provider)
    factory = CreatureFactory()
    owned = list(factory.batch(count, rarity=rarity))
    await app.inventory.add_creatures(owned)
    return app, provider, [creature.id for creature in owned]


@pytest.mark.asyncio()
async def test_natural_success_on_first_attempt():
    app, provider, ids = await seeded_app()
    provider.queue(payloads.for_rarity(4, Rarity.RARE))

    result = await app.fusion.fuse(ids)

    assert result.attempts == 1
    assert not result.boosted
    assert result.creature.rarity is Rarity.RARE
    assert result.creature.species_id == 4
    assert [creature.id for creature in result.consumed] == ids
    assert app.inventory.collection == (result.creature,)
    assert app.inventory.credits == 2000
    assert not any(app.inventory.is_reserved(cid) for cid in ids)


@pytest.mark.asyncio()
async def test_higher_rarity_counts_as_success():
    app, provider, ids = await seeded_app()
    provider.queue(payloads.for_rarity(1, Rarity.COMMON), payloads.for_rarity(2, Rarity.EPIC))

    result = await app.fusion.fuse(ids)
    assert result.attempts == 2
    assert result.creature.rarity is Rarity.EPIC


@pytest.mark.asyncio()
async def test_boost_after_exhausting_attempts():
    app, provider, ids = await seeded_app()
    provider.queue(*(payloads.for_rarity(species_id, Rarity.COMMON) for species_id in range(1, 6)))

    result = await app.fusion.fuse(ids)

    assert result.boosted
    assert result.attempts == 5
    assert len(provider.requests) == 5
    fused = result.creature
    assert fused.rarity is Rarity.RARE
    assert fused.species_id == 1
    assert fused.stats == Stats(hp=150, attack=150, defense=50, speed=50)
    # Five draws used c0001..c0005; the boost issues a fresh id.
    assert fused.id == "c0006"
    assert app.inventory.collection == (fused,)


@pytest.mark.asyncio()
async def test_boost_keeps_most_valuable_miss():
    app, provider, ids = await seeded_app(Rarity.EPIC)
    provider.queue(
        payloads.for_rarity(1, Rarity.COMMON),
        payloads.for_rarity(2, Rarity.EPIC),
        payloads.for_rarity(3, Rarity.RARE),
        payloads.for_rarity(4, Rarity.COMMON),
        payloads.for_rarity(5, Rarity.RARE),
    )

    result = await app.fusion.fuse(ids)

    assert result.boosted
    assert result.creature.species_id == 2
    assert result.creature.rarity is Rarity.LEGENDARY
    assert result.creature.stats.hp == 260


@pytest.mark.asyncio()
async def test_provider_fallback_can_satisfy_rare_tier():
    app, provider, ids = await seeded_app()
    provider.queue(ProviderFailure("offline"))

    result = await app.fusion.fuse(ids)
    assert result.attempts == 1
    assert result.creature.name == "pikachu"
    assert result.creature.rarity is Rarity.RARE


@pytest.mark.asyncio()
async def test_fusion_publishes_event():
    app, provider, ids = await seeded_app()
    provider.queue(payloads.for_rarity(4, Rarity.RARE))
    events = []

    async def listener(payload):
        events.append(payload)

    app.event_bus.subscribe(FUSION_COMPLETED, listener)
    result = await app.fusion.fuse(ids)
    assert events == [
        {"consumed": ids, "result": result.creature.id, "rarity": "rare", "boosted": False}
    ]


@pytest.mark.asyncio()
async def test_invalid_selections_change_nothing():
    app, provider, ids = await seeded_app()
    factory = CreatureFactory()
    rare = factory.build(Rarity.RARE)
    legendary = list(factory.batch(3, rarity=Rarity.LEGENDARY))
    await app.inventory.add_creatures([rare, *legendary])
    before = app.inventory.collection

    selections = [
        ids[:2],
        [*ids, rare.id],
        [ids[0], ids[0], ids[1]],
        [ids[0], ids[1], "missing"],
        [ids[0], ids[1], rare.id],
        [creature.id for creature in legendary],
    ]
    for selection in selections:
        with pytest.raises(InvalidFusionSelection):
            await app.fusion.fuse(selection)

    assert app.inventory.collection == before
    assert app.inventory.credits == 2000
    assert provider.requests == []
    assert not app.fusion.is_fusing


@pytest.mark.asyncio()
async def test_concurrent_fusion_and_release_are_rejected():
    provider = GatedProvider(factory=PayloadFactory().build)
    app = app_fixture(provider=provider)
    factory = CreatureFactory()
    first = list(factory.batch(3, rarity=Rarity.COMMON))
    second = list(factory.batch(3, rarity=Rarity.COMMON))
    await app.inventory.add_creatures([*first, *second])

    task = asyncio.ensure_future(app.fusion.fuse([creature.id for creature in first]))
    await asyncio.sleep(0)

    assert app.fusion.is_fusing
    with pytest.raises(OperationInProgress):
        await app.fusion.fuse([creature.id for creature in second])
    with pytest.raises(CreatureLocked):
        await app.inventory.release(first[0].id)
    with pytest.raises(CreatureLocked):
        await app.inventory.release_many([first[1].id, second[0].id])
    with pytest.raises(CreatureLocked):
        await app.inventory.remove_by_ids([first[0].id])
    with pytest.raises(CreatureLocked):
        await app.inventory.update_by_id(first[2].id, {"personality": "Nervous."})
    assert len(app.inventory) == 6

    provider.gate.set()
    result = await task
    assert result.boosted
    assert len(app.inventory) == 4
    assert not app.fusion.is_fusing


def test_engine_requires_an_attempt(memory_app):
    with pytest.raises(ValueError):
        FusionEngine(
            memory_app.inventory,
            memory_app.acquisition,
            FusionConfig(max_attempts=0),
            memory_app.event_bus,
        )
