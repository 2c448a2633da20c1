import pytest

from pokegen.domain import Rarity
from pokegen.testing import PayloadFactory, StubProvider, TestClient, app_fixture


@pytest.mark.asyncio()
async def test_client_records_a_session():
    payloads = PayloadFactory()
    provider = StubProvider(factory=payloads.build)
    app = app_fixture(provider=provider)
    client = TestClient(app)

    await client.pull(3)
    commons = [creature.id for creature in app.inventory.collection]
    provider.queue(payloads.for_rarity(25, Rarity.RARE))
    await client.fuse(commons)
    fused = app.inventory.collection[0]
    await client.release(fused.id)

    log = client.history()
    assert [message.text.split()[0] for message in log] == ["Pulled", "Fused", "Released"]
    assert log[0].metadata["credits"] == 1700
    assert log[1].metadata["boosted"] is False
    assert log[2].metadata == {"credits": 1750, "value": 50}
    assert len(app.inventory) == 0
    assert app.snapshot()["rank"] == "Rookie"
