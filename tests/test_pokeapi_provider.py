import httpx
import pytest
import respx

from pokegen.providers import PokeApiProvider, ProviderFailure, parse_pokemon_payload
from pokegen.testing import PayloadFactory

BASE_URL = "https://pokeapi.test/api/v2"


@pytest.mark.asyncio()
async def test_fetch_parses_pokeapi_document():
    document = PayloadFactory().raw(6, stat=80, types=("fire", "flying"))
    with respx.mock(assert_all_called=True) as router:
        router.get(f"{BASE_URL}/pokemon/6").mock(return_value=httpx.Response(200, json=document))
        provider = PokeApiProvider(BASE_URL)
        payload = await provider.fetch(6)
        await provider.aclose()

    assert payload.species_id == 6
    assert payload.types == ("fire", "flying")
    assert payload.stats["speed"] == 80
    assert payload.base_experience == 64
    assert payload.image == "https://example.com/art/6.png"
    assert payload.shiny_image == "https://example.com/art/shiny/6.png"


@pytest.mark.asyncio()
async def test_fetch_wraps_http_errors():
    with respx.mock() as router:
        router.get(f"{BASE_URL}/pokemon/1").mock(return_value=httpx.Response(404))
        router.get(f"{BASE_URL}/pokemon/2").mock(side_effect=httpx.ConnectError("offline"))
        router.get(f"{BASE_URL}/pokemon/3").mock(return_value=httpx.Response(200, text="<html>"))
        provider = PokeApiProvider(BASE_URL)
        for species_id in (1, 2, 3):
            with pytest.raises(ProviderFailure):
                await provider.fetch(species_id)
        await provider.aclose()


def test_types_follow_slot_order():
    document = PayloadFactory().raw(1, types=("grass", "poison"))
    document["types"].reverse()
    assert parse_pokemon_payload(document).types == ("grass", "poison")


def test_images_fall_back_to_front_sprites():
    document = PayloadFactory().raw(7)
    document["sprites"]["other"] = {}
    payload = parse_pokemon_payload(document)
    assert payload.image == "https://example.com/7.png"
    assert payload.shiny_image == "https://example.com/shiny/7.png"

    del document["sprites"]
    payload = parse_pokemon_payload(document)
    assert payload.image is None
    assert payload.shiny_image is None


@pytest.mark.parametrize(
    "mutate",
    [
        lambda doc: doc.pop("types"),
        lambda doc: doc.update(types=[]),
        lambda doc: doc.pop("stats"),
        lambda doc: doc.update(stats=[{"base_stat": 10}]),
        lambda doc: doc.update(name=""),
        lambda doc: doc.update(id="six"),
    ],
)
def test_required_field_mismatch_fails_closed(mutate):
    document = PayloadFactory().raw(6)
    mutate(document)
    with pytest.raises(ProviderFailure):
        parse_pokemon_payload(document)


def test_missing_base_experience_is_optional():
    document = PayloadFactory().raw(6)
    document["base_experience"] = None
    assert parse_pokemon_payload(document).base_experience is None
