import pytest

from pokegen.domain import Rarity
from pokegen.loaders import (
    dump_creature,
    parse_collection,
    parse_credits,
    validate_collection_data,
)
from pokegen.testing import CreatureFactory


@pytest.fixture()
def entry():
    return dump_creature(CreatureFactory().build(Rarity.EPIC, is_shiny=True, personality="Shy."))


def test_dump_uses_camel_case_keys(entry):
    assert set(entry) == {
        "id", "speciesId", "name", "image", "types", "stats",
        "rarity", "isShiny", "personality", "obtainedAt",
    }
    assert entry["rarity"] == "epic"
    assert entry["isShiny"] is True


def test_valid_collection_has_no_errors(entry):
    assert validate_collection_data([entry]) == []
    (creature,) = parse_collection([entry])
    assert creature.personality == "Shy."


def test_validation_reports_each_problem(entry):
    broken = dict(entry, id="b", rarity="mythic", types=[], speciesId=0)
    duplicate = dict(entry)
    errors = validate_collection_data([entry, broken, duplicate, "junk"])

    assert any("invalid rarity 'mythic'" in error for error in errors)
    assert any("one or two 'types'" in error for error in errors)
    assert any("'speciesId'" in error for error in errors)
    assert any("stored multiple times" in error for error in errors)
    assert any("#4 must be an object" in error for error in errors)
    with pytest.raises(ValueError, match="Collection validation failed"):
        parse_collection([entry, broken])


def test_bad_timestamps_and_stats(entry):
    errors = validate_collection_data(
        [dict(entry, obtainedAt="yesterday", stats={"hp": -1})]
    )
    assert len(errors) == 2


@pytest.mark.parametrize("raw", [-1, True, "10", 1.5, None])
def test_invalid_credits(raw):
    with pytest.raises(ValueError):
        parse_credits(raw)


def test_credits_accept_zero():
    assert parse_credits(0) == 0
