"""Save-data codecs."""

from .save_data import (
    dump_collection,
    dump_creature,
    parse_collection,
    parse_creature,
    parse_credits,
    validate_collection_data,
)

__all__ = [
    "dump_collection",
    "dump_creature",
    "parse_collection",
    "parse_creature",
    "parse_credits",
    "validate_collection_data",
]
