"""Domain models and services."""

from .acquisition import AcquisitionService, fallback_creature
from .creatures import (
    FUSION_TIERS,
    Creature,
    FusionTier,
    PersonalityState,
    Rarity,
    Stats,
    fusion_tier_for,
)
from .economy import Wallet, base_value_for_rarity, resell_value
from .events import EventBus
from .exceptions import (
    CreatureLocked,
    CreatureNotFound,
    InsufficientCredits,
    InvalidFusionSelection,
    OperationInProgress,
    PokeGenError,
    PreconditionViolation,
)
from .fusion import FusionDraw, FusionEngine, FusionResult, boost_creature
from .gacha import GachaEngine, PullResult
from .inventory import InventoryStore, SortKey, SpeciesStack
from .personality import ChatSession, PersonalityService
from .progression import RANKS, ProgressReport, Rank, collection_score, progress_fraction, rank_for
from .rarity import classify_rarity

__all__ = [
    "AcquisitionService",
    "fallback_creature",
    "FUSION_TIERS",
    "Creature",
    "FusionTier",
    "PersonalityState",
    "Rarity",
    "Stats",
    "fusion_tier_for",
    "Wallet",
    "base_value_for_rarity",
    "resell_value",
    "EventBus",
    "CreatureLocked",
    "CreatureNotFound",
    "InsufficientCredits",
    "InvalidFusionSelection",
    "OperationInProgress",
    "PokeGenError",
    "PreconditionViolation",
    "FusionDraw",
    "FusionEngine",
    "FusionResult",
    "boost_creature",
    "GachaEngine",
    "PullResult",
    "InventoryStore",
    "SortKey",
    "SpeciesStack",
    "ChatSession",
    "PersonalityService",
    "RANKS",
    "ProgressReport",
    "Rank",
    "collection_score",
    "progress_fraction",
    "rank_for",
    "classify_rarity",
]
