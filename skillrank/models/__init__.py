"""Data models for the lifecycle and related-items engine."""

from .config import DEFAULT_CONFIG, EngineConfig, SignalWeights, resolve_config
from .item import (
    Candidate,
    CandidateRow,
    DiscoveryTier,
    Item,
    ItemState,
    RelatedItem,
    ensure_items,
    ensure_utc,
)
from .scoring import ScoredCandidate
from .tier import Tier, TierPolicy, tier_policy

__all__ = [
    "DEFAULT_CONFIG",
    "Candidate",
    "CandidateRow",
    "DiscoveryTier",
    "EngineConfig",
    "Item",
    "ItemState",
    "RelatedItem",
    "ScoredCandidate",
    "SignalWeights",
    "Tier",
    "TierPolicy",
    "ensure_items",
    "ensure_utc",
    "resolve_config",
    "tier_policy",
]
