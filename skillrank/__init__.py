"""
skillrank: freshness lifecycle and related-items ranking for the skill catalog.

Single entry point for the engine package:
- models/: EngineConfig, Item, Candidate, ScoredCandidate, Tier
- lifecycle/: needs_update, DedupGuard, AccessRecorder, ResurrectionChecker
- stages/: discovery (Stage A), ranking (Stage B), orchestrator
- gateway: CatalogGateway and ScratchStore protocols the server implements
"""

from .errors import GatewayError, ResurrectionServiceError
from .gateway import (
    NEEDS_RESURRECTION_PREFIX,
    NEEDS_UPDATE_PREFIX,
    RELATED_CACHE_PREFIX,
    CatalogGateway,
    ScratchStore,
    needs_resurrection_key,
    needs_update_key,
    related_cache_key,
)
from .lifecycle import (
    AccessRecorder,
    BackgroundRunner,
    DedupGuard,
    ResurrectionChecker,
    ResurrectionClient,
    ResurrectionResult,
    needs_update,
)
from .models import (
    DEFAULT_CONFIG,
    Candidate,
    CandidateRow,
    DiscoveryTier,
    EngineConfig,
    Item,
    ItemState,
    RelatedItem,
    ScoredCandidate,
    SignalWeights,
    Tier,
    resolve_config,
    tier_policy,
)
from .stages import discover_candidates, get_related_items, rank_candidates, rank_related

__version__ = "1.0.0"

__all__ = [
    "NEEDS_RESURRECTION_PREFIX",
    "NEEDS_UPDATE_PREFIX",
    "RELATED_CACHE_PREFIX",
    "AccessRecorder",
    "BackgroundRunner",
    "Candidate",
    "CandidateRow",
    "CatalogGateway",
    "DEFAULT_CONFIG",
    "DedupGuard",
    "DiscoveryTier",
    "EngineConfig",
    "GatewayError",
    "Item",
    "ItemState",
    "RelatedItem",
    "ResurrectionChecker",
    "ResurrectionClient",
    "ResurrectionResult",
    "ResurrectionServiceError",
    "ScoredCandidate",
    "ScratchStore",
    "SignalWeights",
    "Tier",
    "discover_candidates",
    "get_related_items",
    "needs_resurrection_key",
    "needs_update",
    "needs_update_key",
    "rank_candidates",
    "rank_related",
    "related_cache_key",
    "resolve_config",
    "tier_policy",
]
