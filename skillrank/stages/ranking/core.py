"""
Main ranking orchestration: pick adaptive weights, then blended scoring.

Overlap counts come from the discovery query for the pass that matched on that
signal (tier 1 for categories, tier 2 for tags) and from the batch overlap maps
for every other candidate.
Submodules used: weights, blended_scoring.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ...models.config import DEFAULT_CONFIG, EngineConfig
from ...models.item import Candidate, DiscoveryTier
from ...models.scoring import ScoredCandidate
from .blended_scoring import build_scored_candidate
from .weights import select_weights

logger = logging.getLogger(__name__)


def _shared_count(
    candidate: Candidate,
    query_tier: DiscoveryTier,
    overlap: Optional[Dict[str, int]],
) -> int:
    if candidate.discovery_tier is query_tier:
        return candidate.row.shared_count
    if overlap is None:
        return 0
    return overlap.get(candidate.id, 0)


def sort_key(scored: ScoredCandidate):
    """Score desc, then trending desc, stars desc, discovery tier asc."""
    return (
        -scored.final_score,
        -scored.trending_score,
        -scored.stars,
        int(scored.candidate.discovery_tier),
    )


def rank_candidates(
    candidates: List[Candidate],
    source_categories: Sequence[str],
    source_tags: Sequence[str],
    repo_owner: Optional[str],
    now: datetime,
    config: EngineConfig = DEFAULT_CONFIG,
    category_overlap: Optional[Dict[str, int]] = None,
    tag_overlap: Optional[Dict[str, int]] = None,
) -> List[ScoredCandidate]:
    """
    Rank candidates by adaptive weighted score.

    Weights follow which signals the source has (categories, tags, both,
    neither). Returns every candidate scored and sorted; truncation is the
    caller's job.
    """
    # 1) Select weight row from the source's available signals
    has_categories = len(source_categories) > 0
    has_tags = len(source_tags) > 0
    weights = select_weights(has_categories, has_tags, config)

    # 2) Score each candidate
    scored: List[ScoredCandidate] = []
    for candidate in candidates:
        shared_cats = _shared_count(candidate, DiscoveryTier.CATEGORY, category_overlap)
        shared_tags = _shared_count(candidate, DiscoveryTier.TAG, tag_overlap)
        scored.append(
            build_scored_candidate(
                candidate,
                shared_categories=shared_cats,
                shared_tags=shared_tags,
                total_categories=len(source_categories),
                total_tags=len(source_tags),
                repo_owner=repo_owner,
                weights=weights,
                now=now,
                config=config,
            )
        )

    # 3) Sort with tie-breaks
    scored.sort(key=sort_key)
    if scored:
        logger.debug(
            "[ranking] RANKED count=%d top_id=%s top_score=%.2f has_categories=%s has_tags=%s",
            len(scored), scored[0].candidate.id, scored[0].final_score, has_categories, has_tags,
        )
    return scored
