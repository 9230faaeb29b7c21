"""
Per-candidate blended scoring over six 0-100 signals.

Builds a ScoredCandidate for one candidate given its overlap counts and the
selected weight row:
final = category*w.category + tag*w.tag + author*w.author
        + popularity*w.popularity + freshness*w.freshness + discovery*w.discovery
"""

from datetime import datetime
from typing import Optional

from ...models.config import EngineConfig, SignalWeights
from ...models.item import Candidate, DiscoveryTier
from ...models.scoring import (
    ScoredCandidate,
    freshness_score,
    overlap_score,
    popularity_score,
)


def discovery_score(tier: DiscoveryTier, config: EngineConfig) -> float:
    """Fixed score for the pass that found the candidate."""
    if tier is DiscoveryTier.CATEGORY:
        return config.discovery_score_category
    if tier is DiscoveryTier.TAG:
        return config.discovery_score_tag
    if tier is DiscoveryTier.AUTHOR:
        return config.discovery_score_author
    return config.discovery_score_trending


def build_scored_candidate(
    candidate: Candidate,
    shared_categories: int,
    shared_tags: int,
    total_categories: int,
    total_tags: int,
    repo_owner: Optional[str],
    weights: SignalWeights,
    now: datetime,
    config: EngineConfig,
) -> ScoredCandidate:
    """Compute every signal for one candidate and blend with the weight row."""
    row = candidate.row
    cat_score = overlap_score(shared_categories, total_categories)
    tag_score = overlap_score(shared_tags, total_tags)
    author = 100.0 if repo_owner and row.repo_owner == repo_owner else 0.0
    pop = popularity_score(
        row.stars,
        row.trending_score,
        config.popularity_star_factor,
        config.popularity_trending_factor,
        config.popularity_cap,
    )
    fresh = freshness_score(
        row.last_commit_at,
        now,
        config.freshness_decay_per_day,
        config.freshness_default_days,
    )
    disc = discovery_score(candidate.discovery_tier, config)

    final = (
        cat_score * weights.category
        + tag_score * weights.tag
        + author * weights.author
        + pop * weights.popularity
        + fresh * weights.freshness
        + disc * weights.discovery
    )
    return ScoredCandidate(
        candidate=candidate,
        shared_categories=shared_categories,
        shared_tags=shared_tags,
        category_score=cat_score,
        tag_score=tag_score,
        author_score=author,
        popularity_score=pop,
        freshness_score=fresh,
        discovery_score=disc,
        final_score=final,
    )
