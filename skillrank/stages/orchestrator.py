"""
Pipeline orchestrator: runs Stage A (tiered discovery) then Stage B (ranking)
to produce the related-items list for one item.

The main entry point is get_related_items: load source tags, discover, batch
overlap enrichment, rank, truncate, attach categories, strip bookkeeping.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from ..gateway import CatalogGateway
from ..models.config import EngineConfig, resolve_config
from ..models.item import Candidate, DiscoveryTier, RelatedItem
from ..models.scoring import ScoredCandidate
from .discovery import discover_candidates
from .ranking import rank_candidates


async def _batch_overlaps(
    gateway: CatalogGateway,
    candidates: List[Candidate],
    categories: Sequence[str],
    tags: Sequence[str],
) -> Tuple[Optional[Dict[str, int]], Optional[Dict[str, int]]]:
    """
    Overlap counts not already known from the discovery queries.

    Tags: every candidate (tier 2 rows keep their query count regardless).
    Categories: only candidates outside tier 1.
    """
    tag_overlap = None
    if tags:
        tag_overlap = await gateway.batch_count_overlap(
            [c.id for c in candidates], list(tags), "tags"
        )
    category_overlap = None
    non_tier1 = [c.id for c in candidates if c.discovery_tier is not DiscoveryTier.CATEGORY]
    if categories and non_tier1:
        category_overlap = await gateway.batch_count_overlap(
            non_tier1, list(categories), "categories"
        )
    return category_overlap, tag_overlap


def to_related_item(scored: ScoredCandidate, categories: List[str]) -> RelatedItem:
    """Public shape of a ranked candidate (no overlap counts, tier or score)."""
    row = scored.candidate.row
    return RelatedItem(
        id=row.id,
        slug=row.slug,
        name=row.name,
        description=row.description,
        repo_owner=row.repo_owner,
        repo_name=row.repo_name,
        stars=row.stars,
        forks=row.forks,
        trending_score=row.trending_score,
        updated_at=row.updated_at,
        categories=categories,
    )


async def rank_related(
    gateway: CatalogGateway,
    item_id: str,
    categories: Sequence[str],
    repo_owner: Optional[str] = None,
    limit: int = 10,
    now: Optional[datetime] = None,
    config: Optional[EngineConfig] = None,
) -> List[ScoredCandidate]:
    """Stage A → Stage B, returning the top `limit` scored candidates."""
    config = resolve_config(config)
    now = now or datetime.now(timezone.utc)
    limit = max(limit, 1)

    tags = await gateway.get_tags(item_id)
    candidates = await discover_candidates(
        gateway, item_id, categories, tags, repo_owner, limit, config=config
    )
    if not candidates:
        return []

    category_overlap, tag_overlap = await _batch_overlaps(gateway, candidates, categories, tags)
    ranked = rank_candidates(
        candidates,
        categories,
        tags,
        repo_owner,
        now,
        config,
        category_overlap=category_overlap,
        tag_overlap=tag_overlap,
    )
    return ranked[:limit]


async def get_related_items(
    gateway: CatalogGateway,
    item_id: str,
    categories: Sequence[str],
    repo_owner: Optional[str] = None,
    limit: int = 10,
    now: Optional[datetime] = None,
    config: Optional[EngineConfig] = None,
) -> List[RelatedItem]:
    """
    Related items for item_id, best first.

    Returns:
        Up to `limit` RelatedItem entries with their categories attached;
        empty only when no other public item exists.
    """
    top = await rank_related(gateway, item_id, categories, repo_owner, limit, now, config)
    if not top:
        return []
    categories_by_id = await gateway.get_categories_map([s.candidate.id for s in top])
    return [to_related_item(s, categories_by_id.get(s.candidate.id, [])) for s in top]
