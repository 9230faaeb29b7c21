"""
Stage A: Tiered Candidate Discovery

Builds the related-items candidate pool with fallback passes, so an item with
no categories, tags or known author still gets results:
  Tier 1: category overlap | Tier 2: tag overlap | Tier 3: same author | Tier 4: trending

Passes stop once the pool reaches 2 * limit. Each pass excludes the source item
and everything already found; a candidate keeps the tier of the first pass that
found it.

The public entry point is discover_candidates.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..gateway import CatalogGateway
from ..models.config import EngineConfig, resolve_config
from ..models.item import Candidate, CandidateRow, DiscoveryTier

logger = logging.getLogger(__name__)


class _Pool:
    """Ordered candidate map plus the running exclusion list."""

    def __init__(self, exclude_ids: List[str]):
        self.by_id: Dict[str, Candidate] = {}
        self.exclude_ids = exclude_ids

    def add(self, rows: List[CandidateRow], tier: DiscoveryTier) -> int:
        added = 0
        for row in rows:
            if row.id in self.by_id or row.id in self.exclude_ids:
                continue
            self.by_id[row.id] = Candidate(row=row, discovery_tier=tier)
            self.exclude_ids.append(row.id)
            added += 1
        return added

    def __len__(self) -> int:
        return len(self.by_id)

    def candidates(self) -> List[Candidate]:
        return list(self.by_id.values())


def min_pool_size(limit: int) -> int:
    """Target pool size for a requested result limit."""
    return 2 * max(limit, 1)


async def discover_candidates(
    gateway: CatalogGateway,
    item_id: str,
    categories: Sequence[str],
    tags: Sequence[str],
    repo_owner: Optional[str],
    limit: int = 10,
    exclude_self: bool = True,
    config: Optional[EngineConfig] = None,
) -> List[Candidate]:
    """
    Stage A: discover related candidates through the four fallback passes.

    Returns candidates in discovery order, each tagged with its discovery tier.
    Never empty when the catalog holds another public item (tier 4 has no
    preconditions).
    """
    config = resolve_config(config)
    target = min_pool_size(limit)
    pool = _Pool([item_id] if exclude_self else [])

    # Tier 1: category overlap
    if categories:
        rows = await gateway.find_by_category_overlap(
            list(categories), list(pool.exclude_ids), config.category_pass_limit
        )
        pool.add(rows, DiscoveryTier.CATEGORY)

    # Tier 2: tag overlap
    if tags and len(pool) < target:
        rows = await gateway.find_by_tag_overlap(
            list(tags), list(pool.exclude_ids), config.tag_pass_limit
        )
        pool.add(rows, DiscoveryTier.TAG)

    # Tier 3: same author
    if repo_owner and len(pool) < target:
        rows = await gateway.find_by_author(
            repo_owner, list(pool.exclude_ids), config.author_pass_limit
        )
        pool.add(rows, DiscoveryTier.AUTHOR)

    # Tier 4: trending fallback
    if len(pool) < target:
        rows = await gateway.find_trending(list(pool.exclude_ids), config.trending_pass_limit)
        pool.add(rows, DiscoveryTier.TRENDING)

    logger.debug(
        "[discovery] POOL item_id=%s size=%d target=%d has_categories=%s has_tags=%s has_owner=%s",
        item_id, len(pool), target, bool(categories), bool(tags), bool(repo_owner),
    )
    return pool.candidates()
