"""
Persistence abstractions consumed by the engine.

CatalogGateway supplies item records, tag/category joins and the discovery
queries; ScratchStore is a key-value store with TTL holding advisory markers.
Implementations live in skillrank_server.services (in-memory, JSON, Firestore).
All methods are coroutines: every store call is an I/O boundary.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional, Protocol, Sequence

from .models.item import CandidateRow, Item, ItemState

OverlapKind = Literal["categories", "tags"]

NEEDS_UPDATE_PREFIX = "needs_update:"
NEEDS_RESURRECTION_PREFIX = "needs_resurrection_check:"
RELATED_CACHE_PREFIX = "related:"


def needs_update_key(item_id: str) -> str:
    return f"{NEEDS_UPDATE_PREFIX}{item_id}"


def needs_resurrection_key(item_id: str) -> str:
    return f"{NEEDS_RESURRECTION_PREFIX}{item_id}"


def related_cache_key(item_id: str) -> str:
    return f"{RELATED_CACHE_PREFIX}{item_id}"


class CatalogGateway(Protocol):
    """Protocol for catalog reads and access-counter writes."""

    async def get_item(self, item_id: str) -> Optional[Item]:
        """Full item record, or None if it does not exist."""
        ...

    async def list_items(self, limit: Optional[int] = None, offset: int = 0) -> List[Item]:
        """Public items in catalog order, paginated."""
        ...

    async def get_item_state(self, item_id: str) -> Optional[ItemState]:
        """tier, next_update_at and last_accessed_at, or None if missing."""
        ...

    async def increment_access_counters(self, item_id: str, now: datetime) -> None:
        """Bump access_count_7d/30d by one and set last_accessed_at = now."""
        ...

    async def get_tags(self, item_id: str) -> List[str]:
        ...

    async def get_categories(self, item_id: str) -> List[str]:
        ...

    async def get_categories_map(self, item_ids: Sequence[str]) -> Dict[str, List[str]]:
        """Categories per item id (ids without categories may be absent)."""
        ...

    async def find_by_category_overlap(
        self,
        categories: Sequence[str],
        exclude_ids: Sequence[str],
        limit: int,
    ) -> List[CandidateRow]:
        """
        Public items sharing at least one category, ordered by shared count
        then trending score (both descending). shared_count is set on each row.
        """
        ...

    async def find_by_tag_overlap(
        self,
        tags: Sequence[str],
        exclude_ids: Sequence[str],
        limit: int,
    ) -> List[CandidateRow]:
        """Same as find_by_category_overlap, over free-form tags."""
        ...

    async def find_by_author(
        self,
        repo_owner: str,
        exclude_ids: Sequence[str],
        limit: int,
    ) -> List[CandidateRow]:
        """Public items from the same repository owner, by trending score."""
        ...

    async def find_trending(
        self,
        exclude_ids: Sequence[str],
        limit: int,
    ) -> List[CandidateRow]:
        """Globally highest-trending public items."""
        ...

    async def batch_count_overlap(
        self,
        item_ids: Sequence[str],
        values: Sequence[str],
        kind: OverlapKind,
    ) -> Dict[str, int]:
        """How many of values each item carries (ids with zero may be absent)."""
        ...


class ScratchStore(Protocol):
    """Protocol for the TTL-bound key-value scratch store."""

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        ...

    async def get(self, key: str) -> Optional[str]:
        """Value, or None if absent or expired."""
        ...

    async def delete(self, key: str) -> None:
        ...

    async def keys(self, prefix: str = "") -> List[str]:
        """Live (unexpired) keys starting with prefix."""
        ...
