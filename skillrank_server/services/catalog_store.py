"""
Catalog stores: CatalogGateway implementations over in-process item records.

InMemoryCatalogStore keeps Item models in a dict and answers the discovery
queries the way the SQL store does (public only, exclusions, ordering, caps).
JsonCatalogStore loads the same records from an items.json fixture
(DATA_SOURCE=json); counter updates stay in memory.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from skillrank import CandidateRow, Item, ItemState
from skillrank.gateway import OverlapKind
from skillrank.models import ensure_items

logger = logging.getLogger(__name__)


class InMemoryCatalogStore:
    """
    Catalog backed by a dict of Item models.
    Used for local runs, evaluation fixtures, and tests.
    """

    def __init__(self, items: Optional[Iterable[Union[Dict[str, Any], Item]]] = None):
        self._items: Dict[str, Item] = {}
        for item in ensure_items(list(items or [])):
            self._items[item.id] = item

    def add(self, item: Union[Dict[str, Any], Item]) -> Item:
        """Insert or replace one item."""
        typed = Item.model_validate(item) if isinstance(item, dict) else item
        self._items[typed.id] = typed
        return typed

    def __len__(self) -> int:
        return len(self._items)

    def _public(self, exclude_ids: Sequence[str]) -> List[Item]:
        excluded = set(exclude_ids)
        return [i for i in self._items.values() if i.is_public and i.id not in excluded]

    @staticmethod
    def _values(item: Item, kind: OverlapKind) -> List[str]:
        return item.categories if kind == "categories" else item.tags

    def _find_by_overlap(
        self,
        values: Sequence[str],
        kind: OverlapKind,
        exclude_ids: Sequence[str],
        limit: int,
    ) -> List[CandidateRow]:
        wanted = set(values)
        rows = []
        for item in self._public(exclude_ids):
            shared = len(wanted.intersection(self._values(item, kind)))
            if shared > 0:
                rows.append(CandidateRow.from_item(item, shared_count=shared))
        rows.sort(key=lambda r: (r.shared_count, r.trending_score), reverse=True)
        return rows[:limit]

    async def get_item(self, item_id: str) -> Optional[Item]:
        return self._items.get(item_id)

    async def list_items(self, limit: Optional[int] = None, offset: int = 0) -> List[Item]:
        items = [i for i in self._items.values() if i.is_public]
        if offset:
            items = items[offset:]
        if limit is not None:
            items = items[:limit]
        return items

    async def get_item_state(self, item_id: str) -> Optional[ItemState]:
        item = self._items.get(item_id)
        return item.state() if item is not None else None

    async def increment_access_counters(self, item_id: str, now: datetime) -> None:
        item = self._items.get(item_id)
        if item is None:
            return
        item.access_count_7d += 1
        item.access_count_30d += 1
        item.last_accessed_at = now

    async def get_tags(self, item_id: str) -> List[str]:
        item = self._items.get(item_id)
        return list(item.tags) if item is not None else []

    async def get_categories(self, item_id: str) -> List[str]:
        item = self._items.get(item_id)
        return list(item.categories) if item is not None else []

    async def get_categories_map(self, item_ids: Sequence[str]) -> Dict[str, List[str]]:
        out = {}
        for item_id in item_ids:
            item = self._items.get(item_id)
            if item is not None and item.categories:
                out[item_id] = list(item.categories)
        return out

    async def find_by_category_overlap(
        self,
        categories: Sequence[str],
        exclude_ids: Sequence[str],
        limit: int,
    ) -> List[CandidateRow]:
        return self._find_by_overlap(categories, "categories", exclude_ids, limit)

    async def find_by_tag_overlap(
        self,
        tags: Sequence[str],
        exclude_ids: Sequence[str],
        limit: int,
    ) -> List[CandidateRow]:
        return self._find_by_overlap(tags, "tags", exclude_ids, limit)

    async def find_by_author(
        self,
        repo_owner: str,
        exclude_ids: Sequence[str],
        limit: int,
    ) -> List[CandidateRow]:
        rows = [
            CandidateRow.from_item(i)
            for i in self._public(exclude_ids)
            if i.repo_owner == repo_owner
        ]
        rows.sort(key=lambda r: r.trending_score, reverse=True)
        return rows[:limit]

    async def find_trending(
        self,
        exclude_ids: Sequence[str],
        limit: int,
    ) -> List[CandidateRow]:
        rows = [CandidateRow.from_item(i) for i in self._public(exclude_ids)]
        rows.sort(key=lambda r: r.trending_score, reverse=True)
        return rows[:limit]

    async def batch_count_overlap(
        self,
        item_ids: Sequence[str],
        values: Sequence[str],
        kind: OverlapKind,
    ) -> Dict[str, int]:
        wanted = set(values)
        out = {}
        for item_id in item_ids:
            item = self._items.get(item_id)
            if item is None:
                continue
            count = len(wanted.intersection(self._values(item, kind)))
            if count:
                out[item_id] = count
        return out


class JsonCatalogStore(InMemoryCatalogStore):
    """Catalog loaded from a JSON file (a list of items, or {"items": [...]})."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Items JSON not found: {self._path}")
        with open(self._path) as f:
            data = json.load(f)
        items = data.get("items", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise ValueError(f"Items JSON must hold a list of items: {self._path}")
        super().__init__(items)
        logger.info("[catalog] LOADED path=%s items=%d", self._path, len(self))
