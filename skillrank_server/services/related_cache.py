"""
Related-items cache on top of the scratch store.

Related lists are cached as JSON under related:<item_id> with a short TTL.
Cache read/write failures fall through to a fresh computation.
"""

import json
import logging
from typing import Awaitable, Callable, List, Tuple

from pydantic import TypeAdapter

from skillrank import RelatedItem, ScratchStore, related_cache_key

logger = logging.getLogger(__name__)

_related_list = TypeAdapter(List[RelatedItem])


class RelatedItemsCache:
    """get-or-compute wrapper for related-items lists."""

    def __init__(self, scratch: ScratchStore, ttl_seconds: int = 3600):
        self.scratch = scratch
        self.ttl_seconds = ttl_seconds

    async def get_or_compute(
        self,
        item_id: str,
        fetcher: Callable[[], Awaitable[List[RelatedItem]]],
    ) -> Tuple[List[RelatedItem], bool]:
        """Return (items, cache_hit)."""
        key = related_cache_key(item_id)
        try:
            raw = await self.scratch.get(key)
            if raw is not None:
                return _related_list.validate_json(raw), True
        except Exception as e:
            logger.warning("[related_cache] READ_FAILED key=%s err=%s", key, e)

        items = await fetcher()
        try:
            payload = json.dumps([i.model_dump(mode="json") for i in items])
            await self.scratch.put(key, payload, self.ttl_seconds)
        except Exception as e:
            logger.warning("[related_cache] WRITE_FAILED key=%s err=%s", key, e)
        return items, False

    async def invalidate(self, item_id: str) -> None:
        await self.scratch.delete(related_cache_key(item_id))
