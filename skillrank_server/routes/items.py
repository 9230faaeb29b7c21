"""Item catalog endpoints: detail (records access) and related items."""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Header, HTTPException, Query, Request

from skillrank import get_related_items

from ..models import ItemCard, ItemListResponse, RelatedItemsResponse
from ..state import get_state
from ..utils import (
    DEFAULT_RELATED_LIMIT,
    MAX_RELATED_LIMIT,
    access_client_key,
    should_track_access,
    to_item_card,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ItemListResponse)
async def list_items(limit: Optional[int] = Query(None, ge=1), offset: int = Query(0, ge=0)):
    """List public items."""
    state = get_state()
    everything = await state.catalog.list_items()
    page = everything[offset : offset + limit] if limit else everything[offset:]
    return ItemListResponse(
        items=[to_item_card(i) for i in page],
        total=len(everything),
        offset=offset,
        limit=limit,
    )


@router.get("/{item_id}", response_model=ItemCard)
async def get_item(
    item_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
    x_user_id: Optional[str] = Header(None),
):
    """Item detail. Records the view after the response is sent."""
    state = get_state()
    item = await state.catalog.get_item(item_id)
    if item is None or not item.is_public:
        raise HTTPException(status_code=404, detail="Item not found")
    if should_track_access(request.headers):
        background_tasks.add_task(
            state.access_recorder.record_access,
            item.id,
            access_client_key(request.headers, x_user_id),
        )
    return to_item_card(item)


@router.get("/{item_id}/related", response_model=RelatedItemsResponse)
async def get_related(
    item_id: str,
    limit: int = Query(DEFAULT_RELATED_LIMIT, ge=1, le=MAX_RELATED_LIMIT),
):
    """Related items (cached). Degrades to an empty list on failure."""
    state = get_state()
    item = await state.catalog.get_item(item_id)
    if item is None or not item.is_public:
        raise HTTPException(status_code=404, detail="Item not found")

    async def _compute():
        return await get_related_items(
            state.catalog,
            item.id,
            item.categories,
            item.repo_owner,
            limit=limit,
            config=state.engine_config,
        )

    try:
        if limit == state.config.related_limit:
            related, cached = await state.related_cache.get_or_compute(item.id, _compute)
        else:
            related, cached = await _compute(), False
    except Exception as e:
        logger.warning("[items] RELATED_FAILED item_id=%s err=%s", item.id, e)
        related, cached = [], False
    return RelatedItemsResponse(item_id=item.id, related=related, cached=cached)
