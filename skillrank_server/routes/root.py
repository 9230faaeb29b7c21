"""Root and health endpoints."""

import logging
from typing import Optional, Tuple

from fastapi import APIRouter

from skillrank import NEEDS_RESURRECTION_PREFIX, NEEDS_UPDATE_PREFIX, GatewayError, __version__

from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


async def _scratch_available(state: AppState) -> Tuple[bool, str]:
    """Return (available, message) for the scratch store."""
    check = getattr(state.scratch, "is_available", None)
    if check is None:
        return True, "in-process"
    ok = await check()
    return ok, "connected" if ok else "not reachable"


async def _marker_count(state: AppState, prefix: str) -> Optional[int]:
    """Live markers under prefix, or None if the scratch store cannot list them."""
    try:
        return len(await state.scratch.keys(prefix))
    except GatewayError as e:
        logger.warning("[health] MARKER_COUNT_FAILED prefix=%s err=%s", prefix, e)
        return None


@router.get("/")
async def root():
    state = get_state()
    return {
        "name": "skillrank API",
        "version": __version__,
        "catalog": type(state.catalog).__name__,
        "scratch": type(state.scratch).__name__,
        "endpoints": {
            "items": ["/api/items", "/api/items/{item_id}", "/api/items/{item_id}/related"],
            "health": ["/api/health"],
        },
    }


@router.get("/api/health")
async def health():
    state = get_state()
    scratch_ok, scratch_msg = await _scratch_available(state)
    return {
        "status": "healthy",
        "scratch": {"available": scratch_ok, "message": scratch_msg},
        "resurrection": {"configured": state.resurrection.service_configured},
        "markers": {
            "needs_update": await _marker_count(state, NEEDS_UPDATE_PREFIX) if scratch_ok else None,
            "needs_resurrection_check": await _marker_count(state, NEEDS_RESURRECTION_PREFIX) if scratch_ok else None,
        },
        "background_tasks": state.runner.pending,
    }
