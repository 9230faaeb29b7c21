"""
Access recorder: counts item views and emits refresh markers.

Called after an item page is served. Flow per view:
1. Suppress repeat views by the same client within the dedup window
2. Bump access counters and last_accessed_at
3. Archived items: hand off to the resurrection checker (detached) and stop
4. Otherwise, if the tier scheduler says the item is due, write a
   needs_update marker unless one was written for it within the debounce window

Every failure is logged and swallowed; the next view re-derives the same decision.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ..gateway import CatalogGateway, ScratchStore, needs_update_key
from ..models.config import EngineConfig, resolve_config
from ..models.tier import Tier
from .background import BackgroundRunner
from .dedup import DedupGuard
from .resurrection import ResurrectionChecker
from .scheduler import needs_update

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccessRecorder:
    """Records item views; owns its dedup and debounce guards."""

    def __init__(
        self,
        gateway: CatalogGateway,
        scratch: ScratchStore,
        resurrection: ResurrectionChecker,
        runner: Optional[BackgroundRunner] = None,
        config: Optional[EngineConfig] = None,
        access_guard: Optional[DedupGuard] = None,
        marker_guard: Optional[DedupGuard] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.gateway = gateway
        self.scratch = scratch
        self.resurrection = resurrection
        self.runner = runner or BackgroundRunner()
        self.config = resolve_config(config)
        self.access_guard = access_guard or DedupGuard(
            timedelta(seconds=self.config.access_dedup_window_seconds),
            self.config.access_dedup_max_entries,
        )
        self.marker_guard = marker_guard or DedupGuard(
            timedelta(seconds=self.config.marker_debounce_window_seconds),
            self.config.marker_debounce_max_entries,
        )
        self.clock = clock

    def schedule(self, item_id: str, client_key: Optional[str] = None) -> None:
        """Fire-and-forget record_access on the running loop."""
        self.runner.spawn(self.record_access(item_id, client_key), label=f"access:{item_id}")

    async def record_access(
        self,
        item_id: str,
        client_key: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Record one view of item_id. Never raises."""
        now = now or self.clock()
        if client_key and self.access_guard.should_skip(f"{item_id}:{client_key}", now):
            logger.debug("[access] DEDUPED item_id=%s client=%s", item_id, client_key)
            return

        try:
            state = await self.gateway.get_item_state(item_id)
        except Exception as e:
            logger.warning("[access] STATE_READ_FAILED item_id=%s err=%s", item_id, e)
            return
        if state is None:
            logger.debug("[access] ITEM_NOT_FOUND item_id=%s", item_id)
            return

        try:
            await self.gateway.increment_access_counters(item_id, now)
        except Exception as e:
            logger.warning("[access] COUNTER_UPDATE_FAILED item_id=%s err=%s", item_id, e)

        tier = Tier.parse(state.tier)
        if tier is Tier.ARCHIVED:
            self.runner.spawn(
                self.resurrection.check_resurrection(item_id),
                label=f"resurrection:{item_id}",
            )
            return

        if not needs_update(tier, state.next_update_at, state.last_accessed_at, now):
            return
        if self.marker_guard.should_skip(item_id, now):
            logger.debug("[access] MARKER_DEBOUNCED item_id=%s", item_id)
            return
        try:
            await self.scratch.put(
                needs_update_key(item_id),
                "1",
                self.config.needs_update_ttl_seconds,
            )
            logger.info("[access] NEEDS_UPDATE_MARKED item_id=%s tier=%s", item_id, tier.value)
        except Exception as e:
            # Let the next view retry instead of waiting out the debounce window
            self.marker_guard.forget(item_id)
            logger.warning("[access] MARKER_WRITE_FAILED item_id=%s err=%s", item_id, e)
