"""
Resurrection checker for archived items.

When a user opens an archived item, the external resurrection service (if
configured) decides whether to move it back to an active tier. Without the
service, or when the call fails, a needs_resurrection_check marker is left for
the batch sweep to pick up. Nothing here raises into the caller.
"""

import logging
from typing import Optional, Protocol

from pydantic import BaseModel

from ..gateway import ScratchStore, needs_resurrection_key
from ..models.config import EngineConfig, resolve_config

logger = logging.getLogger(__name__)


class ResurrectionResult(BaseModel):
    """Response body of POST {RESURRECTION_URL}/check."""

    resurrected: bool
    reason: Optional[str] = None


class ResurrectionClient(Protocol):
    """Calls the external resurrection service; raises on any failure."""

    async def check(self, item_id: str) -> ResurrectionResult:
        ...


class ResurrectionChecker:
    """Escalates archived-item views to the resurrection service or a deferred marker."""

    def __init__(
        self,
        scratch: ScratchStore,
        client: Optional[ResurrectionClient] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.scratch = scratch
        self.client = client
        self.config = resolve_config(config)

    @property
    def service_configured(self) -> bool:
        return self.client is not None

    async def check_resurrection(self, item_id: str) -> None:
        """Ask the service about item_id, falling back to the deferred marker."""
        if self.client is not None:
            try:
                result = await self.client.check(item_id)
            except Exception as e:
                logger.warning(
                    "[resurrection] SERVICE_UNAVAILABLE item_id=%s err=%s; deferring to sweep",
                    item_id, e,
                )
            else:
                if result.resurrected:
                    logger.info("[resurrection] RESURRECTED item_id=%s", item_id)
                else:
                    logger.info(
                        "[resurrection] NOT_RESURRECTED item_id=%s reason=%s",
                        item_id, result.reason,
                    )
                return
        await self._write_marker(item_id)

    async def _write_marker(self, item_id: str) -> None:
        try:
            await self.scratch.put(
                needs_resurrection_key(item_id),
                "1",
                self.config.resurrection_marker_ttl_seconds,
            )
        except Exception as e:
            logger.warning("[resurrection] MARKER_WRITE_FAILED item_id=%s err=%s", item_id, e)
