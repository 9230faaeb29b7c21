"""
Detached background tasks for fire-and-forget lifecycle work.

The request path never awaits these. A runner keeps a reference to each task
until it finishes (so it is not garbage collected mid-flight) and logs any
exception the task ends with; nothing is re-raised.
"""

import asyncio
import logging
from typing import Coroutine, Set

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """Owns detached tasks spawned by the access recorder and resurrection checker."""

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def spawn(self, coro: Coroutine, label: str = "task") -> asyncio.Task:
        """Schedule coro on the running loop and return without awaiting it."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._finished(t, label))
        return task

    def _finished(self, task: asyncio.Task, label: str) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.info("[background] TASK_CANCELLED label=%s", label)
            return
        exc = task.exception()
        if exc is not None:
            logger.error("[background] TASK_FAILED label=%s err=%r", label, exc)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every in-flight task, including ones spawned while draining."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await self.drain()
