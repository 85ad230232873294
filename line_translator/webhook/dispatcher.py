"""Bounded background dispatch for webhook batches.

A fixed pool of worker tasks drains a bounded queue; each queued item is
the full event list of one webhook request. When the queue is full new
batches are dropped rather than spawning unbounded tasks.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from line_translator.webhook.processor import EventProcessor

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Runs ``EventProcessor.process`` for queued batches on a worker pool."""

    def __init__(
        self,
        processor: EventProcessor,
        workers: int = 4,
        max_pending: int = 100,
    ) -> None:
        self._processor = processor
        self._worker_count = workers
        self._max_pending = max_pending
        self._queue: asyncio.Queue[list[Any]] | None = None
        self._workers: list[asyncio.Task[None]] = []

    @property
    def running(self) -> bool:
        return bool(self._workers)

    def _ensure_started(self) -> asyncio.Queue[list[Any]]:
        # Started lazily so the queue and tasks belong to the serving loop
        if self._queue is None:
            self._queue = asyncio.Queue(maxsize=self._max_pending)
        if not self._workers:
            self._workers = [
                asyncio.create_task(self._run(self._queue), name=f"webhook-worker-{i}")
                for i in range(self._worker_count)
            ]
        return self._queue

    def submit(self, events: Sequence[Any]) -> bool:
        """Queue one request's events. Returns False if the batch was dropped."""
        queue = self._ensure_started()
        try:
            queue.put_nowait(list(events))
        except asyncio.QueueFull:
            logger.warning(
                "Webhook queue full (%d pending); dropping %d event(s)",
                queue.qsize(), len(events),
            )
            return False
        return True

    async def _run(self, queue: asyncio.Queue[list[Any]]) -> None:
        while True:
            batch = await queue.get()
            try:
                await self._processor.process(batch)
            except Exception:
                logger.exception("Unhandled error while processing webhook batch")
            finally:
                queue.task_done()

    async def join(self) -> None:
        """Wait until every queued batch has been processed."""
        if self._queue is not None:
            await self._queue.join()

    async def shutdown(self, drain_timeout: float | None = 30.0) -> None:
        """Drain pending batches (bounded by ``drain_timeout``), then stop workers."""
        if not self._workers:
            return
        try:
            await asyncio.wait_for(self.join(), timeout=drain_timeout)
        except TimeoutError:
            logger.warning("Webhook queue not drained after %ss; cancelling", drain_timeout)
        for task in self._workers:
            task.cancel()
        for task in self._workers:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._workers = []
        self._queue = None
