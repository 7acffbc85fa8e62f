"""
Admission control for headless-browser renders.

Every PDF render launches its own Chromium process (~100-300MB RSS).
Without a limit, a burst of requests launches a burst of browsers and
the container gets OOM-killed. RenderGate is a small bounded worker pool:

- at most `max_concurrent` renders hold a slot at once
- at most `max_queued` requests wait for a slot; beyond that we reject
  immediately instead of piling up
- a waiting request gives up after `queue_timeout` seconds

Rejections raise ServiceBusyError (HTTP 503) so clients know to retry.

Usage:
    gate = RenderGate(max_concurrent=4, max_queued=16, queue_timeout=30)
    async with gate.slot():
        ...  # launch browser, render, close
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from readiness_report.errors import ServiceBusyError

logger = logging.getLogger(__name__)


class RenderGate:
    """Bounds concurrent browser sessions and the queue in front of them."""

    def __init__(self, max_concurrent: int, max_queued: int, queue_timeout: float):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        if max_queued < 0:
            raise ValueError("max_queued cannot be negative")

        self.max_concurrent = max_concurrent
        self.max_queued = max_queued
        self.queue_timeout = queue_timeout

        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._active = 0
        self._waiting = 0

    @property
    def active(self) -> int:
        return self._active

    @property
    def waiting(self) -> int:
        return self._waiting

    def stats(self) -> dict:
        """Snapshot for the /health endpoint."""
        return {
            "active_renders": self._active,
            "queued_renders": self._waiting,
            "max_concurrent": self.max_concurrent,
            "max_queued": self.max_queued,
        }

    @asynccontextmanager
    async def slot(self):
        """Hold one render slot for the duration of the block.

        Raises:
            ServiceBusyError: queue already full, or the wait timed out.
        """
        if self._active >= self.max_concurrent and self._waiting >= self.max_queued:
            logger.warning(
                "🚦 Render queue full (%d active, %d waiting), rejecting request",
                self._active, self._waiting,
            )
            raise ServiceBusyError()

        self._waiting += 1
        try:
            await asyncio.wait_for(self._semaphore.acquire(), timeout=self.queue_timeout)
        except asyncio.TimeoutError:
            logger.warning("🚦 Gave up waiting %.1fs for a render slot", self.queue_timeout)
            raise ServiceBusyError()
        finally:
            self._waiting -= 1

        self._active += 1
        try:
            yield
        finally:
            self._active -= 1
            self._semaphore.release()
