"""Scheduler adapter for hosts that run an asyncio event loop."""

from __future__ import annotations

import asyncio
import logging

from scenecue.core.scheduling.protocols import Action

logger = logging.getLogger(__name__)


class AsyncioTimer:
    """Cancellable handle returned by AsyncioScheduler."""

    def __init__(self, action: Action) -> None:
        self.action = action
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class AsyncioScheduler:
    """
    Run deferred actions on an asyncio event loop.

    Actions sharing the exact same loop deadline are grouped into a single
    ``call_at`` so they fire in registration order.

    Must be created from inside a running loop unless ``loop`` is passed.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self._buckets: dict[float, list[AsyncioTimer]] = {}

    def schedule(self, delay_ms: float, action: Action) -> AsyncioTimer:
        """Schedule ``action`` on the loop after ``delay_ms`` milliseconds."""
        when = self._loop.time() + max(0.0, float(delay_ms)) / 1000.0
        timer = AsyncioTimer(action)
        bucket = self._buckets.get(when)
        if bucket is None:
            bucket = self._buckets[when] = []
            self._loop.call_at(when, self._fire, when)
        bucket.append(timer)
        return timer

    @property
    def pending(self) -> int:
        """Number of scheduled, not yet fired, not cancelled actions."""
        return sum(1 for b in self._buckets.values() for t in b if not t.cancelled)

    def _fire(self, when: float) -> None:
        for timer in self._buckets.pop(when, []):
            if timer.cancelled:
                continue
            try:
                timer.action()
            except Exception:
                logger.exception("Scheduled action failed")
