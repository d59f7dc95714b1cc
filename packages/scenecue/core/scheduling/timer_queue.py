"""Deterministic timer queue driven by the host tick."""

from __future__ import annotations

from dataclasses import dataclass, field
import heapq
import itertools
import logging

from scenecue.core.scheduling.protocols import Action

logger = logging.getLogger(__name__)


@dataclass(order=True)
class ScheduledAction:
    """Pending entry in a TimerQueue.

    Ordering is (deadline_ms, order) so ties fire in registration order.
    """

    deadline_ms: float
    order: int
    action: Action = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class TimerQueue:
    """Priority queue of pending (deadline, action) entries.

    The queue keeps its own notion of "now" that only moves when the host
    calls ``advance``. Nothing fires inside ``schedule``.

    Example:
        >>> queue = TimerQueue()
        >>> fired = []
        >>> _ = queue.schedule(500, lambda: fired.append("a"))
        >>> queue.advance(499)
        0
        >>> queue.advance(1)
        1
        >>> fired
        ['a']
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now_ms = float(start_ms)
        self._heap: list[ScheduledAction] = []
        self._counter = itertools.count()

    @property
    def now_ms(self) -> float:
        """Current queue time in milliseconds."""
        return self._now_ms

    def __len__(self) -> int:
        return sum(1 for entry in self._heap if not entry.cancelled)

    def schedule(self, delay_ms: float, action: Action) -> ScheduledAction:
        """Schedule ``action`` at ``now + delay_ms``.

        Args:
            delay_ms: Relative delay in milliseconds. Negative values fire on
                the next drain, like a zero delay.
            action: Zero-argument callable.

        Returns:
            The queued entry, usable as a cancellable handle.
        """
        entry = ScheduledAction(
            deadline_ms=self._now_ms + max(0.0, float(delay_ms)),
            order=next(self._counter),
            action=action,
        )
        heapq.heappush(self._heap, entry)
        return entry

    def next_deadline(self) -> float | None:
        """Deadline of the earliest pending action, or None when idle."""
        self._discard_cancelled()
        return self._heap[0].deadline_ms if self._heap else None

    def advance(self, dt_ms: float) -> int:
        """Move time forward by ``dt_ms`` and run every action that is due.

        Actions scheduled while draining run in the same call when their
        deadline is already reached. An action that raises is logged and
        does not stop the remaining ones.

        Returns:
            Number of actions that ran.
        """
        if dt_ms < 0:
            raise ValueError(f"dt_ms must be >= 0, got {dt_ms}")
        return self.advance_to(self._now_ms + dt_ms)

    def advance_to(self, time_ms: float) -> int:
        """Move time forward to ``time_ms`` and run every due action."""
        target = max(self._now_ms, float(time_ms))
        fired = 0
        while self._heap and self._heap[0].deadline_ms <= target:
            entry = heapq.heappop(self._heap)
            if entry.cancelled:
                continue
            # Actions observe the time they were scheduled for
            self._now_ms = entry.deadline_ms
            try:
                entry.action()
            except Exception:
                logger.exception("Scheduled action failed at %.1fms", entry.deadline_ms)
            fired += 1
        self._now_ms = target
        return fired

    def run_until_idle(self, max_ms: float | None = None) -> int:
        """Drain the queue completely, optionally stopping at ``max_ms``."""
        fired = 0
        while True:
            deadline = self.next_deadline()
            if deadline is None or (max_ms is not None and deadline > max_ms):
                break
            fired += self.advance_to(deadline)
        return fired

    def _discard_cancelled(self) -> None:
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)
