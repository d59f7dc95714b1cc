"""Deferred-action scheduling for SceneCue.

Example:
    >>> from scenecue.core.scheduling import TimerQueue
    >>> queue = TimerQueue()
    >>> _ = queue.schedule(100, lambda: print("fired"))
    >>> queue.advance(100)
    fired
    1
"""

from scenecue.core.scheduling.asyncio_scheduler import AsyncioScheduler, AsyncioTimer
from scenecue.core.scheduling.protocols import Action, Scheduler, TimerHandle
from scenecue.core.scheduling.timer_queue import ScheduledAction, TimerQueue

__all__ = [
    # Protocols
    "Action",
    "Scheduler",
    "TimerHandle",
    # Implementations
    "TimerQueue",
    "ScheduledAction",
    "AsyncioScheduler",
    "AsyncioTimer",
]
