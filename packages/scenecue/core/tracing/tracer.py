"""Lightweight tracer for sequence playback.

Events are kept in memory so tooling and tests can collect them, and are
mirrored to the debug log.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
from typing import Any

from scenecue.core.tracing.models import TraceEvent

logger = logging.getLogger(__name__)


class Tracer:
    """Collects TraceEvent instances.

    Example:
        >>> tracer = Tracer()
        >>> with tracer.scope("load"):
        ...     pass
        >>> [e.name for e in tracer.events]
        ['load_start', 'load_end']
    """

    def __init__(self, max_events: int | None = None) -> None:
        self._events: list[TraceEvent] = []
        self._max_events = max_events

    @property
    def events(self) -> list[TraceEvent]:
        return list(self._events)

    def trace_event(self, name: str, **data: Any) -> TraceEvent:
        """Record an event called ``name`` with ``data``."""
        event = TraceEvent(name=name, data=data)
        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            del self._events[: len(self._events) - self._max_events]
        logger.debug("[CinematicTrace] %s", event.model_dump_json())
        return event

    @contextmanager
    def scope(self, name: str, **data: Any) -> Iterator[None]:
        """Emit ``<name>_start`` on entry and ``<name>_end`` on exit, even on error."""
        self.trace_event(f"{name}_start", **data)
        try:
            yield
        finally:
            self.trace_event(f"{name}_end", **data)

    def find(self, name: str) -> list[TraceEvent]:
        return [e for e in self._events if e.name == name]

    def clear(self) -> None:
        self._events.clear()


class NullTracer(Tracer):
    """Tracer that records nothing."""

    def trace_event(self, name: str, **data: Any) -> TraceEvent:
        return TraceEvent(name=name, data=data)
