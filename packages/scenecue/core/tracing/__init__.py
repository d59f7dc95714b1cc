"""Structured tracing for sequence playback."""

from scenecue.core.tracing.models import TraceEvent
from scenecue.core.tracing.tracer import NullTracer, Tracer

__all__ = [
    "TraceEvent",
    "Tracer",
    "NullTracer",
]
