"""Protocols for deferred-action scheduling.

The host engine owns the clock. Anything that can run a callback once after
a relative delay satisfies ``Scheduler``.
"""

from collections.abc import Callable
from typing import Protocol

Action = Callable[[], None]


class TimerHandle(Protocol):
    """Handle to a scheduled action."""

    @property
    def cancelled(self) -> bool:
        """True once cancel() has been called."""
        ...

    def cancel(self) -> None:
        """Prevent the action from running if it has not fired yet."""
        ...


class Scheduler(Protocol):
    """
    Protocol for one-shot deferred actions.

    Implementations must:
    - Never run the action synchronously inside schedule()
    - Fire actions in order of absolute deadline
    - Fire actions with identical deadlines in registration order
    """

    def schedule(self, delay_ms: float, action: Action) -> TimerHandle:
        """
        Run ``action`` once, ``delay_ms`` milliseconds from now.

        Args:
            delay_ms: Relative delay in milliseconds (negative is treated as 0)
            action: Zero-argument callable

        Returns:
            Handle for the scheduled action
        """
        ...
