"""Table of sequences that are currently playing."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class SequenceRegistry:
    """Tracks whether each named sequence is still playing.

    Entries are created by start() and flipped to inactive by deactivate();
    they are never removed, so a name that has played stays known.

    Example:
        >>> registry = SequenceRegistry()
        >>> registry.start("Intro")
        >>> registry.is_active("Intro"), registry.is_active("Outro")
        (True, False)
        >>> registry.deactivate("Intro")
        >>> registry.is_active("Intro")
        False
    """

    def __init__(self) -> None:
        self._active: dict[str, bool] = {}

    def start(self, name: str) -> None:
        """Mark ``name`` as playing."""
        if self._active.get(name):
            logger.debug("Sequence '%s' restarted while still playing", name)
        self._active[name] = True

    def deactivate(self, name: str) -> None:
        """Mark ``name`` as no longer playing."""
        self._active[name] = False

    def is_active(self, name: str) -> bool:
        return self._active.get(name, False)

    def __contains__(self, name: object) -> bool:
        return name in self._active

    def names(self) -> list[str]:
        """Every name seen so far, in first-start order."""
        return list(self._active)
