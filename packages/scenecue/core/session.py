"""SceneCue session coordinator.

The session owns everything one running scene needs to play cinematics:
- Configuration
- The timer queue driven by the host frame loop
- The active-sequence registry and the player
- The project sequence library and the scripting extension
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from scenecue.core.config.models import AppConfig
from scenecue.core.extension import CinematicSequencerExtension
from scenecue.core.project.library import SequenceLibrary
from scenecue.core.scheduling.protocols import Scheduler
from scenecue.core.scheduling.timer_queue import TimerQueue
from scenecue.core.sequencer.player import SequencePlayer
from scenecue.core.sequencer.registry import SequenceRegistry
from scenecue.core.tracing.tracer import NullTracer, Tracer

logger = logging.getLogger(__name__)


class CinematicSession:
    """Per-scene coordinator for cinematic playback.

    With the default TimerQueue the host calls ``update(dt)`` once per
    frame. A host-supplied scheduler fires actions on its own and
    ``update`` becomes a no-op.

    Example:
        >>> session = CinematicSession()
        >>> session.player.play_sequence(scene, document)  # doctest: +SKIP
        >>> session.update(1 / 60)  # doctest: +SKIP
    """

    def __init__(
        self,
        *,
        app_config: AppConfig | Path | str | None = None,
        library: SequenceLibrary | Path | str | None = None,
        scheduler: Scheduler | None = None,
    ):
        """Initialize session.

        Args:
            app_config: AppConfig instance, path, or None (uses default path)
            library: SequenceLibrary, library file path, or None (uses
                ``app_config.library_path`` when set)
            scheduler: Deferred-action facility; a TimerQueue when None

        Raises:
            FileNotFoundError: If a config or library file doesn't exist
            ValidationError: If config is invalid
        """
        self.app_config: AppConfig = self._resolve_config(app_config)
        self.library: SequenceLibrary = self._resolve_library(library)

        self.timer_queue: TimerQueue | None = None
        if scheduler is None:
            self.timer_queue = TimerQueue()
            scheduler = self.timer_queue
        self.scheduler: Scheduler = scheduler

        seq_config = self.app_config.sequencer
        self.tracer: Tracer = (
            Tracer(max_events=seq_config.max_trace_events)
            if seq_config.tracing_enabled
            else NullTracer()
        )
        self.registry = SequenceRegistry()
        self.player = SequencePlayer(
            self.scheduler,
            self.registry,
            self.tracer,
            padding_ms=seq_config.deactivation_padding_ms,
            name_prefix=seq_config.name_prefix,
        )
        self.extension = CinematicSequencerExtension(self.player, self.library)

        logger.debug(
            "Session initialized: sequences=%d, padding=%.0fms",
            len(self.library),
            seq_config.deactivation_padding_ms,
        )

    @staticmethod
    def _resolve_config(value: Any) -> AppConfig:
        if value is None:
            return AppConfig.load_or_default()
        elif isinstance(value, (Path, str)):
            return AppConfig.load_or_default(Path(value))
        elif isinstance(value, AppConfig):
            return value
        else:
            raise TypeError(f"Expected AppConfig, Path, str, or None; got {type(value).__name__}")

    def _resolve_library(self, value: Any) -> SequenceLibrary:
        if value is None:
            if self.app_config.library_path:
                return SequenceLibrary.load(self.app_config.library_path)
            return SequenceLibrary()
        elif isinstance(value, (Path, str)):
            return SequenceLibrary.load(value)
        elif isinstance(value, SequenceLibrary):
            return value
        else:
            raise TypeError(
                f"Expected SequenceLibrary, Path, str, or None; got {type(value).__name__}"
            )

    @classmethod
    def from_directory(cls, config_dir: Path | str = ".") -> CinematicSession:
        """Create a session from a directory containing config.json/.yaml/.yml.

        Falls back to defaults when none of them exist.
        """
        config_dir = Path(config_dir)
        for filename in ("config.json", "config.yaml", "config.yml"):
            candidate = config_dir / filename
            if candidate.exists():
                config = AppConfig.load_or_default(candidate)
                if config.library_path and not Path(config.library_path).is_absolute():
                    config = config.model_copy(
                        update={"library_path": str(config_dir / config.library_path)}
                    )
                return cls(app_config=config)
        return cls(app_config=AppConfig())

    def update(self, dt: float) -> int:
        """Advance the timer queue by ``dt`` seconds.

        Returns:
            Number of scheduled actions that ran
        """
        if self.timer_queue is None:
            return 0
        return self.timer_queue.advance(dt * 1000.0)

    @property
    def now_ms(self) -> float | None:
        """Timer queue time, or None with a host-supplied scheduler."""
        return self.timer_queue.now_ms if self.timer_queue is not None else None
