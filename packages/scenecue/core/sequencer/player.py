"""Sequence player.

Turns a sequence document into deferred, one-shot property mutations on
scene objects and tracks which named sequences are still playing.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import partial
import logging
from uuid import uuid4

from pydantic import ValidationError

from scenecue.core.scene.protocols import Scene, SceneObject
from scenecue.core.scheduling.protocols import Scheduler
from scenecue.core.sequencer.models import Keyframe, SequenceDescriptor, Track
from scenecue.core.sequencer.registry import SequenceRegistry
from scenecue.core.tracing.tracer import NullTracer, Tracer

logger = logging.getLogger(__name__)

DEFAULT_PADDING_MS = 100.0
DEFAULT_NAME_PREFIX = "Cinematic_"


class SequencePlayer:
    """Schedules keyframes of sequence documents against a scene.

    Nothing is applied synchronously: every keyframe and the final
    "finished" transition run later, from the scheduler.

    Example:
        >>> from scenecue.core.scene import InMemoryScene
        >>> from scenecue.core.scheduling import TimerQueue
        >>> queue, scene = TimerQueue(), InMemoryScene()
        >>> hero = scene.create("Hero")
        >>> player = SequencePlayer(queue)
        >>> player.play_sequence(scene, '{"name": "Intro", "tracks": [{"type": "object", '
        ...     '"name": "Hero", "keyframes": [{"time": 2, "value": {"x": 10}}]}]}')
        >>> _ = queue.advance(2000)
        >>> hero.x, player.is_playing(scene, "Intro")
        (10.0, True)
        >>> _ = queue.advance(100)
        >>> player.is_playing(scene, "Intro")
        False
    """

    def __init__(
        self,
        scheduler: Scheduler,
        registry: SequenceRegistry | None = None,
        tracer: Tracer | None = None,
        *,
        padding_ms: float = DEFAULT_PADDING_MS,
        name_prefix: str = DEFAULT_NAME_PREFIX,
    ) -> None:
        """Initialize the player.

        Args:
            scheduler: Deferred-action facility supplied by the host
            registry: Active-sequence table (a private one when None)
            tracer: Receives playback trace events (discarded when None)
            padding_ms: Delay after the last keyframe before the sequence
                stops reporting as playing
            name_prefix: Prefix of names generated for unnamed sequences
        """
        self._scheduler = scheduler
        self.registry = registry if registry is not None else SequenceRegistry()
        self._tracer = tracer if tracer is not None else NullTracer()
        self._padding_ms = padding_ms
        self._name_prefix = name_prefix

    def play_sequence(self, scene: Scene, sequence_json: str | None) -> None:
        """Start playing a sequence document.

        Empty input is a no-op. Text that is not JSON is logged and ignored;
        wrong-typed fields inside a document are treated as absent.
        Never raises for bad documents or scene lookup failures.

        Args:
            scene: Scene used to resolve track targets (resolved now, once)
            sequence_json: JSON-encoded sequence document
        """
        if not sequence_json:
            return

        try:
            descriptor = SequenceDescriptor.from_json(sequence_json)
        except ValidationError as e:
            logger.error("Failed to parse or play cinematic: %s", e)
            self._tracer.trace_event("cinematic_error", error=str(e))
            return

        self.play_descriptor(scene, descriptor)

    def play_descriptor(self, scene: Scene, descriptor: SequenceDescriptor) -> str:
        """Start playing an already validated sequence.

        Returns:
            The name the sequence is tracked under
        """
        seq_name = descriptor.name or self._generate_name()
        self.registry.start(seq_name)
        logger.info("Playing cinematic sequence: %s", seq_name)
        self._tracer.trace_event(
            "cinematic_play", sequence=seq_name, tracks=len(descriptor.tracks)
        )

        try:
            for track in descriptor.object_tracks():
                self._schedule_track(scene, seq_name, track)
        except Exception as e:
            logger.exception("Failed to schedule cinematic '%s'", seq_name)
            self._tracer.trace_event("cinematic_error", sequence=seq_name, error=str(e))
        finally:
            # max_time follows the last-keyframe-per-track rule
            end_ms = descriptor.max_time * 1000.0 + self._padding_ms
            self._scheduler.schedule(end_ms, partial(self._finish, seq_name))

        return seq_name

    def is_playing(self, scene: Scene | None, sequence_name: str) -> bool:
        """Whether ``sequence_name`` is still playing.

        ``scene`` is unused; it mirrors the scripting calling convention.
        """
        return self.registry.is_active(sequence_name)

    def _schedule_track(self, scene: Scene, seq_name: str, track: Track) -> None:
        objects = scene.get_objects(track.name)
        if not objects:
            logger.debug("No objects named '%s', skipping track", track.name)
            return

        targets = list(objects)
        for keyframe in track.keyframes:
            self._scheduler.schedule(
                keyframe.time_ms,
                partial(self._apply_keyframe, seq_name, track.name, targets, keyframe),
            )

    def _apply_keyframe(
        self,
        seq_name: str,
        track_name: str,
        targets: Sequence[SceneObject],
        keyframe: Keyframe,
    ) -> None:
        value = keyframe.value
        for obj in targets:
            if value.x is not None:
                obj.set_x(value.x)
            if value.y is not None:
                obj.set_y(value.y)
            if value.angle is not None:
                obj.set_angle(value.angle)

        self._tracer.trace_event(
            "cinematic_keyframe",
            sequence=seq_name,
            track=track_name,
            time=keyframe.time,
            instances=len(targets),
        )

    def _finish(self, seq_name: str) -> None:
        self.registry.deactivate(seq_name)
        logger.info("Cinematic finished: %s", seq_name)
        self._tracer.trace_event("cinematic_finished", sequence=seq_name)

    def _generate_name(self) -> str:
        return f"{self._name_prefix}{uuid4().hex}"
