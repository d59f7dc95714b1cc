"""Shared pytest fixtures for scenecue tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from scenecue.core.scene.impl_memory import InMemoryScene, MemorySceneObject
from scenecue.core.scheduling.timer_queue import TimerQueue
from scenecue.core.sequencer.player import SequencePlayer
from scenecue.core.sequencer.registry import SequenceRegistry
from scenecue.core.tracing.tracer import Tracer

# ============================================================================
# Document Helpers
# ============================================================================


def make_track(name: str, *keyframes: tuple[float, dict[str, Any]], type: str = "object") -> dict:
    """Build a track dict from (time, value) pairs."""
    return {
        "type": type,
        "name": name,
        "keyframes": [{"time": t, "value": v} for t, v in keyframes],
    }


def make_sequence(*tracks: dict, name: str | None = None) -> str:
    """Build a sequence JSON document."""
    document: dict[str, Any] = {"tracks": list(tracks)}
    if name is not None:
        document["name"] = name
    return json.dumps(document)


# ============================================================================
# Playback Fixtures
# ============================================================================


@pytest.fixture
def queue() -> TimerQueue:
    """Timer queue starting at 0ms."""
    return TimerQueue()


@pytest.fixture
def scene(queue: TimerQueue) -> InMemoryScene:
    """Empty scene whose objects stamp changes with queue time."""
    return InMemoryScene(clock=lambda: queue.now_ms)


@pytest.fixture
def hero(scene: InMemoryScene) -> MemorySceneObject:
    """A single "Hero" instance at (1, 2) with angle 3."""
    return scene.create("Hero", x=1.0, y=2.0, angle=3.0)


@pytest.fixture
def registry() -> SequenceRegistry:
    return SequenceRegistry()


@pytest.fixture
def tracer() -> Tracer:
    return Tracer()


@pytest.fixture
def player(queue: TimerQueue, registry: SequenceRegistry, tracer: Tracer) -> SequencePlayer:
    """Player wired to the shared queue, registry and tracer."""
    return SequencePlayer(queue, registry, tracer)


# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def sequence_file(tmp_path: Path) -> Path:
    """Sequence document on disk with one object track and one audio track."""
    path = tmp_path / "intro.json"
    path.write_text(
        make_sequence(
            make_track("Hero", (0.0, {"x": 0}), (2.0, {"x": 10, "angle": 90})),
            make_track("Music", (0.0, {}), type="audio"),
            name="Intro",
        ),
        encoding="utf-8",
    )
    return path


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_logging():
    """Put root and library logger state back after configure_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    levels = {name: logging.getLogger(name).level for name in ("scenecue.core.tracing", "asyncio")}
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, lvl in levels.items():
        logging.getLogger(name).setLevel(lvl)
