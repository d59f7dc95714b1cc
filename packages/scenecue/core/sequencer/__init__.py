"""Cinematic sequence playback."""

from scenecue.core.sequencer.models import (
    Keyframe,
    KeyframeValue,
    SequenceDescriptor,
    Track,
    TrackType,
)
from scenecue.core.sequencer.player import (
    DEFAULT_NAME_PREFIX,
    DEFAULT_PADDING_MS,
    SequencePlayer,
)
from scenecue.core.sequencer.registry import SequenceRegistry

__all__ = [
    # Document models
    "SequenceDescriptor",
    "Track",
    "TrackType",
    "Keyframe",
    "KeyframeValue",
    # Playback
    "SequencePlayer",
    "SequenceRegistry",
    "DEFAULT_PADDING_MS",
    "DEFAULT_NAME_PREFIX",
]
