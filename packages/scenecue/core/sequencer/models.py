"""Sequence document models.

A sequence document is the JSON exported by the cinematic editor:

    {
        "name": "Intro",
        "tracks": [
            {
                "type": "object",
                "name": "Hero",
                "keyframes": [
                    {"time": 0.0, "value": {"x": 0, "y": 100}},
                    {"time": 2.0, "value": {"x": 10, "angle": 90}}
                ]
            }
        ]
    }

Absent fields fall back to defaults and unknown fields are ignored, so
documents written by newer editors still load. Fields of the wrong type are
treated as absent instead of rejecting the document: a null ``tracks`` is
an empty list, a keyframe whose ``value`` is not an object changes nothing,
and a top-level value that is not an object is an empty document. Only text
that is not JSON at all fails to parse.
"""

from __future__ import annotations

from enum import Enum
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _to_finite(value: Any, default: float | None) -> float | None:
    """Finite float from a JSON scalar, else ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return ""


def _only(items: Any, *types: type) -> list[Any]:
    """Entries of a JSON list that are objects (or already-built models)."""
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, (dict, *types))]


class TrackType(str, Enum):
    """Track types understood by the player.

    Documents may carry other types (audio, camera, ...); they are skipped.
    """

    OBJECT = "object"


class KeyframeValue(BaseModel):
    """Instantaneous property snapshot applied by a keyframe.

    None means "leave the property untouched". Non-numeric entries count
    as absent.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    x: float | None = None
    y: float | None = None
    angle: float | None = None

    @field_validator("x", "y", "angle", mode="before")
    @classmethod
    def _coerce_number(cls, v: Any) -> float | None:
        return _to_finite(v, None)

    def is_empty(self) -> bool:
        return self.x is None and self.y is None and self.angle is None


class Keyframe(BaseModel):
    """A value to apply at ``time`` seconds after the sequence starts."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    time: float = Field(default=0.0, allow_inf_nan=False, description="Seconds from start")
    value: KeyframeValue = Field(default_factory=KeyframeValue)

    @field_validator("time", mode="before")
    @classmethod
    def _coerce_time(cls, v: Any) -> float:
        # Unusable times fire immediately
        return _to_finite(v, 0.0)

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, KeyframeValue)) else {}

    @property
    def time_ms(self) -> float:
        return self.time * 1000.0


class Track(BaseModel):
    """Ordered keyframes targeting every instance of one scene object.

    Keyframes are kept in document order; the player never sorts them.
    Keyframe entries that are not objects are dropped.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str | None = None
    type: str = ""
    name: str = ""
    keyframes: list[Keyframe] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> str | None:
        return _to_text(v) or None

    @field_validator("type", "name", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _to_text(v)

    @field_validator("keyframes", mode="before")
    @classmethod
    def _coerce_keyframes(cls, v: Any) -> list[Any]:
        return _only(v, Keyframe)

    @property
    def is_object_track(self) -> bool:
        return self.type == TrackType.OBJECT.value

    @property
    def last_keyframe_time(self) -> float:
        """Time of the last keyframe in document order (0 when empty)."""
        return self.keyframes[-1].time if self.keyframes else 0.0


class SequenceDescriptor(BaseModel):
    """A parsed sequence document.

    Example:
        >>> seq = SequenceDescriptor.from_json('{"name": "Intro", "tracks": []}')
        >>> seq.name, seq.max_time
        ('Intro', 0.0)
        >>> SequenceDescriptor.from_json('{"tracks": null}').tracks
        []
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None
    version: int = 1
    duration: float | None = Field(
        default=None, ge=0.0, allow_inf_nan=False, description="Authored length in seconds"
    )
    tracks: list[Track] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce_document(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, v: Any) -> str | None:
        return _to_text(v) or None

    @field_validator("version", mode="before")
    @classmethod
    def _coerce_version(cls, v: Any) -> int:
        number = _to_finite(v, None)
        return int(number) if number is not None else 1

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, v: Any) -> float | None:
        number = _to_finite(v, None)
        return number if number is not None and number >= 0.0 else None

    @field_validator("tracks", mode="before")
    @classmethod
    def _coerce_tracks(cls, v: Any) -> list[Any]:
        return _only(v, Track)

    @classmethod
    def from_json(cls, text: str | bytes) -> SequenceDescriptor:
        """Parse a JSON document.

        Raises:
            ValidationError: If the text is not JSON
        """
        return cls.model_validate_json(text)

    def object_tracks(self) -> list[Track]:
        return [track for track in self.tracks if track.is_object_track]

    @property
    def max_time(self) -> float:
        """Playback end in seconds, as used to clear the playing flag.

        Only the *last* keyframe of each track is consulted, not the latest
        keyframe overall. A track listed out of time order therefore ends
        early. Kept as-is for compatibility with sequences already authored
        against this rule; see latest_keyframe_time for the true maximum.
        """
        return max([0.0, *(track.last_keyframe_time for track in self.tracks)])

    @property
    def latest_keyframe_time(self) -> float:
        """Latest keyframe time across all tracks (0 when there are none)."""
        times = [kf.time for track in self.tracks for kf in track.keyframes]
        return max([0.0, *times])

    def approx_duration(self) -> float:
        """Authored duration when present, else the latest keyframe time."""
        if self.duration is not None:
            return self.duration
        return self.latest_keyframe_time
