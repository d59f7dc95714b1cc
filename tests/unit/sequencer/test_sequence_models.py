"""Tests for sequence document models."""

from pydantic import ValidationError
import pytest

from scenecue.core.sequencer.models import (
    Keyframe,
    KeyframeValue,
    SequenceDescriptor,
    Track,
    TrackType,
)


class TestKeyframeValue:
    """Test KeyframeValue model."""

    def test_defaults_are_absent(self):
        value = KeyframeValue()
        assert value.x is None
        assert value.y is None
        assert value.angle is None
        assert value.is_empty()

    def test_unknown_keys_ignored(self):
        value = KeyframeValue.model_validate({"x": 1, "scale": 3})
        assert value.x == 1.0
        assert not hasattr(value, "scale")

    def test_non_numeric_entries_absent(self):
        value = KeyframeValue.model_validate({"x": "far", "y": None, "angle": False})
        assert value.is_empty()

    def test_immutability(self):
        value = KeyframeValue(x=1.0)
        with pytest.raises((ValidationError, AttributeError)):
            value.x = 2.0


class TestKeyframe:
    """Test Keyframe model."""

    def test_time_ms(self):
        assert Keyframe(time=1.5).time_ms == 1500.0

    def test_defaults(self):
        keyframe = Keyframe.model_validate({})
        assert keyframe.time == 0.0
        assert keyframe.value.is_empty()

    @pytest.mark.parametrize("bad_time", [float("nan"), float("inf"), None, "soon", True])
    def test_unusable_time_fires_immediately(self, bad_time):
        assert Keyframe.model_validate({"time": bad_time}).time == 0.0

    def test_numeric_string_time(self):
        assert Keyframe.model_validate({"time": "1.5"}).time == 1.5

    @pytest.mark.parametrize("bad_value", [None, 5, "left", [1, 2]])
    def test_non_mapping_value_is_empty(self, bad_value):
        keyframe = Keyframe.model_validate({"time": 1, "value": bad_value})

        assert keyframe.time == 1.0
        assert keyframe.value.is_empty()


class TestTrack:
    """Test Track model."""

    def test_object_track(self):
        assert Track(type=TrackType.OBJECT.value, name="Hero").is_object_track
        assert not Track(type="audio", name="Music").is_object_track
        assert not Track.model_validate({"name": "Untyped"}).is_object_track

    def test_last_keyframe_time_uses_document_order(self):
        track = Track.model_validate(
            {"type": "object", "keyframes": [{"time": 4.0}, {"time": 2.0}]}
        )
        assert track.last_keyframe_time == 2.0

    def test_wrong_typed_fields_default(self):
        track = Track.model_validate({"id": 7, "type": None, "name": ["Hero"], "keyframes": None})

        assert track.id == "7"
        assert track.type == ""
        assert track.name == ""
        assert track.keyframes == []
        assert not track.is_object_track

    def test_non_object_keyframes_dropped(self):
        track = Track.model_validate(
            {"type": "object", "keyframes": [{"time": 1.0}, None, 3, {"time": 2.0}]}
        )
        assert [kf.time for kf in track.keyframes] == [1.0, 2.0]

    def test_last_keyframe_time_empty(self):
        assert Track(type="object").last_keyframe_time == 0.0


class TestSequenceDescriptor:
    """Test SequenceDescriptor parsing and timing."""

    def test_from_json(self):
        seq = SequenceDescriptor.from_json(
            '{"name": "Intro", "version": 1, "duration": 5.0, "tracks": '
            '[{"id": "t1", "name": "Player", "type": "object", "keyframes": []}]}'
        )
        assert seq.name == "Intro"
        assert seq.duration == 5.0
        assert seq.tracks[0].id == "t1"
        assert seq.object_tracks() == seq.tracks

    def test_missing_fields_default(self):
        seq = SequenceDescriptor.from_json("{}")
        assert seq.name is None
        assert seq.tracks == []
        assert seq.max_time == 0.0

    @pytest.mark.parametrize("text", ["{nope", "", "{\"tracks\": [}"])
    def test_non_json_rejected(self, text):
        with pytest.raises(ValidationError):
            SequenceDescriptor.from_json(text)

    @pytest.mark.parametrize("text", ["[]", "42", '"Intro"', "null"])
    def test_non_object_document_is_empty(self, text):
        seq = SequenceDescriptor.from_json(text)

        assert seq.name is None
        assert seq.tracks == []
        assert seq.max_time == 0.0

    def test_wrong_typed_fields_default(self):
        seq = SequenceDescriptor.from_json(
            '{"name": null, "version": "two", "duration": "long", "tracks": null}'
        )
        assert seq.name is None
        assert seq.version == 1
        assert seq.duration is None
        assert seq.tracks == []

    def test_numeric_name_kept_as_text(self):
        assert SequenceDescriptor.from_json('{"name": 42}').name == "42"

    def test_non_object_tracks_dropped(self):
        seq = SequenceDescriptor.from_json(
            '{"tracks": [null, "Hero", {"type": "object", "name": "Hero"}]}'
        )
        assert [t.name for t in seq.tracks] == ["Hero"]

    def test_max_time_uses_last_keyframe_per_track(self):
        seq = SequenceDescriptor.model_validate(
            {
                "tracks": [
                    {"type": "object", "keyframes": [{"time": 0.0}, {"time": 1.0}]},
                    {"type": "object", "keyframes": [{"time": 5.0}, {"time": 3.0}]},
                    {"type": "object", "keyframes": []},
                ]
            }
        )
        assert seq.max_time == 3.0
        assert seq.latest_keyframe_time == 5.0

    def test_max_time_includes_non_object_tracks(self):
        seq = SequenceDescriptor.model_validate(
            {"tracks": [{"type": "audio", "keyframes": [{"time": 8.0}]}]}
        )
        assert seq.object_tracks() == []
        assert seq.max_time == 8.0

    def test_max_time_never_negative(self):
        seq = SequenceDescriptor.model_validate(
            {"tracks": [{"type": "object", "keyframes": [{"time": -2.0}]}]}
        )
        assert seq.max_time == 0.0

    def test_approx_duration_prefers_authored_duration(self):
        seq = SequenceDescriptor.model_validate(
            {"duration": 12.0, "tracks": [{"type": "object", "keyframes": [{"time": 3.0}]}]}
        )
        assert seq.approx_duration() == 12.0

    def test_approx_duration_falls_back_to_keyframes(self):
        seq = SequenceDescriptor.model_validate(
            {"tracks": [{"type": "object", "keyframes": [{"time": 3.0}, {"time": 1.0}]}]}
        )
        assert seq.approx_duration() == 3.0

    def test_negative_duration_ignored(self):
        seq = SequenceDescriptor.model_validate(
            {"duration": -1.0, "tracks": [{"type": "object", "keyframes": [{"time": 2.0}]}]}
        )
        assert seq.duration is None
        assert seq.approx_duration() == 2.0
