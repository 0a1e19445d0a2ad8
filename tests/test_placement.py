"""Tests for splice.assembly.placement module."""

from __future__ import annotations

import pytest

from splice.assembly.placement import (
    place_clips,
    resolve_clip_duration,
    transition_for,
)
from splice.exceptions import ValidationError
from splice.ids import SequentialIds
from splice.models import Asset


def make_asset(asset_id: str, **metadata) -> Asset:
    return Asset(id=asset_id, metadata=metadata)


class TestResolveClipDuration:
    def test_declared_duration(self) -> None:
        assert resolve_clip_duration(make_asset("a", duration=12.5)) == 12.5

    def test_integer_duration(self) -> None:
        assert resolve_clip_duration(make_asset("a", duration=3)) == 3.0

    @pytest.mark.parametrize("duration", [None, 0, -4.0, float("nan")])
    def test_falls_back_to_default(self, duration) -> None:
        metadata = {} if duration is None else {"duration": duration}
        assert resolve_clip_duration(Asset(id="a", metadata=metadata)) == 5.0

    @pytest.mark.parametrize("duration", ["12.5", " 12.500000 ", "12.5e0"])
    def test_numeric_string_duration(self, duration) -> None:
        assert resolve_clip_duration(make_asset("a", duration=duration)) == 12.5

    @pytest.mark.parametrize("duration", ["", "N/A", "0", "-3", "nan"])
    def test_unusable_string_falls_back(self, duration) -> None:
        assert resolve_clip_duration(make_asset("a", duration=duration)) == 5.0

    def test_custom_default(self) -> None:
        assert resolve_clip_duration(make_asset("a"), default=2.0) == 2.0

    def test_non_numeric_raises(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            resolve_clip_duration(make_asset("a", duration="long"))
        assert exc_info.value.option == "duration"

    @pytest.mark.parametrize("duration", [True, [4], {"seconds": 4}])
    def test_non_numeric_types_raise(self, duration) -> None:
        with pytest.raises(ValidationError):
            resolve_clip_duration(make_asset("a", duration=duration))


class TestTransitionFor:
    def test_capped_at_one_second(self) -> None:
        transition = transition_for(12.0)
        assert transition.type == "dissolve"
        assert transition.duration_seconds == 1.0

    def test_quarter_of_short_clip(self) -> None:
        assert transition_for(2.0).duration_seconds == 0.5

    def test_custom_cap_and_type(self) -> None:
        transition = transition_for(20.0, max_duration=2.0, transition_type="wipe")
        assert transition.type == "wipe"
        assert transition.duration_seconds == 2.0


class TestPlaceClips:
    def test_clips_are_contiguous(self) -> None:
        assets = [make_asset("a", duration=10.0), make_asset("b"), make_asset("c", duration=2.5)]
        track, duration = place_clips(assets, SequentialIds())

        assert [(c.start_time, c.end_time) for c in track.clips] == [
            (0.0, 10.0),
            (10.0, 15.0),
            (15.0, 17.5),
        ]
        assert duration == 17.5

    def test_source_range_is_full_duration(self) -> None:
        track, _ = place_clips([make_asset("a", duration=8.0)], SequentialIds())
        clip = track.clips[0]
        assert clip.in_point == 0.0
        assert clip.out_point == 8.0
        assert clip.asset_id == "a"

    def test_single_video_track_with_sequential_ids(self) -> None:
        track, _ = place_clips([make_asset("a"), make_asset("b")], SequentialIds())
        assert track.type == "video"
        assert track.id == "track-001"
        assert [c.id for c in track.clips] == ["clip-001", "clip-002"]

    def test_no_transitions_by_default(self) -> None:
        track, _ = place_clips([make_asset("a"), make_asset("b")], SequentialIds())
        assert all(c.transitions.in_ is None for c in track.clips)

    def test_transitions_skip_first_clip(self) -> None:
        assets = [
            make_asset("a", duration=8.0),
            make_asset("b", duration=2.0),
            make_asset("c", duration=12.0),
        ]
        track, _ = place_clips(assets, SequentialIds(), add_transitions=True)

        first, second, third = track.clips
        assert first.transitions.in_ is None
        assert second.transitions.in_.type == "dissolve"
        assert second.transitions.in_.duration_seconds == 0.5
        assert third.transitions.in_.duration_seconds == 1.0
        assert all(c.transitions.out is None for c in track.clips)

    def test_empty_sequence(self) -> None:
        track, duration = place_clips([], SequentialIds())
        assert track.clips == []
        assert duration == 0.0

    def test_clips_never_overlap(self) -> None:
        assets = [make_asset(str(i), duration=0.1 * (i + 1)) for i in range(20)]
        track, duration = place_clips(assets, SequentialIds())
        for prev, clip in zip(track.clips, track.clips[1:]):
            assert prev.end_time <= clip.start_time
        assert track.clips[-1].end_time == duration
