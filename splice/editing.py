"""
splice.editing - Manual track and clip edits on an assembled timeline.

Every edit returns a new Timeline; the input is left untouched. Clips are
kept sorted by start time and may never overlap on the same track.
"""

from __future__ import annotations

import bisect

from pydantic import ValidationError as PydanticValidationError

from splice.exceptions import ClipOverlapError, TrackNotFoundError, ValidationError
from splice.ids import Clock, IdFactory, utcnow, uuid_ids
from splice.models import TRACK_TYPES, Clip, ClipTransitions, Timeline, Track

DEFAULT_MANUAL_CLIP_DURATION = 5.0


def _replace_tracks(timeline: Timeline, tracks: list[Track], now: Clock) -> Timeline:
    duration = max((clip.end_time for track in tracks for clip in track.clips), default=0.0)
    return timeline.model_copy(update={"tracks": tracks, "duration": duration, "modified": now()})


def add_track(
    timeline: Timeline,
    type: str = "video",
    *,
    ids: IdFactory = uuid_ids,
    now: Clock = utcnow,
) -> tuple[Timeline, Track]:
    """Append an empty track.

    Raises:
        ValidationError: If type is not video, audio or graphics
    """
    if type not in TRACK_TYPES:
        raise ValidationError(
            f"Track type must be one of: {', '.join(TRACK_TYPES)}",
            option="type",
            value=type,
            timeline_id=timeline.id,
        )
    track = Track(id=ids("track"), type=type)
    return _replace_tracks(timeline, [*timeline.tracks, track], now), track


def add_clip(
    timeline: Timeline,
    track_id: str,
    asset_id: str,
    start_time: float = 0.0,
    end_time: float | None = None,
    in_point: float = 0.0,
    out_point: float | None = None,
    transitions: ClipTransitions | None = None,
    *,
    ids: IdFactory = uuid_ids,
    now: Clock = utcnow,
) -> tuple[Timeline, Clip]:
    """Place a clip on a track at an explicit position.

    Without an end time the clip is five seconds long; without an out point
    the source range matches the record range.

    Raises:
        TrackNotFoundError: If track_id is not on the timeline
        ClipOverlapError: If the clip would overlap another clip on the track
        ValidationError: If the times are inconsistent
    """
    track = timeline.find_track(track_id)
    if track is None:
        raise TrackNotFoundError(track_id, timeline_id=timeline.id)

    if end_time is None:
        end_time = start_time + DEFAULT_MANUAL_CLIP_DURATION
    if out_point is None:
        out_point = in_point + (end_time - start_time)

    try:
        clip = Clip(
            id=ids("clip"),
            asset_id=asset_id,
            start_time=start_time,
            end_time=end_time,
            in_point=in_point,
            out_point=out_point,
            transitions=transitions or ClipTransitions(),
        )
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid clip for asset {asset_id}: {e.errors()[0]['msg']}",
            option="clip",
            value=asset_id,
            timeline_id=timeline.id,
        ) from e

    for existing in track.clips:
        if clip.overlaps(existing):
            raise ClipOverlapError(clip.id, existing.id, timeline_id=timeline.id)

    starts = [c.start_time for c in track.clips]
    clips = list(track.clips)
    clips.insert(bisect.bisect_right(starts, clip.start_time), clip)

    new_track = track.model_copy(update={"clips": clips})
    tracks = [new_track if t.id == track_id else t for t in timeline.tracks]
    return _replace_tracks(timeline, tracks, now), clip


def remove_clip(timeline: Timeline, clip_id: str, *, now: Clock = utcnow) -> Timeline:
    """Remove a clip from whichever track holds it.

    Raises:
        ValidationError: If no track holds the clip
    """
    for track in timeline.tracks:
        if any(c.id == clip_id for c in track.clips):
            remaining = [c for c in track.clips if c.id != clip_id]
            new_track = track.model_copy(update={"clips": remaining})
            tracks = [new_track if t.id == track.id else t for t in timeline.tracks]
            return _replace_tracks(timeline, tracks, now)

    raise ValidationError(
        f"Clip with ID {clip_id} not found",
        option="clip_id",
        value=clip_id,
        timeline_id=timeline.id,
    )
