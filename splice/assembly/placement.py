"""
splice.assembly.placement - Clip placement and transition synthesis.

Walks the ordered assets with a single running cursor and lays them end to
end on one video track. Source media is never trimmed: every clip spans its
asset's full declared duration. Optional dissolves are attached to the
incoming side of every clip after the first.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from splice.exceptions import ValidationError
from splice.ids import IdFactory
from splice.models import Asset, Clip, ClipTransitions, Track, Transition

DEFAULT_CLIP_DURATION = 5.0
MAX_TRANSITION_DURATION = 1.0
DEFAULT_TRANSITION_TYPE = "dissolve"


def resolve_clip_duration(asset: Asset, default: float = DEFAULT_CLIP_DURATION) -> float:
    """Get the clip duration for an asset.

    Uses ``metadata["duration"]`` when it is a positive number, otherwise the
    default. Zero, negative and missing durations all fall back. Numeric
    strings as written by media ingestion (``"12.500000"``) are parsed.

    Raises:
        ValidationError: If the duration is present but not a number
    """
    value = asset.metadata.get("duration")
    if value is None:
        return default
    if isinstance(value, str):
        value = _parse_duration_string(asset, value)
        if value is None:
            return default
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _non_numeric_duration(asset, value)
    if not math.isfinite(value) or value <= 0:
        return default
    return float(value)


def _non_numeric_duration(asset: Asset, value: object) -> ValidationError:
    return ValidationError(
        f"Asset {asset.id} has a non-numeric duration: {value!r}",
        option="duration",
        value=value,
    )


def _parse_duration_string(asset: Asset, value: str) -> float | None:
    text = value.strip()
    if not text or text == "N/A":
        return None
    try:
        return float(text)
    except ValueError as e:
        raise _non_numeric_duration(asset, value) from e


def transition_for(
    clip_duration: float,
    max_duration: float = MAX_TRANSITION_DURATION,
    transition_type: str = DEFAULT_TRANSITION_TYPE,
) -> Transition:
    """Build an incoming transition, capped at a quarter of the clip."""
    return Transition(type=transition_type, duration_seconds=min(max_duration, clip_duration / 4))


def place_clips(
    assets: Sequence[Asset],
    ids: IdFactory,
    add_transitions: bool = False,
    default_duration: float = DEFAULT_CLIP_DURATION,
    max_transition_duration: float = MAX_TRANSITION_DURATION,
    transition_type: str = DEFAULT_TRANSITION_TYPE,
) -> tuple[Track, float]:
    """Place assets end to end on a new video track.

    Args:
        assets: Assets in final timeline order
        ids: Id factory for the track and its clips
        add_transitions: Attach an incoming dissolve to every clip but the first
        default_duration: Duration used when an asset declares none
        max_transition_duration: Upper bound for a transition's length
        transition_type: Transition type name written on each clip

    Returns:
        Tuple of (track, total duration in seconds)
    """
    track_id = ids("track")
    clips: list[Clip] = []
    current_time = 0.0

    for asset in assets:
        clip_duration = resolve_clip_duration(asset, default_duration)

        transitions = ClipTransitions()
        if add_transitions and clips:
            transitions = ClipTransitions(
                in_=transition_for(clip_duration, max_transition_duration, transition_type)
            )

        clips.append(
            Clip(
                id=ids("clip"),
                asset_id=asset.id,
                start_time=current_time,
                end_time=current_time + clip_duration,
                in_point=0.0,
                out_point=clip_duration,
                transitions=transitions,
            )
        )
        current_time += clip_duration

    return Track(id=track_id, type="video", clips=clips), current_time
