"""
splice.models - Timeline data model.

Assets are immutable inputs supplied by the catalog. Clips, tracks and
timelines are produced by the assembly engine and the editing helpers. The
JSON form uses camelCase keys (``assetId``, ``startTime``, ``transitions.in``)
so stored timelines stay compatible with the web editor that reads them.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from splice.exceptions import ValidationError

TRACK_TYPES = ("video", "audio", "graphics")
TrackType = Literal["video", "audio", "graphics"]

# Float slack when comparing clip spans and timeline duration.
SPAN_TOLERANCE = 1e-6


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Asset(_Model):
    """A media item with timing and descriptive metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    upload_time: datetime | None = None


class Transition(_Model):
    type: str
    duration_seconds: float = Field(gt=0.0)


class ClipTransitions(_Model):
    in_: Transition | None = Field(default=None, alias="in")
    out: Transition | None = None


class Clip(_Model):
    """A placement of an asset's source range on a track."""

    id: str
    asset_id: str
    start_time: float = Field(ge=0.0)
    end_time: float
    in_point: float = Field(default=0.0, ge=0.0)
    out_point: float
    transitions: ClipTransitions = Field(default_factory=ClipTransitions)

    @model_validator(mode="after")
    def check_spans(self) -> Clip:
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be greater than startTime")
        if self.out_point <= self.in_point:
            raise ValueError("outPoint must be greater than inPoint")
        if abs(self.duration - (self.out_point - self.in_point)) > SPAN_TOLERANCE:
            raise ValueError("record span and source span must be equal")
        return self

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def overlaps(self, other: Clip) -> bool:
        return self.start_time < other.end_time and other.start_time < self.end_time


class Track(_Model):
    """An ordered lane of non-overlapping clips."""

    id: str
    type: TrackType = "video"
    clips: list[Clip] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_clip_order(self) -> Track:
        for prev, clip in zip(self.clips, self.clips[1:]):
            if clip.start_time < prev.start_time:
                raise ValueError(f"clips on track {self.id} are not sorted by startTime")
            if clip.start_time < prev.end_time:
                raise ValueError(f"clip {clip.id} overlaps clip {prev.id} on track {self.id}")
        return self


class ExportRecord(_Model):
    timestamp: datetime
    format: str
    filename: str
    location: str


class Timeline(_Model):
    """An ordered set of tracks with project-level settings."""

    id: str
    name: str
    framerate: int = Field(default=24, gt=0)
    resolution: str = Field(default="1920x1080", pattern=r"^\d+x\d+$")
    duration: float = Field(default=0.0, ge=0.0)
    tracks: list[Track] = Field(default_factory=list)
    created: datetime | None = None
    modified: datetime | None = None
    version: int = Field(default=0, ge=0)
    export_history: list[ExportRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_duration(self) -> Timeline:
        expected = self.compute_duration()
        if abs(self.duration - expected) > SPAN_TOLERANCE:
            raise ValueError(
                f"duration {self.duration} does not match last clip end time {expected}"
            )
        return self

    def iter_clips(self) -> Iterator[tuple[Track, Clip]]:
        """Yield (track, clip) pairs in track-then-clip order."""
        for track in self.tracks:
            for clip in track.clips:
                yield track, clip

    def compute_duration(self) -> float:
        return max((clip.end_time for _, clip in self.iter_clips()), default=0.0)

    def clip_count(self) -> int:
        return sum(len(track.clips) for track in self.tracks)

    def find_track(self, track_id: str) -> Track | None:
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None


class AssemblyOptions(_Model):
    """How assets are ordered, grouped and joined during assembly."""

    model_config = ConfigDict(extra="forbid")

    strategy: str = "chronological"
    group_by: str | None = None
    add_transitions: StrictBool = False
    default_clip_duration: float = Field(default=5.0, gt=0.0)
    max_transition_duration: float = Field(default=1.0, gt=0.0)
    transition_type: str = "dissolve"

    @field_validator("strategy", "transition_type")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("group_by")
    @classmethod
    def validate_group_by(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("groupBy must be a metadata key or omitted")
        return v

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> AssemblyOptions:
        """Build options from caller input, raising splice's ValidationError.

        Raises:
            ValidationError: Naming the first offending option and its value
        """
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as e:
            error = e.errors()[0]
            option = ".".join(str(part) for part in error["loc"]) or None
            raise ValidationError(
                f"Invalid assembly option {option}: {error['msg']}",
                option=option,
                value=error.get("input"),
            ) from e
