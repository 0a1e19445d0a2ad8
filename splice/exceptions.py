"""
splice.exceptions - Custom exception classes.

All Splice-specific exceptions inherit from SpliceError. Errors raised by the
assembly engine and EDL codec signal a caller contract violation and are
never retried.
"""

from __future__ import annotations

from typing import Any


class SpliceError(Exception):
    """Base exception for all Splice errors."""

    def __init__(self, message: str, timeline_id: str | None = None):
        self.message = message
        self.timeline_id = timeline_id
        if timeline_id:
            message = f"{message} (timeline {timeline_id})"
        super().__init__(message)


class ConfigError(SpliceError):
    """Configuration loading or validation error."""

    pass


class ProjectError(SpliceError):
    """Project directory or catalog error."""

    pass


class ValidationError(SpliceError):
    """Malformed or missing option or data."""

    def __init__(
        self,
        message: str,
        option: str | None = None,
        value: Any = None,
        timeline_id: str | None = None,
    ):
        self.option = option
        self.value = value
        super().__init__(message, timeline_id=timeline_id)


class TrackNotFoundError(ValidationError):
    """Referenced track does not exist on the timeline."""

    def __init__(self, track_id: str, timeline_id: str | None = None):
        self.track_id = track_id
        super().__init__(
            f"Track with ID {track_id} not found",
            option="track_id",
            value=track_id,
            timeline_id=timeline_id,
        )


class ClipOverlapError(ValidationError):
    """Clip would overlap an existing clip on the same track."""

    def __init__(self, clip_id: str, other_id: str, timeline_id: str | None = None):
        self.clip_id = clip_id
        self.other_id = other_id
        super().__init__(
            f"Clip {clip_id} overlaps clip {other_id}",
            option="start_time",
            value=clip_id,
            timeline_id=timeline_id,
        )


class AssemblyError(SpliceError):
    """Timeline assembly error."""

    pass


class NoAssetsError(AssemblyError):
    """Assembly requested with zero assets."""

    def __init__(self, timeline_id: str | None = None):
        super().__init__("No assets found to assemble", timeline_id=timeline_id)


class UnsupportedStrategyError(AssemblyError):
    """Requested ordering strategy is not known."""

    def __init__(self, strategy: str, timeline_id: str | None = None):
        self.strategy = strategy
        super().__init__(f"Unsupported assembly strategy: {strategy!r}", timeline_id=timeline_id)


class ExportError(SpliceError):
    """Timeline export error."""

    pass


class NoClipsError(ExportError):
    """Export requested on a timeline without clips."""

    def __init__(self, timeline_id: str | None = None):
        super().__init__("Cannot export EDL: timeline has no tracks or clips", timeline_id)


class UnsupportedFormatError(ExportError):
    """Requested EDL dialect is not supported."""

    def __init__(self, format: str, timeline_id: str | None = None):
        self.format = format
        super().__init__(f"Unsupported EDL format: {format!r}", timeline_id=timeline_id)


class TimecodeError(SpliceError):
    """Timecode conversion error."""

    pass


class InvalidFramerateError(TimecodeError):
    """Frame rate is not a positive integer or a valid rational."""

    def __init__(self, framerate: Any):
        self.framerate = framerate
        super().__init__(f"Invalid framerate: {framerate!r}")


class InvalidTimeError(TimecodeError):
    """Time value is negative, non-finite, or a malformed timecode."""

    def __init__(self, value: Any, reason: str = "must be a non-negative number of seconds"):
        self.value = value
        super().__init__(f"Invalid time {value!r}: {reason}")


class TimelineNotFoundError(SpliceError):
    """Timeline is not present in the store."""

    def __init__(self, timeline_id: str):
        super().__init__(f"Timeline with ID {timeline_id} not found")
        self.timeline_id = timeline_id


class ConcurrentModificationError(SpliceError):
    """Timeline was saved by someone else since it was loaded."""

    def __init__(self, timeline_id: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Timeline changed since it was loaded: version {expected} is stale, "
            f"store has version {actual}",
            timeline_id=timeline_id,
        )


class TimelineLockedError(SpliceError):
    """Another writer held the timeline's lock for longer than the timeout."""

    def __init__(self, timeline_id: str, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Timeline is locked by another writer (waited {timeout:g}s)",
            timeline_id=timeline_id,
        )
