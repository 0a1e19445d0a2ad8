"""
splice.export.edl - CMX 3600 EDL generator.

Generates Edit Decision List files for import into DaVinci Resolve,
Premiere Pro, and other NLEs. Encode only: EDLs are never read back.
"""

from __future__ import annotations

import re
from datetime import datetime

from splice.exceptions import NoClipsError, UnsupportedFormatError
from splice.export.timecode import seconds_to_timecode
from splice.models import Timeline

SUPPORTED_FORMATS = ("CMX3600",)

FCM_NON_DROP = "NON-DROP FRAME"
REEL = "AX"


def normalize_format(format: str, timeline_id: str | None = None) -> str:
    """Check the requested EDL dialect and return its canonical name.

    Raises:
        UnsupportedFormatError: For anything other than CMX3600
    """
    canonical = format.strip().upper() if isinstance(format, str) else ""
    if canonical not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(format, timeline_id=timeline_id)
    return canonical


def format_event(
    number: int,
    src_in: str,
    src_out: str,
    rec_in: str,
    rec_out: str,
) -> str:
    """Format one CMX 3600 event line (video, cut)."""
    return f"{number:03d}  {REEL}       V     C        {src_in} {src_out} {rec_in} {rec_out}"


def generate_cmx3600(timeline: Timeline) -> str:
    """Generate a CMX 3600 EDL from a populated timeline.

    Events are numbered across all tracks in track-then-clip order. Each event
    block is followed by a blank line.

    Args:
        timeline: Timeline with at least one clip

    Returns:
        EDL content as string

    Raises:
        NoClipsError: If the timeline has no tracks or every track is empty
    """
    if timeline.clip_count() == 0:
        raise NoClipsError(timeline_id=timeline.id)

    fps = timeline.framerate
    lines = [
        f"TITLE: {timeline.name}",
        f"FCM: {FCM_NON_DROP}",
        "",
    ]

    for number, (_, clip) in enumerate(timeline.iter_clips(), 1):
        lines.append(
            format_event(
                number,
                seconds_to_timecode(clip.in_point, fps),
                seconds_to_timecode(clip.out_point, fps),
                seconds_to_timecode(clip.start_time, fps),
                seconds_to_timecode(clip.end_time, fps),
            )
        )
        lines.append(f"* FROM CLIP NAME: {clip.asset_id}")
        lines.append("")

    return "\n".join(lines) + "\n"


def export_edl(timeline: Timeline, format: str = "CMX3600") -> str:
    """Render a timeline as EDL text in the requested dialect.

    Raises:
        UnsupportedFormatError: If the format is not CMX3600
        NoClipsError: If the timeline has no clips
    """
    normalize_format(format, timeline_id=timeline.id)
    return generate_cmx3600(timeline)


def sanitize_name(name: str) -> str:
    """Strip everything outside [a-z0-9] (case-insensitive) and lower-case."""
    return re.sub(r"[^a-z0-9]", "", name, flags=re.IGNORECASE).lower()


def edl_filename(name: str, when: datetime) -> str:
    """Suggest a filename: ``<sanitized-name>_<epoch-milliseconds>.edl``."""
    stem = sanitize_name(name) or "untitled"
    return f"{stem}_{int(when.timestamp() * 1000)}.edl"
