"""
splice.export.timecode - Timecode math utilities.

Converts timeline seconds to non-drop-frame HH:MM:SS:FF timecode at an
integer frame rate, plus the inverse used to validate EDL output. Every
field is floored, never rounded, so a clip never claims a frame it does not
fully cover.
"""

from __future__ import annotations

import math
import re
from fractions import Fraction
from typing import Any

from splice.exceptions import InvalidFramerateError, InvalidTimeError

TIMECODE_PATTERN = re.compile(r"^(\d{2,}):(\d{2}):(\d{2}):(\d{2,})$")


def validate_framerate(framerate: Any) -> int:
    """Check that a frame rate is a positive integer.

    Raises:
        InvalidFramerateError: For bools, floats, strings, zero or negatives
    """
    if isinstance(framerate, bool) or not isinstance(framerate, int) or framerate <= 0:
        raise InvalidFramerateError(framerate)
    return framerate


def validate_seconds(seconds: Any) -> float:
    """Check that a time value is a finite, non-negative number.

    Raises:
        InvalidTimeError: For negative, NaN, infinite or non-numeric values
    """
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise InvalidTimeError(seconds, "must be a number of seconds")
    if not math.isfinite(seconds):
        raise InvalidTimeError(seconds, "must be finite")
    if seconds < 0:
        raise InvalidTimeError(seconds)
    return float(seconds)


def _split_seconds(seconds: float) -> tuple[int, int, int, float]:
    hh = int(seconds // 3600)
    mm = int((seconds % 3600) // 60)
    ss = int(seconds % 60)
    return hh, mm, ss, seconds % 1


def seconds_to_timecode(seconds: float, framerate: int) -> str:
    """Convert float seconds to non-drop-frame timecode.

    Args:
        seconds: Time in seconds (>= 0)
        framerate: Frames per second, a positive integer

    Returns:
        Timecode string in HH:MM:SS:FF format

    Raises:
        InvalidFramerateError: If framerate is not a positive integer
        InvalidTimeError: If seconds is negative or not finite
    """
    framerate = validate_framerate(framerate)
    seconds = validate_seconds(seconds)

    hh, mm, ss, fraction = _split_seconds(seconds)
    ff = math.floor(fraction * framerate)

    return f"{hh:02d}:{mm:02d}:{ss:02d}:{ff:02d}"


def seconds_to_display_time(seconds: float) -> str:
    """Convert float seconds to HH:MM:SS.cc for on-screen display.

    Args:
        seconds: Time in seconds (>= 0)

    Returns:
        Display string with a two-digit centisecond field
    """
    seconds = validate_seconds(seconds)

    hh, mm, ss, fraction = _split_seconds(seconds)
    cc = math.floor(fraction * 100)

    return f"{hh:02d}:{mm:02d}:{ss:02d}.{cc:02d}"


def timecode_to_seconds(timecode: str, framerate: int) -> float:
    """Convert non-drop-frame timecode back to seconds.

    Args:
        timecode: Timecode string in HH:MM:SS:FF format
        framerate: Frames per second, a positive integer

    Returns:
        Time in seconds

    Raises:
        InvalidTimeError: If the timecode is malformed or a field is out of range
    """
    framerate = validate_framerate(framerate)

    match = TIMECODE_PATTERN.match(timecode.strip()) if isinstance(timecode, str) else None
    if not match:
        raise InvalidTimeError(timecode, "expected HH:MM:SS:FF")

    hh, mm, ss, ff = (int(part) for part in match.groups())
    if mm >= 60 or ss >= 60:
        raise InvalidTimeError(timecode, "minutes and seconds must be below 60")
    if ff >= framerate:
        raise InvalidTimeError(timecode, f"frame field must be below {framerate}")

    return hh * 3600 + mm * 60 + ss + ff / framerate


def parse_frame_rate(value: Any) -> Fraction:
    """Parse a frame rate given as a number or a rational string.

    Accepts ``24``, ``"25"``, ``"29.97"`` and rational ``"30000/1001"``.
    Strings are split on ``/`` and each side parsed as a number; nothing is
    ever evaluated.

    Args:
        value: Frame rate as int, float or string

    Returns:
        Frame rate as an exact Fraction

    Raises:
        InvalidFramerateError: If the value cannot be parsed or is not positive
    """
    if isinstance(value, bool):
        raise InvalidFramerateError(value)

    try:
        if isinstance(value, (int, float)):
            rate = Fraction(value)
        elif isinstance(value, str):
            text = value.strip()
            if "/" in text:
                num, den = text.split("/", 1)
                numerator = int(num.strip())
                denominator = int(den.strip())
                if denominator <= 0:
                    raise InvalidFramerateError(value)
                rate = Fraction(numerator, denominator)
            else:
                rate = Fraction(text)
        else:
            raise InvalidFramerateError(value)
    except (ValueError, OverflowError) as e:
        raise InvalidFramerateError(value) from e

    if rate <= 0:
        raise InvalidFramerateError(value)
    return rate


def parse_integer_framerate(value: Any) -> int:
    """Parse a frame rate that must resolve to a whole number of frames.

    Raises:
        InvalidFramerateError: If the rate is fractional (e.g. 30000/1001)
    """
    rate = parse_frame_rate(value)
    if rate.denominator != 1:
        raise InvalidFramerateError(value)
    return rate.numerator
