"""
splice.ids - Identifier and clock capabilities.

The assembly engine never invents ids or reads the wall clock itself; it
receives an id factory and a clock so that output is reproducible.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime, timezone

IdFactory = Callable[[str], str]
Clock = Callable[[], datetime]


class SequentialIds:
    """Deterministic id factory: one zero-padded counter per prefix."""

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}

    def __call__(self, prefix: str) -> str:
        counter = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = counter
        return f"{prefix}-{counter:03d}"


def uuid_ids(prefix: str) -> str:
    """Generate a globally unique id such as ``timeline-3f2a...``."""
    return f"{prefix}-{uuid.uuid4().hex}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
