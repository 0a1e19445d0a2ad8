"""
splice.store - Timeline persistence with optimistic concurrency.

The assembly engine never touches storage. Callers load a timeline, run the
engine, and save the result; the store rejects a save whose version no
longer matches what is on disk, so two racing assemblies cannot silently
overwrite each other. The version check and the write happen under a
per-timeline lock file, so this holds across processes as well as threads.
"""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

from splice.exceptions import (
    ConcurrentModificationError,
    TimelineLockedError,
    TimelineNotFoundError,
)
from splice.ids import Clock, IdFactory, utcnow, uuid_ids
from splice.io import read_json, write_json
from splice.logging import logger
from splice.models import Timeline


class TimelineStore(Protocol):
    def load(self, timeline_id: str) -> Timeline: ...

    def save(self, timeline: Timeline) -> Timeline: ...


class JsonTimelineStore:
    """Stores one JSON document per timeline in a directory."""

    def __init__(
        self,
        directory: Path,
        ids: IdFactory = uuid_ids,
        now: Clock = utcnow,
        lock_timeout: float = 10.0,
        stale_lock_after: float = 60.0,
    ) -> None:
        self.directory = directory
        self.ids = ids
        self.now = now
        self.lock_timeout = lock_timeout
        self.stale_lock_after = stale_lock_after
        self._lock = threading.Lock()

    def path_for(self, timeline_id: str) -> Path:
        return self.directory / f"{timeline_id}.json"

    def exists(self, timeline_id: str) -> bool:
        return self.path_for(timeline_id).exists()

    def lock_path_for(self, timeline_id: str) -> Path:
        return self.directory / f".{timeline_id}.lock"

    @contextmanager
    def _locked(self, timeline_id: str) -> Iterator[None]:
        """Hold the timeline's lock file for the duration of the block.

        The lock file is created with O_CREAT | O_EXCL, so only one writer in
        any process can hold it. A lock file older than stale_lock_after is
        treated as left behind by a crashed writer and removed.

        Raises:
            TimelineLockedError: If the lock is not acquired within lock_timeout
        """
        lock_path = self.lock_path_for(timeline_id)
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        deadline = time.monotonic() + self.lock_timeout
        while True:
            try:
                fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
                break
            except FileExistsError:
                try:
                    age = time.time() - lock_path.stat().st_mtime
                except FileNotFoundError:
                    continue
                if age > self.stale_lock_after:
                    logger.warning("Removing stale lock %s", lock_path)
                    lock_path.unlink(missing_ok=True)
                    continue
                if time.monotonic() >= deadline:
                    raise TimelineLockedError(timeline_id, self.lock_timeout) from None
                time.sleep(0.01)

        try:
            try:
                os.write(fd, str(os.getpid()).encode())
            finally:
                os.close(fd)
            yield
        finally:
            lock_path.unlink(missing_ok=True)

    def create(
        self,
        name: str,
        framerate: int = 24,
        resolution: str = "1920x1080",
    ) -> Timeline:
        """Create and persist an empty timeline."""
        created = self.now()
        timeline = Timeline(
            id=self.ids("timeline"),
            name=name,
            framerate=framerate,
            resolution=resolution,
            created=created,
            modified=created,
        )
        write_json(self.path_for(timeline.id), timeline.to_dict())
        logger.debug("Created timeline %s (%s)", timeline.id, name)
        return timeline

    def load(self, timeline_id: str) -> Timeline:
        path = self.path_for(timeline_id)
        if not path.exists():
            raise TimelineNotFoundError(timeline_id)
        return Timeline.model_validate(read_json(path))

    def save(self, timeline: Timeline) -> Timeline:
        """Persist a timeline if nobody else saved it since it was loaded.

        Args:
            timeline: Timeline whose version is the one originally loaded

        Returns:
            The stored timeline, with its version incremented

        Raises:
            TimelineNotFoundError: If the timeline was never created or was deleted
            ConcurrentModificationError: If the stored version has moved on
            TimelineLockedError: If another writer holds the timeline too long
        """
        with self._lock, self._locked(timeline.id):
            current = self.load(timeline.id)
            if current.version != timeline.version:
                raise ConcurrentModificationError(timeline.id, timeline.version, current.version)

            stored = timeline.model_copy(update={"version": timeline.version + 1})
            write_json(self.path_for(stored.id), stored.to_dict())

        logger.debug("Saved timeline %s at version %d", stored.id, stored.version)
        return stored

    def list_timelines(self) -> list[Timeline]:
        if not self.directory.exists():
            return []
        timelines = [
            Timeline.model_validate(read_json(path))
            for path in sorted(self.directory.glob("*.json"))
        ]
        return sorted(timelines, key=lambda t: (t.name.lower(), t.id))

    def delete(self, timeline_id: str) -> None:
        path = self.path_for(timeline_id)
        if not path.exists():
            raise TimelineNotFoundError(timeline_id)
        with self._lock, self._locked(timeline_id):
            path.unlink()
