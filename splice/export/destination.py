"""
splice.export.destination - Delivery of exported EDL files.

A destination is an opaque sink that receives the EDL text and a suggested
filename. Cloud transfer is handled elsewhere; the directory destination
covers local exports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from splice.export.edl import edl_filename, export_edl, normalize_format
from splice.ids import Clock, utcnow
from splice.io import write_text
from splice.logging import logger
from splice.models import ExportRecord, Timeline


class ExportDestination(Protocol):
    def deliver(self, filename: str, content: str) -> str:
        """Store the content and return where it ended up."""
        ...


class DirectoryDestination:
    """Writes exports into a local directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def deliver(self, filename: str, content: str) -> str:
        path = self.directory / filename
        write_text(path, content)
        return str(path)


class FileDestination:
    """Writes an export to one fixed path, ignoring the suggested filename."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def deliver(self, filename: str, content: str) -> str:
        write_text(self.path, content)
        return str(self.path)


def export_timeline(
    timeline: Timeline,
    destination: ExportDestination,
    format: str = "CMX3600",
    now: Clock | None = None,
) -> tuple[Timeline, ExportRecord]:
    """Export a timeline as EDL and record the export in its history.

    Args:
        timeline: Timeline to export
        destination: Sink receiving the EDL text
        format: EDL dialect (only CMX3600)
        now: Clock used for the filename and the history record

    Returns:
        Tuple of (timeline with the export appended to its history, record)
    """
    now = now or utcnow
    canonical = normalize_format(format, timeline_id=timeline.id)
    content = export_edl(timeline, canonical)

    when = now()
    filename = edl_filename(timeline.name, when)
    location = destination.deliver(filename, content)
    logger.debug("Exported %s as %s to %s", timeline.id, canonical, location)

    record = ExportRecord(timestamp=when, format=canonical, filename=filename, location=location)
    updated = timeline.model_copy(
        update={"export_history": [*timeline.export_history, record]}
    )
    return updated, record
