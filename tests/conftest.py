"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import os

# Rich consoles wrap output at the terminal width; widen it so CLI messages
# containing long tmp paths are not split across lines in captured output.
os.environ["COLUMNS"] = "1000"

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from splice.models import Asset, Clip, Timeline, Track
from splice.project import Project

FIXED_NOW = datetime(2026, 2, 15, 12, 0, 0, tzinfo=timezone.utc)


def make_asset(asset_id: str, **metadata: Any) -> Asset:
    return Asset(id=asset_id, metadata=metadata)


@pytest.fixture
def fixed_now() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def tmp_project(tmp_path: Path) -> Project:
    """Create a temporary project directory with basic structure."""
    project = Project(tmp_path / "test_project")
    project.create(profile="rough-cut")
    return project


@pytest.fixture
def shoot_assets() -> list[Asset]:
    """Four assets from one shoot day, in upload order A, B, C, D."""
    return [
        make_asset("A", timestamp="2026-02-14T10:00:00Z", duration=10.0, scene="interview"),
        make_asset("B", timestamp="2026-02-14T11:30:00Z", duration=8.0, scene="b-roll"),
        make_asset("C", timestamp="2026-02-14T14:15:00Z", duration=12.0, scene="product"),
        make_asset("D", timestamp="2026-02-14T09:00:00Z", duration=6.0, scene="interview"),
    ]


@pytest.fixture
def demo_timeline() -> Timeline:
    """One video track with a single 15 second clip."""
    clip = Clip(
        id="clip-001",
        asset_id="asset-1",
        start_time=0.0,
        end_time=15.0,
        in_point=0.0,
        out_point=15.0,
    )
    return Timeline(
        id="timeline-demo",
        name="Demo",
        framerate=24,
        duration=15.0,
        tracks=[Track(id="track-001", type="video", clips=[clip])],
    )


@pytest.fixture
def sample_asset_records() -> list[dict]:
    """Asset records as the catalog receives them."""
    return [
        {
            "id": "beach-wide",
            "metadata": {
                "timestamp": "2026-02-14T16:00:00Z",
                "duration": 4.0,
                "scene": "beach",
            },
        },
        {
            "id": "arrival",
            "metadata": {
                "timestamp": "2026-02-14T09:15:00Z",
                "duration": 7.5,
                "analysis": {"scene": "road", "sequence": 1},
            },
        },
        {
            "id": "beach-close",
            "metadata": {
                "timestamp": "2026-02-14T16:05:00Z",
                "scene": "beach",
            },
        },
    ]
