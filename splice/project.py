"""
splice.project - Project directory management.

Handles project creation, directory structure, and access to the timeline
store and asset catalog that live inside it.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from splice.catalog import AssetCatalog
from splice.config import (
    BUILTIN_PROFILES,
    CONFIG_FILENAME,
    SpliceConfig,
    create_default_config,
    load_config,
    write_config,
)
from splice.exceptions import ProjectError
from splice.export.destination import DirectoryDestination
from splice.io import write_json
from splice.store import JsonTimelineStore


class Project:
    """Represents a Splice project directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.config_path = path / CONFIG_FILENAME
        self.manifest_path = path / "project.json"
        self.catalog_path = path / "assets.json"
        self.timelines_dir = path / "timelines"
        self.exports_dir = path / "exports"
        self.profiles_dir = path / "profiles"
        self.store = JsonTimelineStore(self.timelines_dir)

    def exists(self) -> bool:
        return self.config_path.exists() and self.manifest_path.exists()

    def create(self, profile: str = "rough-cut") -> None:
        """Create the project directory structure."""
        if self.exists():
            raise ProjectError(f"Project already exists at {self.path}")
        if profile not in BUILTIN_PROFILES:
            raise ProjectError(f"Unknown profile: {profile}")

        self.path.mkdir(parents=True, exist_ok=True)
        self.timelines_dir.mkdir(exist_ok=True)
        self.exports_dir.mkdir(exist_ok=True)
        self.profiles_dir.mkdir(exist_ok=True)

        config = create_default_config(self.path.name, profile)
        write_config(config, self.config_path)

        manifest = {
            "project_name": self.path.name,
            "created": datetime.now().isoformat(timespec="seconds"),
            "profile": profile,
        }
        write_json(self.manifest_path, manifest)
        write_json(self.catalog_path, {"timelines": {}})

    def config(self) -> SpliceConfig:
        return load_config(self.path)

    @property
    def catalog(self) -> AssetCatalog:
        return AssetCatalog(self.catalog_path)

    @property
    def destination(self) -> DirectoryDestination:
        return DirectoryDestination(self.exports_dir)


def find_project_dir(start: Path | None = None) -> Path | None:
    """Find the project directory by looking for splice.yaml upwards."""
    current = (start or Path.cwd()).resolve()
    while True:
        if (current / CONFIG_FILENAME).exists():
            return current
        if current == current.parent:
            return None
        current = current.parent
