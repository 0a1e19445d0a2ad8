"""
splice.catalog - Asset catalog.

Keeps the assets registered for each timeline in a single JSON document.
Media ingestion and metadata extraction happen upstream; the catalog only
records what it is given, stamped with an upload time.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from splice.exceptions import ProjectError, ValidationError
from splice.ids import Clock, utcnow
from splice.io import read_json, read_text, write_json
from splice.models import Asset


def load_asset_records(path: Path) -> list[dict[str, Any]]:
    """Read asset records from a JSON or YAML file.

    The file holds either a list of records or a mapping with an ``assets``
    list. Each record needs an ``id`` and usually a ``metadata`` mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ProjectError: If the file does not contain a list of records
    """
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(read_text(path))
        except yaml.YAMLError as e:
            raise ProjectError(f"Invalid YAML in {path}: {e}") from e
    else:
        data = read_json(path)

    if isinstance(data, dict):
        data = data.get("assets")
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ProjectError(f"{path} does not contain a list of asset records")
    return data


class AssetCatalog:
    """Assets registered per timeline, persisted as JSON."""

    def __init__(self, path: Path, now: Clock = utcnow) -> None:
        self.path = path
        self.now = now

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"timelines": {}}
        data = read_json(self.path)
        data.setdefault("timelines", {})
        return data

    def assets_for(self, timeline_id: str) -> list[Asset]:
        """Get the assets registered for a timeline, in registration order."""
        records = self._load()["timelines"].get(timeline_id, [])
        return [Asset.model_validate(record) for record in records]

    def register(self, timeline_id: str, records: list[dict[str, Any]]) -> list[Asset]:
        """Add assets to a timeline's catalog entry.

        Args:
            timeline_id: Timeline the assets belong to
            records: Asset records with id and metadata

        Returns:
            The newly registered assets

        Raises:
            ValidationError: If a record is malformed or its id is already registered
        """
        data = self._load()
        existing = data["timelines"].setdefault(timeline_id, [])
        seen = {record.get("id") for record in existing}

        uploaded = self.now()
        added = []
        for record in records:
            try:
                asset = Asset.model_validate(record)
            except PydanticValidationError as e:
                raise ValidationError(
                    f"Invalid asset record: {e.errors()[0]['msg']}",
                    option="asset",
                    value=record.get("id"),
                    timeline_id=timeline_id,
                ) from e
            if asset.id in seen:
                raise ValidationError(
                    f"Asset {asset.id} is already registered",
                    option="id",
                    value=asset.id,
                    timeline_id=timeline_id,
                )
            if asset.upload_time is None:
                asset = asset.model_copy(update={"upload_time": uploaded})
            seen.add(asset.id)
            added.append(asset)

        existing.extend(asset.to_dict() for asset in added)
        write_json(self.path, data)
        return added

    def remove_timeline(self, timeline_id: str) -> None:
        data = self._load()
        if data["timelines"].pop(timeline_id, None) is not None:
            write_json(self.path, data)
