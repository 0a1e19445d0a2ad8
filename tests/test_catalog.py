"""Tests for splice.catalog module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from splice.catalog import AssetCatalog, load_asset_records
from splice.exceptions import ProjectError, ValidationError


class TestLoadAssetRecords:
    def test_json_list(self, tmp_path: Path, sample_asset_records) -> None:
        path = tmp_path / "assets.json"
        path.write_text(json.dumps(sample_asset_records))
        assert load_asset_records(path) == sample_asset_records

    def test_json_assets_key(self, tmp_path: Path, sample_asset_records) -> None:
        path = tmp_path / "shoot.json"
        path.write_text(json.dumps({"assets": sample_asset_records}))
        assert len(load_asset_records(path)) == len(sample_asset_records)

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "shoot.yaml"
        path.write_text(
            "assets:\n"
            "  - id: beach\n"
            "    metadata:\n"
            "      duration: 4\n"
            "      scene: coast\n"
        )
        records = load_asset_records(path)
        assert records == [{"id": "beach", "metadata": {"duration": 4, "scene": "coast"}}]

    def test_not_a_list_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"clips": []}))
        with pytest.raises(ProjectError):
            load_asset_records(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_asset_records(tmp_path / "nope.json")


class TestAssetCatalog:
    def test_register_stamps_upload_time(
        self, tmp_path: Path, fixed_now, sample_asset_records
    ) -> None:
        catalog = AssetCatalog(tmp_path / "assets.json", now=fixed_now)
        added = catalog.register("timeline-1", sample_asset_records)

        assert [a.id for a in added] == [r["id"] for r in sample_asset_records]
        assert all(a.upload_time == fixed_now() for a in added)

    def test_assets_persist_in_order(self, tmp_path: Path, sample_asset_records) -> None:
        path = tmp_path / "assets.json"
        AssetCatalog(path).register("timeline-1", sample_asset_records)

        assets = AssetCatalog(path).assets_for("timeline-1")
        assert [a.id for a in assets] == [r["id"] for r in sample_asset_records]
        assert assets[1].metadata["analysis"]["scene"] == "road"

    def test_existing_upload_time_kept(self, tmp_path: Path, fixed_now) -> None:
        catalog = AssetCatalog(tmp_path / "assets.json", now=fixed_now)
        added = catalog.register(
            "t", [{"id": "a", "uploadTime": "2026-01-01T08:00:00Z", "metadata": {}}]
        )
        assert added[0].upload_time.month == 1

    def test_duplicate_id_raises(self, tmp_path: Path) -> None:
        catalog = AssetCatalog(tmp_path / "assets.json")
        catalog.register("t", [{"id": "a"}])

        with pytest.raises(ValidationError) as exc_info:
            catalog.register("t", [{"id": "b"}, {"id": "a"}])
        assert exc_info.value.value == "a"
        assert [a.id for a in catalog.assets_for("t")] == ["a"]

    def test_same_id_on_other_timeline_allowed(self, tmp_path: Path) -> None:
        catalog = AssetCatalog(tmp_path / "assets.json")
        catalog.register("t1", [{"id": "a"}])
        catalog.register("t2", [{"id": "a"}])
        assert len(catalog.assets_for("t2")) == 1

    def test_malformed_record_raises(self, tmp_path: Path) -> None:
        catalog = AssetCatalog(tmp_path / "assets.json")
        with pytest.raises(ValidationError):
            catalog.register("t", [{"metadata": {}}])

    def test_unknown_timeline_is_empty(self, tmp_path: Path) -> None:
        assert AssetCatalog(tmp_path / "assets.json").assets_for("nope") == []

    def test_remove_timeline(self, tmp_path: Path) -> None:
        catalog = AssetCatalog(tmp_path / "assets.json")
        catalog.register("t", [{"id": "a"}])
        catalog.remove_timeline("t")
        assert catalog.assets_for("t") == []
