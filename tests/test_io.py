"""Tests for splice.io module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from splice.io import read_json, read_text, write_json, write_text


class TestJson:
    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        data = {"name": "Café", "tracks": [1, 2]}
        write_json(path, data)
        assert read_json(path) == data

    def test_creates_parent_dirs(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "data.json"
        write_json(path, {})
        assert path.exists()

    def test_unicode_written_verbatim(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        write_json(path, {"name": "Café"})
        assert "Café" in path.read_text(encoding="utf-8")

    def test_read_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_json(tmp_path / "missing.json")

    def test_read_invalid_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            read_json(path)

    def test_failed_write_keeps_original(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        write_json(path, {"version": 1})

        with pytest.raises(TypeError):
            write_json(path, {"bad": object()})

        assert read_json(path) == {"version": 1}
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


class TestText:
    def test_newlines_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "out.edl"
        write_text(path, "TITLE: Demo\n\n001\n")
        assert path.read_bytes() == b"TITLE: Demo\n\n001\n"
        assert read_text(path) == "TITLE: Demo\n\n001\n"

    def test_overwrites(self, tmp_path: Path) -> None:
        path = tmp_path / "out.txt"
        write_text(path, "first")
        write_text(path, "second")
        assert read_text(path) == "second"
