"""
splice.io - JSON and text file helpers with atomic writes.

The timeline store, asset catalog and export destinations all write through
here so that an interrupted write never leaves a half-written file behind.
"""

from __future__ import annotations

import json
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import IO, Any


def _atomic_write(path: Path, write: Callable[[IO[str]], None]) -> None:
    """Write to a sibling temp file, then rename it over the destination."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        newline="",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            write(tmp)
        except Exception:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    tmp_path.replace(path)


def read_json(path: Path) -> dict[str, Any]:
    """Read a UTF-8 JSON document.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data: dict[str, Any], indent: int = 2) -> None:
    """Atomically write pretty-printed JSON, creating parent directories."""
    _atomic_write(path, lambda f: json.dump(data, f, indent=indent, ensure_ascii=False))


def read_text(path: Path) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    """Atomically write text exactly as given (no newline translation)."""
    _atomic_write(path, lambda f: f.write(content))
