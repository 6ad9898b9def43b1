"""File-backed key-value storage for the recent-search slot.

The browser version of this widget keeps its history in local storage: one
named slot holding a serialized string. ``JsonKeyValueStore`` mirrors that
contract on disk so the history survives restarts. Writes go through a
temporary file and ``os.replace`` so a crash never leaves half a file behind.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, TypeVar

from core.errors import DeserializationError

T = TypeVar("T")


def read_json(path: Path, default: T) -> T:
    """Return JSON content from ``path`` or ``default`` when the file is absent."""

    if not path.exists():
        return default
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return default
    if not raw.strip():
        return default
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise DeserializationError(f"{path} does not contain valid JSON") from exc


def atomic_write_json(path: Path, payload: Any) -> None:
    """Persist ``payload`` to ``path`` atomically."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    os.replace(tmp_path, path)


class JsonKeyValueStore:
    """Named string slots persisted as one JSON object."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        data = read_json(self._path, {})
        if not isinstance(data, dict):
            raise DeserializationError(f"{self._path} must hold a JSON object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except DeserializationError:
            # an unreadable file is replaced by a fresh object
            data = {}
        data[key] = value
        atomic_write_json(self._path, data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            atomic_write_json(self._path, data)


__all__ = ["read_json", "atomic_write_json", "JsonKeyValueStore"]
