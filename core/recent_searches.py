"""Bounded most-recent-first history mirrored to durable storage."""

from __future__ import annotations

import json
import logging
from typing import List, Tuple

from core.errors import DeserializationError
from core.json_storage import JsonKeyValueStore
from core.weather_record import WeatherRecord

DEFAULT_STORAGE_KEY = "weatherSearches"
DEFAULT_MAX_ENTRIES = 5

logger = logging.getLogger(__name__)


def serialize_records(records: Tuple[WeatherRecord, ...] | List[WeatherRecord]) -> str:
    return json.dumps([record.to_dict() for record in records], ensure_ascii=False)


def deserialize_records(raw: str) -> List[WeatherRecord]:
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise DeserializationError("Recent searches slot is not valid JSON") from exc
    if not isinstance(payload, list):
        raise DeserializationError("Recent searches slot must hold a JSON array")
    return [WeatherRecord.from_dict(item) for item in payload]


class RecentSearchStore:
    """WHAT: the last few successful searches, newest first.

    WHY: the UI offers one-click repeats of recent cities and the list must
    survive restarts.
    HOW: keep a plain list in memory, prepend-then-truncate on ``save`` and
    overwrite the whole serialized list in the storage slot after every
    mutation.
    """

    def __init__(
        self,
        storage: JsonKeyValueStore,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        self._storage = storage
        self._key = key
        self._max_entries = max(1, max_entries)
        self._entries: List[WeatherRecord] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def entries(self) -> Tuple[WeatherRecord, ...]:
        return tuple(self._entries)

    def load(self) -> Tuple[WeatherRecord, ...]:
        """Restore the in-memory list from storage.

        A missing slot yields an empty list. A malformed slot is logged and
        treated as empty; it is overwritten by the next ``save``.
        """

        try:
            raw = self._storage.get_item(self._key)
            records = deserialize_records(raw) if raw is not None else []
        except DeserializationError as exc:
            logger.warning("Ignoring unreadable recent searches in %s: %s", self._storage.path, exc)
            records = []
        self._entries = records[: self._max_entries]
        return self.entries()

    def save(self, record: WeatherRecord) -> Tuple[WeatherRecord, ...]:
        self._entries.insert(0, record)
        if len(self._entries) > self._max_entries:
            self._entries.pop()
        self._storage.set_item(self._key, serialize_records(self._entries))
        return self.entries()


__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_STORAGE_KEY",
    "RecentSearchStore",
    "deserialize_records",
    "serialize_records",
]
