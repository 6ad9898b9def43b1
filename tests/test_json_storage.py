import json

import pytest

from core.errors import DeserializationError
from core.json_storage import JsonKeyValueStore, atomic_write_json, read_json


def test_read_json_returns_default_for_missing_or_blank_file(tmp_path):
    path = tmp_path / "data.json"
    assert read_json(path, {"empty": True}) == {"empty": True}

    path.write_text("   \n", encoding="utf-8")
    assert read_json(path, []) == []


def test_read_json_raises_on_corrupt_content(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DeserializationError):
        read_json(path, {})


def test_atomic_write_creates_parents_and_leaves_no_temp_file(tmp_path):
    path = tmp_path / "nested" / "data.json"

    atomic_write_json(path, {"city": "Zürich"})

    assert json.loads(path.read_text(encoding="utf-8")) == {"city": "Zürich"}
    assert not path.with_suffix(".json.tmp").exists()


def test_key_value_slots_round_trip(tmp_path):
    store = JsonKeyValueStore(tmp_path / "local_storage.json")

    assert store.get_item("weatherSearches") is None
    store.set_item("weatherSearches", "[]")
    store.set_item("theme", "dark")

    assert store.get_item("weatherSearches") == "[]"
    assert store.get_item("theme") == "dark"

    store.remove_item("theme")
    assert store.get_item("theme") is None
    assert store.get_item("weatherSearches") == "[]"


def test_non_object_file_is_rejected_on_read(tmp_path):
    path = tmp_path / "local_storage.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(DeserializationError):
        JsonKeyValueStore(path).get_item("weatherSearches")


def test_set_item_replaces_unreadable_file(tmp_path):
    path = tmp_path / "local_storage.json"
    path.write_text("garbage", encoding="utf-8")
    store = JsonKeyValueStore(path)

    store.set_item("weatherSearches", "[]")

    assert json.loads(path.read_text(encoding="utf-8")) == {"weatherSearches": "[]"}
