"""Tests for the debug-mode preference stores."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from corelog.storage.preferences import (
    DEBUG_MODE_KEY,
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestMemoryPreferenceStore:
    def test_roundtrip_and_remove(self) -> None:
        store = MemoryPreferenceStore()
        assert store.get_bool(DEBUG_MODE_KEY) is False
        store.set_bool(DEBUG_MODE_KEY, True)
        assert store.get_bool(DEBUG_MODE_KEY) is True
        store.remove(DEBUG_MODE_KEY)
        assert not store.contains(DEBUG_MODE_KEY)


class TestJsonFilePreferenceStore:
    def test_missing_file_reads_false(self, tmp_path: Path) -> None:
        store = JsonFilePreferenceStore(tmp_path / "prefs.json")
        assert store.get_bool(DEBUG_MODE_KEY) is False

    def test_set_creates_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "prefs.json"
        store = JsonFilePreferenceStore(path)
        assert store.set_bool(DEBUG_MODE_KEY, True) is True
        assert json.loads(path.read_text(encoding="utf-8")) == {DEBUG_MODE_KEY: True}
        assert JsonFilePreferenceStore(path).get_bool(DEBUG_MODE_KEY) is True

    def test_remove_last_key_deletes_file(self, tmp_path: Path) -> None:
        path = tmp_path / "prefs.json"
        store = JsonFilePreferenceStore(path)
        store.set_bool(DEBUG_MODE_KEY, True)
        assert store.remove(DEBUG_MODE_KEY) is True
        assert not path.exists()

    def test_remove_keeps_other_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "prefs.json"
        store = JsonFilePreferenceStore(path)
        store.set_bool("other", True)
        store.set_bool(DEBUG_MODE_KEY, True)
        store.remove(DEBUG_MODE_KEY)
        assert json.loads(path.read_text(encoding="utf-8")) == {"other": True}

    def test_remove_absent_key_is_success(self, tmp_path: Path) -> None:
        assert JsonFilePreferenceStore(tmp_path / "prefs.json").remove(DEBUG_MODE_KEY) is True

    def test_corrupt_file_reads_empty_and_reports(self, tmp_path: Path) -> None:
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        failures: list[str] = []
        store = JsonFilePreferenceStore(path, on_failure=failures.append)
        assert store.get_bool(DEBUG_MODE_KEY) is False
        assert failures

    def test_non_object_reads_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "prefs.json"
        path.write_text("[true]", encoding="utf-8")
        assert JsonFilePreferenceStore(path).get_bool(DEBUG_MODE_KEY) is False

    def test_write_failure_returns_false(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        failures: list[str] = []
        store = JsonFilePreferenceStore(blocker / "prefs.json", on_failure=failures.append)
        assert store.set_bool(DEBUG_MODE_KEY, True) is False
        assert failures
