"""Durable per-user storage for the debug-mode preference.

Preferences are a flat JSON object of booleans stored at
``config.preferences_path``. Read failures behave like an empty store and
write failures are reported, never raised.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

from corelog.exceptions import PersistenceError
from corelog.storage._files import read_text, remove_file, write_text_atomic

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("corelog")

DEBUG_MODE_KEY = "/corelog/debug_mode"


class PreferenceStore(ABC):
    """Boolean key-value store surviving process restarts."""

    @abstractmethod
    def get_bool(self, key: str) -> bool:
        """Return the value for *key*, ``False`` if absent."""

    @abstractmethod
    def set_bool(self, key: str, value: bool) -> bool:
        """Persist *value* under *key*. Returns True on success."""

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Delete *key* if present. Returns True on success."""


class MemoryPreferenceStore(PreferenceStore):
    """Process-local preference store for tests and embedding."""

    def __init__(self, initial: dict[str, bool] | None = None) -> None:
        self._values: dict[str, bool] = dict(initial or {})

    def get_bool(self, key: str) -> bool:
        return self._values.get(key, False)

    def set_bool(self, key: str, value: bool) -> bool:
        self._values[key] = value
        return True

    def remove(self, key: str) -> bool:
        self._values.pop(key, None)
        return True

    def contains(self, key: str) -> bool:
        return key in self._values


class JsonFilePreferenceStore(PreferenceStore):
    """Preference store backed by a JSON file.

    Every call re-reads the file, so several processes sharing the file see
    each other's last completed write.

    Args:
        path: Location of the JSON file. Created on first write; removed
            when the last key is removed.
        on_failure: Optional callback receiving a description of every
            persistence failure.
    """

    def __init__(
        self,
        path: Path | str,
        on_failure: Callable[[str], None] | None = None,
    ) -> None:
        self._path = Path(path)
        self._on_failure = on_failure

    @property
    def path(self) -> Path:
        return self._path

    def get_bool(self, key: str) -> bool:
        return bool(self._load().get(key, False))

    def set_bool(self, key: str, value: bool) -> bool:
        values = self._load()
        values[key] = bool(value)
        return self._store(values)

    def remove(self, key: str) -> bool:
        values = self._load()
        if key not in values:
            return True
        del values[key]
        return self._store(values)

    def _load(self) -> dict[str, Any]:
        try:
            contents = read_text(self._path)
        except PersistenceError as exc:
            self._report(f"Attempted to read preferences but failed: {exc}")
            return {}
        if contents is None:
            return {}
        try:
            values = json.loads(contents)
        except json.JSONDecodeError as exc:
            self._report(f"Preferences at {self._path} are not valid JSON: {exc}")
            return {}
        if not isinstance(values, dict):
            self._report(f"Preferences at {self._path} are not a JSON object")
            return {}
        return values

    def _store(self, values: dict[str, Any]) -> bool:
        try:
            if values:
                write_text_atomic(self._path, json.dumps(values, sort_keys=True))
            else:
                remove_file(self._path)
        except PersistenceError as exc:
            self._report(f"Attempted to write preferences but failed: {exc}")
            return False
        return True

    def _report(self, description: str) -> None:
        logger.debug(description)
        if self._on_failure is not None:
            try:
                self._on_failure(description)
            except Exception:  # Intentional: failure reporting is best-effort
                logger.debug("Preference failure callback raised", exc_info=True)
