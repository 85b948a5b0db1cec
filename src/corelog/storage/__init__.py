"""Durable storage for issue counters and the debug-mode preference."""

from corelog.storage.counters import (
    COUNT_NOT_FOUND,
    ERROR_COUNT_FILE_NAME,
    WARNING_COUNT_FILE_NAME,
    IssueCounterStore,
)
from corelog.storage.preferences import (
    DEBUG_MODE_KEY,
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
)

__all__ = [
    "COUNT_NOT_FOUND",
    "DEBUG_MODE_KEY",
    "ERROR_COUNT_FILE_NAME",
    "WARNING_COUNT_FILE_NAME",
    "IssueCounterStore",
    "JsonFilePreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
]
