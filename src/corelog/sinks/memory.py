"""In-memory destination for tests and post-hoc inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from corelog.sinks.base import LogDestination

if TYPE_CHECKING:
    from corelog.config import CoreLogConfig
    from corelog.severity import Severity


class MemoryDestination(LogDestination):
    """Keep every delivered ``(severity, text)`` pair in arrival order."""

    def __init__(self, config: CoreLogConfig | None = None) -> None:
        self._records: list[tuple[Severity, str]] = []
        self.threshold: Severity | None = None

    @property
    def name(self) -> str:
        return "memory"

    @property
    def records(self) -> list[tuple[Severity, str]]:
        """Copy of the delivered records."""
        return list(self._records)

    @property
    def lines(self) -> list[str]:
        """Delivered lines without their severities."""
        return [text for _, text in self._records]

    def write(self, text: str, severity: Severity) -> None:
        self._records.append((severity, text))

    def set_threshold(self, severity: Severity) -> None:
        self.threshold = severity

    def clear(self) -> None:
        self._records.clear()
