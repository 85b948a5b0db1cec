"""Durable error and warning counters.

Each issue kind is backed by one text file in the cache directory holding
the decimal representation of a non-negative integer. A missing or
unreadable file reads as :data:`COUNT_NOT_FOUND`, which is distinct from a
real zero. The store does no locking: every call is made from a serial
dispatcher turn, which serializes the read/modify/write of ``increment``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from corelog.exceptions import PersistenceError
from corelog.severity import IssueKind
from corelog.storage._files import read_text, write_text_atomic

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("corelog")

COUNT_NOT_FOUND = -1
"""Sentinel returned by :meth:`IssueCounterStore.read` when no record exists."""

ERROR_COUNT_FILE_NAME = "corelog-count-of-errors-logged.txt"
WARNING_COUNT_FILE_NAME = "corelog-count-of-warnings-logged.txt"

_FILE_NAMES: dict[IssueKind, str] = {
    IssueKind.ERROR: ERROR_COUNT_FILE_NAME,
    IssueKind.WARNING: WARNING_COUNT_FILE_NAME,
}


class IssueCounterStore:
    """Read, increment and reset the persisted issue counters.

    Args:
        cache_dir: Directory holding the counter files. Created on first
            write.
        on_failure: Optional callback receiving a description of every
            persistence failure. Failures never propagate.
    """

    def __init__(
        self,
        cache_dir: Path | str,
        on_failure: Callable[[str], None] | None = None,
    ) -> None:
        self._cache_dir = Path(cache_dir)
        self._on_failure = on_failure

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def path_for(self, kind: IssueKind) -> Path:
        return self._cache_dir / _FILE_NAMES[kind]

    def read(self, kind: IssueKind) -> int:
        """Return the persisted count for *kind*.

        Returns:
            The count, or :data:`COUNT_NOT_FOUND` if the record is missing,
            unreadable, or does not hold a non-negative integer.
        """
        path = self.path_for(kind)
        try:
            contents = read_text(path)
        except PersistenceError as exc:
            self._report(f"Attempted to read the {kind.value} counter but failed: {exc}")
            return COUNT_NOT_FOUND
        if contents is None:
            return COUNT_NOT_FOUND
        try:
            value = int(contents.strip())
        except ValueError:
            self._report(f"The {kind.value} counter at {path} holds {contents!r}, not an integer")
            return COUNT_NOT_FOUND
        if value < 0:
            self._report(f"The {kind.value} counter at {path} holds negative value {value}")
            return COUNT_NOT_FOUND
        return value

    def write(self, kind: IssueKind, value: int) -> bool:
        """Persist *value* as the count for *kind*.

        Returns:
            True if the record was written.
        """
        try:
            write_text_atomic(self.path_for(kind), str(value))
        except PersistenceError as exc:
            self._report(f"Attempted to write the {kind.value} counter to file but failed: {exc}")
            return False
        return True

    def increment(self, kind: IssueKind) -> bool:
        """Add one to the count for *kind*; a missing record counts as 0."""
        current = self.read(kind)
        if current == COUNT_NOT_FOUND:
            current = 0
        return self.write(kind, current + 1)

    def reset(self) -> bool:
        """Write 0 for both kinds.

        Both writes are attempted even if the first fails.

        Returns:
            True only if both writes succeeded.
        """
        results = [self.write(kind, 0) for kind in IssueKind]
        return all(results)

    def _report(self, description: str) -> None:
        logger.debug(description)
        if self._on_failure is not None:
            try:
                self._on_failure(description)
            except Exception:  # Intentional: failure reporting is best-effort
                logger.debug("Counter failure callback raised", exc_info=True)
