"""Abstract base class for all log destinations.

A destination is the write-only end of the pipeline: it accepts an already
formatted line together with its numeric severity. Subclasses must implement
``name`` and ``write()``; ``close()`` and ``set_threshold()`` default to
no-ops.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from corelog.severity import Severity


class LogDestination(ABC):
    """Abstract base for all log destinations.

    ``write()`` and ``set_threshold()`` are only ever called from the serial
    worker, so implementations need no locking of their own.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used in ``config.destination`` (e.g., ``'logging'``)."""

    @abstractmethod
    def write(self, text: str, severity: Severity) -> None:
        """Deliver one formatted line.

        Args:
            text: The fully formatted line.
            severity: Severity of the line, for destinations that filter or
                tag by level.

        Raises:
            DestinationError: If the line could not be delivered.
        """

    def set_threshold(self, severity: Severity) -> None:
        """Accept every line up to *severity* from now on.

        Called whenever the logger filter changes. Destinations with a
        filter of their own must open it at least this far.
        """

    def close(self) -> None:
        """Release resources (handles, buffers). Default: no-op."""
