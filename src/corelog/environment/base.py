"""Abstract base class for environment probes.

A probe answers the two questions initialization asks about the host:
which OS major version it runs, and whether it was obtained through a
restricted (curated) distribution channel.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class EnvironmentProbe(ABC):
    """Read-only view of the platform the logger runs on."""

    @property
    @abstractmethod
    def os_major_version(self) -> int:
        """Major version of the host OS, or 0 when it cannot be determined."""

    @property
    @abstractmethod
    def is_restricted_distribution(self) -> bool:
        """Whether verbose logging must be suppressed for this host."""

    def describe(self) -> dict[str, Any]:
        """Return a status dictionary for diagnostics."""
        return {
            "os_major_version": self.os_major_version,
            "restricted_distribution": self.is_restricted_distribution,
        }
