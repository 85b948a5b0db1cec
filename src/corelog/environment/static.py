"""Fixed-answer environment probe for tests and embedding."""

from __future__ import annotations

from corelog.environment.base import EnvironmentProbe


class StaticEnvironmentProbe(EnvironmentProbe):
    """Probe returning the values it was constructed with.

    Args:
        os_major_version: Value reported by :attr:`os_major_version`.
        restricted_distribution: Value reported by
            :attr:`is_restricted_distribution`.
    """

    def __init__(self, os_major_version: int = 0, restricted_distribution: bool = False) -> None:
        self._os_major_version = os_major_version
        self._restricted_distribution = restricted_distribution

    @property
    def os_major_version(self) -> int:
        return self._os_major_version

    @property
    def is_restricted_distribution(self) -> bool:
        return self._restricted_distribution
