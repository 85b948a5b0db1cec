"""Environment probe backed by the running interpreter's platform.

The OS major version comes from :func:`platform.release`. The
restricted-distribution signal is either set directly in configuration or
inferred from the presence of a distribution receipt file.
"""

from __future__ import annotations

import logging
import platform
import re
from pathlib import Path
from typing import TYPE_CHECKING

from corelog.environment.base import EnvironmentProbe

if TYPE_CHECKING:
    from corelog.config import CoreLogConfig

logger = logging.getLogger("corelog")

_LEADING_NUMBER = re.compile(r"\d+")


def parse_major_version(release: str) -> int:
    """Extract the leading integer of a release string.

    Args:
        release: Release string such as ``'6.8.0-45-generic'`` or ``'10'``.

    Returns:
        The major version, or 0 if the string does not start with a number.
    """
    match = _LEADING_NUMBER.match(release.strip())
    return int(match.group()) if match else 0


class SystemEnvironmentProbe(EnvironmentProbe):
    """Probe reading the host platform and the corelog configuration.

    Args:
        config: Configuration providing ``restricted_distribution`` and
            ``distribution_receipt_path``.
    """

    def __init__(self, config: CoreLogConfig) -> None:
        self._forced_restricted = config.restricted_distribution
        self._receipt_path = config.distribution_receipt_path

    @property
    def os_major_version(self) -> int:
        return parse_major_version(platform.release())

    @property
    def is_restricted_distribution(self) -> bool:
        if self._forced_restricted:
            return True
        if not self._receipt_path:
            return False
        try:
            return Path(self._receipt_path).is_file()
        except OSError:
            logger.debug("Cannot stat distribution receipt %s", self._receipt_path, exc_info=True)
            return False
