"""Severity levels and the issue kinds counted for them.

Severities use the syslog numeric ranks, so a lower value is more severe.
A message is visible when its severity is less than or equal to the
configured maximum visible severity.
"""

from __future__ import annotations

import enum
import logging
from typing import Any

from corelog.exceptions import InvalidSeverityError

# Between INFO (20) and WARNING (30) in the stdlib numbering.
NOTICE_LOGGING_LEVEL = 25

logging.addLevelName(NOTICE_LOGGING_LEVEL, "NOTICE")


class Severity(enum.IntEnum):
    """Ordered log importance, ERROR being the most severe."""

    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @classmethod
    def coerce(cls, value: Any) -> Severity:
        """Convert *value* into a ``Severity``.

        Accepts a ``Severity``, an integer rank, or a case-insensitive
        level name.

        Args:
            value: The value to convert.

        Returns:
            The matching severity.

        Raises:
            InvalidSeverityError: If *value* is outside ERROR..DEBUG.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidSeverityError(f"Unknown severity name: {value!r}") from None
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSeverityError(f"Severity must be an int or name, got {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise InvalidSeverityError(
                f"Severity {value} outside valid range {SEVERITY_MIN.value}..{SEVERITY_MAX.value}"
            ) from None

    @property
    def logging_level(self) -> int:
        """The stdlib ``logging`` level used when forwarding to ``logging``."""
        return _LOGGING_LEVELS[self]


SEVERITY_MIN = Severity.ERROR
SEVERITY_MAX = Severity.DEBUG

_LOGGING_LEVELS: dict[Severity, int] = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.NOTICE: NOTICE_LOGGING_LEVEL,
    Severity.INFO: logging.INFO,
    Severity.DEBUG: logging.DEBUG,
}


class IssueKind(enum.Enum):
    """Severities whose emissions are counted across process runs."""

    ERROR = "errors"
    WARNING = "warnings"

    @classmethod
    def for_severity(cls, severity: Severity) -> IssueKind | None:
        """Return the kind counted for *severity*, or ``None`` if uncounted."""
        if severity is Severity.ERROR:
            return cls.ERROR
        if severity is Severity.WARNING:
            return cls.WARNING
        return None
