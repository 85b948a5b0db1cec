"""Destination forwarding lines to a stdlib ``logging`` logger.

This is the default destination: it lets the host application route
corelog output with its ordinary ``logging`` handlers. When the host has
configured no handlers at all, lines go to standard error so they are not
lost to ``logging.lastResort``, which drops everything below WARNING.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from corelog.severity import Severity
from corelog.sinks.base import LogDestination

if TYPE_CHECKING:
    from corelog.config import CoreLogConfig

STDERR_FORMAT = "%(asctime)s %(name)s[%(process)d] <%(levelname)s> %(message)s"


class StdlibLoggingDestination(LogDestination):
    """Forward each line to ``logging.getLogger(config.system_logger_name)``.

    The severity is mapped to the matching stdlib level and also attached
    to the record as ``corelog_severity``. The logger's level follows the
    corelog filter through :meth:`set_threshold`, starting at NOTICE.
    """

    def __init__(self, config: CoreLogConfig | None = None) -> None:
        name = config.system_logger_name if config is not None else "corelog.system"
        self._logger = logging.getLogger(name)
        self._logger.setLevel(Severity.NOTICE.logging_level)
        self._stderr_handler: logging.Handler | None = None
        if not self._logger.hasHandlers():
            self._stderr_handler = logging.StreamHandler()
            self._stderr_handler.setFormatter(logging.Formatter(STDERR_FORMAT))
            self._logger.addHandler(self._stderr_handler)

    @property
    def name(self) -> str:
        return "logging"

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_threshold(self, severity: Severity) -> None:
        self._logger.setLevel(severity.logging_level)

    def write(self, text: str, severity: Severity) -> None:
        self._logger.log(
            severity.logging_level,
            "%s",
            text,
            extra={"corelog_severity": int(severity)},
        )

    def close(self) -> None:
        if self._stderr_handler is not None:
            self._logger.removeHandler(self._stderr_handler)
            self._stderr_handler.close()
            self._stderr_handler = None
