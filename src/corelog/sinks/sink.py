"""The formatting adapter between log messages and a destination.

Every line carries the build/version stamp, the service tag and the
diagnostic code ahead of the body::

    0.3.0 - [Corelog/Core][I-COR000001] Configuration finished.

Destinations are chosen by name. The built-in names are ``logging``,
``stderr`` and ``memory``; other packages add destinations through the
``corelog.destinations`` entry-point group::

    [project.entry-points."corelog.destinations"]
    syslog = "acme_logging:SyslogDestination"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING

from corelog.sinks.memory import MemoryDestination
from corelog.sinks.stdlib import StdlibLoggingDestination
from corelog.sinks.stream import StderrDestination

if TYPE_CHECKING:
    from corelog.config import CoreLogConfig
    from corelog.messages import LogMessage
    from corelog.severity import Severity
    from corelog.sinks.base import LogDestination

logger = logging.getLogger("corelog")

ENTRY_POINT_GROUP = "corelog.destinations"
DEFAULT_DESTINATION = "logging"
RAW_OUTPUT_DESTINATION = "stderr"

BUILTIN_DESTINATIONS: dict[str, type[LogDestination]] = {
    "logging": StdlibLoggingDestination,
    "stderr": StderrDestination,
    "memory": MemoryDestination,
}


def available_destinations() -> list[str]:
    """Return every destination name ``build_destination`` accepts, sorted."""
    names = set(BUILTIN_DESTINATIONS)
    names.update(ep.name for ep in _entry_points())
    return sorted(names)


def build_destination(config: CoreLogConfig, *, raw_output: bool = False) -> LogDestination:
    """Instantiate the destination the logger should write to.

    Resolution order:

    1. ``'stderr'`` when *raw_output* is set, whatever the config says
    2. a built-in destination named by ``config.destination``
    3. a ``corelog.destinations`` entry point of that name

    A name that resolves to nothing, or a plugin that fails to load or to
    construct, is reported as a warning on the ``corelog`` logger and
    replaced by the ``'logging'`` destination, so a configuration mistake
    never stops messages from being written.

    Args:
        config: Configuration naming the destination.
        raw_output: Use the ``'stderr'`` destination regardless of config.

    Returns:
        A new destination instance.
    """
    name = RAW_OUTPUT_DESTINATION if raw_output else config.destination
    builtin = BUILTIN_DESTINATIONS.get(name)
    if builtin is not None:
        return builtin(config)

    try:
        plugin = _load_plugin(name)
        if plugin is not None:
            return plugin(config)  # type: ignore[call-arg]
    except Exception:  # Intentional: a broken plugin must not disable logging
        logger.warning("Log destination %r could not be built", name, exc_info=True)
    else:
        logger.warning(
            "Unknown log destination %r, available: %s",
            name,
            ", ".join(available_destinations()),
        )
    logger.warning("Falling back to the %r log destination", DEFAULT_DESTINATION)
    return BUILTIN_DESTINATIONS[DEFAULT_DESTINATION](config)


def _load_plugin(name: str) -> type[LogDestination] | None:
    for ep in _entry_points():
        if ep.name == name:
            destination_cls: type[LogDestination] = ep.load()
            logger.debug("Loaded log destination %r from %s", name, ep.value)
            return destination_cls
    return None


def _entry_points() -> list[importlib.metadata.EntryPoint]:
    try:
        return list(importlib.metadata.entry_points(group=ENTRY_POINT_GROUP))
    except Exception:  # Intentional: broken metadata must not disable logging
        logger.warning("Failed to read entry points for %s", ENTRY_POINT_GROUP, exc_info=True)
        return []


class LogSink:
    """Format messages and hand them to a destination, best-effort.

    Args:
        destination: Where formatted lines are written.
        version_stamp: Prefix identifying the build that produced the line.
    """

    def __init__(self, destination: LogDestination, version_stamp: str) -> None:
        self._destination = destination
        self._version_stamp = version_stamp

    @property
    def destination(self) -> LogDestination:
        return self._destination

    def format(self, message: LogMessage) -> str:
        return f"{self._version_stamp} - {message.service}[{message.code}] {message.body}"

    def emit(self, message: LogMessage) -> None:
        """Write *message* to the destination.

        Failures of the destination are reported on the ``corelog`` logger
        at DEBUG and otherwise ignored.
        """
        line = self.format(message)
        try:
            self._destination.write(line, message.severity)
        except Exception:  # Intentional: logging must never crash the host
            logger.debug(
                "Log destination %r failed to write a line",
                self._destination.name,
                exc_info=True,
            )

    def set_threshold(self, severity: Severity) -> None:
        try:
            self._destination.set_threshold(severity)
        except Exception:  # Intentional: logging must never crash the host
            logger.debug(
                "Log destination %r rejected threshold %s",
                self._destination.name,
                severity.name,
                exc_info=True,
            )

    def close(self) -> None:
        try:
            self._destination.close()
        except Exception:  # Intentional: shutdown is best-effort
            logger.debug("Error closing log destination %r", self._destination.name, exc_info=True)
