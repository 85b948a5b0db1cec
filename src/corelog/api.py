"""Process-wide default logger.

Module-level functions mirroring :class:`~corelog.context.LoggerContext`
that act on one lazily created context shared by the whole process::

    from corelog import api, services

    api.log_error(services.CORE, "I-COR000001", "Configuration failed.")

The default context is closed at interpreter exit so queued lines are
written before the process ends.
"""

from __future__ import annotations

import atexit
import threading
from typing import TYPE_CHECKING

from corelog.context import LoggerContext
from corelog.severity import Severity

if TYPE_CHECKING:
    from corelog.context import ServiceLogger

_default_context: LoggerContext | None = None
_default_lock = threading.Lock()


def get_default_context() -> LoggerContext:
    """Return the process-wide context, creating it on first use."""
    global _default_context
    context = _default_context
    if context is not None:
        return context
    with _default_lock:
        if _default_context is None:
            _default_context = LoggerContext()
            atexit.register(_default_context.close)
        return _default_context


def set_default_context(context: LoggerContext | None) -> LoggerContext | None:
    """Replace the process-wide context.

    Args:
        context: New default, or ``None`` to create a fresh one on next use.

    Returns:
        The previous default, which the caller is responsible for closing.
    """
    global _default_context
    with _default_lock:
        previous = _default_context
        _default_context = context
        return previous


def initialize() -> None:
    get_default_context().initialize()


def set_maximum_severity(level: Severity | int | str) -> None:
    get_default_context().set_maximum_severity(level)


def set_analytics_debug_mode(enabled: bool) -> None:
    get_default_context().set_analytics_debug_mode(enabled)


def is_loggable(severity: Severity | int | str, is_analytics_service: bool = False) -> bool:
    return get_default_context().is_loggable(severity, is_analytics_service)


def log(severity: Severity | int | str, service: str, code: str, body: str) -> None:
    get_default_context().log(severity, service, code, body)


def log_error(service: str, code: str, body: str) -> None:
    get_default_context().log(Severity.ERROR, service, code, body)


def log_warning(service: str, code: str, body: str) -> None:
    get_default_context().log(Severity.WARNING, service, code, body)


def log_notice(service: str, code: str, body: str) -> None:
    get_default_context().log(Severity.NOTICE, service, code, body)


def log_info(service: str, code: str, body: str) -> None:
    get_default_context().log(Severity.INFO, service, code, body)


def log_debug(service: str, code: str, body: str) -> None:
    get_default_context().log(Severity.DEBUG, service, code, body)


def for_service(service: str) -> ServiceLogger:
    return get_default_context().for_service(service)


def number_of_errors_logged() -> int:
    return get_default_context().number_of_errors_logged()


def number_of_warnings_logged() -> int:
    return get_default_context().number_of_warnings_logged()


def reset_issue_counters() -> bool:
    return get_default_context().reset_issue_counters()
