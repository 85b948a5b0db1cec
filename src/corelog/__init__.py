"""corelog: process-wide leveled logging with persisted issue counters.

Messages are filtered on the calling thread against a global maximum
severity and a debug-mode override, then written by a single serial worker
that also keeps durable counts of errors and warnings across process runs.
"""

from __future__ import annotations

from corelog._version import __version__
from corelog.api import (
    get_default_context,
    initialize,
    is_loggable,
    log,
    number_of_errors_logged,
    number_of_warnings_logged,
    reset_issue_counters,
    set_analytics_debug_mode,
    set_default_context,
    set_maximum_severity,
)
from corelog.config import CoreLogConfig, LaunchOverrides
from corelog.context import LoggerContext, ServiceLogger
from corelog.exceptions import (
    CoreLogError,
    DestinationError,
    InvalidSeverityError,
    MalformedCodeError,
    PersistenceError,
)
from corelog.messages import LogMessage
from corelog.severity import IssueKind, Severity

__all__ = [
    "CoreLogConfig",
    "CoreLogError",
    "DestinationError",
    "InvalidSeverityError",
    "IssueKind",
    "LaunchOverrides",
    "LogMessage",
    "LoggerContext",
    "MalformedCodeError",
    "PersistenceError",
    "ServiceLogger",
    "Severity",
    "__version__",
    "get_default_context",
    "initialize",
    "is_loggable",
    "log",
    "number_of_errors_logged",
    "number_of_warnings_logged",
    "reset_issue_counters",
    "set_analytics_debug_mode",
    "set_default_context",
    "set_maximum_severity",
]
