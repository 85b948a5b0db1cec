"""The logger context: public entry point of corelog.

A :class:`LoggerContext` owns one filter state, one serial dispatcher, one
sink and one issue counter store. Every public method first makes sure the
context is initialized, which happens exactly once however many threads
call in concurrently.

Filtering happens on the calling thread against the current state. Every
side effect (writing a line, counting an issue, changing the filter) is
posted to the dispatcher, so side effects land in the order the calls were
made. Counter reads and resets wait for their turn, which makes them
observe every write submitted before them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from corelog import services
from corelog._version import __version__
from corelog.config import CoreLogConfig, LaunchOverrides
from corelog.dispatcher import SerialDispatcher
from corelog.environment.system import SystemEnvironmentProbe
from corelog.exceptions import CoreLogError, InvalidSeverityError
from corelog.messages import LogMessage, validate_code
from corelog.severity import IssueKind, Severity
from corelog.sinks.sink import LogSink, build_destination
from corelog.state import LoggerSnapshot, LoggerState, OnceGuard
from corelog.storage.counters import COUNT_NOT_FOUND, IssueCounterStore
from corelog.storage.preferences import DEBUG_MODE_KEY, JsonFilePreferenceStore

if TYPE_CHECKING:
    from collections.abc import Sequence

    from corelog.environment.base import EnvironmentProbe
    from corelog.sinks.base import LogDestination
    from corelog.storage.preferences import PreferenceStore

logger = logging.getLogger("corelog")

INVALID_LEVEL_CODE = "I-COR000023"
PERSISTENCE_FAILURE_CODE = "I-COR000029"


class LoggerContext:
    """Leveled, tagged logging with a serialized sink and durable counters.

    Collaborators default to the ones described by *config*; pass them
    explicitly to embed the logger or to test it.

    Args:
        config: Configuration; loaded from the environment when omitted.
        environment: Probe for OS version and restricted distribution.
        preferences: Store holding the persisted debug-mode preference.
        counters: Store holding the persisted issue counters.
        destination: Destination for formatted lines, used instead of
            ``config.destination`` unless raw output is forced.
        argv: Process arguments scanned for launch overrides; defaults to
            ``sys.argv`` at initialization time.
    """

    def __init__(
        self,
        config: CoreLogConfig | None = None,
        *,
        environment: EnvironmentProbe | None = None,
        preferences: PreferenceStore | None = None,
        counters: IssueCounterStore | None = None,
        destination: LogDestination | None = None,
        argv: Sequence[str] | None = None,
    ) -> None:
        self._config = config if config is not None else CoreLogConfig()
        self._environment = environment or SystemEnvironmentProbe(self._config)
        self._preferences = preferences or JsonFilePreferenceStore(
            self._config.preferences_path,
            on_failure=self._report_persistence_failure,
        )
        self._counters = counters or IssueCounterStore(
            self._config.cache_dir,
            on_failure=self._report_persistence_failure,
        )
        self._destination = destination
        self._argv = argv

        self._state = LoggerState()
        self._guard = OnceGuard()
        self._dispatcher: SerialDispatcher | None = None
        self._sink: LogSink | None = None

    # --- Lifecycle ---

    def initialize(self) -> None:
        """Apply the default configuration, once.

        Safe to call from any thread and any number of times. Callers that
        lose the race block until the winner has finished.
        """
        self._guard.run(self._setup)

    def _setup(self) -> None:
        if self._dispatcher is None:
            self._dispatcher = SerialDispatcher()

        overrides = LaunchOverrides.resolve(self._config, self._argv)
        if self._sink is None:
            self._sink = self._build_sink(overrides)

        self._state.restore_defaults()
        persisted = self._preferences.get_bool(DEBUG_MODE_KEY)
        if overrides.debug_disabled:
            self._preferences.remove(DEBUG_MODE_KEY)
        elif overrides.debug_enabled or persisted:
            self._preferences.set_bool(DEBUG_MODE_KEY, True)
            self._state.debug_mode = True

        # Never ship debug verbosity to restricted-distribution hosts.
        if self._state.debug_mode and self._environment.is_restricted_distribution:
            self._state.debug_mode = False
        self._sync_threshold()

        logger.debug(
            "corelog initialized: sink=%s debug_mode=%s",
            self._require_sink().destination.name,
            self._state.debug_mode,
        )

    def _build_sink(self, overrides: LaunchOverrides) -> LogSink:
        min_os = self._config.native_log_min_os_version
        legacy_os = min_os > 0 and self._environment.os_major_version < min_os
        if overrides.force_raw_output or legacy_os:
            destination = build_destination(self._config, raw_output=True)
        elif self._destination is not None:
            destination = self._destination
        else:
            destination = build_destination(self._config)
        return LogSink(destination, self._config.version_stamp or __version__)

    def flush(self) -> None:
        """Block until every side effect submitted so far has completed."""
        if self._dispatcher is not None:
            self._dispatcher.flush()

    def close(self) -> None:
        """Drain pending turns and stop the worker thread.

        Calls made after ``close()`` still work; their side effects run on
        the calling thread.
        """
        if self._dispatcher is None:
            return
        self._dispatcher.close()
        if self._sink is not None:
            self._sink.close()

    def reset(self) -> None:
        """Testing hook: zero the counters, forget the debug preference,
        and re-arm initialization so the next call starts from scratch.
        """
        self.initialize()
        self._require_dispatcher().post_and_wait(self._reset_turn)
        self._guard.reset()

    def _reset_turn(self) -> None:
        self._counters.reset()
        self._preferences.remove(DEBUG_MODE_KEY)
        self._state.restore_defaults()
        self._sync_threshold()

    def _sync_threshold(self) -> None:
        # The destination must let through everything the filter admits.
        state = self._state
        if state.debug_mode or state.analytics_debug_mode:
            threshold = Severity.DEBUG
        else:
            threshold = state.max_visible_severity
        self._require_sink().set_threshold(threshold)

    # --- Configuration ---

    def set_maximum_severity(self, level: Severity | int | str) -> None:
        """Set the least severe level that is still written.

        Under restricted distribution, requests for NOTICE or anything more
        verbose are silently ignored.

        Raises:
            InvalidSeverityError: If *level* is outside ERROR..DEBUG. The
                rejection is also logged as an error.
        """
        self.initialize()
        try:
            severity = Severity.coerce(level)
        except InvalidSeverityError:
            self.log(
                Severity.ERROR,
                services.CORE,
                INVALID_LEVEL_CODE,
                f"Invalid logger level, {level!r}",
            )
            raise
        if severity >= Severity.NOTICE and self._environment.is_restricted_distribution:
            return
        self._require_dispatcher().post(self._apply_maximum_severity, severity)

    def _apply_maximum_severity(self, severity: Severity) -> None:
        self._state.max_visible_severity = severity
        self._sync_threshold()

    def set_analytics_debug_mode(self, enabled: bool) -> None:
        """Let every analytics message through the filter, or stop doing so.

        Enabling is silently ignored under restricted distribution.
        """
        self.initialize()
        if enabled and self._environment.is_restricted_distribution:
            return
        self._require_dispatcher().post(self._apply_analytics_debug_mode, bool(enabled))

    def _apply_analytics_debug_mode(self, enabled: bool) -> None:
        self._state.analytics_debug_mode = enabled
        self._sync_threshold()

    # --- Queries ---

    def is_loggable(
        self,
        severity: Severity | int | str,
        is_analytics_service: bool = False,
    ) -> bool:
        """Return True if a message of *severity* would be written now.

        Does not wait for pending configuration changes. A severity outside
        ERROR..DEBUG is never loggable.
        """
        self.initialize()
        try:
            level = Severity.coerce(severity)
        except InvalidSeverityError:
            return False
        return self._state.allows(level, is_analytics_service)

    @property
    def debug_mode(self) -> bool:
        self.initialize()
        return self._state.debug_mode

    @property
    def analytics_debug_mode(self) -> bool:
        self.initialize()
        return self._state.analytics_debug_mode

    @property
    def max_visible_severity(self) -> Severity:
        self.initialize()
        return self._state.max_visible_severity

    def snapshot(self) -> LoggerSnapshot:
        state = self._state
        return LoggerSnapshot(
            initialized=self._guard.done,
            max_visible_severity=state.max_visible_severity,
            debug_mode=state.debug_mode,
            analytics_debug_mode=state.analytics_debug_mode,
        )

    @property
    def config(self) -> CoreLogConfig:
        return self._config

    @property
    def sink(self) -> LogSink:
        self.initialize()
        return self._require_sink()

    @property
    def counters(self) -> IssueCounterStore:
        return self._counters

    @property
    def preferences(self) -> PreferenceStore:
        return self._preferences

    # --- Logging ---

    def log(self, severity: Severity | int | str, service: str, code: str, body: str) -> None:
        """Write one message if it passes the filter.

        The line is written and, for errors and warnings, counted, in one
        dispatcher turn. Returns without waiting for either. A message whose
        severity is outside ERROR..DEBUG is dropped.

        Args:
            severity: Importance of the message.
            service: Tag of the emitting component, e.g. ``services.CORE``.
            code: Diagnostic code of the shape ``I-XXXnnnnnn``.
            body: Fully interpolated message text.

        Raises:
            MalformedCodeError: In strict mode, if *code* is malformed.
        """
        self.initialize()
        try:
            level = Severity.coerce(severity)
        except InvalidSeverityError:
            logger.debug("Dropped message %s with invalid severity %r", code, severity)
            return
        if not self._state.allows(level, services.is_analytics(service)):
            return
        if self._config.strict_mode:
            validate_code(code)
        message = LogMessage(severity=level, service=service, code=code, body=body)
        self._require_dispatcher().post(self._emit_and_count, message)

    def _emit_and_count(self, message: LogMessage) -> None:
        self._require_sink().emit(message)
        kind = IssueKind.for_severity(message.severity)
        if kind is not None:
            self._counters.increment(kind)

    def error(self, service: str, code: str, body: str) -> None:
        self.log(Severity.ERROR, service, code, body)

    def warning(self, service: str, code: str, body: str) -> None:
        self.log(Severity.WARNING, service, code, body)

    def notice(self, service: str, code: str, body: str) -> None:
        self.log(Severity.NOTICE, service, code, body)

    def info(self, service: str, code: str, body: str) -> None:
        self.log(Severity.INFO, service, code, body)

    def debug(self, service: str, code: str, body: str) -> None:
        self.log(Severity.DEBUG, service, code, body)

    def for_service(self, service: str) -> ServiceLogger:
        """Return a logger bound to *service*."""
        return ServiceLogger(self, service)

    # --- Issue counters ---

    def number_of_errors_logged(self) -> int:
        """Errors written since the last reset, across process runs."""
        return self._read_count(IssueKind.ERROR)

    def number_of_warnings_logged(self) -> int:
        """Warnings written since the last reset, across process runs."""
        return self._read_count(IssueKind.WARNING)

    def _read_count(self, kind: IssueKind) -> int:
        self.initialize()
        value = self._require_dispatcher().post_and_wait(self._counters.read, kind)
        return 0 if value == COUNT_NOT_FOUND else value

    def reset_issue_counters(self) -> bool:
        """Zero both counters. Returns True only if both writes succeeded."""
        self.initialize()
        return self._require_dispatcher().post_and_wait(self._counters.reset)

    # --- Internals ---

    def _require_dispatcher(self) -> SerialDispatcher:
        dispatcher = self._dispatcher
        if dispatcher is None:
            raise CoreLogError("LoggerContext used before initialize() completed")
        return dispatcher

    def _require_sink(self) -> LogSink:
        sink = self._sink
        if sink is None:
            raise CoreLogError("LoggerContext used before initialize() completed")
        return sink

    def _report_persistence_failure(self, description: str) -> None:
        if self._dispatcher is None:
            return
        self.log(Severity.DEBUG, services.CORE, PERSISTENCE_FAILURE_CODE, description)


class ServiceLogger:
    """Logger bound to a single service tag.

    Args:
        context: The context that filters and writes the messages.
        service: Tag attached to every message.
    """

    def __init__(self, context: LoggerContext, service: str) -> None:
        self._context = context
        self._service = service

    @property
    def service(self) -> str:
        return self._service

    def is_loggable(self, severity: Severity | int | str) -> bool:
        return self._context.is_loggable(severity, services.is_analytics(self._service))

    def log(self, severity: Severity | int | str, code: str, body: str) -> None:
        self._context.log(severity, self._service, code, body)

    def error(self, code: str, body: str) -> None:
        self._context.log(Severity.ERROR, self._service, code, body)

    def warning(self, code: str, body: str) -> None:
        self._context.log(Severity.WARNING, self._service, code, body)

    def notice(self, code: str, body: str) -> None:
        self._context.log(Severity.NOTICE, self._service, code, body)

    def info(self, code: str, body: str) -> None:
        self._context.log(Severity.INFO, self._service, code, body)

    def debug(self, code: str, body: str) -> None:
        self._context.log(Severity.DEBUG, self._service, code, body)

    def __repr__(self) -> str:
        return f"ServiceLogger({self._service!r})"
