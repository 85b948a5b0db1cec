"""Process-wide logger configuration and its one-time initialization guard."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from corelog.severity import Severity

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True, slots=True)
class LoggerSnapshot:
    """Immutable copy of :class:`LoggerState` at one point in time."""

    initialized: bool
    max_visible_severity: Severity
    debug_mode: bool
    analytics_debug_mode: bool


@dataclass(slots=True)
class LoggerState:
    """Mutable filter configuration.

    After initialization only serial dispatcher turns assign to these
    fields. :meth:`allows` may be called from any thread; attribute reads
    are atomic, so a concurrent change is seen either before or after.
    """

    max_visible_severity: Severity = Severity.NOTICE
    debug_mode: bool = False
    analytics_debug_mode: bool = False

    def allows(self, severity: Severity, is_analytics_service: bool = False) -> bool:
        """Return True if a message of *severity* passes the filter.

        Either debug flag bypasses the severity comparison; the analytics
        flag only does so for the analytics service.
        """
        if self.debug_mode:
            return True
        if self.analytics_debug_mode and is_analytics_service:
            return True
        return severity <= self.max_visible_severity

    def restore_defaults(self) -> None:
        self.max_visible_severity = Severity.NOTICE
        self.debug_mode = False
        self.analytics_debug_mode = False


class OnceGuard:
    """Run a setup body exactly once, however many threads race to call it.

    The first caller runs the body while later callers wait on a condition
    variable until it has finished. A call made from inside the body on the
    initializing thread returns immediately. If the body raises, the guard
    stays unarmed and the next caller runs it again.
    """

    def __init__(self) -> None:
        self._done = False
        self._owner: int | None = None
        self._cond = threading.Condition()

    @property
    def done(self) -> bool:
        return self._done

    def run(self, body: Callable[[], None]) -> bool:
        """Run *body* if no call has completed it yet.

        Returns:
            True if this call executed *body*.
        """
        if self._done:
            return False
        me = threading.get_ident()
        with self._cond:
            while self._owner is not None and not self._done:
                if self._owner == me:
                    return False
                self._cond.wait()
            if self._done:
                return False
            self._owner = me
        try:
            body()
        except BaseException:
            with self._cond:
                self._owner = None
                self._cond.notify_all()
            raise
        with self._cond:
            self._done = True
            self._owner = None
            self._cond.notify_all()
        return True

    def reset(self) -> None:
        """Re-arm the guard so the next :meth:`run` executes the body again."""
        with self._cond:
            self._done = False
