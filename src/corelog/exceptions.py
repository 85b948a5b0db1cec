"""Exception hierarchy for corelog.

All exceptions derive from CoreLogError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
Only ``InvalidSeverityError`` and (in strict mode) ``MalformedCodeError``
ever reach application code; the others are recovered inside the package.
"""


class CoreLogError(Exception):
    """Base exception for all corelog errors."""


class InvalidSeverityError(CoreLogError, ValueError):
    """A severity value lies outside the ERROR..DEBUG range.

    Raised by ``set_maximum_severity()`` after the rejection has been
    self-logged, and by ``Severity.coerce()`` for unknown names or values.
    """


class MalformedCodeError(CoreLogError):
    """A diagnostic code does not have the ``I-XXXnnnnnn`` shape.

    Only raised when ``strict_mode`` is enabled. Outside strict mode codes
    are accepted verbatim.
    """


class PersistenceError(CoreLogError):
    """A durable read or write failed.

    Raised by storage helpers and always recovered by the stores, which
    report ``COUNT_NOT_FOUND`` or ``False`` instead.
    """


class DestinationError(CoreLogError):
    """A log destination could not accept a line.

    Swallowed by ``LogSink.emit()``: logging must never crash the host.
    """
