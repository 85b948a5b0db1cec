"""Log sink subsystem for corelog.

Re-exports the destination ABC, all built-in destinations, destination
selection and the formatting sink::

    from corelog.sinks import LogSink, MemoryDestination
"""

from corelog.sinks.base import LogDestination
from corelog.sinks.memory import MemoryDestination
from corelog.sinks.sink import LogSink, available_destinations, build_destination
from corelog.sinks.stdlib import StdlibLoggingDestination
from corelog.sinks.stream import StderrDestination

__all__ = [
    "LogDestination",
    "LogSink",
    "MemoryDestination",
    "StderrDestination",
    "StdlibLoggingDestination",
    "available_destinations",
    "build_destination",
]
