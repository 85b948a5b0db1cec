"""Raw-output destination writing each line to standard error."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from corelog.exceptions import DestinationError
from corelog.sinks.base import LogDestination

if TYPE_CHECKING:
    from corelog.config import CoreLogConfig
    from corelog.severity import Severity


class StderrDestination(LogDestination):
    """Write ``<SEVERITY> line`` to a text stream, flushing after each line.

    Selected when raw output is forced at launch, or when the host OS is
    too old for the native destination.

    Args:
        config: Unused; accepted so ``build_destination`` can build every
            destination the same way.
        stream: Stream to write to; ``sys.stderr`` is looked up at write time
            when omitted, so redirections made after construction apply.
    """

    def __init__(self, config: CoreLogConfig | None = None, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def name(self) -> str:
        return "stderr"

    def write(self, text: str, severity: Severity) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        try:
            stream.write(f"<{severity.name.capitalize()}> {text}\n")
            stream.flush()
        except (OSError, ValueError) as exc:
            raise DestinationError(f"Cannot write to {stream!r}: {exc}") from exc
