"""Immutable log message records and the diagnostic code contract."""

from __future__ import annotations

import re
from dataclasses import dataclass

from corelog.exceptions import MalformedCodeError
from corelog.severity import Severity

CODE_LENGTH = 11
"""Every diagnostic code is exactly 11 characters long."""

_CODE_PATTERN = re.compile(r"I-[A-Z]{3}[0-9]{6}")


def is_valid_code(code: str) -> bool:
    """Return True if *code* has the ``I-XXXnnnnnn`` shape."""
    return len(code) == CODE_LENGTH and _CODE_PATTERN.fullmatch(code) is not None


def validate_code(code: str) -> None:
    """Check *code* against the diagnostic code contract.

    Args:
        code: Diagnostic code such as ``'I-COR000001'``.

    Raises:
        MalformedCodeError: If the length or the shape is wrong.
    """
    if len(code) != CODE_LENGTH:
        raise MalformedCodeError(
            f"Incorrect message code length: {code!r} has {len(code)} characters, "
            f"expected {CODE_LENGTH}"
        )
    if _CODE_PATTERN.fullmatch(code) is None:
        raise MalformedCodeError(f"Incorrect message code format: {code!r}")


@dataclass(frozen=True, slots=True)
class LogMessage:
    """A single message on its way to the log destination.

    Attributes:
        severity: Importance of the message.
        service: Opaque tag of the emitting component.
        code: Diagnostic code, ``I-XXXnnnnnn`` by convention.
        body: Fully interpolated message text.
    """

    severity: Severity
    service: str
    code: str
    body: str
