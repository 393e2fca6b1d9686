"""Error types for one-version action construction."""

from __future__ import annotations

from typing import TypeVar

_T = TypeVar("_T")

REASON_ENFORCEMENT_OFF = "ENFORCEMENT_OFF"
REASON_MISSING_FIELD = "MISSING_FIELD"
REASON_UNRESOLVED_OWNER = "UNRESOLVED_OWNER"
REASON_BUILDER_CONSUMED = "BUILDER_CONSUMED"


class PreconditionError(ValueError):
    """Caller broke the builder or encoder contract.

    These are defects in the calling code, never user-facing build diagnostics.
    """

    reason_code: str

    def __init__(self, message: str, reason_code: str) -> None:
        super().__init__(message)
        self.reason_code = reason_code


class LabelSyntaxError(ValueError):
    """Raised when a target label string cannot be parsed."""


def check_not_none(value: _T | None, message: str, reason_code: str = REASON_MISSING_FIELD) -> _T:
    """Return ``value`` or raise ``PreconditionError`` when it is ``None``."""
    if value is None:
        raise PreconditionError(message, reason_code)
    return value
