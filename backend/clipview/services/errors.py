"""Exceptions raised by the clipview services.

The clipping core itself never raises; these cover the input and
window validation that happens before segments reach it.  All of them
derive from ``ValueError`` so callers that only care about "bad input"
can catch that.
"""

from __future__ import annotations


class ClipInputError(ValueError):
    """Base class for rejected clipping input."""


class InputParseError(ClipInputError):
    """Textual input could not be parsed.

    Attributes:
        position: Zero-based index of the offending token, or ``None``
            when the input ended early.
        field: Name of the value that was expected at that position.
    """

    def __init__(self, message: str, position: int | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.position = position
        self.field = field


class InvalidWindowError(ClipInputError):
    """Window bounds are not ordered (``left > right`` or ``bottom > top``)."""
