"""
Parser for the textual clipping input format.

The format mirrors the prompts of the original terminal tool::

    left top right bottom
    n
    x1 y1 x2 y2        # repeated n times

Tokens may be separated by any whitespace, so the values can be split
over lines however the caller likes.  Anything after the last segment
is ignored with a warning.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Tuple

from .errors import InputParseError
from .geometry import ClipWindow, Segment

logger = logging.getLogger(__name__)

WINDOW_FIELDS = ("left", "top", "right", "bottom")
SEGMENT_FIELDS = ("x1", "y1", "x2", "y2")


class _TokenReader:
    """Sequential reader over whitespace separated tokens."""

    def __init__(self, text: str) -> None:
        self.tokens = text.split()
        self.pos = 0

    def remaining(self) -> int:
        return len(self.tokens) - self.pos

    def _next(self, field: str) -> str:
        if self.pos >= len(self.tokens):
            raise InputParseError(
                f"Unexpected end of input: expected {field}", position=None, field=field
            )
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def next_float(self, field: str) -> float:
        token = self._next(field)
        try:
            value = float(token)
        except ValueError:
            raise InputParseError(
                f"Token {self.pos} ({token!r}) is not a number: expected {field}",
                position=self.pos - 1,
                field=field,
            ) from None
        if not math.isfinite(value):
            raise InputParseError(
                f"Token {self.pos} ({token!r}) is not finite: expected {field}",
                position=self.pos - 1,
                field=field,
            )
        return value

    def next_count(self, field: str) -> int:
        token = self._next(field)
        try:
            value = int(token)
        except ValueError:
            raise InputParseError(
                f"Token {self.pos} ({token!r}) is not an integer: expected {field}",
                position=self.pos - 1,
                field=field,
            ) from None
        if value < 0:
            raise InputParseError(
                f"Token {self.pos} ({token!r}) is negative: expected {field}",
                position=self.pos - 1,
                field=field,
            )
        return value


def parse_clip_input(text: str) -> Tuple[ClipWindow, List[Segment]]:
    """Parse window bounds and a count-prefixed segment list.

    Args:
        text: Raw input in the format described in the module docstring.

    Returns:
        A tuple ``(window, segments)``.

    Raises:
        InputParseError: If a token is missing, non-numeric or
            non-finite, or the segment count is not a non-negative
            integer.
        InvalidWindowError: If the window bounds are not ordered.
    """
    reader = _TokenReader(text)
    bounds = [reader.next_float(name) for name in WINDOW_FIELDS]
    window = ClipWindow.from_bounds(*bounds)

    count = reader.next_count("segment count")
    segments: List[Segment] = []
    for i in range(count):
        coords = [reader.next_float(f"segment {i + 1} {name}") for name in SEGMENT_FIELDS]
        segments.append(Segment.from_coords(*coords))

    if reader.remaining():
        logger.warning(
            "Ignoring %d trailing token(s) after %d segment(s)", reader.remaining(), count
        )
    logger.debug("Parsed window %s with %d segment(s)", window, len(segments))
    return window, segments


def read_clip_input(path: str | Path) -> Tuple[ClipWindow, List[Segment]]:
    """Read and parse an input file."""
    text = Path(path).read_text(encoding="utf-8")
    return parse_clip_input(text)
