"""
Cohen-Sutherland line clipping against an axis-aligned window.

Each endpoint of a segment is classified with a 4-bit outcode that
records which of the window's half-planes it violates.  A segment whose
endpoints are both inside is accepted as-is; one whose endpoints share
a violated half-plane is rejected.  Anything else straddles the window
and is shortened one boundary at a time until one of those two trivial
cases applies.

The boundary tested for an outside endpoint follows the fixed order
TOP, BOTTOM, RIGHT, LEFT.  The order only changes intermediate points,
never the final visible segment, but keeping it fixed makes the output
reproducible bit for bit when a segment crosses a window corner.

Debug messages for every correction step are emitted when the
environment variable ``CLIP_DEBUG`` is set.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .geometry import ClipWindow, Point, Segment

logger = logging.getLogger(__name__)


class OutCode(enum.IntFlag):
    """Half-planes of the clip window that a point lies outside of."""

    INSIDE = 0
    LEFT = 1
    TOP = 2
    BOTTOM = 4
    RIGHT = 8


# Order in which a single violated boundary is chosen per correction.
BOUNDARY_PRIORITY: Tuple[OutCode, ...] = (
    OutCode.TOP,
    OutCode.BOTTOM,
    OutCode.RIGHT,
    OutCode.LEFT,
)


def compute_outcode(x: float, y: float, window: ClipWindow) -> OutCode:
    """Classify ``(x, y)`` against ``window``.

    Points on the boundary count as inside.  NaN coordinates fail every
    comparison and therefore also classify as inside.
    """
    code = OutCode.INSIDE
    if x < window.left:
        code |= OutCode.LEFT
    if x > window.right:
        code |= OutCode.RIGHT
    if y < window.bottom:
        code |= OutCode.BOTTOM
    if y > window.top:
        code |= OutCode.TOP
    return code


@dataclass(frozen=True)
class ClipResult:
    """Outcome of clipping one segment.

    Attributes:
        segment: The visible part of the input segment, or ``None`` if
            the segment was rejected.
        iterations: Number of boundary intersections computed before
            the segment was accepted or rejected.
    """

    segment: Optional[Segment]
    iterations: int = 0

    @property
    def accepted(self) -> bool:
        return self.segment is not None

    @classmethod
    def accept(cls, segment: Segment, iterations: int = 0) -> "ClipResult":
        return cls(segment=segment, iterations=iterations)

    @classmethod
    def reject(cls, iterations: int = 0) -> "ClipResult":
        return cls(segment=None, iterations=iterations)


def _intersect_boundary(
    boundary: OutCode,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    window: ClipWindow,
) -> Optional[Point]:
    """Intersect the line through the two points with one window edge.

    Returns ``None`` when the line is parallel to that edge, which would
    otherwise divide by zero.
    """
    if boundary is OutCode.TOP or boundary is OutCode.BOTTOM:
        dy = y1 - y0
        if dy == 0:
            return None
        edge = window.top if boundary is OutCode.TOP else window.bottom
        return Point(x0 + (x1 - x0) * (edge - y0) / dy, edge)
    dx = x1 - x0
    if dx == 0:
        return None
    edge = window.right if boundary is OutCode.RIGHT else window.left
    return Point(edge, y0 + (y1 - y0) * (edge - x0) / dx)


def clip(window: ClipWindow, segment: Segment) -> ClipResult:
    """Clip ``segment`` to ``window``.

    The input segment is never modified.  For finite coordinates the
    loop ends after at most four corrections, one per window edge.

    A segment parallel to the edge selected for correction has no
    intersection with it and is rejected instead of producing
    ``inf``/``nan`` endpoints.  Both endpoints of such a segment lie on
    the same side of that edge, so the shared-outcode test normally
    rejects it first.  NaN coordinates are not guarded against: they
    classify as inside and propagate into the result.

    Args:
        window: Clip rectangle.
        segment: Segment to clip.

    Returns:
        ClipResult: Accepted with the visible portion, or rejected.
    """
    debug = bool(os.getenv("CLIP_DEBUG"))
    x0, y0 = segment.p1.x, segment.p1.y
    x1, y1 = segment.p2.x, segment.p2.y
    code0 = compute_outcode(x0, y0, window)
    code1 = compute_outcode(x1, y1, window)
    iterations = 0

    while True:
        if not (code0 | code1):
            return ClipResult.accept(Segment(Point(x0, y0), Point(x1, y1)), iterations)
        if code0 & code1:
            return ClipResult.reject(iterations)

        # The first endpoint wins when both are outside.
        use_first = bool(code0)
        code_out = code0 if use_first else code1
        boundary = next(b for b in BOUNDARY_PRIORITY if code_out & b)
        hit = _intersect_boundary(boundary, x0, y0, x1, y1, window)
        iterations += 1
        if hit is None:
            logger.warning(
                "Segment %s is parallel to the %s edge it must be clipped against; rejecting",
                segment.as_tuple(),
                boundary.name,
            )
            return ClipResult.reject(iterations)

        if debug:
            logger.debug(
                "clip step %d: endpoint %d outcode=%s boundary=%s -> (%s, %s)",
                iterations,
                0 if use_first else 1,
                int(code_out),
                boundary.name,
                hit.x,
                hit.y,
            )

        if use_first:
            x0, y0 = hit.x, hit.y
            code0 = compute_outcode(x0, y0, window)
        else:
            x1, y1 = hit.x, hit.y
            code1 = compute_outcode(x1, y1, window)


def clip_segments(window: ClipWindow, segments: Iterable[Segment]) -> List[ClipResult]:
    """Clip every segment and return one result per input, in order."""
    return [clip(window, seg) for seg in segments]


def clip_all(window: ClipWindow, segments: Iterable[Segment]) -> List[Segment]:
    """Clip every segment and keep only the visible parts.

    Rejected segments are dropped; the survivors keep their relative
    input order.
    """
    clipped: List[Segment] = []
    for result in clip_segments(window, segments):
        if result.segment is not None:
            clipped.append(result.segment)
    return clipped


__all__ = [
    "OutCode",
    "BOUNDARY_PRIORITY",
    "compute_outcode",
    "ClipResult",
    "clip",
    "clip_segments",
    "clip_all",
]
