"""
Plain value types for 2D clipping.

``Point``, ``Segment`` and ``ClipWindow`` are frozen dataclasses so they
can be shared freely between requests and used as cache or dict keys.
None of them depend on FastAPI or the database; the API layer converts
its pydantic models into these types before calling the clipper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from .errors import InvalidWindowError


@dataclass(frozen=True)
class Point:
    """A point in window coordinates."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Segment:
    """Ordered pair of endpoints ``(x1, y1)-(x2, y2)``."""

    p1: Point
    p2: Point

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> "Segment":
        return cls(Point(float(x1), float(y1)), Point(float(x2), float(y2)))

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return the flat ``(x1, y1, x2, y2)`` quadruple."""
        return (self.p1.x, self.p1.y, self.p2.x, self.p2.y)


@dataclass(frozen=True)
class ClipWindow:
    """Axis-aligned clip rectangle.

    Attributes:
        left: Minimum x coordinate.
        top: Maximum y coordinate.
        right: Maximum x coordinate.
        bottom: Minimum y coordinate.

    The field order follows the order in which the bounds are entered
    (left, top, right, bottom).  A well-formed window satisfies
    ``left <= right`` and ``bottom <= top``; zero width or height is
    allowed.  The constructor itself does not validate so that the
    clipper stays total over any four floats; use :meth:`from_bounds`
    at input boundaries.
    """

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_bounds(cls, left: float, top: float, right: float, bottom: float) -> "ClipWindow":
        """Build a window and check that its bounds are ordered.

        Raises:
            InvalidWindowError: If ``left > right`` or ``bottom > top``.
        """
        window = cls(float(left), float(top), float(right), float(bottom))
        if not window.is_well_formed():
            raise InvalidWindowError(
                f"Invalid clip window: expected left <= right and bottom <= top, "
                f"got left={window.left}, top={window.top}, right={window.right}, bottom={window.bottom}"
            )
        return window

    def is_well_formed(self) -> bool:
        return self.left <= self.right and self.bottom <= self.top

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    def contains(self, point: Point) -> bool:
        """Return True if ``point`` lies inside the window or on its boundary."""
        return self.left <= point.x <= self.right and self.bottom <= point.y <= self.top


def segments_from_quads(quads: Iterable[Iterable[float]]) -> list[Segment]:
    """Convert ``[x1, y1, x2, y2]`` rows into :class:`Segment` values."""
    result: list[Segment] = []
    for quad in quads:
        x1, y1, x2, y2 = quad
        result.append(Segment.from_coords(x1, y1, x2, y2))
    return result
