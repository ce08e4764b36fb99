"""
SVG rendering of a clipping run.

The window is scaled to fit a fixed-size canvas and drawn together with
the original segments and their clipped counterparts, each in its own
style:

* window outline: red
* original segments: light gray
* clipped segments: black

The mapping from window coordinates to pixels is purely presentational.
It reproduces the original viewer: the scale is chosen so that the
window plus one unit of margin fits the canvas, the lower-left corner of
the window maps to the left edge, the y axis is flipped so that larger
y values appear higher, and pixel coordinates are truncated towards
zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Sequence

try:
    import numpy as np  # type: ignore  # noqa: N816
except Exception as exc:  # pragma: no cover - dependency guard
    raise RuntimeError("numpy is required for rendering") from exc

from .geometry import ClipWindow, Segment

if TYPE_CHECKING:  # pragma: no cover - for type checkers only
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# Canvas size of the original viewer frame.
DEFAULT_CANVAS_WIDTH: int = 800
DEFAULT_CANVAS_HEIGHT: int = 600

STROKE_WIDTH: int = 2
WINDOW_COLOR = "#ff0000"
ORIGINAL_COLOR = "#c0c0c0"
CLIPPED_COLOR = "#000000"


@dataclass(frozen=True)
class Viewport:
    """Affine mapping from window coordinates to canvas pixels."""

    scale: float
    x_offset: float
    y_offset: float
    canvas_width: int
    canvas_height: int

    def to_screen(self, points: 'NDArray[np.float64] | Sequence[Sequence[float]]') -> 'NDArray[np.int64]':
        """Map an ``(N, 2)`` array of points to integer pixel coordinates."""
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        sx = (pts[:, 0] + self.x_offset) * self.scale
        sy = self.canvas_height - (pts[:, 1] + self.y_offset) * self.scale
        return np.stack([sx, sy], axis=1).astype(np.int64)


def compute_viewport(
    window: ClipWindow,
    canvas_width: int = DEFAULT_CANVAS_WIDTH,
    canvas_height: int = DEFAULT_CANVAS_HEIGHT,
) -> Viewport:
    """Fit ``window`` into a canvas of the given size.

    ``scale = min(w / (window_width + 1), h / (window_height + 1))``
    where the window extents are taken from the ordered bounds.  The
    extra unit keeps a degenerate window from dividing by zero.
    """
    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError(f"Canvas size must be positive, got {canvas_width}x{canvas_height}")
    min_x = min(window.left, window.right)
    max_x = max(window.left, window.right)
    min_y = min(window.bottom, window.top)
    max_y = max(window.bottom, window.top)

    scale_x = canvas_width / (max_x - min_x + 1)
    scale_y = canvas_height / (max_y - min_y + 1)
    return Viewport(
        scale=min(scale_x, scale_y),
        x_offset=-min_x,
        y_offset=-min_y,
        canvas_width=int(canvas_width),
        canvas_height=int(canvas_height),
    )


def _segment_lines(viewport: Viewport, segments: Sequence[Segment], color: str) -> List[str]:
    if not segments:
        return []
    coords = np.array([seg.as_tuple() for seg in segments], dtype=float)
    screen = viewport.to_screen(coords.reshape(-1, 2)).reshape(-1, 4)
    return [
        f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" stroke="{color}" />'
        for x1, y1, x2, y2 in screen.tolist()
    ]


def render_svg(
    window: ClipWindow,
    originals: Iterable[Segment],
    clipped: Iterable[Segment],
    width: int = DEFAULT_CANVAS_WIDTH,
    height: int = DEFAULT_CANVAS_HEIGHT,
) -> str:
    """Render the window, original segments and clipped segments as SVG.

    Originals are drawn before the clipped segments so the visible
    portions appear on top of them.

    Args:
        window: Clip rectangle.
        originals: Segments as supplied by the user.
        clipped: Accepted output of the clipper.
        width: Canvas width in pixels.
        height: Canvas height in pixels.

    Returns:
        str: A standalone SVG document.
    """
    viewport = compute_viewport(window, width, height)
    originals = list(originals)
    clipped = list(clipped)

    # Rectangle anchored at the top-left corner of the window on screen.
    wx, wy = viewport.to_screen([(window.left, window.top)])[0].tolist()
    ww = int((window.right - window.left) * viewport.scale)
    wh = int((window.top - window.bottom) * viewport.scale)

    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">',
        f'<rect width="{width}" height="{height}" fill="#ffffff" />',
        f'<rect class="window" x="{wx}" y="{wy}" width="{ww}" height="{wh}" '
        f'fill="none" stroke="{WINDOW_COLOR}" stroke-width="{STROKE_WIDTH}" />',
        f'<g class="original" stroke-width="{STROKE_WIDTH}">',
        *_segment_lines(viewport, originals, ORIGINAL_COLOR),
        "</g>",
        f'<g class="clipped" stroke-width="{STROKE_WIDTH}">',
        *_segment_lines(viewport, clipped, CLIPPED_COLOR),
        "</g>",
        "</svg>",
    ]
    logger.debug(
        "Rendered %d original and %d clipped segment(s) at scale %.4f",
        len(originals),
        len(clipped),
        viewport.scale,
    )
    return "\n".join(parts) + "\n"
