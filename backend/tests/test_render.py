"""Tests for the viewport mapping and SVG renderer."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from clipview.services.clipping import clip_all  # type: ignore
from clipview.services.geometry import ClipWindow, Segment  # type: ignore
from clipview.services.render import (  # type: ignore
    CLIPPED_COLOR,
    ORIGINAL_COLOR,
    WINDOW_COLOR,
    compute_viewport,
    render_svg,
)


WINDOW = ClipWindow(left=0.0, top=10.0, right=10.0, bottom=0.0)


def test_scale_uses_smaller_axis() -> None:
    viewport = compute_viewport(WINDOW, 800, 600)
    assert viewport.scale == pytest.approx(600 / 11)
    assert viewport.x_offset == 0.0
    assert viewport.y_offset == 0.0


def test_scale_for_offset_window() -> None:
    window = ClipWindow(left=-20.0, top=5.0, right=19.0, bottom=-4.0)
    viewport = compute_viewport(window, 400, 400)
    assert viewport.scale == pytest.approx(400 / 40)
    assert viewport.x_offset == 20.0
    assert viewport.y_offset == 4.0


def test_degenerate_window_does_not_divide_by_zero() -> None:
    viewport = compute_viewport(ClipWindow(3.0, 3.0, 3.0, 3.0), 200, 100)
    assert viewport.scale == pytest.approx(100.0)


def test_invalid_canvas_size() -> None:
    with pytest.raises(ValueError):
        compute_viewport(WINDOW, 0, 100)


def test_to_screen_inverts_y_and_truncates() -> None:
    viewport = compute_viewport(WINDOW, 110, 110)
    assert viewport.scale == pytest.approx(10.0)
    screen = viewport.to_screen([(0.0, 0.0), (5.0, 5.0), (10.0, 10.0), (-5.0, 5.0), (-0.05, 0.0)])
    assert screen.dtype == np.int64
    assert screen.tolist() == [[0, 110], [50, 60], [100, 10], [-50, 60], [0, 110]]


def test_render_svg_contains_three_styles() -> None:
    originals = [
        Segment.from_coords(-5, 5, 5, 5),
        Segment.from_coords(-5, -5, -1, -1),
        Segment.from_coords(2, 2, 8, 8),
    ]
    clipped = clip_all(WINDOW, originals)
    svg = render_svg(WINDOW, originals, clipped, width=110, height=110)

    assert svg.startswith("<svg")
    assert svg.rstrip().endswith("</svg>")
    assert f'stroke="{WINDOW_COLOR}"' in svg
    assert svg.count(f'stroke="{ORIGINAL_COLOR}"') == 3
    assert svg.count(f'stroke="{CLIPPED_COLOR}"') == 2
    # Window outline spans the full 10x10 window at scale 10.
    assert '<rect class="window" x="0" y="10" width="100" height="100"' in svg
    # Clipped (0,5)-(5,5) maps to pixels (0,60)-(50,60).
    assert '<line x1="0" y1="60" x2="50" y2="60" stroke="#000000" />' in svg


def test_render_svg_without_segments() -> None:
    svg = render_svg(WINDOW, [], [])
    assert 'width="800"' in svg
    assert "<line" not in svg
