"""Tests for outcode classification against a clip window."""

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from clipview.services.clipping import OutCode, compute_outcode  # type: ignore
from clipview.services.geometry import ClipWindow  # type: ignore


WINDOW = ClipWindow(left=0.0, top=10.0, right=10.0, bottom=0.0)


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (5.0, 5.0, OutCode.INSIDE),
        (-1.0, 5.0, OutCode.LEFT),
        (11.0, 5.0, OutCode.RIGHT),
        (5.0, -1.0, OutCode.BOTTOM),
        (5.0, 11.0, OutCode.TOP),
        (-1.0, 11.0, OutCode.LEFT | OutCode.TOP),
        (11.0, 11.0, OutCode.RIGHT | OutCode.TOP),
        (-1.0, -1.0, OutCode.LEFT | OutCode.BOTTOM),
        (11.0, -1.0, OutCode.RIGHT | OutCode.BOTTOM),
    ],
)
def test_outcode_regions(x: float, y: float, expected: OutCode) -> None:
    """Each of the nine regions around the window gets its own code."""
    assert compute_outcode(x, y, WINDOW) == expected


@pytest.mark.parametrize(
    "x, y",
    [(0.0, 0.0), (10.0, 10.0), (0.0, 5.0), (10.0, 5.0), (5.0, 0.0), (5.0, 10.0)],
)
def test_boundary_points_are_inside(x: float, y: float) -> None:
    assert compute_outcode(x, y, WINDOW) == OutCode.INSIDE


def test_bit_values_match_reference_layout() -> None:
    assert int(OutCode.LEFT) == 1
    assert int(OutCode.TOP) == 2
    assert int(OutCode.BOTTOM) == 4
    assert int(OutCode.RIGHT) == 8


def test_nan_classifies_as_inside() -> None:
    """NaN fails every comparison, so no bit is set."""
    assert compute_outcode(math.nan, math.nan, WINDOW) == OutCode.INSIDE


def test_degenerate_window_point_on_line() -> None:
    line_window = ClipWindow(left=3.0, top=8.0, right=3.0, bottom=2.0)
    assert compute_outcode(3.0, 5.0, line_window) == OutCode.INSIDE
    assert compute_outcode(3.5, 5.0, line_window) == OutCode.RIGHT
