"""
Routes for stateless clipping and rendering.

``POST /clip`` accepts a JSON window and segment list, ``POST
/clip/text`` accepts the same data in the plain-text input format, and
``POST /render`` returns an SVG picture of the window, the originals and
the clipped result.  Nothing is stored; see ``routes_scenes`` for the
persistent variant.
"""

from __future__ import annotations

import logging
from typing import Sequence

from fastapi import APIRouter, HTTPException, Query, Request, Response

from .models import ClipRequest, ClipResponse, SegmentResult, WindowModel
from ..services.clipping import clip_all, clip_segments
from ..services.errors import ClipInputError
from ..services.geometry import ClipWindow, Segment
from ..services.input_parser import parse_clip_input
from ..services.render import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, render_svg

logger = logging.getLogger(__name__)

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"
MAX_CANVAS_SIZE: int = 8192


def build_clip_response(window: ClipWindow, segments: Sequence[Segment]) -> ClipResponse:
    """Clip ``segments`` and package the outcome for the API."""
    results = clip_segments(window, segments)
    entries = [SegmentResult.from_result(i, r) for i, r in enumerate(results)]
    clipped = [e.segment for e in entries if e.segment is not None]
    return ClipResponse(
        window=WindowModel.from_window(window),
        results=entries,
        clipped=clipped,
        acceptedCount=len(clipped),
        rejectedCount=len(entries) - len(clipped),
    )


def render_response(
    window: ClipWindow,
    originals: Sequence[Segment],
    clipped: Sequence[Segment],
    width: int,
    height: int,
) -> Response:
    """Render an SVG and wrap it in a response, mapping failures to 500."""
    try:
        svg = render_svg(window, originals, clipped, width=width, height=height)
    except Exception as exc:
        logger.exception("render failed for window=%s: %s", window, exc)
        raise HTTPException(status_code=500, detail=f"Failed to render: {exc}")
    return Response(content=svg, media_type=SVG_MEDIA_TYPE)


@router.post("/clip", response_model=ClipResponse)
async def clip_json(body: ClipRequest) -> ClipResponse:
    """Clip a batch of segments against a window.

    Returns one result per input segment plus the list of accepted
    segments in input order.
    """
    window, segments = body.to_geometry()
    return build_clip_response(window, segments)


@router.post("/clip/text", response_model=ClipResponse)
async def clip_text(request: Request) -> ClipResponse:
    """Clip segments supplied in the plain-text input format.

    The body holds ``left top right bottom``, the segment count and then
    ``x1 y1 x2 y2`` for each segment, separated by whitespace.

    Raises:
        HTTPException: 400 if the body cannot be parsed.
    """
    raw = await request.body()
    try:
        window, segments = parse_clip_input(raw.decode("utf-8"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Request body must be UTF-8 text")
    except ClipInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return build_clip_response(window, segments)


@router.post("/render", response_class=Response)
async def render(
    body: ClipRequest,
    width: int = Query(DEFAULT_CANVAS_WIDTH, ge=1, le=MAX_CANVAS_SIZE, description="Canvas width in pixels"),
    height: int = Query(DEFAULT_CANVAS_HEIGHT, ge=1, le=MAX_CANVAS_SIZE, description="Canvas height in pixels"),
) -> Response:
    """Clip the request and return an SVG drawing of the result."""
    window, segments = body.to_geometry()
    clipped = clip_all(window, segments)
    return render_response(window, segments, clipped, width, height)


__all__ = ["router", "build_clip_response", "render_response"]
