"""
Routes for stored clipping scenes.

A scene is created from JSON or from an uploaded text file in the
clipping input format.  Reading a scene recomputes its clipped
segments, which can also be rendered as SVG or exported as CSV.
"""

from __future__ import annotations

import csv
import io
import logging

from fastapi import APIRouter, File, HTTPException, Query, Response, UploadFile

from .models import SceneCreateRequest, SceneDetail, SceneInfo, SegmentModel, WindowModel
from .routes_clip import MAX_CANVAS_SIZE, build_clip_response, render_response
from ..services.clipping import clip_all
from ..services.errors import ClipInputError
from ..services.input_parser import parse_clip_input
from ..services.render import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH
from ..services.scenes_store import (
    SceneRecord,
    delete_scene as delete_scene_record,
    get_scene,
    insert_scene,
    list_scenes as list_scene_records,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _scene_info(record: SceneRecord) -> SceneInfo:
    return SceneInfo(
        sceneId=record.scene_id,
        name=record.name,
        createdAt=record.created_at,
        segmentCount=record.segment_count,
    )


def _require_scene(scene_id: str) -> SceneRecord:
    record = get_scene(scene_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Scene not found")
    return record


@router.post("/scenes", response_model=SceneInfo, status_code=201)
async def create_scene(body: SceneCreateRequest) -> SceneInfo:
    """Store a window and its segments as a new scene."""
    window, segments = body.to_geometry()
    record = insert_scene(window, segments, name=body.name)
    return _scene_info(record)


@router.post("/scenes/upload", response_model=SceneInfo, status_code=201)
async def upload_scene(file: UploadFile = File(...)) -> SceneInfo:
    """Store a scene from an uploaded text file.

    The file uses the plain-text clipping input format; its filename
    becomes the scene name.

    Raises:
        HTTPException: 400 if the file cannot be parsed.
    """
    logger.info("Parsing uploaded scene %s", getattr(file, "filename", "<unknown>"))
    raw = await file.read()
    try:
        window, segments = parse_clip_input(raw.decode("utf-8"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Uploaded file must be UTF-8 text")
    except ClipInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    record = insert_scene(window, segments, name=file.filename or "")
    return _scene_info(record)


@router.get("/scenes", response_model=list[SceneInfo])
async def list_scenes() -> list[SceneInfo]:
    """Return summaries of all stored scenes."""
    return [_scene_info(r) for r in list_scene_records()]


@router.get("/scenes/{scene_id}", response_model=SceneDetail)
async def get_scene_detail(scene_id: str) -> SceneDetail:
    """Return a scene's inputs together with its clipped result."""
    record = _require_scene(scene_id)
    window = record.window()
    segments = record.segments()
    info = _scene_info(record)
    return SceneDetail(
        **info.model_dump(),
        window=WindowModel.from_window(window),
        segments=[SegmentModel.from_segment(s) for s in segments],
        clip=build_clip_response(window, segments),
    )


@router.delete("/scenes/{scene_id}", status_code=204)
async def delete_scene(scene_id: str) -> Response:
    """Delete a scene."""
    if not delete_scene_record(scene_id):
        raise HTTPException(status_code=404, detail="Scene not found")
    return Response(status_code=204)


@router.get("/scenes/{scene_id}/render", response_class=Response)
async def render_scene(
    scene_id: str,
    width: int = Query(DEFAULT_CANVAS_WIDTH, ge=1, le=MAX_CANVAS_SIZE, description="Canvas width in pixels"),
    height: int = Query(DEFAULT_CANVAS_HEIGHT, ge=1, le=MAX_CANVAS_SIZE, description="Canvas height in pixels"),
) -> Response:
    """Render a stored scene as SVG."""
    record = _require_scene(scene_id)
    window = record.window()
    segments = record.segments()
    return render_response(window, segments, clip_all(window, segments), width, height)


@router.get("/scenes/{scene_id}/export")
async def export_scene(scene_id: str) -> Response:
    """Export the clipped segments of a scene as CSV.

    Returns:
        A Response with a ``x1,y1,x2,y2`` header and one row per
        accepted segment, in input order.
    """
    record = _require_scene(scene_id)
    clipped = clip_all(record.window(), record.segments())
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(["x1", "y1", "x2", "y2"])
    for seg in clipped:
        writer.writerow(seg.as_tuple())
    return Response(content=output.getvalue(), media_type="text/csv")
