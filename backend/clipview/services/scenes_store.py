"""
Persistence for clipping scenes.

A scene is a clip window together with the original segments entered
for it.  Only the inputs are stored; the clipped result is cheap to
recompute and is derived on every read, so a scene can never hold a
result that disagrees with the current clipper.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlmodel import SQLModel, Field, select

from .db import create_db_and_tables, get_session
from .geometry import ClipWindow, Segment, segments_from_quads

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SceneRecord(SQLModel, table=True):
    """Database row for a stored scene.

    Window bounds are stored as individual columns; segments are a JSON
    array of ``[x1, y1, x2, y2]`` rows in input order.
    """

    scene_id: str = Field(primary_key=True)
    name: str = Field(default="")
    left: float
    top: float
    right: float
    bottom: float
    segments_json: str = Field(default="[]")
    segment_count: int = 0
    created_at: datetime = Field(default_factory=_utcnow)

    def window(self) -> ClipWindow:
        return ClipWindow(self.left, self.top, self.right, self.bottom)

    def segments(self) -> List[Segment]:
        return segments_from_quads(json.loads(self.segments_json))


def init_db() -> None:
    """Initialise the database and create tables if they do not exist."""
    create_db_and_tables()


def insert_scene(window: ClipWindow, segments: Sequence[Segment], name: str = "") -> SceneRecord:
    """Persist a new scene and return the stored record.

    Args:
        window: Clip window of the scene.
        segments: Original segments, stored in the given order.
        name: Optional human readable label.
    """
    record = SceneRecord(
        scene_id=uuid.uuid4().hex,
        name=name,
        left=window.left,
        top=window.top,
        right=window.right,
        bottom=window.bottom,
        segments_json=json.dumps([list(seg.as_tuple()) for seg in segments]),
        segment_count=len(segments),
    )
    with get_session() as session:
        session.add(record)
        session.commit()
        session.refresh(record)
    logger.info("Stored scene %s with %d segment(s)", record.scene_id, record.segment_count)
    return record


def get_scene(scene_id: str) -> Optional[SceneRecord]:
    """Retrieve a scene by identifier, or ``None`` if it does not exist."""
    with get_session() as session:
        return session.get(SceneRecord, scene_id)


def list_scenes() -> List[SceneRecord]:
    """Return all scenes, oldest first."""
    with get_session() as session:
        statement = select(SceneRecord).order_by(SceneRecord.created_at)
        return list(session.exec(statement))


def delete_scene(scene_id: str) -> bool:
    """Delete a scene.

    Returns:
        True if a scene was deleted, False if none matched.
    """
    with get_session() as session:
        record = session.get(SceneRecord, scene_id)
        if record is None:
            return False
        session.delete(record)
        session.commit()
    logger.info("Deleted scene %s", scene_id)
    return True
