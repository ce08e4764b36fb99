"""
Pydantic data models for the clipview API.

These models define the shapes of requests and responses used by the
backend.  They convert to and from the plain geometry types in
``services.geometry`` so that the clipper never sees pydantic objects.
Coordinates must be finite; infinities and NaN are refused with a 422
before any clipping happens.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from ..services.clipping import ClipResult
from ..services.geometry import ClipWindow, Segment


class WindowModel(BaseModel):
    """Axis‑aligned clip window."""

    left: float = Field(..., allow_inf_nan=False, description="Minimum x coordinate")
    top: float = Field(..., allow_inf_nan=False, description="Maximum y coordinate")
    right: float = Field(..., allow_inf_nan=False, description="Maximum x coordinate")
    bottom: float = Field(..., allow_inf_nan=False, description="Minimum y coordinate")

    @model_validator(mode="after")
    def _check_order(self) -> "WindowModel":
        if self.left > self.right or self.bottom > self.top:
            raise ValueError("window bounds must satisfy left <= right and bottom <= top")
        return self

    def to_window(self) -> ClipWindow:
        return ClipWindow(self.left, self.top, self.right, self.bottom)

    @classmethod
    def from_window(cls, window: ClipWindow) -> "WindowModel":
        return cls(left=window.left, top=window.top, right=window.right, bottom=window.bottom)


class SegmentModel(BaseModel):
    """Line segment from (x1, y1) to (x2, y2)."""

    x1: float = Field(..., allow_inf_nan=False)
    y1: float = Field(..., allow_inf_nan=False)
    x2: float = Field(..., allow_inf_nan=False)
    y2: float = Field(..., allow_inf_nan=False)

    def to_segment(self) -> Segment:
        return Segment.from_coords(self.x1, self.y1, self.x2, self.y2)

    @classmethod
    def from_segment(cls, segment: Segment) -> "SegmentModel":
        x1, y1, x2, y2 = segment.as_tuple()
        return cls(x1=x1, y1=y1, x2=x2, y2=y2)


class ClipRequest(BaseModel):
    """Request body for clipping a batch of segments."""

    window: WindowModel
    segments: List[SegmentModel] = Field(
        default_factory=list, description="Segments to clip, in order"
    )

    def to_geometry(self) -> tuple[ClipWindow, List[Segment]]:
        return self.window.to_window(), [s.to_segment() for s in self.segments]


class SegmentResult(BaseModel):
    """Clipping outcome for one input segment."""

    index: int = Field(..., description="Position of the segment in the request")
    accepted: bool = Field(..., description="Whether any part of the segment is visible")
    segment: Optional[SegmentModel] = Field(
        default=None, description="Visible portion of the segment, absent when rejected"
    )
    iterations: int = Field(..., description="Boundary intersections computed for this segment")

    @classmethod
    def from_result(cls, index: int, result: ClipResult) -> "SegmentResult":
        return cls(
            index=index,
            accepted=result.accepted,
            segment=SegmentModel.from_segment(result.segment) if result.segment is not None else None,
            iterations=result.iterations,
        )


class ClipResponse(BaseModel):
    """Response returned after clipping."""

    window: WindowModel
    results: List[SegmentResult] = Field(..., description="One entry per input segment")
    clipped: List[SegmentModel] = Field(
        ..., description="Accepted segments only, in input order"
    )
    acceptedCount: int
    rejectedCount: int


class SceneCreateRequest(ClipRequest):
    """Request body for storing a scene."""

    name: str = Field(default="", max_length=200, description="Optional label for the scene")


class SceneInfo(BaseModel):
    """Summary information about a stored scene."""

    sceneId: str = Field(..., description="Unique identifier for the scene")
    name: str
    createdAt: datetime
    segmentCount: int


class SceneDetail(SceneInfo):
    """A stored scene with its inputs and the freshly computed clip result."""

    window: WindowModel
    segments: List[SegmentModel]
    clip: ClipResponse
