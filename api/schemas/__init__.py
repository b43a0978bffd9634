"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- timer: Timer session and preset models
"""

from api.schemas.timer import (
    CreateTimerSessionRequest,
    CueListResponse,
    FullscreenReportRequest,
    PresetResponse,
    ReplaceExercisesRequest,
    SegmentResponse,
    TimerSessionResponse,
    VisibilityRequest,
)

__all__ = [
    "CreateTimerSessionRequest",
    "CueListResponse",
    "FullscreenReportRequest",
    "PresetResponse",
    "ReplaceExercisesRequest",
    "SegmentResponse",
    "TimerSessionResponse",
    "VisibilityRequest",
]
