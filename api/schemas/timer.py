"""
Timer session request and response models.

Exercise entries are accepted as loose dicts: timing fields that are missing
or invalid fall back to defaults when the plan is built, so the request model
only checks the overall shape.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from backend.services.timer_engine import TimerContext


class CreateTimerSessionRequest(BaseModel):
    """Request model for creating a timer session from exercises or a preset."""

    context: TimerContext = Field(
        default=TimerContext.TRAINING,
        description="Timer call site; selects the stored audio preference",
    )
    exercises: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Ordered exercises with name, sets, hold_time_seconds, rest_time_seconds",
    )
    preset: Optional[str] = Field(
        default=None,
        description="Interval preset name (alternative to exercises)",
    )
    exercise_name: Optional[str] = Field(
        default=None,
        description="Name announced for every preset interval",
    )
    language: Optional[str] = Field(default=None, description="Narration language code")

    @model_validator(mode="after")
    def _exercises_or_preset(self) -> "CreateTimerSessionRequest":
        if self.exercises is None and self.preset is None:
            raise ValueError("Either exercises or preset is required")
        if self.exercises is not None and self.preset is not None:
            raise ValueError("Provide exercises or preset, not both")
        return self


class ReplaceExercisesRequest(BaseModel):
    """Request model for rebuilding a session plan."""

    exercises: List[Dict[str, Any]]


class VisibilityRequest(BaseModel):
    """Page visibility reported by the client."""

    visible: bool


class FullscreenReportRequest(BaseModel):
    """Fullscreen state observed by the client (e.g. the user pressed escape)."""

    active: bool


class SegmentResponse(BaseModel):
    kind: str
    exercise_index: int
    set_index: int
    duration_seconds: int
    display_name: str
    notes: Optional[str] = None
    media_ref: Optional[str] = None


class TimerSessionResponse(BaseModel):
    """Snapshot of one timer session."""

    id: str
    context: str
    language: str
    status: str
    current_segment_index: int
    position: str
    time_remaining_seconds: int
    time_remaining_display: str
    preparation_seconds_remaining: Optional[int] = None
    progress: float
    current_segment: Optional[SegmentResponse] = None
    next_segment: Optional[SegmentResponse] = None
    total_segments: int
    total_duration_seconds: int
    is_rest_day: bool
    audio_mode: str
    is_fullscreen: bool
    chrome_visible: bool
    wake_lock_held: bool
    created_at: str
    completed_at: Optional[str] = None
    last_cue_seq: int


class CueListResponse(BaseModel):
    session_id: str
    cues: List[Dict[str, Any]]
    last_seq: int


class PresetResponse(BaseModel):
    name: str
    work_seconds: int
    rest_seconds: int
    rounds: int
    sets: int
    rest_between_sets_seconds: int
    total_duration_seconds: int
