"""
Segment and Plan value objects.

A segment is one timed unit of playback; a plan is the ordered sequence of
segments derived from an exercise list.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

REST_DISPLAY_NAME = "Rest"


class SegmentKind(str, Enum):
    """Kind of a timed segment."""

    EXERCISE = "exercise"
    REST = "rest"


class Segment(BaseModel):
    """
    One timed unit of playback.

    `set_index` is 1-based. Notes and media are carried only by exercise
    segments.
    """

    kind: SegmentKind
    exercise_index: int = Field(..., ge=0)
    set_index: int = Field(..., ge=1)
    duration_seconds: int = Field(..., gt=0)
    display_name: str
    notes: Optional[str] = None
    media_ref: Optional[str] = None

    @model_validator(mode="after")
    def _rest_has_no_notes(self) -> "Segment":
        if self.kind == SegmentKind.REST and (self.notes or self.media_ref):
            raise ValueError("rest segments carry no notes or media")
        return self

    @property
    def is_exercise(self) -> bool:
        return self.kind == SegmentKind.EXERCISE

    @property
    def is_rest(self) -> bool:
        return self.kind == SegmentKind.REST

    model_config = {"frozen": True}


class Plan(BaseModel):
    """
    Ordered, immutable sequence of segments.

    An empty plan is valid and means a rest day.
    """

    segments: List[Segment] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_rest_placement(self) -> "Plan":
        if self.segments and self.segments[-1].is_rest:
            raise ValueError("a plan cannot end with a rest segment")
        for previous, current in zip(self.segments, self.segments[1:]):
            if previous.is_rest and current.is_rest:
                raise ValueError("a plan cannot contain two consecutive rest segments")
        return self

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]

    @property
    def is_rest_day(self) -> bool:
        return not self.segments

    @property
    def last_index(self) -> int:
        return len(self.segments) - 1

    @property
    def total_duration_seconds(self) -> int:
        return sum(segment.duration_seconds for segment in self.segments)

    def duration_before(self, index: int) -> int:
        """Sum of durations of the segments preceding `index`."""
        return sum(segment.duration_seconds for segment in self.segments[:index])

    def get(self, index: int) -> Optional[Segment]:
        if 0 <= index < len(self.segments):
            return self.segments[index]
        return None

    model_config = {"frozen": True}
