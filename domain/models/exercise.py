"""
Exercise value object for timed workout plans.

An exercise is one entry of a training day or challenge day as supplied by the
hosting page. Timing fields are forgiving: anything missing, non-numeric or
out of range is replaced by the documented default so that plan construction
never fails on partially filled records.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_SETS = 1
DEFAULT_HOLD_TIME_SECONDS = 30
DEFAULT_REST_TIME_SECONDS = 15


def _coerce_positive_int(value: Any, default: int) -> int:
    """Return value as a positive int, or default when it cannot be one."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class Exercise(BaseModel):
    """
    Value object representing an exercise within a timed plan.

    Examples:
        >>> exercise = Exercise(name="Plank", sets=3, hold_time_seconds=45)
        >>> exercise.rest_time_seconds
        15

        >>> Exercise(name="Split", sets=0, hold_time_seconds="abc").sets
        1
    """

    name: str = Field(..., min_length=1, description="Exercise (figure) name")
    sets: int = Field(default=DEFAULT_SETS, ge=1, description="Number of sets")
    hold_time_seconds: int = Field(
        default=DEFAULT_HOLD_TIME_SECONDS,
        gt=0,
        description="Hold time per set in seconds",
    )
    rest_time_seconds: int = Field(
        default=DEFAULT_REST_TIME_SECONDS,
        gt=0,
        description="Rest after each set in seconds (0 is coerced to the default)",
    )
    notes: Optional[str] = Field(
        default=None, description="Coaching notes spoken after the exercise name"
    )
    media_ref: Optional[str] = Field(
        default=None, description="Reference to an image or video of the figure"
    )

    @field_validator("sets", mode="before")
    @classmethod
    def _default_sets(cls, v: Any) -> int:
        return _coerce_positive_int(v, DEFAULT_SETS)

    @field_validator("hold_time_seconds", mode="before")
    @classmethod
    def _default_hold_time(cls, v: Any) -> int:
        return _coerce_positive_int(v, DEFAULT_HOLD_TIME_SECONDS)

    @field_validator("rest_time_seconds", mode="before")
    @classmethod
    def _default_rest_time(cls, v: Any) -> int:
        return _coerce_positive_int(v, DEFAULT_REST_TIME_SECONDS)

    @field_validator("notes", mode="before")
    @classmethod
    def _blank_notes_to_none(cls, v: Any) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def total_duration_seconds(self) -> int:
        """Hold time across all sets, without rests."""
        return self.sets * self.hold_time_seconds

    def __str__(self) -> str:
        return f"{self.name} {self.sets}x{self.hold_time_seconds}s (rest {self.rest_time_seconds}s)"

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jade Split",
                    "sets": 2,
                    "hold_time_seconds": 20,
                    "rest_time_seconds": 5,
                },
                {
                    "name": "Straddle Back",
                    "sets": 3,
                    "hold_time_seconds": 45,
                    "rest_time_seconds": 30,
                    "notes": "Keep shoulders engaged",
                },
            ]
        },
    }
