"""
Segment plan builder.

Turns an ordered exercise list into the ordered list of timed segments played
by the scheduler: every set is an exercise segment followed by a rest segment,
except after the very last set of the plan.
"""
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

from pydantic import ValidationError

from application.exceptions import InvalidPlanError
from domain.models import REST_DISPLAY_NAME, Exercise, Plan, Segment, SegmentKind

ExerciseInput = Union[Exercise, Mapping[str, Any]]


def coerce_exercises(items: Iterable[ExerciseInput]) -> List[Exercise]:
    """
    Normalize raw exercise records into Exercise models.

    Accepts Exercise instances or plain dicts. Timing fields that are missing
    or invalid fall back to the documented defaults (see Exercise).

    Args:
        items: Exercise models or dictionaries with at least a "name"

    Returns:
        List of Exercise models in input order

    Raises:
        InvalidPlanError: If an item is not a mapping or has no usable name
    """
    exercises: List[Exercise] = []
    for position, item in enumerate(items):
        if isinstance(item, Exercise):
            exercises.append(item)
            continue
        if not isinstance(item, Mapping):
            raise InvalidPlanError(
                f"Exercise {position} must be a mapping, got {type(item).__name__}"
            )
        try:
            exercises.append(Exercise.model_validate(dict(item)))
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "exercise"
            raise InvalidPlanError(f"Exercise {position} is invalid ({field}): {first['msg']}") from e
    return exercises


def build_segments(exercises: Sequence[Exercise]) -> List[Segment]:
    """
    Build the ordered segment list for a sequence of exercises.

    Example:
        One exercise with sets=2, hold=20s, rest=5s gives
        [exercise(20, set 1), rest(5), exercise(20, set 2)].

    Args:
        exercises: Exercises in display order

    Returns:
        Segments in playback order (empty for an empty input)
    """
    segments: List[Segment] = []
    last_exercise_index = len(exercises) - 1

    for exercise_index, exercise in enumerate(exercises):
        for set_index in range(1, exercise.sets + 1):
            segments.append(
                Segment(
                    kind=SegmentKind.EXERCISE,
                    exercise_index=exercise_index,
                    set_index=set_index,
                    duration_seconds=exercise.hold_time_seconds,
                    display_name=exercise.name,
                    notes=exercise.notes,
                    media_ref=exercise.media_ref,
                )
            )

            is_last_set_of_plan = (
                exercise_index == last_exercise_index and set_index == exercise.sets
            )
            if not is_last_set_of_plan:
                segments.append(
                    Segment(
                        kind=SegmentKind.REST,
                        exercise_index=exercise_index,
                        set_index=set_index,
                        duration_seconds=exercise.rest_time_seconds,
                        display_name=REST_DISPLAY_NAME,
                    )
                )

    return segments


def build_plan(exercises: Iterable[ExerciseInput]) -> Plan:
    """Build a Plan from exercise models or raw exercise dicts."""
    return Plan(segments=build_segments(coerce_exercises(exercises)))


def describe_plan(plan: Plan) -> List[Dict[str, Any]]:
    """Flatten a plan into JSON-friendly rows for listings and the CLI."""
    rows = []
    for position, segment in enumerate(plan.segments):
        rows.append({
            "position": position,
            "kind": segment.kind.value,
            "name": segment.display_name,
            "set": segment.set_index,
            "duration_seconds": segment.duration_seconds,
        })
    return rows
