"""
Domain models for the timer engine.

These models represent the core concepts:
- Exercise: one entry of a training or challenge day (sets, hold, rest)
- Segment: one timed unit of playback (exercise or rest)
- Plan: the ordered segment sequence derived from an exercise list
- PlaybackState: frozen snapshot of a playback session
- AudioMode: cueing verbosity (silent, minimal beep, full voice)

Usage:
    >>> from domain.models import Exercise, PlaybackState
    >>> exercise = Exercise(name="Jade Split", sets=2, hold_time_seconds=20)
    >>> PlaybackState().status
    <PlaybackStatus.IDLE: 'idle'>
"""

from domain.models.exercise import (
    DEFAULT_HOLD_TIME_SECONDS,
    DEFAULT_REST_TIME_SECONDS,
    DEFAULT_SETS,
    Exercise,
)
from domain.models.playback import (
    PREPARATION_SECONDS,
    AudioMode,
    PlaybackState,
    PlaybackStatus,
)
from domain.models.segment import REST_DISPLAY_NAME, Plan, Segment, SegmentKind

__all__ = [
    # Main entities
    "Exercise",
    "Segment",
    "Plan",
    "PlaybackState",
    # Enums
    "SegmentKind",
    "PlaybackStatus",
    "AudioMode",
    # Constants
    "DEFAULT_SETS",
    "DEFAULT_HOLD_TIME_SECONDS",
    "DEFAULT_REST_TIME_SECONDS",
    "PREPARATION_SECONDS",
    "REST_DISPLAY_NAME",
]
