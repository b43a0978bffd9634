"""
Domain layer for the timer engine.

This package contains pure domain models that are independent of
infrastructure concerns (clocks, audio, storage, HTTP).
"""

from domain.models import (
    AudioMode,
    Exercise,
    Plan,
    PlaybackState,
    PlaybackStatus,
    Segment,
    SegmentKind,
)

__all__ = [
    "AudioMode",
    "Exercise",
    "Plan",
    "PlaybackState",
    "PlaybackStatus",
    "Segment",
    "SegmentKind",
]
