"""
Playback state value object and audio mode enum.

PlaybackState is frozen; transitions produce new instances (see
backend.core.playback_machine).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

PREPARATION_SECONDS = 10


class PlaybackStatus(str, Enum):
    """Lifecycle status of a playback session."""

    IDLE = "idle"
    PREPARING = "preparing"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"

    @property
    def is_ticking(self) -> bool:
        """True for the statuses that own a clock subscription."""
        return self in (PlaybackStatus.PREPARING, PlaybackStatus.RUNNING)


class AudioMode(str, Enum):
    """
    Cueing verbosity.

    - SILENT: no tones, no speech
    - MINIMAL_BEEP: short countdown tones only
    - FULL_VOICE: spoken announcements and countdown, no tones
    """

    SILENT = "silent"
    MINIMAL_BEEP = "minimal_beep"
    FULL_VOICE = "full_voice"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["AudioMode"]:
        """Return the mode for a stored value, or None when unrecognised."""
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None

    def next(self) -> "AudioMode":
        """Next mode in the fixed toggle order silent -> minimal_beep -> full_voice."""
        order = list(AudioMode)
        return order[(order.index(self) + 1) % len(order)]


@dataclass(frozen=True)
class PlaybackState:
    """
    Snapshot of a playback session.

    Attributes:
        status: Current lifecycle status
        current_segment_index: Index into the plan (meaningful for non-empty plans)
        time_remaining_seconds: Seconds left in the current segment
        preparation_seconds_remaining: Lead-in countdown, only meaningful while preparing
        segment_started: Whether the current segment has begun running
        announced: Whether the entry announcement for the current segment was made
    """

    status: PlaybackStatus = PlaybackStatus.IDLE
    current_segment_index: int = 0
    time_remaining_seconds: int = 0
    preparation_seconds_remaining: int = PREPARATION_SECONDS
    segment_started: bool = False
    announced: bool = False

    @property
    def is_active(self) -> bool:
        return self.status.is_ticking

    @property
    def is_completed(self) -> bool:
        return self.status == PlaybackStatus.COMPLETED
