"""
Audio cue policy.

Decides once per tick whether a tone is played. Only the minimal-beep mode
produces tones; full-voice mode relies on narration and silent mode on
nothing. One tick yields at most one cue.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from domain.models import AudioMode, SegmentKind

READY_FREQUENCY_HZ = 880.0
EXERCISE_FREQUENCY_HZ = 1000.0
REST_FREQUENCY_HZ = 600.0
COMPLETION_FREQUENCY_HZ = 1500.0
TONE_DURATION_MS = 150
BEEP_WINDOW_SECONDS = 5


class CuePhase(str, Enum):
    """Phase a tick belongs to, from the point of view of cueing."""

    PREPARATION = "preparation"
    EXERCISE = "exercise"
    REST = "rest"
    COMPLETION = "completion"

    @classmethod
    def for_segment(cls, kind: SegmentKind) -> "CuePhase":
        return cls.EXERCISE if kind == SegmentKind.EXERCISE else cls.REST


@dataclass(frozen=True)
class ToneCue:
    """One self-terminating tone."""

    frequency: float
    duration_ms: int
    phase: CuePhase


@dataclass(frozen=True)
class AudioCuePolicy:
    """
    Tone decision function, parameterized by frequencies and window.

    Attributes:
        ready_frequency: Tone during the last seconds of preparation
        exercise_frequency: Tone during the last seconds of an exercise segment
        rest_frequency: Tone during the last seconds of a rest segment
        completion_frequency: Tone played once when the session completes
        duration_ms: Length of every tone
        window_seconds: Countdown window at the end of each phase
    """

    ready_frequency: float = READY_FREQUENCY_HZ
    exercise_frequency: float = EXERCISE_FREQUENCY_HZ
    rest_frequency: float = REST_FREQUENCY_HZ
    completion_frequency: float = COMPLETION_FREQUENCY_HZ
    duration_ms: int = TONE_DURATION_MS
    window_seconds: int = BEEP_WINDOW_SECONDS

    def frequency_for(self, phase: CuePhase) -> float:
        return {
            CuePhase.PREPARATION: self.ready_frequency,
            CuePhase.EXERCISE: self.exercise_frequency,
            CuePhase.REST: self.rest_frequency,
            CuePhase.COMPLETION: self.completion_frequency,
        }[phase]

    def decide(
        self,
        mode: AudioMode,
        phase: CuePhase,
        seconds_remaining: int,
    ) -> Optional[ToneCue]:
        """
        Decide the tone for one tick.

        Args:
            mode: Current audio mode
            phase: Phase the tick belongs to
            seconds_remaining: Seconds left in that phase after the tick

        Returns:
            A ToneCue, or None for silence
        """
        if mode != AudioMode.MINIMAL_BEEP:
            return None
        if phase == CuePhase.COMPLETION:
            return ToneCue(self.completion_frequency, self.duration_ms, phase)
        if 0 < seconds_remaining <= self.window_seconds:
            return ToneCue(self.frequency_for(phase), self.duration_ms, phase)
        return None
