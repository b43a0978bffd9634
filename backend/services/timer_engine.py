"""
Parameterized exercise timer engine.

One engine serves every timer context (challenge days, training sessions,
interval presets). A context differs only by configuration: where exercises
come from, the preference key its audio mode is stored under and the
narration language.

Usage:
    config = TimerEngineConfig.for_context(TimerContext.CHALLENGE, language="en")
    engine = TimerEngine(config, clock, preferences=repo, on_completed=mark_day_done)
    engine.load_exercises(exercises)
    engine.start()
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional

from application.exceptions import TimerEngineError
from application.ports import (
    TICK_INTERVAL_MS,
    AudioPort,
    Clock,
    ExerciseSource,
    FullscreenPort,
    NarratorPort,
    PreferenceRepository,
    WakeLockPort,
)
from backend.core.audio_cues import AudioCuePolicy
from backend.core.narration import DEFAULT_LANGUAGE, VOICE_COUNTDOWN_SECONDS, AnnouncementNarrator
from backend.core.plan_builder import ExerciseInput, build_plan
from backend.core.progress import format_clock, next_segment, segment_position
from backend.services.audio_preferences import (
    CHALLENGE_TIMER_AUDIO_MODE_KEY,
    DEFAULT_AUDIO_MODE,
    TRAINING_TIMER_AUDIO_MODE_KEY,
    AudioModePreferences,
)
from backend.services.playback_scheduler import PlaybackScheduler
from backend.services.session_environment import SessionEnvironmentManager
from domain.models import PREPARATION_SECONDS, AudioMode, Plan, PlaybackState, PlaybackStatus, Segment
from infrastructure.capabilities import NullAudioPort, NullFullscreen, NullNarratorPort, NullWakeLock

logger = logging.getLogger(__name__)


class TimerContext(str, Enum):
    """Timer call sites, each with its own stored audio preference."""

    CHALLENGE = "challenge"
    TRAINING = "training"

    @property
    def storage_key(self) -> str:
        if self == TimerContext.CHALLENGE:
            return CHALLENGE_TIMER_AUDIO_MODE_KEY
        return TRAINING_TIMER_AUDIO_MODE_KEY


@dataclass(frozen=True)
class TimerEngineConfig:
    """
    Configuration of one engine instance.

    Attributes:
        context: Timer call site
        storage_key: Preference key for the audio mode
        language: Narration language code
        default_audio_mode: Mode used when nothing valid is stored
        preparation_seconds: Lead-in before exercise segments
        tick_interval_ms: Clock period
        voice_countdown_seconds: Length of the spoken countdown
        cue_policy: Tone frequencies, length and window
    """

    context: TimerContext = TimerContext.CHALLENGE
    storage_key: str = CHALLENGE_TIMER_AUDIO_MODE_KEY
    language: str = DEFAULT_LANGUAGE
    default_audio_mode: AudioMode = DEFAULT_AUDIO_MODE
    preparation_seconds: int = PREPARATION_SECONDS
    tick_interval_ms: int = TICK_INTERVAL_MS
    voice_countdown_seconds: int = VOICE_COUNTDOWN_SECONDS
    cue_policy: AudioCuePolicy = field(default_factory=AudioCuePolicy)

    @classmethod
    def for_context(cls, context: TimerContext, **overrides: Any) -> "TimerEngineConfig":
        context = TimerContext(context)
        values: Dict[str, Any] = {"context": context, "storage_key": context.storage_key}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @classmethod
    def from_settings(
        cls,
        settings,
        context: TimerContext,
        language: Optional[str] = None,
    ) -> "TimerEngineConfig":
        """Build a config from backend.settings.Settings."""
        return cls.for_context(
            context,
            language=language or settings.default_language,
            default_audio_mode=AudioMode(settings.default_audio_mode),
            preparation_seconds=settings.preparation_seconds,
            tick_interval_ms=settings.tick_interval_ms,
            voice_countdown_seconds=settings.voice_countdown_seconds,
            cue_policy=AudioCuePolicy(
                ready_frequency=settings.ready_tone_hz,
                exercise_frequency=settings.exercise_tone_hz,
                rest_frequency=settings.rest_tone_hz,
                completion_frequency=settings.completion_tone_hz,
                duration_ms=settings.tone_duration_ms,
                window_seconds=settings.beep_window_seconds,
            ),
        )


def _segment_to_dict(segment: Optional[Segment]) -> Optional[Dict[str, Any]]:
    if segment is None:
        return None
    return {
        "kind": segment.kind.value,
        "exercise_index": segment.exercise_index,
        "set_index": segment.set_index,
        "duration_seconds": segment.duration_seconds,
        "display_name": segment.display_name,
        "notes": segment.notes,
        "media_ref": segment.media_ref,
    }


class TimerEngine:
    """
    Composes plan building, playback, cueing, preferences and environment
    handling for one timer session.
    """

    def __init__(
        self,
        config: TimerEngineConfig,
        clock: Clock,
        *,
        preferences: Optional[PreferenceRepository] = None,
        exercise_source: Optional[ExerciseSource] = None,
        audio_port: Optional[AudioPort] = None,
        narrator_port: Optional[NarratorPort] = None,
        wake_lock: Optional[WakeLockPort] = None,
        fullscreen: Optional[FullscreenPort] = None,
        on_completed: Optional[Callable[[], None]] = None,
    ):
        self.config = config
        self._exercise_source = exercise_source
        self._preferences = AudioModePreferences(
            preferences, config.storage_key, default=config.default_audio_mode
        )
        mode = self._preferences.load()

        self._scheduler = PlaybackScheduler(
            Plan(),
            clock,
            audio_mode=mode,
            audio_port=audio_port or NullAudioPort(),
            narrator_port=narrator_port or NullNarratorPort(),
            cue_policy=config.cue_policy,
            narrator=AnnouncementNarrator(
                language=config.language,
                countdown_seconds=config.voice_countdown_seconds,
            ),
            on_completed=on_completed,
            preparation_seconds=config.preparation_seconds,
            tick_interval_ms=config.tick_interval_ms,
        )
        self._environment = SessionEnvironmentManager(
            wake_lock=wake_lock or NullWakeLock(),
            fullscreen=fullscreen or NullFullscreen(),
        )
        self._environment.attach(self._scheduler)
        logger.info(
            f"Timer engine ready for {config.context.value} "
            f"(audio={mode.value}, language={config.language})"
        )

    # =========================================================================
    # Plan input
    # =========================================================================

    @property
    def plan(self) -> Plan:
        return self._scheduler.plan

    @property
    def scheduler(self) -> PlaybackScheduler:
        return self._scheduler

    @property
    def environment(self) -> SessionEnvironmentManager:
        return self._environment

    def load_exercises(self, exercises: Iterable[ExerciseInput]) -> Plan:
        """Build a plan from exercises and reset playback onto it."""
        plan = build_plan(exercises)
        self._scheduler.load_plan(plan)
        return plan

    def load_session(self, session_id: str) -> Plan:
        """
        Fetch exercises from the configured source and load them.

        Raises:
            TimerEngineError: If no exercise source is configured
        """
        if self._exercise_source is None:
            raise TimerEngineError("No exercise source configured for this engine")
        return self.load_exercises(self._exercise_source(session_id))

    # =========================================================================
    # Playback
    # =========================================================================

    @property
    def state(self) -> PlaybackState:
        return self._scheduler.state

    def start(self) -> PlaybackState:
        return self._scheduler.start()

    def pause(self) -> PlaybackState:
        return self._scheduler.pause()

    def resume(self) -> PlaybackState:
        return self._scheduler.resume()

    def skip(self) -> PlaybackState:
        return self._scheduler.skip()

    def cancel(self) -> PlaybackState:
        return self._scheduler.cancel()

    def toggle_play_pause(self) -> PlaybackState:
        """Single play/pause button: start or resume when stopped, pause otherwise."""
        if self.state.status.is_ticking:
            return self.pause()
        if self.state.status == PlaybackStatus.PAUSED:
            return self.resume()
        return self.start()

    def progress(self) -> float:
        return self._scheduler.progress()

    # =========================================================================
    # Audio mode & environment
    # =========================================================================

    @property
    def audio_mode(self) -> AudioMode:
        return self._preferences.mode

    def set_audio_mode(self, mode: AudioMode) -> AudioMode:
        mode = self._preferences.set(mode)
        self._scheduler.audio_mode = mode
        logger.info(f"Audio mode for {self.config.context.value} set to {mode.value}")
        return mode

    def cycle_audio_mode(self) -> AudioMode:
        return self.set_audio_mode(self.audio_mode.next())

    def toggle_fullscreen(self) -> bool:
        return self._environment.toggle_fullscreen()

    def teardown(self) -> None:
        self._scheduler.teardown()

    # =========================================================================
    # Display
    # =========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """JSON-friendly view of the session for displays and the API."""
        state = self.state
        plan = self.plan
        return {
            "context": self.config.context.value,
            "status": state.status.value,
            "current_segment_index": state.current_segment_index,
            "position": segment_position(state, plan),
            "time_remaining_seconds": state.time_remaining_seconds,
            "time_remaining_display": format_clock(state.time_remaining_seconds),
            "preparation_seconds_remaining": (
                state.preparation_seconds_remaining
                if state.status == PlaybackStatus.PREPARING
                else None
            ),
            "progress": round(self.progress(), 2),
            "current_segment": _segment_to_dict(self._scheduler.current_segment),
            "next_segment": _segment_to_dict(next_segment(state, plan)),
            "total_segments": len(plan),
            "total_duration_seconds": plan.total_duration_seconds,
            "is_rest_day": plan.is_rest_day,
            "audio_mode": self.audio_mode.value,
            "is_fullscreen": self._environment.is_fullscreen,
            "chrome_visible": self._environment.chrome_visible,
            "wake_lock_held": self._environment.wake_lock_held,
        }
