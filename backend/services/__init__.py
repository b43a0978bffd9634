"""Backend services for the timer engine."""

from backend.services.audio_preferences import AudioModePreferences
from backend.services.playback_scheduler import PlaybackScheduler
from backend.services.session_environment import SessionEnvironmentManager
from backend.services.timer_engine import TimerContext, TimerEngine, TimerEngineConfig

__all__ = [
    "AudioModePreferences",
    "PlaybackScheduler",
    "SessionEnvironmentManager",
    "TimerContext",
    "TimerEngine",
    "TimerEngineConfig",
]
