"""
Interfaces (Ports) for the timer engine.

This package defines abstract interfaces that decouple the playback logic from
the platform (event loop, audio, speech, screen) and from storage. Concrete
adapters live in infrastructure/, in-memory fakes in tests/fakes/.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import Clock, PreferenceRepository

    class PlaybackScheduler:
        def __init__(self, plan, clock: Clock):
            self._clock = clock
"""

# Tick source
from application.ports.clock import Clock, ClockFactory, TickCallback, TICK_INTERVAL_MS

# Platform capabilities
from application.ports.capabilities import (
    AudioPort,
    FullscreenChangeCallback,
    FullscreenPort,
    NarratorPort,
    WakeLockPort,
)

# Preference persistence
from application.ports.preference_repository import PreferenceRepository

# Plan input
from application.ports.exercise_source import ExerciseSource

__all__ = [
    # Clock
    "Clock",
    "ClockFactory",
    "TickCallback",
    "TICK_INTERVAL_MS",
    # Capabilities
    "WakeLockPort",
    "FullscreenPort",
    "FullscreenChangeCallback",
    "AudioPort",
    "NarratorPort",
    # Preferences
    "PreferenceRepository",
    # Plan input
    "ExerciseSource",
]
