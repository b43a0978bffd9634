"""
Fake implementations of the timer engine ports for testing.

This package provides in-memory fakes for the clock, the platform
capabilities and preference storage, for fast, deterministic tests without an
event loop, a browser or a database.

Usage:
    from tests.fakes import FakeClock, FakePreferenceRepository

    clock = FakeClock()
    engine = TimerEngine(config, clock, preferences=FakePreferenceRepository())
    engine.load_exercises([{"name": "Plank", "hold_time_seconds": 20}])
    engine.start()
    clock.tick(10)
"""
from tests.fakes.capabilities import (
    FailingAudioPort,
    FailingNarratorPort,
    FakeFullscreen,
    FakeWakeLock,
    RecordingAudioPort,
    RecordingNarratorPort,
)
from tests.fakes.clock import FakeClock
from tests.fakes.preference_repository import FakePreferenceRepository

__all__ = [
    "FakeClock",
    "FakePreferenceRepository",
    "FakeWakeLock",
    "FakeFullscreen",
    "RecordingAudioPort",
    "RecordingNarratorPort",
    "FailingAudioPort",
    "FailingNarratorPort",
]
