"""
Shared fixtures for timer engine tests.

Fixtures return fresh fakes for every test, so no state leaks between tests.
"""
from typing import Any, Dict, List

import pytest

from tests.fakes import (
    FakeClock,
    FakeFullscreen,
    FakePreferenceRepository,
    FakeWakeLock,
    RecordingAudioPort,
    RecordingNarratorPort,
)


# =============================================================================
# Port fakes
# =============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def preference_repo() -> FakePreferenceRepository:
    return FakePreferenceRepository()


@pytest.fixture
def wake_lock() -> FakeWakeLock:
    return FakeWakeLock()


@pytest.fixture
def fullscreen() -> FakeFullscreen:
    return FakeFullscreen()


@pytest.fixture
def audio_port() -> RecordingAudioPort:
    return RecordingAudioPort()


@pytest.fixture
def narrator_port() -> RecordingNarratorPort:
    return RecordingNarratorPort()


# =============================================================================
# Sample data
# =============================================================================


@pytest.fixture
def sample_exercises() -> List[Dict[str, Any]]:
    """Two exercises: 2x20s (rest 5s) and 1x30s (rest 10s)."""
    return [
        {"name": "Jade Split", "sets": 2, "hold_time_seconds": 20, "rest_time_seconds": 5},
        {
            "name": "Straddle Back",
            "sets": 1,
            "hold_time_seconds": 30,
            "rest_time_seconds": 10,
            "notes": "Keep shoulders engaged",
        },
    ]
