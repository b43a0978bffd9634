"""
Unit tests for the timer sessions router.

Tests the endpoints in api/routers/timer_sessions.py with a registry whose
sessions tick on FakeClocks, so playback is advanced by the test.
"""

import io
import wave

import pytest
from fastapi.testclient import TestClient

from api.deps import get_session_registry, get_settings
from backend.main import create_app
from backend.services.audio_preferences import TRAINING_TIMER_AUDIO_MODE_KEY
from backend.services.session_registry import TimerSessionRegistry
from backend.settings import Settings
from tests.fakes import FakeClock, FakePreferenceRepository

pytestmark = pytest.mark.unit

# =============================================================================
# Test Constants
# =============================================================================

SAMPLE_EXERCISES = [
    {"name": "Jade Split", "sets": 2, "hold_time_seconds": 20, "rest_time_seconds": 5},
    {"name": "Straddle Back", "sets": 1, "hold_time_seconds": 30, "rest_time_seconds": 10},
]


# =============================================================================
# Fixtures
# =============================================================================


class RecordingClockFactory:
    def __init__(self):
        self.clocks = []

    def __call__(self) -> FakeClock:
        clock = FakeClock()
        self.clocks.append(clock)
        return clock


@pytest.fixture
def clocks():
    return RecordingClockFactory()


@pytest.fixture
def preferences():
    return FakePreferenceRepository()


@pytest.fixture
def registry(clocks, preferences):
    settings = Settings(environment="test", _env_file=None)
    registry = TimerSessionRegistry(settings, clocks, preferences=preferences)
    yield registry
    registry.close_all()


@pytest.fixture
def app(registry):
    """Create test app with the fake-clock registry."""
    settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=settings)
    test_app.dependency_overrides[get_session_registry] = lambda: registry
    test_app.dependency_overrides[get_settings] = lambda: settings
    return test_app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def session_id(client):
    response = client.post("/timer/sessions", json={"exercises": SAMPLE_EXERCISES})
    assert response.status_code == 201
    return response.json()["id"]


# =============================================================================
# Create / get / delete
# =============================================================================


class TestCreateSession:
    def test_create_from_exercises(self, client):
        response = client.post(
            "/timer/sessions",
            json={"context": "challenge", "exercises": SAMPLE_EXERCISES, "language": "pl"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["context"] == "challenge"
        assert data["language"] == "pl"
        assert data["status"] == "idle"
        assert data["total_segments"] == 5
        assert data["total_duration_seconds"] == 80
        assert data["current_segment"]["display_name"] == "Jade Split"
        assert data["next_segment"]["kind"] == "rest"
        assert data["audio_mode"] == "minimal_beep"

    def test_create_from_preset(self, client):
        response = client.post(
            "/timer/sessions", json={"preset": "Tabata", "exercise_name": "Burpees"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["context"] == "training"
        assert data["total_segments"] == 15
        assert data["current_segment"]["display_name"] == "Burpees"

    def test_rest_day(self, client):
        data = client.post("/timer/sessions", json={"exercises": []}).json()
        assert data["is_rest_day"] is True
        assert data["position"] == "0 / 0"
        assert data["current_segment"] is None

    def test_unknown_preset(self, client):
        response = client.post("/timer/sessions", json={"preset": "emom"})
        assert response.status_code == 404
        assert "emom" in response.json()["detail"]

    def test_requires_exercises_or_preset(self, client):
        assert client.post("/timer/sessions", json={}).status_code == 422
        both = {"exercises": SAMPLE_EXERCISES, "preset": "tabata"}
        assert client.post("/timer/sessions", json=both).status_code == 422

    def test_exercise_without_name_rejected(self, client, registry):
        response = client.post("/timer/sessions", json={"exercises": [{"sets": 2}]})
        assert response.status_code == 422
        assert len(registry) == 0

    def test_invalid_timing_falls_back_to_defaults(self, client):
        response = client.post(
            "/timer/sessions",
            json={"exercises": [{"name": "Pike", "sets": 0, "hold_time_seconds": -5}]},
        )
        assert response.status_code == 201
        assert response.json()["total_segments"] == 1


class TestGetAndDelete:
    def test_get(self, client, session_id):
        response = client.get(f"/timer/sessions/{session_id}")
        assert response.status_code == 200
        assert response.json()["id"] == session_id

    def test_get_unknown(self, client):
        assert client.get("/timer/sessions/nope").status_code == 404

    def test_delete(self, client, session_id, clocks):
        client.post(f"/timer/sessions/{session_id}/start")

        response = client.delete(f"/timer/sessions/{session_id}")

        assert response.json() == {"success": True, "session_id": session_id, "status": "preparing"}
        assert not clocks.clocks[0].is_running
        assert client.get(f"/timer/sessions/{session_id}").status_code == 404
        assert client.delete(f"/timer/sessions/{session_id}").status_code == 404


# =============================================================================
# Playback
# =============================================================================


class TestPlayback:
    def test_start_prepares_then_runs(self, client, session_id, clocks):
        data = client.post(f"/timer/sessions/{session_id}/start").json()
        assert data["status"] == "preparing"
        assert data["preparation_seconds_remaining"] == 10
        assert data["wake_lock_held"] is True

        clocks.clocks[0].tick(10)

        data = client.get(f"/timer/sessions/{session_id}").json()
        assert data["status"] == "running"
        assert data["time_remaining_seconds"] == 20
        assert data["preparation_seconds_remaining"] is None

    def test_pause_resume_and_toggle(self, client, session_id, clocks):
        client.post(f"/timer/sessions/{session_id}/start")
        clocks.clocks[0].tick(13)

        assert client.post(f"/timer/sessions/{session_id}/pause").json()["status"] == "paused"
        assert client.post(f"/timer/sessions/{session_id}/resume").json()["status"] == "running"
        assert client.post(f"/timer/sessions/{session_id}/toggle").json()["status"] == "paused"
        data = client.post(f"/timer/sessions/{session_id}/toggle").json()
        assert data["status"] == "running"
        assert data["time_remaining_seconds"] == 17

    def test_skip_and_cancel(self, client, session_id, clocks):
        client.post(f"/timer/sessions/{session_id}/start")
        # cancel abandons the lead-in
        assert client.post(f"/timer/sessions/{session_id}/cancel").json()["status"] == "idle"

        client.post(f"/timer/sessions/{session_id}/start")
        clocks.clocks[0].tick(10)
        data = client.post(f"/timer/sessions/{session_id}/skip").json()
        assert data["current_segment"]["kind"] == "rest"
        assert data["position"] == "2 / 5"

    def test_run_to_completion(self, client, session_id, clocks):
        client.post(f"/timer/sessions/{session_id}/start")
        clocks.clocks[0].run_until_stopped()

        data = client.get(f"/timer/sessions/{session_id}").json()
        assert data["status"] == "completed"
        assert data["progress"] == 100.0
        assert data["completed_at"] is not None
        assert data["wake_lock_held"] is False

    def test_replace_exercises_resets(self, client, session_id, clocks):
        client.post(f"/timer/sessions/{session_id}/start")
        clocks.clocks[0].run_until_stopped()

        response = client.put(
            f"/timer/sessions/{session_id}/exercises",
            json={"exercises": [{"name": "Bridge", "hold_time_seconds": 40}]},
        )

        data = response.json()
        assert data["status"] == "idle"
        assert data["total_segments"] == 1
        assert data["completed_at"] is None

    def test_replace_exercises_invalid(self, client, session_id):
        response = client.put(f"/timer/sessions/{session_id}/exercises", json={"exercises": [{}]})
        assert response.status_code == 422


# =============================================================================
# Audio mode & environment
# =============================================================================


class TestAudioAndEnvironment:
    def test_cycle_audio_mode_persists(self, client, session_id, preferences):
        assert client.post(f"/timer/sessions/{session_id}/audio-mode/cycle").json()["audio_mode"] == "full_voice"
        assert preferences.get(TRAINING_TIMER_AUDIO_MODE_KEY) == "full_voice"

        # a new session in the same context starts from the stored mode
        data = client.post("/timer/sessions", json={"exercises": SAMPLE_EXERCISES}).json()
        assert data["audio_mode"] == "full_voice"

    def test_fullscreen_toggle_and_external_exit(self, client, session_id):
        assert client.post(f"/timer/sessions/{session_id}/fullscreen/toggle").json()["is_fullscreen"] is True

        data = client.post(f"/timer/sessions/{session_id}/fullscreen", json={"active": False}).json()
        assert data["is_fullscreen"] is False
        assert data["chrome_visible"] is True

    def test_visibility_reacquires_wake_lock(self, client, session_id, registry):
        client.post(f"/timer/sessions/{session_id}/start")

        hidden = client.post(f"/timer/sessions/{session_id}/visibility", json={"visible": False}).json()
        assert hidden["wake_lock_held"] is False
        assert not registry.get(session_id).wake_lock.held

        visible = client.post(f"/timer/sessions/{session_id}/visibility", json={"visible": True}).json()
        assert visible["wake_lock_held"] is True
        assert registry.get(session_id).wake_lock.held


# =============================================================================
# Cues
# =============================================================================


class TestCues:
    def test_list_cues_since(self, client, session_id, clocks):
        client.post(f"/timer/sessions/{session_id}/start")
        clocks.clocks[0].tick(10)

        data = client.get(f"/timer/sessions/{session_id}/cues").json()
        assert data["last_seq"] == 5
        assert [cue["frequency"] for cue in data["cues"]] == [880.0] * 5

        newer = client.get(f"/timer/sessions/{session_id}/cues", params={"since": 3}).json()
        assert [cue["seq"] for cue in newer["cues"]] == [4, 5]

    def test_voice_cues(self, client, session_id):
        client.post(f"/timer/sessions/{session_id}/audio-mode/cycle")
        client.post(f"/timer/sessions/{session_id}/start")

        cues = client.get(f"/timer/sessions/{session_id}/cues").json()["cues"]
        assert cues[0]["type"] == "speech"
        assert cues[0]["text"] == "Get ready. Next: Jade Split"
        assert cues[0]["rate"] == 0.8

    def test_tone_as_wav(self, client, session_id, clocks):
        client.post(f"/timer/sessions/{session_id}/start")
        clocks.clocks[0].tick(6)

        response = client.get(f"/timer/sessions/{session_id}/cues/1/wav")

        assert response.status_code == 200
        assert response.headers["content-type"] == "audio/wav"
        with wave.open(io.BytesIO(response.content), "rb") as wav:
            assert wav.getnframes() == 44100 * 150 // 1000

    def test_missing_cue_wav(self, client, session_id):
        assert client.get(f"/timer/sessions/{session_id}/cues/99/wav").status_code == 404
