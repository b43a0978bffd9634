"""
Unit tests for backend/services/audio_preferences.py
"""

import pytest

from backend.services.audio_preferences import (
    CHALLENGE_TIMER_AUDIO_MODE_KEY,
    TRAINING_TIMER_AUDIO_MODE_KEY,
    AudioModePreferences,
)
from domain.models import AudioMode
from infrastructure.yaml_preference_repository import YamlPreferenceRepository
from tests.fakes import FakePreferenceRepository

pytestmark = pytest.mark.unit


class TestAudioModePreferences:
    def test_default_when_nothing_stored(self, preference_repo):
        prefs = AudioModePreferences(preference_repo, CHALLENGE_TIMER_AUDIO_MODE_KEY)
        assert prefs.load() == AudioMode.MINIMAL_BEEP

    def test_loads_stored_mode(self, preference_repo):
        preference_repo.seed({CHALLENGE_TIMER_AUDIO_MODE_KEY: "full_voice"})
        prefs = AudioModePreferences(preference_repo, CHALLENGE_TIMER_AUDIO_MODE_KEY)
        assert prefs.load() == AudioMode.FULL_VOICE

    def test_unknown_value_falls_back_with_warning(self, preference_repo, caplog):
        preference_repo.seed({CHALLENGE_TIMER_AUDIO_MODE_KEY: "loud"})
        prefs = AudioModePreferences(preference_repo, CHALLENGE_TIMER_AUDIO_MODE_KEY)
        assert prefs.load() == AudioMode.MINIMAL_BEEP
        assert "Ignoring unknown audio mode" in caplog.text

    def test_cycle_order_and_persistence(self, preference_repo):
        preference_repo.seed({TRAINING_TIMER_AUDIO_MODE_KEY: "silent"})
        prefs = AudioModePreferences(preference_repo, TRAINING_TIMER_AUDIO_MODE_KEY)
        prefs.load()

        assert [prefs.cycle() for _ in range(3)] == [
            AudioMode.MINIMAL_BEEP,
            AudioMode.FULL_VOICE,
            AudioMode.SILENT,
        ]
        assert preference_repo.writes == [
            (TRAINING_TIMER_AUDIO_MODE_KEY, "minimal_beep"),
            (TRAINING_TIMER_AUDIO_MODE_KEY, "full_voice"),
            (TRAINING_TIMER_AUDIO_MODE_KEY, "silent"),
        ]

    def test_contexts_are_independent(self, preference_repo):
        challenge = AudioModePreferences(preference_repo, CHALLENGE_TIMER_AUDIO_MODE_KEY)
        training = AudioModePreferences(preference_repo, TRAINING_TIMER_AUDIO_MODE_KEY)
        challenge.load()
        training.load()

        challenge.cycle()

        assert AudioModePreferences(preference_repo, TRAINING_TIMER_AUDIO_MODE_KEY).load() == AudioMode.MINIMAL_BEEP
        assert AudioModePreferences(preference_repo, CHALLENGE_TIMER_AUDIO_MODE_KEY).load() == AudioMode.FULL_VOICE

    def test_write_failure_keeps_mode_in_memory(self, caplog):
        repo = FakePreferenceRepository(fail_on_set=True)
        prefs = AudioModePreferences(repo, CHALLENGE_TIMER_AUDIO_MODE_KEY)
        prefs.load()
        assert prefs.cycle() == AudioMode.FULL_VOICE
        assert prefs.mode == AudioMode.FULL_VOICE
        assert "Failed to persist preference" in caplog.text

    def test_read_failure_uses_default(self):
        repo = FakePreferenceRepository(fail_on_get=True)
        prefs = AudioModePreferences(repo, CHALLENGE_TIMER_AUDIO_MODE_KEY, default=AudioMode.SILENT)
        assert prefs.load() == AudioMode.SILENT

    def test_without_repository(self):
        prefs = AudioModePreferences(None, CHALLENGE_TIMER_AUDIO_MODE_KEY)
        assert prefs.load() == AudioMode.MINIMAL_BEEP
        assert prefs.cycle() == AudioMode.FULL_VOICE

    def test_survives_reload_with_yaml_storage(self, tmp_path):
        """Cycled mode is read back by a fresh instance on a fresh repository."""
        path = tmp_path / "prefs" / "preferences.yaml"
        prefs = AudioModePreferences(YamlPreferenceRepository(path), CHALLENGE_TIMER_AUDIO_MODE_KEY)
        prefs.load()
        prefs.cycle()
        prefs.cycle()

        reloaded = AudioModePreferences(YamlPreferenceRepository(path), CHALLENGE_TIMER_AUDIO_MODE_KEY)
        assert reloaded.load() == AudioMode.SILENT
