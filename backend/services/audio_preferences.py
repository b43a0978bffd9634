"""
Audio mode preference handling.

Each timer context stores its audio mode under its own key so the challenge
timer and the generic training timer keep independent preferences. The mode
is read once when the engine is created and written on every change.
"""
import logging
from typing import Optional

from application.ports import PreferenceRepository
from domain.models import AudioMode

logger = logging.getLogger(__name__)

CHALLENGE_TIMER_AUDIO_MODE_KEY = "challenge_timer_audio_mode"
TRAINING_TIMER_AUDIO_MODE_KEY = "training_timer_audio_mode"
DEFAULT_AUDIO_MODE = AudioMode.MINIMAL_BEEP


class AudioModePreferences:
    """
    Reads, cycles and persists the audio mode of one timer context.

    Usage:
        prefs = AudioModePreferences(repo, CHALLENGE_TIMER_AUDIO_MODE_KEY)
        mode = prefs.load()
        mode = prefs.cycle()   # silent -> minimal_beep -> full_voice -> silent
    """

    def __init__(
        self,
        repository: Optional[PreferenceRepository],
        key: str,
        default: AudioMode = DEFAULT_AUDIO_MODE,
    ):
        self._repository = repository
        self._key = key
        self._default = default
        self._mode = default

    @property
    def key(self) -> str:
        return self._key

    @property
    def mode(self) -> AudioMode:
        return self._mode

    def load(self) -> AudioMode:
        """Read the stored mode; unknown or unreadable values fall back to the default."""
        stored: Optional[str] = None
        if self._repository is not None:
            try:
                stored = self._repository.get(self._key)
            except Exception as e:
                logger.warning(f"Failed to read preference {self._key}: {e}")

        mode = AudioMode.parse(stored)
        if mode is None:
            if stored is not None:
                logger.warning(
                    f"Ignoring unknown audio mode {stored!r} for {self._key}, "
                    f"using {self._default.value}"
                )
            mode = self._default
        self._mode = mode
        return mode

    def set(self, mode: AudioMode) -> AudioMode:
        """Switch to `mode` and persist it. A failed write keeps the in-memory mode."""
        self._mode = AudioMode(mode)
        if self._repository is not None:
            try:
                self._repository.set(self._key, self._mode.value)
            except Exception as e:
                logger.warning(f"Failed to persist preference {self._key}: {e}")
        return self._mode

    def cycle(self) -> AudioMode:
        """Advance to the next mode in the fixed toggle order and persist it."""
        return self.set(self._mode.next())
