"""
Platform Capability Interfaces (Ports).

Wake-lock, fullscreen, tone playback and speech are optional platform
capabilities. Each port exposes `is_supported()` so callers can probe at call
time; infrastructure.capabilities provides no-op fallbacks.
"""
from typing import Callable, Protocol

FullscreenChangeCallback = Callable[[bool], None]


class WakeLockPort(Protocol):
    """Keeps the display awake while playback is active."""

    def is_supported(self) -> bool:
        ...

    def acquire(self) -> None:
        """Request the wake-lock. May raise if the platform denies it."""
        ...

    def release(self) -> None:
        """Release the wake-lock."""
        ...


class FullscreenPort(Protocol):
    """Enters and exits fullscreen and reports platform changes."""

    def is_supported(self) -> bool:
        ...

    def enter(self) -> None:
        ...

    def exit(self) -> None:
        ...

    def on_change(self, callback: FullscreenChangeCallback) -> None:
        """
        Register a listener for fullscreen changes.

        The callback receives True when fullscreen became active and False
        when it was left, including exits the engine did not initiate.
        """
        ...


class AudioPort(Protocol):
    """Plays short synthesized tones."""

    def is_supported(self) -> bool:
        ...

    def play_tone(self, frequency: float, duration_ms: int) -> None:
        """Fire-and-forget playback of one self-terminating tone."""
        ...


class NarratorPort(Protocol):
    """Speaks text through a speech synthesizer."""

    def is_supported(self) -> bool:
        ...

    def speak(self, text: str) -> None:
        """Fire-and-forget speech."""
        ...
