"""
Platform capability adapters.

- Null*: no-op fallbacks for platforms without the capability
- CueLog*: record tones and phrases for a remote display to replay
- ClientWakeLock / ClientFullscreen: mirror state owned by a remote client
- Console*: terminal output for the CLI runner
"""
import itertools
import logging
import sys
from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional, TextIO

from application.ports import FullscreenChangeCallback

logger = logging.getLogger(__name__)

CUE_LOG_SIZE = 200


# =============================================================================
# No-op fallbacks
# =============================================================================


class NullWakeLock:
    def is_supported(self) -> bool:
        return False

    def acquire(self) -> None:
        pass

    def release(self) -> None:
        pass


class NullFullscreen:
    def is_supported(self) -> bool:
        return False

    def enter(self) -> None:
        pass

    def exit(self) -> None:
        pass

    def on_change(self, callback: FullscreenChangeCallback) -> None:
        pass


class NullAudioPort:
    def is_supported(self) -> bool:
        return False

    def play_tone(self, frequency: float, duration_ms: int) -> None:
        pass


class NullNarratorPort:
    def is_supported(self) -> bool:
        return False

    def speak(self, text: str) -> None:
        pass


# =============================================================================
# Cue log (remote displays)
# =============================================================================


class CueLog:
    """
    Bounded, sequenced log of emitted cues.

    Clients poll with the last sequence number they saw and replay newer
    entries locally (tone synthesis, speech synthesis).
    """

    def __init__(self, maxlen: int = CUE_LOG_SIZE):
        self._entries: Deque[Dict[str, Any]] = deque(maxlen=maxlen)
        self._sequence = itertools.count(1)
        self._last_seq = 0

    def append(self, cue_type: str, **payload: Any) -> Dict[str, Any]:
        entry = {
            "seq": self._next_seq(),
            "type": cue_type,
            "at": datetime.now(timezone.utc).isoformat(),
            **payload,
        }
        self._entries.append(entry)
        return entry

    @property
    def last_seq(self) -> int:
        return self._last_seq

    def _next_seq(self) -> int:
        self._last_seq = next(self._sequence)
        return self._last_seq

    def get(self, seq: int) -> Optional[Dict[str, Any]]:
        for entry in self._entries:
            if entry["seq"] == seq:
                return entry
        return None

    def since(self, seq: int = 0) -> List[Dict[str, Any]]:
        return [entry for entry in self._entries if entry["seq"] > seq]

    def __len__(self) -> int:
        return len(self._entries)


class CueLogAudioPort:
    def __init__(self, log: CueLog):
        self._log = log

    def is_supported(self) -> bool:
        return True

    def play_tone(self, frequency: float, duration_ms: int) -> None:
        self._log.append("tone", frequency=frequency, duration_ms=duration_ms)


class CueLogNarratorPort:
    def __init__(self, log: CueLog, language: str = "en", rate: float = 1.0):
        self._log = log
        self._language = language
        self._rate = rate

    def is_supported(self) -> bool:
        return True

    def speak(self, text: str) -> None:
        self._log.append("speech", text=text, language=self._language, rate=self._rate)


# =============================================================================
# Client-owned capabilities
# =============================================================================


class ClientWakeLock:
    """Wake-lock flag a remote client reads to hold its own screen lock."""

    def __init__(self):
        self.held = False

    def is_supported(self) -> bool:
        return True

    def acquire(self) -> None:
        self.held = True

    def release(self) -> None:
        self.held = False


class ClientFullscreen:
    """
    Fullscreen state owned by a remote client.

    enter()/exit() record the request; report() forwards changes the client
    observed itself (e.g. the user pressed escape).
    """

    def __init__(self):
        self.active = False
        self._callbacks: List[FullscreenChangeCallback] = []

    def is_supported(self) -> bool:
        return True

    def enter(self) -> None:
        self.report(True)

    def exit(self) -> None:
        self.report(False)

    def on_change(self, callback: FullscreenChangeCallback) -> None:
        self._callbacks.append(callback)

    def report(self, active: bool) -> None:
        self.active = active
        for callback in list(self._callbacks):
            callback(active)


# =============================================================================
# Console (CLI runner)
# =============================================================================


class ConsoleNarratorPort:
    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream or sys.stdout

    def is_supported(self) -> bool:
        return True

    def speak(self, text: str) -> None:
        self._stream.write(f"\n  >> {text}\n")
        self._stream.flush()


class TerminalBellAudioPort:
    """Rings the terminal bell; frequency and length are not controllable."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream or sys.stdout

    def is_supported(self) -> bool:
        return self._stream.isatty()

    def play_tone(self, frequency: float, duration_ms: int) -> None:
        self._stream.write("\a")
        self._stream.flush()
