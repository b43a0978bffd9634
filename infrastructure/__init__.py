"""
Infrastructure Layer for the timer engine.

This package contains concrete implementations of the interfaces in
application.ports:
- clocks: asyncio event-loop clock
- capabilities: no-op, cue-log, client-mirrored and console capability adapters
- db/: Supabase preference storage
- yaml_preference_repository: file preference storage
"""

from infrastructure.capabilities import (
    ClientFullscreen,
    ClientWakeLock,
    ConsoleNarratorPort,
    CueLog,
    CueLogAudioPort,
    CueLogNarratorPort,
    NullAudioPort,
    NullFullscreen,
    NullNarratorPort,
    NullWakeLock,
    TerminalBellAudioPort,
)
from infrastructure.clocks import AsyncioClock
from infrastructure.db import SupabasePreferenceRepository
from infrastructure.yaml_preference_repository import YamlPreferenceRepository

__all__ = [
    "AsyncioClock",
    "ClientFullscreen",
    "ClientWakeLock",
    "ConsoleNarratorPort",
    "CueLog",
    "CueLogAudioPort",
    "CueLogNarratorPort",
    "NullAudioPort",
    "NullFullscreen",
    "NullNarratorPort",
    "NullWakeLock",
    "TerminalBellAudioPort",
    "SupabasePreferenceRepository",
    "YamlPreferenceRepository",
]
