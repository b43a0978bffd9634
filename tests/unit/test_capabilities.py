"""
Unit tests for infrastructure/capabilities.py
"""

import io

import pytest

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

pytestmark = pytest.mark.unit


class TestNullPorts:
    @pytest.mark.parametrize("port", [NullWakeLock(), NullFullscreen(), NullAudioPort(), NullNarratorPort()])
    def test_unsupported(self, port):
        assert port.is_supported() is False


class TestCueLog:
    def test_sequence_and_since(self):
        log = CueLog()
        CueLogAudioPort(log).play_tone(880.0, 150)
        CueLogNarratorPort(log, language="pl", rate=0.8).speak("Przygotuj się")

        assert log.last_seq == 2
        assert [entry["seq"] for entry in log.since(0)] == [1, 2]
        assert log.since(1)[0] == {
            "seq": 2,
            "type": "speech",
            "at": log.since(1)[0]["at"],
            "text": "Przygotuj się",
            "language": "pl",
            "rate": 0.8,
        }
        assert log.since(2) == []

    def test_get(self):
        log = CueLog()
        log.append("tone", frequency=1000.0, duration_ms=150)
        assert log.get(1)["frequency"] == 1000.0
        assert log.get(7) is None

    def test_bounded(self):
        log = CueLog(maxlen=3)
        for _ in range(5):
            log.append("tone", frequency=600.0, duration_ms=150)

        assert len(log) == 3
        assert log.last_seq == 5
        assert [entry["seq"] for entry in log.since(0)] == [3, 4, 5]
        assert log.get(1) is None


class TestClientMirrors:
    def test_wake_lock(self):
        lock = ClientWakeLock()
        lock.acquire()
        assert lock.held
        lock.release()
        assert not lock.held

    def test_fullscreen_reports_changes(self):
        seen = []
        fullscreen = ClientFullscreen()
        fullscreen.on_change(seen.append)

        fullscreen.enter()
        fullscreen.report(False)

        assert seen == [True, False]
        assert fullscreen.active is False


class TestConsolePorts:
    def test_narrator_writes_phrase(self):
        stream = io.StringIO()
        ConsoleNarratorPort(stream).speak("3")
        assert stream.getvalue() == "\n  >> 3\n"

    def test_bell_needs_a_terminal(self):
        stream = io.StringIO()
        port = TerminalBellAudioPort(stream)
        assert port.is_supported() is False
        port.play_tone(880.0, 150)
        assert stream.getvalue() == "\a"
