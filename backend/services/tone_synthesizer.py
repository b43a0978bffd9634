"""
Tone synthesis for countdown beeps.

Each tone is an independent sine pulse whose gain decays exponentially from
`volume * 0.3` to 0.01 over its duration, so it ends on its own and never
needs to be stopped. Output is 16-bit little-endian mono PCM, optionally
wrapped in a WAV container.
"""
import io
import math
import sys
import wave
from array import array

SAMPLE_RATE = 44100
PEAK_GAIN = 0.3
FLOOR_GAIN = 0.01
MAX_AMPLITUDE = 32767


def synthesize_pulse(
    frequency: float,
    duration_ms: int,
    volume: float = 0.7,
    sample_rate: int = SAMPLE_RATE,
) -> bytes:
    """
    Render one decaying sine pulse.

    Args:
        frequency: Tone frequency in Hz
        duration_ms: Pulse length in milliseconds
        volume: 0.0-1.0, scales the starting gain
        sample_rate: Samples per second

    Returns:
        Raw PCM bytes (signed 16-bit, mono)
    """
    sample_count = max(int(sample_rate * duration_ms / 1000), 1)
    start_gain = max(min(volume, 1.0), 0.0) * PEAK_GAIN
    samples = array("h")
    if start_gain <= 0:
        samples.extend([0] * sample_count)
        return samples.tobytes()

    # exponential ramp from start_gain to FLOOR_GAIN across the pulse
    decay = math.log(FLOOR_GAIN / start_gain) / sample_count if start_gain > FLOOR_GAIN else 0.0
    step = 2.0 * math.pi * frequency / sample_rate
    for i in range(sample_count):
        gain = start_gain * math.exp(decay * i)
        samples.append(int(MAX_AMPLITUDE * gain * math.sin(step * i)))
    if sys.byteorder == "big":
        samples.byteswap()
    return samples.tobytes()


def to_wav(pcm: bytes, sample_rate: int = SAMPLE_RATE) -> bytes:
    """Wrap mono 16-bit PCM in a WAV container."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    return buffer.getvalue()

