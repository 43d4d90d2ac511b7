from __future__ import annotations
import math
import numpy as np

from music_service.config import MAX_FALLBACK_SECONDS

SAMPLE_RATE = 44100
# C4 major scale: C D E F G A B C
C_MAJOR = np.array([261.63, 293.66, 329.63, 349.23, 392.00, 440.00, 493.88, 523.25])
NOTES_PER_SECOND = 2
HARMONY_RATIO = 0.5
HARMONY_GAIN = 0.5
NOTE_EDGE = 0.1        # attack / release share of each note
FADE_SECONDS = 0.1     # global fade in / out
AMPLITUDE = 12000      # headroom below int16 full scale


def clamp_duration(music_length_ms: int | None, ceiling: int = MAX_FALLBACK_SECONDS) -> int:
    """Whole seconds to synthesize for a requested length in ms, in [1, ceiling]."""
    seconds = int(music_length_ms) // 1000 if music_length_ms is not None else ceiling
    return max(1, min(seconds, ceiling))


def _note_envelope(pos: np.ndarray) -> np.ndarray:
    return np.where(
        pos < NOTE_EDGE, pos / NOTE_EDGE,
        np.where(pos > 1 - NOTE_EDGE, (1 - pos) / NOTE_EDGE, 1.0),
    )


def synthesize(duration_seconds: int) -> np.ndarray:
    """Render a repeating ascending C major melody with a lower-octave harmony.

    Output is mono int16 at SAMPLE_RATE, exactly SAMPLE_RATE * duration_seconds
    samples long. The waveform depends on the duration only.
    """
    if duration_seconds < 1:
        raise ValueError(f"duration must be >= 1 second, got {duration_seconds}")
    n = SAMPLE_RATE * int(duration_seconds)
    samples_per_note = SAMPLE_RATE // NOTES_PER_SECOND
    total_notes = math.ceil(duration_seconds * NOTES_PER_SECOND)

    i = np.arange(n)
    note_index = (i // samples_per_note) % total_notes
    base = C_MAJOR[note_index % len(C_MAJOR)]
    harmony = base * HARMONY_RATIO

    t = i / SAMPLE_RATE
    wave = (np.sin(2 * np.pi * base * t) + HARMONY_GAIN * np.sin(2 * np.pi * harmony * t)) / (1 + HARMONY_GAIN)

    envelope = _note_envelope((i % samples_per_note) / samples_per_note)
    fade_len = SAMPLE_RATE * FADE_SECONDS
    fade = np.minimum(1.0, np.minimum(i / fade_len, (n - i) / fade_len))

    return np.floor(wave * envelope * fade * AMPLITUDE).astype(np.int16)


def to_pcm_bytes(samples: np.ndarray) -> bytes:
    """Serialize samples as consecutive little-endian int16."""
    return np.asarray(samples).astype("<i2").tobytes()
