# =============================================================================
# synthesizer.py - Bounce-note synthesizer
# =============================================================================
#
# VOICE (per note):
#   freq  = 440 * 2^((midi - 69) / 12)
#   osc1  = 2 * fract(t * freq)     - 1      naive sawtooth (not band-limited)
#   osc2  = 2 * fract(t * freq * 2) - 1      one octave up
#   out   = (osc1 * 0.7 + osc2 * 0.3) * gain(t) * velocity * 0.5
#
# ENVELOPE (d = note duration, all segments linear):
#
#   gain
#   1.0 |  /\
#       | /  \
#   0.3 |/    '-----.____
#  0.01 |                '--
#       +--+-----+---------+--> t
#       0 10ms  0.2d       d
#
#   Gain never goes below 0.  Notes shorter than 50 ms (0.2d <= 10 ms) skip
#   the early-decay segment entirely.
#
# TIMING GUARANTEE:
#   A note in an event at time T starts at sample int(T * SAMPLE_RATE).  The
#   in-note clock t restarts at 0 for every note, so every note of a bounce
#   starts in phase.
#
# END OF BUFFER:
#   Samples that would land at or past the end of the buffer are dropped
#   (the clip simply ends).  AudioBuffer.truncated_samples counts them.
# =============================================================================

from __future__ import annotations
import math
from typing import Iterable

import numpy as np

from BSAE.SMM.constants import (
    SAMPLE_RATE, A4_FREQUENCY, A4_MIDI, SEMITONES_PER_OCTAVE,
    MASTER_VOLUME, OSC1_LEVEL, OSC2_LEVEL, OSC2_RATIO,
    ATTACK_SECONDS, EARLY_DECAY_FRAC, SUSTAIN_LEVEL, RELEASE_LEVEL,
    CLIP_LIMIT,
)
from BSAE.SMM.models import BounceEvent, Note


# ── Voice building blocks ────────────────────────────────────────────────────

def midi_to_frequency(pitch: float) -> float:
    """Equal-tempered frequency in Hz (A4 = MIDI 69 = 440 Hz)."""
    return A4_FREQUENCY * 2.0 ** ((pitch - A4_MIDI) / SEMITONES_PER_OCTAVE)


def sawtooth(t: np.ndarray, freq: float) -> np.ndarray:
    """Naive sawtooth in [-1, 1): 2 * fract(t * freq) - 1."""
    return 2.0 * np.mod(t * freq, 1.0) - 1.0


def envelope(t: np.ndarray, duration: float) -> np.ndarray:
    """Three-segment attack / early-decay / late-decay gain curve."""
    t = np.asarray(t, dtype=np.float64)
    gain = np.empty_like(t)

    early_end = duration * EARLY_DECAY_FRAC
    attack = t < ATTACK_SECONDS
    early  = ~attack & (t < early_end)
    late   = ~attack & ~early

    gain[attack] = t[attack] / ATTACK_SECONDS

    if early.any():
        progress = (t[early] - ATTACK_SECONDS) / (early_end - ATTACK_SECONDS)
        gain[early] = 1.0 - progress * (1.0 - SUSTAIN_LEVEL)

    if late.any():
        progress = (t[late] - early_end) / (duration - early_end)
        gain[late] = SUSTAIN_LEVEL - progress * (SUSTAIN_LEVEL - RELEASE_LEVEL)

    np.maximum(gain, 0.0, out=gain)
    return gain


def note_length_samples(note: Note, sample_rate: int = SAMPLE_RATE) -> int:
    return int(math.floor(note.duration * sample_rate))


def render_note(
    note: Note,
    sample_rate: int = SAMPLE_RATE,
    max_samples: int | None = None,
) -> np.ndarray:
    """
    Render one note as float64 samples, starting at in-note time 0.

    Args:
        note:        The note to render.
        sample_rate: Output sample rate in Hz.
        max_samples: Render at most this many samples (used when the note
                     runs past the end of the output buffer).

    Returns:
        np.ndarray of length min(floor(duration * sample_rate), max_samples).
    """
    n = note_length_samples(note, sample_rate)
    if max_samples is not None:
        n = min(n, max(max_samples, 0))
    if n <= 0:
        return np.zeros(0, dtype=np.float64)

    t = np.arange(n, dtype=np.float64) / sample_rate
    freq = midi_to_frequency(note.pitch)

    osc1 = sawtooth(t, freq)
    osc2 = sawtooth(t, freq * OSC2_RATIO)
    gain = envelope(t, note.duration)

    return (osc1 * OSC1_LEVEL + osc2 * OSC2_LEVEL) * gain * note.velocity * MASTER_VOLUME


# ── Output buffer ────────────────────────────────────────────────────────────

class AudioBuffer:
    """
    Fixed-length mono float32 mix bus.  Notes are summed in; finalize()
    hard-clips the result to [-1, 1].

    Usage:
        buf = AudioBuffer.for_duration(30.0)
        for event in events:
            buf.add_event(event)
        samples = buf.finalize()
    """

    def __init__(self, total_samples: int, sample_rate: int = SAMPLE_RATE) -> None:
        if total_samples < 0:
            raise ValueError(f"total_samples must be >= 0, got {total_samples}")
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be > 0, got {sample_rate}")
        self.sample_rate = sample_rate
        self.samples = np.zeros(total_samples, dtype=np.float32)
        self.truncated_samples = 0
        self.finalized = False

    @classmethod
    def for_duration(cls, duration_seconds: float,
                     sample_rate: int = SAMPLE_RATE) -> "AudioBuffer":
        return cls(int(math.ceil(duration_seconds * sample_rate)), sample_rate)

    def __len__(self) -> int:
        return len(self.samples)

    def add_note(self, note: Note, start_time: float) -> int:
        """
        Mix one note in at start_time seconds.

        Returns:
            Number of samples actually written.  Anything past the end of the
            buffer is dropped and added to truncated_samples.
        """
        if self.finalized:
            raise RuntimeError("AudioBuffer already finalized")
        if start_time < 0:
            raise ValueError(f"start_time must be >= 0, got {start_time}")

        start  = int(math.floor(start_time * self.sample_rate))
        length = note_length_samples(note, self.sample_rate)
        room   = max(len(self.samples) - start, 0)
        tone   = render_note(note, self.sample_rate, max_samples=room)

        written = len(tone)
        if written:
            # float64 sum, stored back as float32
            self.samples[start:start + written] += tone
        self.truncated_samples += max(length - written, 0)
        return written

    def add_event(self, event: BounceEvent) -> None:
        for note in event.notes:
            self.add_note(note, event.time_seconds)

    def finalize(self) -> np.ndarray:
        """Hard-clip to [-CLIP_LIMIT, CLIP_LIMIT] and return the samples."""
        np.clip(self.samples, -CLIP_LIMIT, CLIP_LIMIT, out=self.samples)
        self.finalized = True
        return self.samples


def synthesize(
    events: Iterable[BounceEvent],
    duration_seconds: float,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """Mix every note of every event into a fresh buffer and finalize it."""
    buf = AudioBuffer.for_duration(duration_seconds, sample_rate)
    for event in events:
        buf.add_event(event)
    return buf.finalize()
