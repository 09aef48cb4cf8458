# =============================================================================
# wav_export.py - Artifact writers
# =============================================================================
#
#   generated-audio.wav    mono, 44.1 kHz, IEEE 32-bit float (soundfile FLOAT)
#   simulation-data.json   [{"x": .., "y": .., "bounceCount": ..}, ...]
#                          one entry per frame, frame 0 first
#
# Both writers create missing parent directories.  Any OSError from the
# filesystem propagates; a partial artifact set is never reported as success.
# =============================================================================

from __future__ import annotations
import json
import os
from typing import Sequence

import numpy as np
import soundfile as sf

from BSAE.SMM.constants import SAMPLE_RATE
from BSAE.SMM.models import FrameRecord


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)


# ── Audio ────────────────────────────────────────────────────────────────────

def write_wav(path: str, samples: np.ndarray, sample_rate: int = SAMPLE_RATE) -> None:
    """
    Write mono float samples as a 32-bit float WAV.

    Args:
        path:        Output .wav path.
        samples:     1-D array, expected already clipped to [-1, 1].
        sample_rate: Hz.
    """
    data = np.asarray(samples, dtype=np.float32)
    if data.ndim != 1:
        raise ValueError(f"expected mono (1-D) samples, got shape {data.shape}")
    _ensure_parent(path)
    sf.write(path, data, sample_rate, subtype="FLOAT", format="WAV")


# ── Trace ────────────────────────────────────────────────────────────────────

def trace_to_json(frames: Sequence[FrameRecord]) -> str:
    """Compact, key-ordered JSON so identical traces give identical bytes."""
    return json.dumps([f.to_json() for f in frames], separators=(",", ":"))


def write_trace(path: str, frames: Sequence[FrameRecord]) -> None:
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(trace_to_json(frames))


def read_trace(path: str) -> list[FrameRecord]:
    """Load a trace written by write_trace (used by the rendering stage)."""
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{os.path.basename(path)}: trace must be a JSON array")

    frames = []
    for i, entry in enumerate(raw):
        try:
            frames.append(FrameRecord(float(entry["x"]), float(entry["y"]),
                                      int(entry["bounceCount"])))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"trace entry {i} is malformed: {entry!r}") from exc
    return frames
