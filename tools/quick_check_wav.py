"""
Quick numeric checker for generated-audio.wav.
Usage: python tools/quick_check_wav.py path/to/generated-audio.wav
"""
import os
import sys

import numpy as np
import soundfile as sf

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from BSAE.SMM.constants import SAMPLE_RATE, TOTAL_FRAMES, FPS


def describe(path):
    info = sf.info(path)
    data, sr = sf.read(path, dtype="float32", always_2d=True)
    n_ch = data.shape[1]
    duration = data.shape[0] / sr

    print("=" * 60)
    print(f"File        : {path}")
    print(f"Sample rate : {sr} Hz")
    print(f"Channels    : {n_ch}")
    print(f"Format      : {info.subtype}")
    print(f"Duration    : {duration:.3f} s")
    print("=" * 60)

    for i in range(n_ch):
        ch = data[:, i]
        peak = float(np.max(np.abs(ch))) if len(ch) else 0.0
        rms = float(np.sqrt(np.mean(ch.astype(np.float64) ** 2))) if len(ch) else 0.0
        clipped = int(np.count_nonzero(np.abs(ch) >= 1.0))
        silent = int(np.count_nonzero(ch == 0.0))
        print(f"  Ch{i}: peak={peak:.3f}  rms={rms:.3f}  "
              f"clipped={clipped}  silent={silent / max(len(ch), 1) * 100:.1f}%")

    expected = TOTAL_FRAMES / FPS
    ok = (sr == SAMPLE_RATE and n_ch == 1 and info.subtype == "FLOAT"
          and abs(duration - expected) < 1.0 / sr * 2)
    print("=" * 60)
    print(f"EXPECTED: mono FLOAT @ {SAMPLE_RATE} Hz, {expected:.3f} s  "
          f"--> {'OK' if ok else 'MISMATCH'}")
    return ok


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python tools/quick_check_wav.py file.wav")
        raise SystemExit(2)
    raise SystemExit(0 if describe(sys.argv[1]) else 1)
