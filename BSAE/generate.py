#!/usr/bin/env python3
# =============================================================================
# generate.py - Offline precompute: score → trace JSON + WAV
# =============================================================================
#
# Usage (from the video project root):
#   python -m BSAE.generate
#
# No flags.  Every setting, including the input/output paths, comes from
# BSAE/SMM/constants.py.
#
# Steps:
#   [1] Load score, build note pool
#   [2] Simulate TOTAL_FRAMES frames
#   [3] Synthesize bounce notes into one mono buffer, hard clip
#   [4] Write generated-audio.wav and simulation-data.json
#
# Any read / parse / write error aborts the run with exit code 1.  Fix the
# input and run it again; there is no partial-resume.
# =============================================================================

from __future__ import annotations
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np

from BSAE.SMM.constants import (
    SCORE_PATH, AUDIO_OUT_PATH, TRACE_OUT_PATH,
    TOTAL_FRAMES, FPS, SAMPLE_RATE, SCORE_TRACK,
)
from BSAE.SMM.models import NoteWindow, PhysicsParams
from BSAE.SLM.score_loader import load_note_pool
from BSAE.PSM.simulator import SimulationContext
from BSAE.SGM.synthesizer import AudioBuffer
from BSAE.SGM.wav_export import write_trace, write_wav

DIVIDER = "=" * 68


def run_pipeline(
    score_path: str = SCORE_PATH,
    audio_path: str = AUDIO_OUT_PATH,
    trace_path: str = TRACE_OUT_PATH,
    total_frames: int = TOTAL_FRAMES,
    fps: int = FPS,
    params: PhysicsParams = PhysicsParams(),
    window: NoteWindow = NoteWindow(),
    sample_rate: int = SAMPLE_RATE,
    verbose: bool = True,
) -> dict:
    """
    Run the whole precompute step and write both artifacts.

    Returns:
        Summary dict: pool_size, frames, bounces, events, samples,
        truncated_samples, peak (pre-clip absolute peak).
    """
    def say(msg: str) -> None:
        if verbose:
            print(msg)

    if total_frames <= 0:
        raise ValueError(f"total_frames must be > 0, got {total_frames}")

    # [1] Score
    pool = load_note_pool(score_path, window, SCORE_TRACK)
    say(f"  [INFO] Note pool  : {len(pool)} notes from {os.path.basename(score_path)} "
        f"(time >= {window.start_offset:g}s)")
    if not pool:
        say("  [!!] Note pool is empty; the audio will be silent")

    # [2] Physics
    ctx = SimulationContext(pool, params, window, fps)
    result = ctx.run(total_frames)
    say(f"  [INFO] Simulated  : {len(result.frames):,} frames, "
        f"{result.bounce_count} bounces, {len(result.events)} note events")

    # [3] Audio
    buf = AudioBuffer.for_duration(total_frames / fps, sample_rate)
    for event in result.events:
        buf.add_event(event)
    peak = float(np.max(np.abs(buf.samples))) if len(buf) else 0.0
    samples = buf.finalize()
    say(f"  [INFO] Synthesized: {len(samples):,} samples @ {sample_rate} Hz, "
        f"pre-clip peak {peak:.3f}")
    if peak > 1.0:
        say(f"  [INFO] Hard-clipped samples above 1.0")
    if buf.truncated_samples:
        say(f"  [INFO] Dropped {buf.truncated_samples:,} samples past end of clip")

    # [4] Artifacts
    write_wav(audio_path, samples, sample_rate)
    say(f"  [ OK ] {audio_path}")
    write_trace(trace_path, result.frames)
    say(f"  [ OK ] {trace_path}")

    return {
        "pool_size":         len(pool),
        "frames":            len(result.frames),
        "bounces":           result.bounce_count,
        "events":            len(result.events),
        "samples":           len(samples),
        "truncated_samples": buf.truncated_samples,
        "peak":              peak,
    }


def main() -> None:
    print(f"\n{DIVIDER}")
    print("  Bounce Simulation and Audio Engine - precompute")
    print(DIVIDER)
    try:
        run_pipeline()
    except (ValueError, OSError) as exc:
        print(f"  [!!] {exc}")
        print(f"{DIVIDER}\n")
        sys.exit(1)
    print("  Audio and simulation data generated.")
    print(f"{DIVIDER}\n")


if __name__ == "__main__":
    main()
