#!/usr/bin/env python3
# =============================================================================
# validate.py - BSAE Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m BSAE.SVM.validate
#             or python BSAE/SVM/validate.py (from project root)
#
# Tests:
#   1. Constants integrity  - timing math, note window, voice levels
#   2. Physics              - trace invariants, first bounce, elastic reflection
#   3. Synthesizer          - tuning, envelope corners, clipping, truncation
#   4. Determinism          - two full runs give byte-identical artifacts
#
# Uses a synthetic note pool, so no score file is needed.
# =============================================================================

import sys
import os
import math

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import numpy as np

from BSAE.SMM.constants import (
    FPS, DURATION_SECONDS, TOTAL_FRAMES, SAMPLE_RATE,
    NOTE_POOL_SIZE, NOTES_PER_BOUNCE, NOTE_STRIDE,
    CIRCLE_RADIUS, BALL_RADIUS, HEAD_SCALE_BASE,
    OSC1_LEVEL, OSC2_LEVEL, SUSTAIN_LEVEL, RELEASE_LEVEL,
)
from BSAE.SMM.models import Note, NoteWindow, PhysicsParams
from BSAE.PSM.simulator import SimulationContext
from BSAE.SGM.synthesizer import AudioBuffer, envelope, midi_to_frequency, synthesize
from BSAE.SGM.wav_export import trace_to_json
from BSAE.SVM.trace_check import check_trace, note_cycle_period

PASS = "[PASS]"
FAIL = "[FAIL]"
INFO = "[INFO]"

failures = 0


def check(label: str, condition: bool, detail: str = "") -> bool:
    global failures
    if condition:
        print(f"  {PASS} {label}")
    else:
        print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
        failures += 1
    return condition


def banner(title: str) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def demo_pool(size: int = NOTE_POOL_SIZE) -> list[Note]:
    """Two-octave chromatic run starting at C4, one note every 250 ms."""
    return [
        Note(pitch=60 + i % 24, onset_time=23.0 + i * 0.25,
             velocity=0.8, duration=0.5, name=f"n{i}")
        for i in range(size)
    ]


# =============================================================================
# TEST 1 - Constants Integrity
# =============================================================================
def test_constants() -> None:
    banner("TEST 1 - Constants Integrity")
    check("TOTAL_FRAMES = DURATION_SECONDS * FPS",
          TOTAL_FRAMES == DURATION_SECONDS * FPS, f"got {TOTAL_FRAMES}")
    check("SAMPLE_RATE = 44100", SAMPLE_RATE == 44_100)
    check("NOTE_STRIDE divides NOTE_POOL_SIZE",
          NOTE_POOL_SIZE % NOTE_STRIDE == 0,
          f"{NOTE_POOL_SIZE} % {NOTE_STRIDE} = {NOTE_POOL_SIZE % NOTE_STRIDE}")
    start_eff = BALL_RADIUS * 2 * HEAD_SCALE_BASE
    check("Starting effective radius fits in circle",
          start_eff < CIRCLE_RADIUS, f"{start_eff} >= {CIRCLE_RADIUS}")
    check("Oscillator levels sum to 1.0",
          math.isclose(OSC1_LEVEL + OSC2_LEVEL, 1.0))
    check("SUSTAIN_LEVEL > RELEASE_LEVEL >= 0",
          SUSTAIN_LEVEL > RELEASE_LEVEL >= 0)


# =============================================================================
# TEST 2 - Physics
# =============================================================================
def test_physics() -> None:
    banner("TEST 2 - Physics")
    pool = demo_pool()
    ctx = SimulationContext(pool)
    result = ctx.run(TOTAL_FRAMES)

    check(f"Trace has {TOTAL_FRAMES} records",
          len(result.frames) == TOTAL_FRAMES, f"got {len(result.frames)}")
    issues = check_trace(result.frames, result.events, TOTAL_FRAMES,
                         notes_per_bounce=NOTES_PER_BOUNCE)
    check("Trace / event invariants hold", not issues,
          "; ".join(f"f{i.frame_index}: {i.reason}" for i in issues[:3]))
    print(f"  {INFO} {len(result.events)} bounces in {TOTAL_FRAMES} frames")

    if result.events:
        first = result.events[0]
        check("First bounce at frame 22", first.frame_index == 22,
              f"got {first.frame_index}")
        check("First bounce plays pool[0:5]",
              list(first.notes) == pool[:NOTES_PER_BOUNCE])

    # Elastic reflection + no residual penetration, every collision
    ctx.reset()
    worst_speed = 0.0
    worst_pen = 0.0
    for _ in range(TOTAL_FRAMES):
        _, event = ctx.step()
        if event is None:
            continue
        c = ctx.last_collision
        worst_speed = max(worst_speed, abs(c.speed_out - c.speed_in))
        if c.effective_radius < CIRCLE_RADIUS:
            worst_pen = max(worst_pen, c.post_distance + c.effective_radius - CIRCLE_RADIUS)
    check("Elastic bounce preserves speed", worst_speed < 1e-9,
          f"max |dv| = {worst_speed:.3e}")
    check("No residual penetration after correction", worst_pen < 1e-9,
          f"max = {worst_pen:.3e}")

    period = note_cycle_period(NOTE_POOL_SIZE, NOTE_STRIDE)
    ctx = SimulationContext(pool, PhysicsParams(), NoteWindow())
    seen = 0
    while seen < period:
        _, event = ctx.step()
        if event is not None:
            seen += 1
    check(f"Note index returns to 0 after {period} bounces", ctx.note_index == 0,
          f"got {ctx.note_index}")


# =============================================================================
# TEST 3 - Synthesizer
# =============================================================================
def test_synth() -> None:
    banner("TEST 3 - Synthesizer")
    check("MIDI 69 = 440 Hz", midi_to_frequency(69) == 440.0)
    check("MIDI 81 = 880 Hz", math.isclose(midi_to_frequency(81), 880.0))

    g = envelope(np.array([0.0, 0.01, 0.2, 1.0 - 1e-9]), 1.0)
    check("Envelope starts at 0", g[0] == 0.0)
    check("Envelope peaks at 1 after attack", math.isclose(g[1], 1.0))
    check("Envelope at 0.2d = sustain level", math.isclose(g[2], SUSTAIN_LEVEL))
    check("Envelope ends near release level", abs(g[3] - RELEASE_LEVEL) < 1e-6)

    loud = Note(pitch=40, onset_time=0.0, velocity=1.0, duration=0.5)
    buf = AudioBuffer(SAMPLE_RATE // 2)
    for _ in range(20):
        buf.add_note(loud, 0.0)
    out = buf.finalize()
    check("Finalized buffer within [-1, 1]",
          float(out.max()) <= 1.0 and float(out.min()) >= -1.0)

    tail = AudioBuffer(SAMPLE_RATE)
    written = tail.add_note(loud, 0.9)
    check("Note past end of buffer is truncated",
          written == SAMPLE_RATE - int(0.9 * SAMPLE_RATE)
          and tail.truncated_samples == int(0.5 * SAMPLE_RATE) - written,
          f"written={written} truncated={tail.truncated_samples}")


# =============================================================================
# TEST 4 - Determinism
# =============================================================================
def test_determinism() -> None:
    banner("TEST 4 - Determinism")
    pool = demo_pool()
    runs = []
    for _ in range(2):
        result = SimulationContext(pool).run(TOTAL_FRAMES)
        audio = synthesize(result.events, TOTAL_FRAMES / FPS)
        runs.append((trace_to_json(result.frames), audio.tobytes()))
    check("Trace JSON identical across runs", runs[0][0] == runs[1][0])
    check("Audio bytes identical across runs", runs[0][1] == runs[1][1])


def run_all() -> int:
    """Run every section; return the number of failed checks."""
    global failures
    failures = 0
    test_constants()
    test_physics()
    test_synth()
    test_determinism()

    print("\n" + "=" * 60)
    if failures == 0:
        print(f"  ALL TESTS PASSED")
    else:
        print(f"  {failures} TEST(S) FAILED")
    print("=" * 60 + "\n")
    return failures


def main() -> None:
    sys.exit(0 if run_all() == 0 else 1)


if __name__ == "__main__":
    main()
