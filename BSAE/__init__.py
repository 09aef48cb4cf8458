# =============================================================================
# Bounce Simulation and Audio Engine (BSAE)
# Offline precompute step for the bouncing-ball short-form videos.
# =============================================================================
#
# ── PYTHON OWNS THE PRECOMPUTED TIMELINE ─────────────────────────────────────
#
# RESPONSIBLE for:
#   - Ball physics
#       Gravity, circle-boundary collision, positional correction and the
#       per-bounce "growing head" collision radius.  One step per video frame.
#   - Bounce → note mapping
#       Every bounce plays a fixed-size window of notes taken cyclically from
#       the note pool.  Same inputs always give the same note order.
#   - Audio synthesis
#       Each note is rendered at sample = int(event_time * SAMPLE_RATE) and
#       mixed into one mono float buffer, then hard-clipped to [-1, 1].
#   - Artifact export
#       generated-audio.wav (mono, 32-bit float) and simulation-data.json
#       (one {x, y, bounceCount} entry per frame).
#
# NOT responsible for:
#   - Video encoding, canvas drawing, UI composition.
#       The rendering stage reads the trace JSON and the WAV; it never re-runs
#       physics.
#
# ── DATA FLOW ─────────────────────────────────────────────────────────────────
#   score JSON   → SLM  → note pool (notes with time >= start offset, first N)
#   note pool    → PSM  → FrameRecords + BounceEvents
#   BounceEvents → SGM  → float32 buffer → WAV
#   FrameRecords → SGM  → trace JSON
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   SMM/   constants + data types (single source of truth for all settings)
#   SLM/   score loading and note pool construction
#   PSM/   physics simulation context
#   SGM/   synthesizer and file export
#   SVM/   trace verification + self-validation suite
#   SViz/  frame-indexed preview / trace replay for the rendering stage
#   generate.py - the precompute entry point  (python -m BSAE.generate)
# =============================================================================

__version__ = "1.0.0"
