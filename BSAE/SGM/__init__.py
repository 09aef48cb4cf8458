# =============================================================================
# SGM - Sound Generation Module
# Subfolder of BSAE (Bounce Simulation and Audio Engine)
# =============================================================================
#
# Turns BounceEvents into a mono float PCM buffer and writes the two
# precompute artifacts.
#
# Modules:
#   synthesizer.py - dual-sawtooth piano voice, envelope, AudioBuffer mixing
#   wav_export.py  - 32-bit float WAV writer (soundfile) + trace JSON I/O
#
# Constants live in BSAE/SMM/constants.py
# Verification tools live in BSAE/SVM/
# =============================================================================
