# =============================================================================
# BSAE/SMM/__init__.py - Settings & Models Module
# =============================================================================
#
# The SMM is the single source of truth for every tunable number in the
# precompute step: canvas size, frame rate, note window, physics constants,
# synth voice shape and artifact paths.  It also holds the shared data types
# passed between the other sub-modules.
#
# All other BSAE sub-modules import their defaults exclusively from here.
# Never define simulation or synth constants outside this module.
#
# Sub-modules:
#   constants.py  - configuration constants
#   models.py     - Note, BallState, FrameRecord, BounceEvent, params tuples
# =============================================================================
