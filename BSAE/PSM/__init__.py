# =============================================================================
# PSM - Physics Simulation Module
# =============================================================================
#
# Steps the ball frame by frame inside the bounding circle and records the
# playback trace plus one BounceEvent per boundary collision.
#
# Modules:
#   simulator.py - SimulationContext (reset / step / run), note cycling helpers
#
# All defaults come from BSAE/SMM/constants.py.
# =============================================================================
