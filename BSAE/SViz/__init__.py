# =============================================================================
# BSAE/SViz/__init__.py - Preview Module
# =============================================================================
#
# Frame-indexed access to the simulation for the rendering stage.
#
# The renderer asks for "frame N" in any order (scrubbing, re-renders,
# parallel chunks).  Two ways to answer:
#   PreviewDriver - steps a live SimulationContext; seeking backwards calls
#                   context.reset() and re-simulates forward
#   TraceReplay   - looks frames up in a precomputed simulation-data.json
#
# Sub-modules:
#   preview_driver.py - PreviewDriver, TraceReplay, spiral_position
# =============================================================================
