# =============================================================================
# BSAE/SVM/__init__.py - Simulation Verification Module
# =============================================================================
#
# The SVM contains the checks that a trace and its bounce events are
# internally consistent before the artifacts are handed to rendering.
#
# Sub-modules:
#   trace_check.py - trace / bounce-event invariant checks (importable)
#   validate.py    - self-validation suite for the whole BSAE stack
#                    (python -m BSAE.SVM.validate)
# =============================================================================
