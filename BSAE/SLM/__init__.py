# =============================================================================
# SLM - Score Loading Module
# =============================================================================
#
# Reads the piano score JSON and cuts it down to the note pool the simulator
# samples from.
#
# Modules:
#   score_loader.py - parse_score / build_note_pool / load_note_pool
# =============================================================================
