# =============================================================================
# constants.py - SMM Configuration Constants
# =============================================================================
#
# Compile-time configuration for the precompute step.  There are no CLI flags
# and no environment variables: change a value here and re-run
# `python -m BSAE.generate`.
#
# The physics constants are tuned against the 1080x1920 canvas.  Changing
# CIRCLE_RADIUS or BALL_RADIUS moves every bounce frame, so the rendered video
# and the audio must always be regenerated together.

# -----------------------------------------------------------------------------
# CANVAS / TIMING
# -----------------------------------------------------------------------------

CANVAS_WIDTH  = 1080            # px - 9:16 vertical short
CANVAS_HEIGHT = 1920            # px
FPS           = 60              # frames per second
DURATION_SECONDS = 30           # s
TOTAL_FRAMES  = DURATION_SECONDS * FPS   # = 1800

# -----------------------------------------------------------------------------
# NOTE WINDOW
# -----------------------------------------------------------------------------
# The pool is the first NOTE_POOL_SIZE notes whose onset is >= SONG_START_TIME.
# Each bounce plays NOTES_PER_BOUNCE consecutive pool notes, then the running
# index advances by NOTE_STRIDE (mod pool size).

SONG_START_TIME  = 23.0         # s - skip the intro of the score
NOTE_POOL_SIZE   = 300
NOTES_PER_BOUNCE = 5
NOTE_STRIDE      = 5
SCORE_TRACK      = 0            # index into score["tracks"]

# -----------------------------------------------------------------------------
# PHYSICS  (units: px and frames; one integration step per frame)
# -----------------------------------------------------------------------------

BALL_INITIAL_VX = 10.0          # px/frame
BALL_INITIAL_VY = 12.0          # px/frame
GRAVITY         = 0.2           # px/frame^2, +y is down
BALL_RADIUS     = 25.0          # px
CIRCLE_RADIUS   = 450.0         # px
CIRCLE_CENTER_X = CANVAS_WIDTH / 2
CIRCLE_CENTER_Y = CANVAS_HEIGHT / 2

# v' = v - BOUNCINESS * (v.n) * n.  2.0 is a perfect mirror reflection.
BOUNCINESS      = 2.0
# Speed multiplier applied after each reflection.  1.0 keeps it elastic.
DAMPING         = 1.0

# Effective collision radius = BALL_RADIUS * 2 * (HEAD_SCALE_BASE
#                              + bounce_count * HEAD_SCALE_FACTOR)
HEAD_SCALE_BASE   = 1.2
HEAD_SCALE_FACTOR = 0.111

# -----------------------------------------------------------------------------
# SYNTH VOICE
# -----------------------------------------------------------------------------

SAMPLE_RATE   = 44_100          # Hz
A4_FREQUENCY  = 440.0           # Hz
A4_MIDI       = 69
SEMITONES_PER_OCTAVE = 12

MASTER_VOLUME = 0.5
OSC1_LEVEL    = 0.7             # fundamental sawtooth
OSC2_LEVEL    = 0.3             # octave-up sawtooth
OSC2_RATIO    = 2.0

# Envelope (three linear segments)
#   [0, ATTACK_SECONDS)                 0    → 1
#   [ATTACK_SECONDS, EARLY_DECAY_FRAC*d) 1   → SUSTAIN_LEVEL
#   [EARLY_DECAY_FRAC*d, d)             SUSTAIN_LEVEL → RELEASE_LEVEL
ATTACK_SECONDS   = 0.01
EARLY_DECAY_FRAC = 0.2
SUSTAIN_LEVEL    = 0.3
RELEASE_LEVEL    = 0.01

CLIP_LIMIT = 1.0

# -----------------------------------------------------------------------------
# SPIRAL GUIDE  (shared with the rendering stage)
# -----------------------------------------------------------------------------

SPIRAL_TURNS        = 3.5
SPIRAL_START_RADIUS = 70.0      # px
SPIRAL_END_RADIUS   = 500.0     # px
SPIRAL_ANGLE_OFFSET = 3.141592653589793   # pi

# -----------------------------------------------------------------------------
# ARTIFACT PATHS  (relative to the working directory)
# -----------------------------------------------------------------------------

SCORE_PATH     = "public/sounds/VisiPiano.json"
AUDIO_OUT_PATH = "public/sounds/generated-audio.wav"
TRACE_OUT_PATH = "src/simulation-data.json"
