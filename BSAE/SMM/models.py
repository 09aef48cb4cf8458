# =============================================================================
# models.py - Shared data types
# =============================================================================
#
# Immutable records are NamedTuples so they compare by value and unpack
# cleanly.  BallState is the only mutable type: the simulator rewrites it once
# per frame.

from __future__ import annotations
from typing import NamedTuple

from BSAE.SMM.constants import (
    BALL_INITIAL_VX, BALL_INITIAL_VY, GRAVITY,
    BALL_RADIUS, CIRCLE_RADIUS, CIRCLE_CENTER_X, CIRCLE_CENTER_Y,
    BOUNCINESS, DAMPING, HEAD_SCALE_BASE, HEAD_SCALE_FACTOR,
    SONG_START_TIME, NOTE_POOL_SIZE, NOTES_PER_BOUNCE, NOTE_STRIDE,
)


class Note(NamedTuple):
    pitch:      int      # MIDI semitone index (69 = A4)
    onset_time: float    # seconds, relative to the source score
    velocity:   float    # 0..1 gain
    duration:   float    # seconds
    name:       str = ""


class FrameRecord(NamedTuple):
    x:            float
    y:            float
    bounce_count: int

    def to_json(self) -> dict:
        return {"x": self.x, "y": self.y, "bounceCount": self.bounce_count}


class BounceEvent(NamedTuple):
    frame_index:  int
    time_seconds: float
    notes:        tuple[Note, ...]


class PhysicsParams(NamedTuple):
    gravity:           float = GRAVITY
    initial_vx:        float = BALL_INITIAL_VX
    initial_vy:        float = BALL_INITIAL_VY
    ball_radius:       float = BALL_RADIUS
    circle_radius:     float = CIRCLE_RADIUS
    center_x:          float = CIRCLE_CENTER_X
    center_y:          float = CIRCLE_CENTER_Y
    bounciness:        float = BOUNCINESS
    damping:           float = DAMPING
    head_scale_base:   float = HEAD_SCALE_BASE
    head_scale_factor: float = HEAD_SCALE_FACTOR


class NoteWindow(NamedTuple):
    start_offset:     float = SONG_START_TIME
    pool_size:        int   = NOTE_POOL_SIZE
    notes_per_bounce: int   = NOTES_PER_BOUNCE
    stride:           int   = NOTE_STRIDE


class BallState:
    """Position and velocity of the one simulated ball (px, px/frame)."""

    __slots__ = ("x", "y", "vx", "vy")

    def __init__(self, x: float, y: float, vx: float, vy: float) -> None:
        self.x  = x
        self.y  = y
        self.vx = vx
        self.vy = vy

    def speed(self) -> float:
        return (self.vx * self.vx + self.vy * self.vy) ** 0.5

    def __repr__(self) -> str:
        return (f"BallState(x={self.x:.3f}, y={self.y:.3f}, "
                f"vx={self.vx:.3f}, vy={self.vy:.3f})")
