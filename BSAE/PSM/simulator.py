# =============================================================================
# simulator.py - Ball-in-circle physics and bounce events
# =============================================================================
#
# One call to step() = one video frame:
#
#   1. Snapshot (x, y, bounce_count) BEFORE integrating.  Frame N of the
#      trace is therefore the position the renderer draws at frame N.
#   2. Semi-implicit Euler with dt = 1 frame:
#        vy += gravity ;  x += vx ;  y += vy
#   3. Effective radius = ball_radius * 2 * (base + bounce_count * factor)
#      (the "growing head": every bounce makes the ball a bit bigger).
#   4. If |ball - center| + effective_radius > circle_radius:
#        n  = (ball - center) / |ball - center|
#        v' = (v - bounciness * (v.n) * n) * damping
#        ball -= overlap * n          (overlap = dist + eff - radius)
#        emit BounceEvent with notes pool[(idx + i) % len(pool)]
#        idx = (idx + stride) % len(pool) ;  bounce_count += 1
#
# DETERMINISM:
#   No randomness and no wall-clock input.  Two contexts built from the same
#   pool and parameters produce identical traces, float for float.
#
# ZERO-DISTANCE CASE:
#   If the ball sits exactly on the center there is no boundary normal.  The
#   frame is treated as "no collision" and a warning is printed; it can only
#   trigger when the effective radius alone exceeds the circle radius.
# =============================================================================

from __future__ import annotations
import math
from typing import NamedTuple, Sequence

from BSAE.SMM.constants import FPS
from BSAE.SMM.models import (
    BallState, BounceEvent, FrameRecord, Note, NoteWindow, PhysicsParams,
)


class CollisionInfo(NamedTuple):
    frame_index:      int
    pre_distance:     float   # |ball - center| before positional correction
    post_distance:    float   # |ball - center| after positional correction
    effective_radius: float
    speed_in:         float
    speed_out:        float


class SimulationResult(NamedTuple):
    frames:       list[FrameRecord]
    events:       list[BounceEvent]
    bounce_count: int


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def reflect(vx: float, vy: float, nx: float, ny: float,
            bounciness: float) -> tuple[float, float]:
    """v' = v - bounciness * (v.n) * n   (n must be unit length)."""
    dot = vx * nx + vy * ny
    return vx - bounciness * dot * nx, vy - bounciness * dot * ny


def sample_notes(pool: Sequence[Note], start: int, count: int) -> tuple[Note, ...]:
    """count consecutive notes from pool starting at start, wrapping around."""
    if not pool:
        return ()
    size = len(pool)
    return tuple(pool[(start + i) % size] for i in range(count))


def advance_note_index(index: int, stride: int, pool_size: int) -> int:
    if pool_size <= 0:
        return 0
    return (index + stride) % pool_size


def effective_radius(params: PhysicsParams, bounce_count: int) -> float:
    scale = params.head_scale_base + bounce_count * params.head_scale_factor
    return params.ball_radius * 2 * scale


# ---------------------------------------------------------------------------
# Simulation context
# ---------------------------------------------------------------------------

class SimulationContext:
    """
    All mutable simulation state for one ball: position/velocity, running
    note index, bounce counter and frame counter.  Nothing lives at module
    level, so single steps can be tested in isolation.

    Usage:
        ctx = SimulationContext(pool)
        result = ctx.run(TOTAL_FRAMES)
        ctx.reset()                       # back to frame 0, same inputs
    """

    def __init__(
        self,
        pool: Sequence[Note],
        params: PhysicsParams = PhysicsParams(),
        window: NoteWindow = NoteWindow(),
        fps: int = FPS,
    ) -> None:
        if fps <= 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        if params.circle_radius <= 0:
            raise ValueError(f"circle_radius must be > 0, got {params.circle_radius}")
        if params.ball_radius < 0:
            raise ValueError(f"ball_radius must be >= 0, got {params.ball_radius}")
        if window.notes_per_bounce < 1:
            raise ValueError(
                f"notes_per_bounce must be >= 1, got {window.notes_per_bounce}"
            )
        if window.stride < 1:
            raise ValueError(f"stride must be >= 1, got {window.stride}")

        self.pool   = tuple(pool)
        self.params = params
        self.window = window
        self.fps    = fps

        self.last_collision: CollisionInfo | None = None
        self.reset()

    # ── State ────────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Restore frame-0 state: ball at the circle center, initial velocity."""
        p = self.params
        self.ball         = BallState(p.center_x, p.center_y, p.initial_vx, p.initial_vy)
        self.note_index   = 0
        self.bounce_count = 0
        self.frame_index  = 0
        self.last_collision = None

    def effective_radius(self) -> float:
        return effective_radius(self.params, self.bounce_count)

    def snapshot(self) -> FrameRecord:
        return FrameRecord(self.ball.x, self.ball.y, self.bounce_count)

    # ── Stepping ─────────────────────────────────────────────────────────────

    def step(self) -> tuple[FrameRecord, BounceEvent | None]:
        """
        Advance one frame.

        Returns:
            (record, event) - record is the pre-integration snapshot for this
            frame; event is the BounceEvent emitted this frame, or None.
        """
        p     = self.params
        ball  = self.ball
        frame = self.frame_index

        record = self.snapshot()
        eff    = self.effective_radius()

        ball.vy += p.gravity
        ball.x  += ball.vx
        ball.y  += ball.vy

        event = None
        dx   = ball.x - p.center_x
        dy   = ball.y - p.center_y
        dist = math.sqrt(dx * dx + dy * dy)

        if dist + eff > p.circle_radius:
            if dist == 0.0:
                print(f"  [!!] frame {frame}: ball on circle center, "
                      f"no collision normal; skipping bounce")
            else:
                event = self._collide(frame, dx, dy, dist, eff)

        self.frame_index += 1
        return record, event

    def _collide(self, frame: int, dx: float, dy: float,
                 dist: float, eff: float) -> BounceEvent | None:
        p    = self.params
        ball = self.ball

        nx = dx / dist
        ny = dy / dist
        speed_in = ball.speed()

        ball.vx, ball.vy = reflect(ball.vx, ball.vy, nx, ny, p.bounciness)
        ball.vx *= p.damping
        ball.vy *= p.damping

        overlap = dist + eff - p.circle_radius
        ball.x -= overlap * nx
        ball.y -= overlap * ny

        self.last_collision = CollisionInfo(
            frame_index=frame,
            pre_distance=dist,
            post_distance=math.hypot(ball.x - p.center_x, ball.y - p.center_y),
            effective_radius=eff,
            speed_in=speed_in,
            speed_out=ball.speed(),
        )

        event = None
        if self.pool:
            event = BounceEvent(
                frame_index=frame,
                time_seconds=frame / self.fps,
                notes=sample_notes(self.pool, self.note_index, self.window.notes_per_bounce),
            )
            self.note_index = advance_note_index(
                self.note_index, self.window.stride, len(self.pool)
            )
        self.bounce_count += 1
        return event

    def run(self, total_frames: int) -> SimulationResult:
        """Step total_frames times from the current state."""
        if total_frames < 0:
            raise ValueError(f"total_frames must be >= 0, got {total_frames}")

        frames: list[FrameRecord] = []
        events: list[BounceEvent] = []
        for _ in range(total_frames):
            record, event = self.step()
            frames.append(record)
            if event is not None:
                events.append(event)
        return SimulationResult(frames, events, self.bounce_count)


def simulate(
    pool: Sequence[Note],
    total_frames: int,
    params: PhysicsParams = PhysicsParams(),
    window: NoteWindow = NoteWindow(),
    fps: int = FPS,
) -> SimulationResult:
    """Fresh context, run total_frames frames."""
    return SimulationContext(pool, params, window, fps).run(total_frames)
