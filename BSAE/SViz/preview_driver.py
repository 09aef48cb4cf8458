# =============================================================================
# preview_driver.py - Frame-indexed simulation access
# =============================================================================
#
# Seeking rules for PreviewDriver.frame_at(n):
#   n == current frame  → cached record, no stepping
#   n >  current frame  → step forward until frame n is recorded
#   n <  current frame  → context.reset(), then step forward from frame 0
#
# The reset is an explicit call made here, by the driver.  The context itself
# never looks at frame numbers to decide when to restart.
# =============================================================================

from __future__ import annotations
import math
from typing import Sequence

from BSAE.SMM.constants import (
    SPIRAL_TURNS, SPIRAL_START_RADIUS, SPIRAL_END_RADIUS, SPIRAL_ANGLE_OFFSET,
)
from BSAE.SMM.models import BounceEvent, FrameRecord
from BSAE.PSM.simulator import SimulationContext
from BSAE.SGM.wav_export import read_trace


class PreviewDriver:
    """
    Live, stateful replay of a SimulationContext.

    Usage:
        driver = PreviewDriver(SimulationContext(pool))
        rec = driver.frame_at(120)
        rec = driver.frame_at(0)      # seeks back: context.reset() + replay
    """

    def __init__(self, context: SimulationContext) -> None:
        self.context = context
        self.resets  = 0
        # Bounce events produced since the last reset, in frame order
        self.events: list[BounceEvent] = []
        self._current: tuple[int, FrameRecord] | None = None
        context.reset()

    def reset(self) -> None:
        self.context.reset()
        self.events = []
        self._current = None
        self.resets += 1

    def frame_at(self, frame: int) -> FrameRecord:
        if frame < 0:
            raise ValueError(f"frame must be >= 0, got {frame}")

        if self._current is not None:
            index, record = self._current
            if frame == index:
                return record
            if frame < index:
                self.reset()

        ctx = self.context
        record = None
        while ctx.frame_index <= frame:
            record, event = ctx.step()
            if event is not None:
                self.events.append(event)
        self._current = (frame, record)
        return record

    def events_at(self, frame: int) -> list[BounceEvent]:
        """Bounce events emitted on exactly this frame (0 or 1 of them)."""
        self.frame_at(frame)
        return [ev for ev in self.events if ev.frame_index == frame]


class TraceReplay:
    """Read-only lookup into a precomputed trace."""

    def __init__(self, frames: Sequence[FrameRecord]) -> None:
        if not frames:
            raise ValueError("trace is empty")
        self.frames = list(frames)

    @classmethod
    def from_file(cls, path: str) -> "TraceReplay":
        return cls(read_trace(path))

    def __len__(self) -> int:
        return len(self.frames)

    def frame_at(self, frame: int) -> FrameRecord:
        """Record for frame; frames past the end hold the last position."""
        if frame < 0:
            raise ValueError(f"frame must be >= 0, got {frame}")
        return self.frames[min(frame, len(self.frames) - 1)]


def spiral_position(t: float, center_x: float, center_y: float) -> tuple[float, float]:
    """
    Point on the spiral guide drawn behind the ball.

    t runs 0 → 1 from the inner end (SPIRAL_START_RADIUS) to the outer end
    (SPIRAL_END_RADIUS) over SPIRAL_TURNS revolutions.
    """
    angle  = SPIRAL_TURNS * 2 * math.pi * t + SPIRAL_ANGLE_OFFSET
    radius = SPIRAL_START_RADIUS + (SPIRAL_END_RADIUS - SPIRAL_START_RADIUS) * t
    return center_x - math.cos(angle) * radius, center_y + math.sin(angle) * radius
