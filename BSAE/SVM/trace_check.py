# =============================================================================
# trace_check.py - Trace / BounceEvent consistency checks
# =============================================================================
#
# The renderer trusts the trace blindly, so these are the properties it relies
# on:
#
#   - exactly one record per frame
#   - frame 0 starts with bounce_count = 0
#   - bounce_count never decreases and steps by exactly 1 on the frame AFTER
#     each bounce event (records are pre-integration snapshots)
#   - event frames strictly increase and event times equal frame / fps
#   - every event carries the same number of notes
#
# The bounce_count check assumes a non-empty note pool; with an empty pool the
# simulator still counts bounces but emits no events.
# =============================================================================

from __future__ import annotations
import math
from typing import NamedTuple, Sequence

from BSAE.SMM.constants import FPS
from BSAE.SMM.models import BounceEvent, FrameRecord


class TraceIssue(NamedTuple):
    frame_index: int      # -1 for whole-trace problems
    reason:      str


def bounce_frames(frames: Sequence[FrameRecord]) -> list[int]:
    """Frames whose step produced a bounce, recovered from the trace alone."""
    return [
        i for i in range(len(frames) - 1)
        if frames[i + 1].bounce_count > frames[i].bounce_count
    ]


def note_cycle_period(pool_size: int, stride: int) -> int:
    """Bounces until the running note index returns to its start value."""
    if pool_size <= 0:
        return 0
    return pool_size // math.gcd(pool_size, stride)


def check_trace(
    frames: Sequence[FrameRecord],
    events: Sequence[BounceEvent],
    total_frames: int | None = None,
    fps: int = FPS,
    notes_per_bounce: int | None = None,
) -> list[TraceIssue]:
    """
    Return every invariant violation found; an empty list means the trace
    and events are consistent.
    """
    issues: list[TraceIssue] = []

    if total_frames is not None and len(frames) != total_frames:
        issues.append(TraceIssue(-1, f"expected {total_frames} records, got {len(frames)}"))

    if frames and frames[0].bounce_count != 0:
        issues.append(TraceIssue(0, f"trace starts at bounce_count={frames[0].bounce_count}"))

    # ── Events ───────────────────────────────────────────────────────────────
    event_frames = set()
    prev = -1
    for ev in events:
        if ev.frame_index <= prev:
            issues.append(TraceIssue(ev.frame_index,
                                     f"event frame not increasing (previous {prev})"))
        prev = ev.frame_index
        event_frames.add(ev.frame_index)

        if not math.isclose(ev.time_seconds, ev.frame_index / fps, abs_tol=1e-12):
            issues.append(TraceIssue(ev.frame_index,
                                     f"event time {ev.time_seconds} != frame / fps"))
        if notes_per_bounce is not None and len(ev.notes) != notes_per_bounce:
            issues.append(TraceIssue(ev.frame_index,
                                     f"{len(ev.notes)} notes, expected {notes_per_bounce}"))

    # ── Bounce counter ───────────────────────────────────────────────────────
    for i in range(1, len(frames)):
        delta = frames[i].bounce_count - frames[i - 1].bounce_count
        expected = 1 if (i - 1) in event_frames else 0
        if delta != expected:
            issues.append(TraceIssue(i, f"bounce_count step {delta}, expected {expected}"))

    return issues
