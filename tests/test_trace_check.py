"""Tests for trace / bounce-event invariant checks."""

from BSAE.SMM.models import BounceEvent, FrameRecord, Note
from BSAE.PSM.simulator import simulate
from BSAE.SVM.trace_check import bounce_frames, check_trace, note_cycle_period

NOTE = Note(60, 23.0, 1.0, 0.5)


def _frames(counts):
    return [FrameRecord(float(i), 0.0, c) for i, c in enumerate(counts)]


def test_simulated_trace_is_clean(pool):
    result = simulate(pool, 1800)
    assert check_trace(result.frames, result.events, 1800, notes_per_bounce=5) == []


def test_bounce_frames_recovered_from_trace(pool):
    result = simulate(pool, 1800)
    expected = [e.frame_index for e in result.events if e.frame_index < 1799]
    assert bounce_frames(result.frames) == expected


def test_wrong_length_reported():
    issues = check_trace(_frames([0, 0]), [], total_frames=3)
    assert issues[0].frame_index == -1


def test_nonzero_start_reported():
    issues = check_trace(_frames([1, 1]), [])
    assert any(i.frame_index == 0 for i in issues)


def test_count_jump_without_event_reported():
    issues = check_trace(_frames([0, 0, 1, 1]), [])
    assert [i.frame_index for i in issues] == [2]


def test_event_without_count_step_reported():
    events = [BounceEvent(1, 1 / 60, (NOTE,))]
    issues = check_trace(_frames([0, 0, 0]), events)
    assert [i.frame_index for i in issues] == [2]


def test_non_increasing_event_frames_reported():
    events = [BounceEvent(1, 1 / 60, (NOTE,)), BounceEvent(1, 1 / 60, (NOTE,))]
    issues = check_trace(_frames([0, 0, 1]), events)
    assert any("not increasing" in i.reason for i in issues)


def test_event_time_mismatch_reported():
    events = [BounceEvent(1, 0.5, (NOTE,))]
    issues = check_trace(_frames([0, 0, 1]), events)
    assert any("frame / fps" in i.reason for i in issues)


def test_note_count_mismatch_reported():
    events = [BounceEvent(1, 1 / 60, (NOTE, NOTE))]
    issues = check_trace(_frames([0, 0, 1]), events, notes_per_bounce=5)
    assert any("expected 5" in i.reason for i in issues)


def test_note_cycle_period():
    assert note_cycle_period(300, 5) == 60
    assert note_cycle_period(300, 7) == 300
    assert note_cycle_period(10, 4) == 5
    assert note_cycle_period(0, 5) == 0
