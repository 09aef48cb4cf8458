"""Tests for the ball-in-circle simulation context."""

import math

import pytest

from BSAE.SMM.constants import CIRCLE_CENTER_X, CIRCLE_CENTER_Y
from BSAE.SMM.models import Note, NoteWindow, PhysicsParams
from BSAE.PSM.simulator import (
    SimulationContext,
    advance_note_index,
    effective_radius,
    reflect,
    sample_notes,
    simulate,
)
from conftest import make_pool


# ─────────────────────────────────────────────────────────────────────────────
# Pure helpers
# ─────────────────────────────────────────────────────────────────────────────


def test_reflect_elastic_preserves_speed():
    n = (math.cos(0.7), math.sin(0.7))
    vx, vy = reflect(3.0, -4.0, n[0], n[1], 2.0)
    assert math.hypot(vx, vy) == pytest.approx(5.0, abs=1e-12)


def test_reflect_head_on_reverses():
    assert reflect(0.0, 5.0, 0.0, 1.0, 2.0) == (0.0, -5.0)


def test_reflect_bounciness_one_kills_normal_component():
    vx, vy = reflect(2.0, 5.0, 0.0, 1.0, 1.0)
    assert (vx, vy) == (2.0, 0.0)


def test_sample_notes_wraps(pool):
    notes = sample_notes(pool, 298, 5)
    assert notes == (pool[298], pool[299], pool[0], pool[1], pool[2])


def test_sample_notes_small_pool_repeats():
    pool = make_pool(2)
    assert sample_notes(pool, 1, 5) == (pool[1], pool[0], pool[1], pool[0], pool[1])


def test_sample_notes_empty_pool():
    assert sample_notes([], 0, 5) == ()


def test_advance_note_index_periodic():
    idx = 0
    for _ in range(60):
        idx = advance_note_index(idx, 5, 300)
    assert idx == 0


def test_effective_radius_grows_per_bounce():
    p = PhysicsParams()
    assert effective_radius(p, 0) == pytest.approx(25 * 2 * 1.2)
    assert effective_radius(p, 3) == pytest.approx(25 * 2 * (1.2 + 3 * 0.111))


# ─────────────────────────────────────────────────────────────────────────────
# Single steps
# ─────────────────────────────────────────────────────────────────────────────


def test_initial_state_is_circle_center(pool):
    ctx = SimulationContext(pool)
    assert (ctx.ball.x, ctx.ball.y) == (CIRCLE_CENTER_X, CIRCLE_CENTER_Y)
    assert (ctx.ball.vx, ctx.ball.vy) == (10.0, 12.0)
    assert ctx.bounce_count == 0 and ctx.note_index == 0 and ctx.frame_index == 0


def test_step_records_pre_integration_position(pool):
    ctx = SimulationContext(pool)
    record, event = ctx.step()
    assert (record.x, record.y, record.bounce_count) == (540.0, 960.0, 0)
    assert event is None
    # vy += g first, then position += velocity
    assert ctx.ball.vy == pytest.approx(12.2)
    assert ctx.ball.x == pytest.approx(550.0)
    assert ctx.ball.y == pytest.approx(972.2)
    assert ctx.frame_index == 1


def test_step_collision_on_boundary():
    params = PhysicsParams(gravity=0.0, initial_vx=0.0, initial_vy=100.0,
                           ball_radius=10.0, circle_radius=150.0,
                           center_x=0.0, center_y=0.0,
                           head_scale_base=1.0, head_scale_factor=0.0)
    ctx = SimulationContext(make_pool(10), params, NoteWindow(notes_per_bounce=2, stride=3))
    ctx.step()                     # y = 100, eff = 20: no contact
    record, event = ctx.step()     # y = 200 -> 200 + 20 > 150
    assert record.y == pytest.approx(100.0)
    assert event is not None
    assert event.frame_index == 1
    assert ctx.ball.vy == pytest.approx(-100.0)
    assert ctx.ball.y == pytest.approx(130.0)          # pushed back by overlap 70
    assert ctx.bounce_count == 1
    assert ctx.note_index == 3


def test_zero_distance_is_not_a_collision(capsys):
    params = PhysicsParams(gravity=0.0, initial_vx=0.0, initial_vy=0.0,
                           ball_radius=100.0, circle_radius=50.0,
                           center_x=0.0, center_y=0.0)
    ctx = SimulationContext(make_pool(5), params)
    record, event = ctx.step()
    assert event is None
    assert ctx.bounce_count == 0
    assert all(math.isfinite(v) for v in (ctx.ball.x, ctx.ball.y, ctx.ball.vx, ctx.ball.vy))
    assert "no collision normal" in capsys.readouterr().out


def test_damping_scales_outgoing_speed():
    params = PhysicsParams(gravity=0.0, initial_vx=0.0, initial_vy=100.0,
                           ball_radius=10.0, circle_radius=150.0,
                           center_x=0.0, center_y=0.0, damping=0.98,
                           head_scale_base=1.0, head_scale_factor=0.0)
    ctx = SimulationContext(make_pool(5), params)
    ctx.run(2)
    c = ctx.last_collision
    assert c.speed_out == pytest.approx(c.speed_in * 0.98)


def test_empty_pool_counts_bounces_without_events():
    result = simulate([], 600)
    assert result.events == []
    assert result.bounce_count > 0
    assert result.frames[-1].bounce_count <= result.bounce_count


@pytest.mark.parametrize(
    "kwargs",
    [
        {"fps": 0},
        {"params": PhysicsParams(circle_radius=0.0)},
        {"params": PhysicsParams(ball_radius=-1.0)},
        {"window": NoteWindow(notes_per_bounce=0)},
        {"window": NoteWindow(stride=0)},
    ],
)
def test_invalid_configuration_rejected(pool, kwargs):
    with pytest.raises(ValueError):
        SimulationContext(pool, **kwargs)


def test_negative_frame_count_rejected(pool):
    with pytest.raises(ValueError):
        SimulationContext(pool).run(-1)


# ─────────────────────────────────────────────────────────────────────────────
# Full runs
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.parametrize("n", [0, 1, 23, 600, 1800])
def test_trace_length_matches_frame_count(pool, n):
    assert len(simulate(pool, n).frames) == n


def test_first_bounce_frame_and_notes(pool):
    result = simulate(pool, 1800)
    first = result.events[0]
    assert first.frame_index == 22
    assert first.time_seconds == pytest.approx(22 / 60)
    assert first.notes == tuple(pool[0:5])
    assert result.events[1].notes == tuple(pool[5:10])
    assert result.frames[22].bounce_count == 0
    assert result.frames[23].bounce_count == 1


def test_bounce_count_steps_at_event_frames(pool):
    result = simulate(pool, 1800)
    event_frames = {e.frame_index for e in result.events}
    for i in range(1, len(result.frames)):
        step = result.frames[i].bounce_count - result.frames[i - 1].bounce_count
        assert step == (1 if i - 1 in event_frames else 0)


def test_event_frames_strictly_increasing(pool):
    frames = [e.frame_index for e in simulate(pool, 1800).events]
    assert all(a < b for a, b in zip(frames, frames[1:]))


def test_collision_geometry_every_bounce(pool):
    ctx = SimulationContext(pool)
    R = ctx.params.circle_radius
    collisions = 0
    for _ in range(1800):
        _, event = ctx.step()
        if event is None:
            continue
        c = ctx.last_collision
        collisions += 1
        assert c.pre_distance + c.effective_radius >= R
        if c.effective_radius < R:
            assert c.post_distance + c.effective_radius <= R + 1e-9
        assert c.speed_out == pytest.approx(c.speed_in, rel=1e-12)
    assert collisions > 0


def test_reset_reproduces_run(pool):
    ctx = SimulationContext(pool)
    first = ctx.run(900)
    ctx.reset()
    second = ctx.run(900)
    assert first == second


def test_note_index_period(pool):
    ctx = SimulationContext(pool)
    bounces = 0
    while bounces < 60:
        _, event = ctx.step()
        if event is not None:
            bounces += 1
            if bounces < 60:
                assert ctx.note_index != 0
    assert ctx.note_index == 0


def test_deterministic_across_contexts(pool):
    assert simulate(pool, 1800) == simulate(list(pool), 1800)


def test_pool_with_single_note():
    pool = [Note(60, 23.0, 1.0, 0.5)]
    result = simulate(pool, 300)
    assert all(e.notes == (pool[0],) * 5 for e in result.events)
