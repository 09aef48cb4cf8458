"""Tests for frame-indexed preview and trace replay."""

import math

import pytest

from BSAE.SMM.constants import SPIRAL_START_RADIUS, SPIRAL_END_RADIUS
from BSAE.PSM.simulator import SimulationContext, simulate
from BSAE.SGM.wav_export import write_trace
from BSAE.SViz.preview_driver import PreviewDriver, TraceReplay, spiral_position


@pytest.fixture
def reference(pool):
    return simulate(pool, 600)


def test_forward_playback_matches_run(pool, reference):
    driver = PreviewDriver(SimulationContext(pool))
    assert [driver.frame_at(i) for i in range(600)] == reference.frames
    assert driver.resets == 0
    assert driver.events == reference.events[:len(driver.events)]


def test_seek_back_resets_explicitly(pool, reference):
    driver = PreviewDriver(SimulationContext(pool))
    driver.frame_at(400)
    assert driver.frame_at(0) == reference.frames[0]
    assert driver.resets == 1
    assert driver.frame_at(250) == reference.frames[250]
    assert driver.resets == 1


def test_same_frame_twice_does_not_step(pool):
    driver = PreviewDriver(SimulationContext(pool))
    first = driver.frame_at(100)
    steps = driver.context.frame_index
    assert driver.frame_at(100) == first
    assert driver.context.frame_index == steps


def test_skip_ahead(pool, reference):
    driver = PreviewDriver(SimulationContext(pool))
    assert driver.frame_at(599) == reference.frames[599]


def test_events_at_bounce_frame(pool, reference):
    driver = PreviewDriver(SimulationContext(pool))
    first = reference.events[0]
    assert driver.events_at(first.frame_index) == [first]
    assert driver.events_at(first.frame_index + 1) == []


def test_negative_frame_rejected(pool):
    with pytest.raises(ValueError):
        PreviewDriver(SimulationContext(pool)).frame_at(-1)


def test_trace_replay_from_file(tmp_path, reference):
    path = tmp_path / "simulation-data.json"
    write_trace(str(path), reference.frames)
    replay = TraceReplay.from_file(str(path))
    assert len(replay) == 600
    assert replay.frame_at(123) == reference.frames[123]
    assert replay.frame_at(10_000) == reference.frames[-1]


def test_trace_replay_rejects_empty():
    with pytest.raises(ValueError):
        TraceReplay([])


def test_spiral_endpoints():
    x0, y0 = spiral_position(0.0, 0.0, 0.0)
    assert math.hypot(x0, y0) == pytest.approx(SPIRAL_START_RADIUS)
    # angle offset pi: -cos(pi) * r = +r
    assert x0 == pytest.approx(SPIRAL_START_RADIUS)
    x1, y1 = spiral_position(1.0, 100.0, 200.0)
    assert math.hypot(x1 - 100.0, y1 - 200.0) == pytest.approx(SPIRAL_END_RADIUS)
