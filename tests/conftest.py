"""Shared fixtures: synthetic note pools and score files."""

import json

import pytest

from BSAE.SMM.models import Note


def make_pool(size: int, start: float = 23.0) -> list[Note]:
    return [
        Note(pitch=48 + i % 36, onset_time=start + i * 0.2,
             velocity=0.5 + (i % 5) * 0.1, duration=0.4, name=f"n{i}")
        for i in range(size)
    ]


@pytest.fixture
def pool():
    return make_pool(300)


@pytest.fixture
def score_dict():
    """Score with 10 notes before the 23 s offset and 400 after it."""
    notes = []
    for i in range(410):
        notes.append({
            "name": f"N{i}",
            "midi": 60 + i % 12,
            "time": 20.0 + i * 0.3,
            "velocity": 0.7,
            "duration": 0.25,
        })
    return {"header": {"ppq": 480}, "tracks": [{"name": "Piano", "notes": notes}]}


@pytest.fixture
def score_file(tmp_path, score_dict):
    path = tmp_path / "score.json"
    path.write_text(json.dumps(score_dict))
    return path
