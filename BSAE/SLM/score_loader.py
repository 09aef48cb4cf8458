# =============================================================================
# score_loader.py - Score JSON → Note pool
# =============================================================================
#
# Expected input (MIDI-to-JSON export, one entry per note):
#
#   {
#     "tracks": [
#       {"notes": [
#         {"name": "C4", "midi": 60, "time": 23.41, "velocity": 0.71,
#          "duration": 0.52},
#         ...
#       ]},
#       ...
#     ]
#   }
#
# Only the fields above are read; anything else in the file is ignored.
# Any structural problem raises ScoreError - the precompute step aborts rather
# than rendering a video against a half-parsed score.
# =============================================================================

from __future__ import annotations
import json
import math
import os

from BSAE.SMM.constants import SCORE_TRACK
from BSAE.SMM.models import Note, NoteWindow


class ScoreError(ValueError):
    """The score file is missing required structure or holds bad values."""


def _number(raw: dict, key: str, where: str) -> float:
    if key not in raw:
        raise ScoreError(f"{where}: missing field {key!r}")
    value = raw[key]
    # bool is an int subclass; a True velocity is a broken export, not 1.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ScoreError(f"{where}: field {key!r} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ScoreError(f"{where}: field {key!r} is not finite ({value!r})")
    return float(value)


def parse_note(raw: dict, where: str = "note") -> Note:
    """Convert one score note dict into a Note."""
    if not isinstance(raw, dict):
        raise ScoreError(f"{where}: expected an object, got {type(raw).__name__}")

    midi = _number(raw, "midi", where)
    if midi != int(midi):
        raise ScoreError(f"{where}: midi must be a whole number, got {midi!r}")
    duration = _number(raw, "duration", where)
    if duration < 0:
        raise ScoreError(f"{where}: duration must be >= 0, got {duration!r}")

    return Note(
        pitch=int(midi),
        onset_time=_number(raw, "time", where),
        velocity=_number(raw, "velocity", where),
        duration=duration,
        name=str(raw.get("name", "")),
    )


def parse_score(data: dict, track_index: int = SCORE_TRACK) -> list[Note]:
    """
    Extract the notes of one track from a decoded score document.

    Args:
        data:        Decoded JSON document.
        track_index: Which entry of data["tracks"] to read.

    Returns:
        list[Note] in file order.

    Raises:
        ScoreError if the document does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise ScoreError(f"score root must be an object, got {type(data).__name__}")
    tracks = data.get("tracks")
    if not isinstance(tracks, list) or not tracks:
        raise ScoreError("score has no 'tracks' list")
    if not 0 <= track_index < len(tracks):
        raise ScoreError(
            f"track {track_index} out of range (score has {len(tracks)} tracks)"
        )

    track = tracks[track_index]
    raw_notes = track.get("notes") if isinstance(track, dict) else None
    if not isinstance(raw_notes, list):
        raise ScoreError(f"track {track_index} has no 'notes' list")

    return [
        parse_note(raw, where=f"tracks[{track_index}].notes[{i}]")
        for i, raw in enumerate(raw_notes)
    ]


def build_note_pool(notes: list[Note], start_offset: float, pool_size: int) -> list[Note]:
    """
    Keep notes with onset_time >= start_offset, then the first pool_size of
    those.  File order is preserved (the score is not re-sorted).
    """
    if pool_size < 0:
        raise ValueError(f"pool_size must be >= 0, got {pool_size}")
    kept = [n for n in notes if n.onset_time >= start_offset]
    return kept[:pool_size]


def load_score(path: str, track_index: int = SCORE_TRACK) -> list[Note]:
    """Read and parse a score file.  OSError propagates for missing files."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ScoreError(f"{os.path.basename(path)}: invalid JSON ({exc})") from exc
    return parse_score(data, track_index)


def load_note_pool(
    path: str,
    window: NoteWindow = NoteWindow(),
    track_index: int = SCORE_TRACK,
) -> list[Note]:
    """load_score + build_note_pool with the configured note window."""
    notes = load_score(path, track_index)
    return build_note_pool(notes, window.start_offset, window.pool_size)
