"""Note identifier parsing (scientific pitch notation, e.g. ``c4``, ``f#3``, ``bb2``)."""

from __future__ import annotations

import re

from padsynth.core.exceptions import InvalidNoteError

_NOTE_PATTERN = re.compile(r"^([a-g])([#b]?)(-?\d)$")

_SEMITONES = {"c": 0, "d": 2, "e": 4, "f": 5, "g": 7, "a": 9, "b": 11}
_ACCIDENTALS = {"": 0, "#": 1, "b": -1}


def note_to_midi(note: str) -> int:
    """Convert a note identifier to its MIDI note number (``a4`` -> 69)."""
    if not isinstance(note, str):
        raise InvalidNoteError(note)
    match = _NOTE_PATTERN.match(note.strip().lower())
    if match is None:
        raise InvalidNoteError(note)

    letter, accidental, octave = match.groups()
    midi = (int(octave) + 1) * 12 + _SEMITONES[letter] + _ACCIDENTALS[accidental]
    if not 0 <= midi <= 127:
        raise InvalidNoteError(note)
    return midi


def is_valid_note(note: str) -> bool:
    try:
        note_to_midi(note)
    except InvalidNoteError:
        return False
    return True
