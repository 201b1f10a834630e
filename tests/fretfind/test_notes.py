"""Tests for note names, identifiers, and fretted-note resolution."""

from typing import Optional

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretfind.notes import (
    InvalidNoteError,
    Note,
    NoteName,
    resolve,
    subscript_num,
)
from tests.fretfind.hypo import configure_hypo

configure_hypo()


@pytest.mark.parametrize(
    "note_id, expected",
    [
        (0, Note(NoteName.C, -1)),
        (40, Note(NoteName.E, 2)),
        (59, Note(NoteName.B, 3)),
        (60, Note(NoteName.C, 4)),
        (64, Note(NoteName.E, 4)),
        (127, Note(NoteName.G, 9)),
        (-1, None),
        (128, None),
    ],
)
def test_from_identifier(note_id: int, expected: Optional[Note]) -> None:
    assert Note.from_identifier(note_id) == expected


def test_identifier_roundtrip() -> None:
    for note_id in range(128):
        note = Note.from_identifier(note_id)
        assert note is not None
        assert note.identifier() == note_id


def test_resolve_open_string() -> None:
    low_e = Note(NoteName.E, 2)
    assert resolve(low_e, 0) == low_e
    assert resolve(low_e, 5) == Note(NoteName.A, 2)
    assert resolve(low_e, 12) == Note(NoteName.E, 3)


def test_resolve_octave_rollover() -> None:
    assert resolve(Note(NoteName.B, 3), 1) == Note(NoteName.C, 4)
    assert resolve(Note(NoteName.G, 3), 16) == Note(NoteName.B, 4)


def test_resolve_invalid() -> None:
    with pytest.raises(InvalidNoteError):
        resolve(Note(NoteName.E, 2), -1)
    with pytest.raises(InvalidNoteError) as info:
        resolve(Note(NoteName.G, 9), 1)
    assert info.value.note_id == 128


@given(st.integers(min_value=0, max_value=126), st.integers(min_value=0))
def test_resolve_monotonic(note_id: int, fret: int) -> None:
    fret = fret % (127 - note_id)
    open_note = Note.from_identifier(note_id)
    assert open_note is not None
    lower = resolve(open_note, fret)
    upper = resolve(open_note, fret + 1)
    assert upper.identifier() == lower.identifier() + 1
    assert upper.name == lower.name.add_steps(1)
    if upper.name == NoteName.C:
        assert upper.octave == lower.octave + 1
    else:
        assert upper.octave == lower.octave


@pytest.mark.parametrize(
    "text, expected",
    [
        ("C", NoteName.C),
        ("c", NoteName.C),
        ("C#", NoteName.Db),
        ("Db", NoteName.Db),
        ("bb", NoteName.Bb),
        ("Cb", NoteName.B),
        ("E#", NoteName.F),
        ("", None),
        ("H", None),
        ("C##", None),
        ("Cx", None),
    ],
)
def test_note_name_from_text(text: str, expected: Optional[NoteName]) -> None:
    assert NoteName.from_text(text) == expected


def test_note_name_add_steps() -> None:
    assert NoteName.B.add_steps(1) == NoteName.C
    assert NoteName.C.add_steps(-1) == NoteName.B
    assert NoteName.E.add_steps(24) == NoteName.E


@pytest.mark.parametrize(
    "text, expected",
    [
        ("E2", Note(NoteName.E, 2)),
        ("F#3", Note(NoteName.Gb, 3)),
        ("Bb-1", Note(NoteName.Bb, -1)),
        ("E", None),
        ("E-", None),
        ("X4", None),
    ],
)
def test_note_parse(text: str, expected: Optional[Note]) -> None:
    assert Note.parse(text) == expected


def test_note_display() -> None:
    assert Note(NoteName.Db, 4).display() == "C#₄"
    assert str(Note(NoteName.E, 2)) == "E2"
    assert subscript_num(12) == "₁₂"
