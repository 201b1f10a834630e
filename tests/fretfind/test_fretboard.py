"""Tests for fretboard generation, fret labels, and chord membership."""

from typing import Optional

import pytest

from fretfind.fretboard import (
    Fretboard,
    Orientation,
    StringPos,
    fret_label,
    is_enabled,
    orientation_for,
)
from fretfind.notes import Note, NoteName
from fretfind.tuning import STANDARD_TUNING, TUNING_LOOKUP, Tuning

C_MAJOR = frozenset([NoteName.C, NoteName.E, NoteName.G])


def _standard(max_fret: int = 17) -> Fretboard:
    return Fretboard.generate(STANDARD_TUNING.display_order(), max_fret)


def test_generate_size() -> None:
    fretboard = _standard()
    assert fretboard.num_strings == 6
    assert fretboard.max_fret == 17
    assert len(fretboard) == 6 * 17
    cells = list(fretboard)
    assert len(cells) == 6 * 17
    assert all(cell.resolved for cell in cells)


def test_generate_row_major() -> None:
    positions = [cell.pos for cell in _standard(3)]
    assert positions[:4] == [
        StringPos(0, 0),
        StringPos(0, 1),
        StringPos(0, 2),
        StringPos(1, 0),
    ]


@pytest.mark.parametrize(
    "pos, expected",
    [
        (StringPos(0, 0), Note(NoteName.E, 4)),
        (StringPos(1, 1), Note(NoteName.C, 4)),
        (StringPos(5, 0), Note(NoteName.E, 2)),
        (StringPos(5, 5), Note(NoteName.A, 2)),
        (StringPos(5, 12), Note(NoteName.E, 3)),
        (StringPos(2, 16), Note(NoteName.B, 4)),
    ],
)
def test_cell_notes(pos: StringPos, expected: Note) -> None:
    cell = _standard().cell(pos)
    assert cell is not None
    assert cell.note == expected


@pytest.mark.parametrize(
    "pos", [StringPos(-1, 0), StringPos(6, 0), StringPos(0, -1), StringPos(0, 17)]
)
def test_cell_off_board(pos: StringPos) -> None:
    assert _standard().cell(pos) is None


def test_unresolvable_cells() -> None:
    # G9 is the highest MIDI note, so frets above it do not resolve
    tuning = Tuning("High", (Note(NoteName.E, 9), Note(NoteName.G, 9)))
    fretboard = Fretboard.generate(tuning, 6)
    assert len(list(fretboard)) == 12
    high_e = [cell.note for cell in fretboard.rows(Orientation.Horizontal)[0]]
    assert high_e[:4] == [
        Note(NoteName.E, 9),
        Note(NoteName.F, 9),
        Note(NoteName.Gb, 9),
        Note(NoteName.G, 9),
    ]
    assert high_e[4:] == [None, None]
    cell = fretboard.cell(StringPos(1, 1))
    assert cell is not None
    assert not cell.resolved
    assert not cell.is_enabled(frozenset())


def test_generate_empty_and_invalid() -> None:
    assert len(list(_standard(0))) == 0
    with pytest.raises(ValueError):
        _standard(-1)


@pytest.mark.parametrize(
    "fret, expected",
    [
        (0, "Open"),
        (1, None),
        (3, "3"),
        (4, None),
        (5, "5"),
        (7, "7"),
        (9, "9"),
        (12, "12"),
        (15, "15"),
        (17, "17"),
        (19, "19"),
        (21, "21"),
        (22, None),
    ],
)
def test_fret_label(fret: int, expected: Optional[str]) -> None:
    assert fret_label(fret) == expected


def test_labels_cover_every_fret() -> None:
    labels = _standard().labels()
    assert len(labels) == 17
    assert labels[0] == "Open"
    assert [i for i, label in enumerate(labels) if label is not None] == [
        0,
        3,
        5,
        7,
        9,
        12,
        15,
    ]


def test_is_enabled_without_chord() -> None:
    for cell in _standard():
        assert cell.note is not None
        assert is_enabled(cell.note, frozenset())
        assert cell.is_enabled(frozenset())


def test_is_enabled_with_chord() -> None:
    enabled = 0
    for cell in _standard():
        assert cell.note is not None
        expected = cell.note.name in C_MAJOR
        assert is_enabled(cell.note, C_MAJOR) == expected
        assert cell.is_enabled(C_MAJOR) == expected
        enabled += int(expected)
    assert enabled > 0


def test_rows_horizontal() -> None:
    rows = _standard().rows(Orientation.Horizontal)
    assert len(rows) == 6
    assert all(len(row) == 17 for row in rows)
    assert [cell.pos for cell in rows[2][:2]] == [StringPos(2, 0), StringPos(2, 1)]


def test_rows_vertical() -> None:
    rows = _standard().rows(Orientation.Vertical)
    assert len(rows) == 17
    assert all(len(row) == 6 for row in rows)
    # Strings run in reverse order across each fret row
    assert [cell.pos for cell in rows[3]] == [
        StringPos(str_index, 3) for str_index in range(5, -1, -1)
    ]


@pytest.mark.parametrize(
    "width, height, expected",
    [
        (800, 600, Orientation.Horizontal),
        (500, 500, Orientation.Horizontal),
        (600, 800, Orientation.Vertical),
    ],
)
def test_orientation_for(width: float, height: float, expected: Orientation) -> None:
    assert orientation_for(width, height) == expected


def test_tuning_presets() -> None:
    assert STANDARD_TUNING.num_strings == 6
    assert [n.identifier() for n in STANDARD_TUNING.notes] == [40, 45, 50, 55, 59, 64]
    assert TUNING_LOOKUP["Drop D"].notes[0] == Note(NoteName.D, 2)
    assert TUNING_LOOKUP["Bass"].num_strings == 4
    assert STANDARD_TUNING.display_order().notes[0] == Note(NoteName.E, 4)


def test_tuning_from_names_invalid() -> None:
    with pytest.raises(ValueError):
        Tuning.from_names("Bad", "E2 X9")
    with pytest.raises(ValueError):
        Tuning.from_names("Empty", "")


def test_fretboard_keeps_tuning() -> None:
    tuning = STANDARD_TUNING.display_order()
    fretboard = Fretboard.generate(tuning, 5)
    assert fretboard.tuning == tuning
    assert fretboard.tuning.notes[0] == Note(NoteName.E, 4)
