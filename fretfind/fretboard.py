"""Fretboard generation and per-cell chord membership.

This module builds the grid of notes for a tuning and a number of frets,
labels the marker frets, and decides which cells a chord enables. The grid
is independent of any chord; only the enabled state changes when the chord
text does.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto, unique
from typing import AbstractSet, Generator, List, Optional

from fretfind import constants
from fretfind.base import MatchException
from fretfind.notes import InvalidNoteError, Note, NoteName, resolve
from fretfind.tuning import Tuning

PitchClassSet = AbstractSet[NoteName]
"""Set of pitch classes used for chord membership tests."""


@dataclass(frozen=True)
class StringPos:
    """A position on the fretboard as a string and fret combination."""

    str_index: int
    """The string number (0-based index into the tuning)."""
    fret: int
    """The fret position (semitone offset from the open string)."""


@dataclass(frozen=True)
class FretCell:
    """A single fretboard position and the note it sounds.

    Cells whose note could not be resolved are kept in the grid so that
    fret alignment is preserved; their note is None.
    """

    pos: StringPos
    """Where this cell sits on the fretboard."""
    note: Optional[Note]
    """The sounded note, or None if it is unresolvable."""

    @property
    def resolved(self) -> bool:
        """Whether this cell has a playable note."""
        return self.note is not None

    def is_enabled(self, pitch_classes: PitchClassSet) -> bool:
        """Check if this cell is interactive for the given chord.

        Args:
            pitch_classes: The pitch classes of the current chord.

        Returns:
            False for unresolvable cells, otherwise the result of
            `is_enabled` for the cell's note.
        """
        return self.note is not None and is_enabled(self.note, pitch_classes)


def is_enabled(note: Note, pitch_classes: PitchClassSet) -> bool:
    """Decide whether a note is interactive for a chord.

    An empty set means there is no chord (nothing entered, or the text did
    not parse), in which case every note is enabled.

    Args:
        note: The note of a fretboard cell.
        pitch_classes: The pitch classes of the current chord.

    Returns:
        True if the set is empty or contains the note's pitch class.
    """
    return len(pitch_classes) == 0 or note.pitch_class in pitch_classes


def fret_label(fret: int) -> Optional[str]:
    """Get the marker label shown above a fret.

    Args:
        fret: The fret number.

    Returns:
        "Open" for fret 0, the fret number for marker frets, None otherwise.
    """
    if fret == 0:
        return constants.OPEN_LABEL
    elif fret in constants.MARKER_FRETS:
        return str(fret)
    else:
        return None


@unique
class Orientation(Enum):
    """How the fretboard grid is laid out for display."""

    Horizontal = auto()  # Strings as rows, frets as columns
    Vertical = auto()  # Frets as rows, strings as columns in reverse order


def orientation_for(width: float, height: float) -> Orientation:
    """Pick a layout for the available display area.

    Args:
        width: Width of the display area.
        height: Height of the display area.

    Returns:
        Vertical when the area is taller than it is wide, else Horizontal.
    """
    return Orientation.Vertical if height > width else Orientation.Horizontal


class Fretboard:
    """The full grid of notes for a tuning, indexed by string then fret."""

    @classmethod
    def generate(cls, tuning: Tuning, max_fret: int) -> Fretboard:
        """Generate the grid for a tuning.

        Cells that fail to resolve are kept as unresolvable cells rather
        than aborting the whole grid.

        Args:
            tuning: The open-string notes, in the order rows should appear.
            max_fret: Number of frets per string, counting the open string.

        Returns:
            A fretboard with `num_strings * max_fret` cells.

        Raises:
            ValueError: If max_fret is negative.
        """
        if max_fret < 0:
            raise ValueError(f"Invalid fret count: {max_fret}")
        rows: List[List[FretCell]] = []
        for str_index, open_note in enumerate(tuning.notes):
            row: List[FretCell] = []
            for fret in range(max_fret):
                pos = StringPos(str_index=str_index, fret=fret)
                try:
                    note: Optional[Note] = resolve(open_note, fret)
                except InvalidNoteError as e:
                    logging.debug("Unresolvable cell %s: %s", pos, e)
                    note = None
                row.append(FretCell(pos, note))
            rows.append(row)
        return cls(tuning, max_fret, rows)

    def __init__(self, tuning: Tuning, max_fret: int, rows: List[List[FretCell]]):
        self._tuning = tuning
        self._max_fret = max_fret
        self._rows = rows

    @property
    def tuning(self) -> Tuning:
        return self._tuning

    @property
    def num_strings(self) -> int:
        return len(self._rows)

    @property
    def max_fret(self) -> int:
        return self._max_fret

    def cell(self, pos: StringPos) -> Optional[FretCell]:
        """Look up the cell at a position.

        Returns:
            The cell, or None if the position is off the fretboard.
        """
        if (
            pos.str_index < 0
            or pos.str_index >= self.num_strings
            or pos.fret < 0
            or pos.fret >= self._max_fret
        ):
            return None
        return self._rows[pos.str_index][pos.fret]

    def __iter__(self) -> Generator[FretCell, None, None]:
        """Iterate over all cells in row-major (string, then fret) order."""
        for row in self._rows:
            yield from row

    def __len__(self) -> int:
        return self.num_strings * self._max_fret

    def rows(self, orientation: Orientation) -> List[List[FretCell]]:
        """Arrange the cells for display.

        Args:
            orientation: The layout to arrange for.

        Returns:
            Horizontal: one row per string, in tuning order.
            Vertical: one row per fret, strings in reverse tuning order.
        """
        if orientation == Orientation.Horizontal:
            return [list(row) for row in self._rows]
        elif orientation == Orientation.Vertical:
            return [
                [row[fret] for row in reversed(self._rows)]
                for fret in range(self._max_fret)
            ]
        else:
            raise MatchException(orientation)

    def labels(self) -> List[Optional[str]]:
        """Fret labels for every column of a horizontal layout."""
        return [fret_label(fret) for fret in range(self._max_fret)]
