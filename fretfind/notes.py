"""Note names, note identifiers, and fretted-note resolution.

A note identifier is a MIDI note number. Transposing a note up by some
number of frets adds that many semitones to its identifier, and the result
is only used if it decodes back into a note.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, NewType, Optional

from fretfind import constants

NoteId = NewType("NoteId", int)
"""MIDI note number (0-127)"""


@unique
class NoteName(Enum):
    """Enumeration of the twelve chromatic note names.

    Values correspond to semitone offsets from C within an octave,
    which makes a NoteName the pitch class of a note.
    """

    C = 0
    Db = 1
    D = 2
    Eb = 3
    E = 4
    F = 5
    Gb = 6
    G = 7
    Ab = 8
    A = 9
    Bb = 10
    B = 11

    def add_steps(self, steps: int) -> NoteName:
        """Add semitone steps to this note name.

        Args:
            steps: Number of semitones to add (can be negative).

        Returns:
            The resulting note name after adding the steps.
        """
        return NOTE_LOOKUP[(self.value + steps) % constants.MAX_NOTES]

    @property
    def display_name(self) -> str:
        """The name shown on the fretboard, using sharps for accidentals."""
        return _SHARP_NAMES[self.value]

    @staticmethod
    def from_text(text: str) -> Optional[NoteName]:
        """Look up a note name like "C", "c#" or "Bb".

        Args:
            text: A letter A-G (either case) with an optional "#" or "b".

        Returns:
            The matching note name, or None if the text is not a note name.
        """
        if not text or text[0].lower() not in _LETTER_TO_SEMITONE:
            return None
        value = _LETTER_TO_SEMITONE[text[0].lower()]
        accidental = text[1:]
        if accidental == "#":
            value += 1
        elif accidental == "b":
            value -= 1
        elif accidental:
            return None
        return NOTE_LOOKUP[value % constants.MAX_NOTES]


_LETTER_TO_SEMITONE = {
    "c": 0,
    "d": 2,
    "e": 4,
    "f": 5,
    "g": 7,
    "a": 9,
    "b": 11,
}

# Unicode sharps need font support, so accidentals display as "#"
_SHARP_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

_SUBSCRIPTS = str.maketrans("0123456789-", "₀₁₂₃₄₅₆₇₈₉₋")


def _build_note_lookup() -> Dict[int, NoteName]:
    d: Dict[int, NoteName] = {}
    for n in NoteName:
        d[n.value] = n
    assert len(d) == constants.MAX_NOTES
    return d


NOTE_LOOKUP = _build_note_lookup()
"""Lookup table from semitone offset (0-11) to NoteName."""


def subscript_num(n: int) -> str:
    """Render a number with unicode subscript digits (4 -> "₄")."""
    return str(n).translate(_SUBSCRIPTS)


class InvalidNoteError(ValueError):
    """Raised when a note identifier does not decode into a note."""

    def __init__(self, note_id: int) -> None:
        """Initialize the error with the offending identifier.

        Args:
            note_id: The identifier that failed to decode.
        """
        super().__init__(f"Invalid note identifier: {note_id}")
        self.note_id = note_id


@dataclass(frozen=True)
class Note:
    """A pitch class and octave, in scientific pitch notation.

    Middle C (MIDI 60) is C4 and the low E string of a guitar is E2.
    """

    name: NoteName
    """The pitch class of this note."""
    octave: int
    """The octave number (C4 is middle C)."""

    @property
    def pitch_class(self) -> NoteName:
        """The pitch class of this note, usable for set membership."""
        return self.name

    def identifier(self) -> NoteId:
        """Encode this note as a MIDI note number.

        Returns:
            The identifier, which may lie outside the MIDI range for
            notes constructed by hand.
        """
        return NoteId((self.octave + 1) * constants.MAX_NOTES + self.name.value)

    @staticmethod
    def from_identifier(note_id: int) -> Optional[Note]:
        """Decode a MIDI note number into a note.

        Args:
            note_id: The identifier to decode.

        Returns:
            The decoded note, or None if the identifier is out of range.
        """
        if note_id < constants.LOW_NOTE_ID or note_id > constants.HIGH_NOTE_ID:
            return None
        name = NOTE_LOOKUP[note_id % constants.MAX_NOTES]
        octave = note_id // constants.MAX_NOTES - 1
        return Note(name, octave)

    @staticmethod
    def parse(text: str) -> Optional[Note]:
        """Parse a note like "E2", "c#4" or "Bb-1".

        Returns:
            The note, or None if the text is not a note with an octave.
        """
        split = len(text)
        while split > 0 and (text[split - 1].isdigit() or text[split - 1] == "-"):
            split -= 1
        name = NoteName.from_text(text[:split])
        if name is None or split == len(text):
            return None
        try:
            octave = int(text[split:])
        except ValueError:
            return None
        return Note(name, octave)

    def display(self) -> str:
        """Render as name plus subscript octave, e.g. "C#₄"."""
        return f"{self.name.display_name}{subscript_num(self.octave)}"

    def __str__(self) -> str:
        return f"{self.name.display_name}{self.octave}"


def resolve(open_note: Note, fret: int) -> Note:
    """Find the note sounded by pressing a string at a fret.

    Args:
        open_note: The open-string note.
        fret: The fret number (0 is the open string).

    Returns:
        The note `fret` semitones above the open string.

    Raises:
        InvalidNoteError: If the fret is negative or the transposed
            identifier falls outside the representable range.
    """
    note_id = open_note.identifier() + fret
    if fret < 0:
        raise InvalidNoteError(note_id)
    note = Note.from_identifier(note_id)
    if note is None:
        raise InvalidNoteError(note_id)
    return note
