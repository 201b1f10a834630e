"""Chord name parsing and chord membership for fretfind.

Chord names look like "C", "F#m7", "Bbmaj7" or "C/G": a root, an optional
quality, and an optional slash bass note. Qualities are looked up in an
alias table that maps spellings to a canonical quality and its intervals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto, unique
from typing import Dict, FrozenSet, List, NewType, Optional, Set, cast

from lark import Lark, Transformer
from lark.exceptions import LarkError

from fretfind.normalize import normalize_chord_name
from fretfind.notes import Note, NoteName

Quality = NewType("Quality", str)

# Lark grammar for chord names. The contextual lexer only offers ROOT at the
# start and after the slash, so "Cb" is a root but "Cm" is C plus a quality.
CHORD_GRAMMAR = """
start: ROOT quality? bass?

quality: QUALITY
bass: "/" ROOT

ROOT: /[A-G][#b]?/
QUALITY: /[a-zA-Z0-9#+]+/
"""

_CHORD_MAP = cast(
    Dict[str, Quality],
    {
        # Major variants
        "major": "maj",
        "maj": "maj",
        "M": "maj",
        # Augmented
        "aug": "aug",
        "+": "aug",
        # Sixth chords
        "6": "6",
        "69": "69",
        # Major seventh and extensions
        "major7": "maj7",
        "maj7": "maj7",
        "M7": "maj7",
        "maj9": "maj9",
        "M9": "maj9",
        "add9": "add9",
        "maj11": "maj11",
        "add11": "add11",
        "maj13": "maj13",
        # Dominant chords
        "7": "7",
        "dom7": "7",
        "9": "9",
        "11": "11",
        "13": "13",
        "7b5": "7b5",
        "7#5": "7#5",
        "7b9": "7b9",
        "7#9": "7#9",
        "7#11": "7#11",
        # Minor chords
        "minor": "min",
        "min": "min",
        "m": "min",
        "min6": "min6",
        "m6": "min6",
        "min7": "min7",
        "m7": "min7",
        "m7b5": "m7b5",
        "min7b5": "m7b5",
        "min9": "min9",
        "m9": "min9",
        "min11": "min11",
        "m11": "min11",
        "mmaj7": "mmaj7",
        "minmaj7": "mmaj7",
        # Diminished
        "dim": "dim",
        "dim7": "dim7",
        # Other chords
        "5": "5",
        "sus2": "sus2",
        "sus4": "sus4",
        "sus": "sus4",
        "7sus4": "7sus4",
    },
)

# Chord note intervals (semitones from root)
_CHORD_INTERVALS = cast(
    Dict[Quality, List[int]],
    {
        "maj": [0, 4, 7],
        "aug": [0, 4, 8],
        "6": [0, 4, 7, 9],
        "69": [0, 4, 7, 9, 14],
        "maj7": [0, 4, 7, 11],
        "maj9": [0, 4, 7, 11, 14],
        "add9": [0, 4, 7, 14],
        "maj11": [0, 4, 7, 11, 14, 17],
        "add11": [0, 4, 7, 17],
        "maj13": [0, 4, 7, 11, 14, 21],
        "7": [0, 4, 7, 10],
        "9": [0, 4, 7, 10, 14],
        "11": [0, 4, 7, 10, 14, 17],
        "13": [0, 4, 7, 10, 14, 17, 21],
        "7b5": [0, 4, 6, 10],
        "7#5": [0, 4, 8, 10],
        "7b9": [0, 4, 7, 10, 13],
        "7#9": [0, 4, 7, 10, 15],
        "7#11": [0, 4, 7, 10, 18],
        "min": [0, 3, 7],
        "min6": [0, 3, 7, 9],
        "min7": [0, 3, 7, 10],
        "m7b5": [0, 3, 6, 10],
        "min9": [0, 3, 7, 10, 14],
        "min11": [0, 3, 7, 10, 14, 17],
        "mmaj7": [0, 3, 7, 11],
        "dim": [0, 3, 6],
        "dim7": [0, 3, 6, 9],
        "5": [0, 7],
        "sus2": [0, 2, 7],
        "sus4": [0, 5, 7],
        "7sus4": [0, 5, 7, 10],
    },
)

DEFAULT_QUALITY = Quality("maj")
"""Quality of a chord name with no quality, e.g. "C"."""

DEFAULT_ROOT_OCTAVE = 4
"""Octave of the root note when a chord is voiced into notes."""


class ChordParseError(ValueError):
    """Raised when chord text cannot be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Cannot parse chord {text!r}: {reason}")
        self.text = text


def parse_quality(name: str) -> Optional[Quality]:
    """Parse a quality spelling into a canonical quality.

    Args:
        name: The quality text, e.g. "M7", "min" or "maj7".

    Returns:
        Canonical quality if found, None otherwise.
    """
    # Exact match first so that "M" and "m" stay distinct
    if name in _CHORD_MAP:
        return _CHORD_MAP[name]
    return _CHORD_MAP.get(name.lower())


def get_all_qualities() -> Set[Quality]:
    """Get all canonical chord qualities."""
    return set(Quality(q) for q in _CHORD_INTERVALS.keys())


@dataclass(frozen=True)
class Chord:
    """A parsed chord: root, quality, and optional slash bass."""

    root: NoteName
    """The root of the chord."""
    quality: Quality
    """The canonical chord quality."""
    bass: Optional[NoteName] = None
    """The bass note of a slash chord, if any."""

    @property
    def intervals(self) -> List[int]:
        """Semitone intervals from the root."""
        return list(_CHORD_INTERVALS[self.quality])

    def notes(self, octave: int = DEFAULT_ROOT_OCTAVE) -> List[Note]:
        """Voice the chord into concrete notes, lowest first.

        A slash bass is placed in the octave below the root. Notes that
        would fall outside the MIDI range are dropped.

        Args:
            octave: Octave of the root note.

        Returns:
            The constituent notes in ascending order.
        """
        root_id = Note(self.root, octave).identifier()
        ids = [root_id + interval for interval in self.intervals]
        if self.bass is not None:
            ids.insert(0, Note(self.bass, octave - 1).identifier())
        notes: List[Note] = []
        for note_id in ids:
            note = Note.from_identifier(note_id)
            if note is None:
                logging.debug("Dropping chord note outside MIDI range: %d", note_id)
            else:
                notes.append(note)
        return notes

    def pitch_classes(self) -> FrozenSet[NoteName]:
        """The set of pitch classes in the chord, bass included."""
        names = {self.root.add_steps(interval) for interval in self.intervals}
        if self.bass is not None:
            names.add(self.bass)
        return frozenset(names)

    def __str__(self) -> str:
        quality = "" if self.quality == DEFAULT_QUALITY else self.quality
        bass = "" if self.bass is None else f"/{self.bass.display_name}"
        return f"{self.root.display_name}{quality}{bass}"


class ChordTransformer(Transformer):
    """Transform a parsed chord name into its parts."""

    def start(self, items):
        root = items[0]
        quality = None
        bass = None
        for item in items[1:]:
            if item[0] == "quality":
                quality = item[1]
            else:
                bass = item[1]
        return root, quality, bass

    def quality(self, items):
        return ("quality", str(items[0]))

    def bass(self, items):
        return ("bass", items[0])

    def ROOT(self, token):
        return str(token)


_PARSER = Lark(CHORD_GRAMMAR, parser="lalr")


def _lookup_root(text: str, root: str) -> NoteName:
    name = NoteName.from_text(root)
    if name is None:
        raise ChordParseError(text, f"unknown note {root!r}")
    return name


def parse_chord(text: str) -> Chord:
    """Parse a chord name into a Chord.

    The text is expected to be normalized already; see
    `normalize_chord_name`.

    Args:
        text: A chord name like "Cmaj7" or "Am/G".

    Returns:
        The parsed chord.

    Raises:
        ChordParseError: If the text does not match the chord grammar
            or names an unknown quality.
    """
    try:
        tree = _PARSER.parse(text)
    except LarkError as e:
        raise ChordParseError(text, str(e).strip().split("\n")[0]) from e
    root_text, quality_text, bass_text = ChordTransformer().transform(tree)
    root = _lookup_root(text, root_text)
    bass = None if bass_text is None else _lookup_root(text, bass_text)
    if quality_text is None:
        quality = DEFAULT_QUALITY
    else:
        parsed = parse_quality(quality_text)
        if parsed is None:
            raise ChordParseError(text, f"unknown quality {quality_text!r}")
        quality = parsed
    return Chord(root=root, quality=quality, bass=bass)


def try_parse_chord(text: str) -> Optional[Chord]:
    """Normalize and parse raw chord text, tolerating failure.

    Args:
        text: Raw chord text as typed by the user.

    Returns:
        The chord, or None if the text is empty or does not parse.
    """
    normalized = normalize_chord_name(text)
    if not normalized:
        return None
    try:
        return parse_chord(normalized)
    except ChordParseError as e:
        logging.debug("%s", e)
        return None


def chord_pitch_classes(text: str) -> FrozenSet[NoteName]:
    """Compute the pitch classes for raw chord text.

    Empty or unparseable text gives the empty set, which leaves the
    whole fretboard enabled.
    """
    chord = try_parse_chord(text)
    return frozenset() if chord is None else chord.pitch_classes()


@unique
class NoteType(Enum):
    """The role of a note relative to the current chord."""

    Root = auto()  # Root note of the chord
    Member = auto()  # Other note of the chord
    Other = auto()  # Note that is not in the chord


class ChordClassifier:
    """Classifies notes relative to a chord for highlighting.

    With no chord every note is classified as Other.
    """

    def __init__(self, chord: Optional[Chord]) -> None:
        self._root = None if chord is None else chord.root
        self._members: FrozenSet[NoteName] = (
            frozenset() if chord is None else chord.pitch_classes()
        )

    @property
    def pitch_classes(self) -> FrozenSet[NoteName]:
        return self._members

    def is_root(self, name: NoteName) -> bool:
        return self._root == name

    def is_member(self, name: NoteName) -> bool:
        return name in self._members

    def classify(self, name: NoteName) -> NoteType:
        """Classify a pitch class as root, member, or other."""
        if self.is_root(name):
            return NoteType.Root
        elif self.is_member(name):
            return NoteType.Member
        else:
            return NoteType.Other
