"""Fretboard chord finder: which notes of a chord lie where on the neck."""

from fretfind.chords import Chord, ChordParseError, chord_pitch_classes, parse_chord
from fretfind.fretboard import Fretboard, Orientation, StringPos, fret_label, is_enabled
from fretfind.normalize import normalize_chord_name
from fretfind.notes import InvalidNoteError, Note, NoteName, resolve
from fretfind.playback import HandleCache, PlaybackHandle
from fretfind.session import Session
from fretfind.tuning import STANDARD_TUNING, TUNING_LOOKUP, Tuning

__all__ = [
    "Chord",
    "ChordParseError",
    "Fretboard",
    "HandleCache",
    "InvalidNoteError",
    "Note",
    "NoteName",
    "Orientation",
    "PlaybackHandle",
    "STANDARD_TUNING",
    "Session",
    "StringPos",
    "TUNING_LOOKUP",
    "Tuning",
    "chord_pitch_classes",
    "fret_label",
    "is_enabled",
    "normalize_chord_name",
    "parse_chord",
    "resolve",
]
