"""Constants for the fretfind chord finder."""

from typing import FrozenSet

LOW_NOTE_ID = 0
"""Lowest valid note identifier (MIDI note number)."""
HIGH_NOTE_ID = 127
"""Highest valid note identifier (MIDI note number), inclusive."""

MAX_NOTES = 12
"""Number of distinct pitch classes in the chromatic scale."""

DEFAULT_MAX_FRET = 17
"""Default number of frets shown, counting the open string as fret 0."""

MARKER_FRETS: FrozenSet[int] = frozenset([3, 5, 7, 9, 12, 15, 17, 19, 21])
"""Frets that carry an inlay marker label."""

OPEN_LABEL = "Open"
"""Label for fret 0."""

MAX_HANDLES = 50
"""Capacity of the playback handle cache."""

DEFAULT_PORT_NAME = "fretfind"
"""Default name for the virtual MIDI output port."""

DEFAULT_CHANNEL = 0
"""Default MIDI channel (0-15) for auditioned notes."""

DEFAULT_VELOCITY = 100
"""Default MIDI velocity for auditioned notes."""

DEFAULT_ATTACK = 0.0
"""Default envelope attack time in seconds."""
DEFAULT_SUSTAIN = 1.0
"""Default envelope sustain time in seconds."""
DEFAULT_RELEASE = 1.0
"""Default envelope release time in seconds."""

MAX_ENVELOPE_TIME = 4.0
"""Envelope time (seconds) mapped to the top of the sound-controller range."""

ATTACK_TIME_CC = 73
"""General MIDI sound controller for attack time."""
RELEASE_TIME_CC = 72
"""General MIDI sound controller for release time."""
