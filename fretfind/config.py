"""Configuration for fretfind sessions.

`SessionConfig` holds the settings a front end would persist between runs:
the chord text and the choice of tuning and layout. `PlayConfig` holds how
auditioned notes are sent out. Transient state such as sounding notes lives
in the session, not here.
"""

from __future__ import annotations

from dataclasses import dataclass

from fretfind import constants
from fretfind.fretboard import Orientation
from fretfind.normalize import normalize_chord_name
from fretfind.playback import Envelope, default_envelope
from fretfind.tuning import STANDARD_TUNING, TUNING_LOOKUP, Tuning


def tuning_for_name(name: str) -> Tuning:
    """Look up a preset tuning by name.

    Raises:
        ValueError: If there is no tuning with that name.
    """
    tuning = TUNING_LOOKUP.get(name)
    if tuning is None:
        raise ValueError(f"Unknown tuning: {name}")
    return tuning


@dataclass(frozen=True)
class SessionConfig:
    """The persistable shape of a session."""

    chord_text: str  # Chord text as entered (normalized)
    tuning_name: str  # Name of a preset in TUNING_LOOKUP
    max_fret: int  # Number of frets shown, counting the open string
    orientation: Orientation  # How the grid is laid out

    @property
    def tuning(self) -> Tuning:
        """The preset tuning named by this config."""
        return tuning_for_name(self.tuning_name)


@dataclass(frozen=True)
class PlayConfig:
    """Settings for auditioning notes."""

    envelope: Envelope  # Timing of each played note
    channel: int  # MIDI channel (0-15)
    velocity: int  # MIDI velocity (1-127)
    output_port: str  # Name of the MIDI output port


def init_config(
    chord_text: str = "",
    tuning_name: str = STANDARD_TUNING.name,
    max_fret: int = constants.DEFAULT_MAX_FRET,
    orientation: Orientation = Orientation.Horizontal,
) -> SessionConfig:
    """Initialize a session configuration, defaulting to standard guitar.

    Args:
        chord_text: Initial chord text, normalized before it is stored.
        tuning_name: Name of the preset tuning.
        max_fret: Number of frets shown, counting the open string.
        orientation: Layout of the grid.

    Returns:
        A SessionConfig with the given settings.

    Raises:
        ValueError: If the tuning is unknown or max_fret is negative.
    """
    tuning_for_name(tuning_name)
    if max_fret < 0:
        raise ValueError(f"Invalid fret count: {max_fret}")
    return SessionConfig(
        chord_text=normalize_chord_name(chord_text),
        tuning_name=tuning_name,
        max_fret=max_fret,
        orientation=orientation,
    )


def init_play_config(output_port: str = constants.DEFAULT_PORT_NAME) -> PlayConfig:
    """Initialize a play configuration with the default envelope.

    Args:
        output_port: The name of the MIDI output port.

    Returns:
        A PlayConfig with default channel, velocity and envelope.
    """
    return PlayConfig(
        envelope=default_envelope(),
        channel=constants.DEFAULT_CHANNEL,
        velocity=constants.DEFAULT_VELOCITY,
        output_port=output_port,
    )
