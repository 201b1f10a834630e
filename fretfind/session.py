"""The fretfind session: chord state, fretboard, and sounding notes.

A session is what a front end talks to on every redraw and every click. It
owns a `SessionConfig`, the fretboard generated from it, the chord parsed
from the chord text, and the cache of playback handles for notes the user
has auditioned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import FrozenSet, Generator, List, Optional

from fretfind import constants
from fretfind.base import Closeable
from fretfind.chords import Chord, ChordClassifier, NoteType, try_parse_chord
from fretfind.config import SessionConfig
from fretfind.fretboard import FretCell, Fretboard, StringPos
from fretfind.normalize import normalize_chord_name
from fretfind.notes import NoteName
from fretfind.playback import Envelope, HandleCache, NotePlayer, PlaybackError


@dataclass(frozen=True)
class CellView:
    """A fretboard cell with its state for the current chord."""

    cell: FretCell
    """The cell and its note."""
    enabled: bool
    """Whether the cell can be clicked."""
    note_type: NoteType
    """The role of the cell's note in the chord, for highlighting."""


def _make_fretboard(config: SessionConfig) -> Fretboard:
    # Rows run from the highest-pitched string down, as on a tab
    return Fretboard.generate(config.tuning.display_order(), config.max_fret)


class Session(Closeable):
    """Coordinates chord text, fretboard state, and note playback."""

    def __init__(
        self,
        config: SessionConfig,
        player: NotePlayer,
        envelope: Envelope,
        capacity: int = constants.MAX_HANDLES,
    ) -> None:
        """Initialize the session.

        Args:
            config: Initial configuration.
            player: Plays auditioned notes.
            envelope: Timing of auditioned notes.
            capacity: Number of playback handles retained.
        """
        # Stored as the front end would display it
        self._config = replace(
            config, chord_text=normalize_chord_name(config.chord_text)
        )
        self._player = player
        self._envelope = envelope
        self._handles = HandleCache(capacity)
        self._fretboard = _make_fretboard(self._config)
        self._chord = try_parse_chord(self._config.chord_text)
        self._classifier = ChordClassifier(self._chord)

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def fretboard(self) -> Fretboard:
        return self._fretboard

    @property
    def chord(self) -> Optional[Chord]:
        """The current chord, or None if the text is empty or invalid."""
        return self._chord

    @property
    def pitch_classes(self) -> FrozenSet[NoteName]:
        return self._classifier.pitch_classes

    @property
    def handles(self) -> HandleCache:
        return self._handles

    def handle_config(self, config: SessionConfig) -> None:
        """Apply a new configuration.

        The fretboard is only regenerated when the tuning or fret count
        change, and the chord only reparsed when the chord text changes.
        If the new configuration is rejected the session is left as it was.

        Args:
            config: The new configuration.

        Raises:
            ValueError: If the tuning is unknown or the fret count negative.
        """
        old = self._config
        fretboard = self._fretboard
        chord = self._chord
        if config.tuning_name != old.tuning_name or config.max_fret != old.max_fret:
            fretboard = _make_fretboard(config)
            logging.info(
                "Regenerated fretboard: %s, %d frets",
                config.tuning_name,
                config.max_fret,
            )
        if config.chord_text != old.chord_text:
            chord = try_parse_chord(config.chord_text)
        self._config = config
        self._fretboard = fretboard
        if chord is not self._chord:
            self._chord = chord
            self._classifier = ChordClassifier(chord)

    def set_chord_text(self, text: str) -> str:
        """Update the chord from raw user input.

        Args:
            text: The chord text as typed.

        Returns:
            The normalized text, which the front end should display.
        """
        normalized = normalize_chord_name(text)
        self.handle_config(replace(self._config, chord_text=normalized))
        return normalized

    def view(self, cell: FretCell) -> CellView:
        """Compute the chord-dependent state of a cell."""
        note_type = (
            NoteType.Other
            if cell.note is None
            else self._classifier.classify(cell.note.pitch_class)
        )
        return CellView(
            cell=cell,
            enabled=cell.is_enabled(self.pitch_classes),
            note_type=note_type,
        )

    def cells(self) -> Generator[CellView, None, None]:
        """All cells in row-major (string, then fret) order."""
        for cell in self._fretboard:
            yield self.view(cell)

    def rows(self) -> List[List[CellView]]:
        """All cells arranged for the configured orientation."""
        return [
            [self.view(cell) for cell in row]
            for row in self._fretboard.rows(self._config.orientation)
        ]

    def play(self, pos: StringPos) -> bool:
        """Audition the note at a fretboard position.

        Disabled and unresolvable cells do not play. If playback fails
        the error is logged and nothing is retained.

        Args:
            pos: The clicked position.

        Returns:
            True if the note started playing.
        """
        cell = self._fretboard.cell(pos)
        if cell is None or cell.note is None:
            logging.debug("Ignoring click on unresolvable cell %s", pos)
            return False
        if not cell.is_enabled(self.pitch_classes):
            logging.debug("Ignoring click on disabled cell %s", pos)
            return False
        try:
            handle = self._player.play(cell.note, self._envelope)
        except PlaybackError as e:
            logging.warning("%s", e)
            return False
        self._handles.insert(handle)
        logging.debug("%s", cell.note.display())
        return True

    def close(self) -> None:
        """Release every sounding note."""
        logging.info("Releasing %d playback handles", len(self._handles))
        self._handles.close()
