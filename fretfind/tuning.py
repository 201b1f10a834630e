"""Instrument tunings for the fretboard.

A tuning lists the open-string notes from the lowest-pitched string to the
highest. The fretboard shows strings the other way round, highest first,
so callers generate from `Tuning.display_order()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from fretfind.notes import Note


@dataclass(frozen=True)
class Tuning:
    """A named, ordered set of open-string notes."""

    name: str
    """Human-readable name of the tuning."""
    notes: Tuple[Note, ...]
    """Open-string notes, lowest-pitched string first."""

    @property
    def num_strings(self) -> int:
        """Number of strings on the instrument."""
        return len(self.notes)

    def display_order(self) -> Tuning:
        """The same tuning with the highest-pitched string first."""
        return Tuning(self.name, tuple(reversed(self.notes)))

    @staticmethod
    def from_names(name: str, open_notes: str) -> Tuning:
        """Build a tuning from whitespace-separated notes like "E2 A2 D3".

        Args:
            name: Name of the tuning.
            open_notes: Open-string notes, lowest string first.

        Returns:
            The parsed tuning.

        Raises:
            ValueError: If any note fails to parse or there are no notes.
        """
        notes: List[Note] = []
        for part in open_notes.split():
            note = Note.parse(part)
            if note is None:
                raise ValueError(f"Invalid note in tuning {name}: {part}")
            notes.append(note)
        if not notes:
            raise ValueError(f"Tuning {name} has no strings")
        return Tuning(name, tuple(notes))


STANDARD_TUNING = Tuning.from_names("Standard", "E2 A2 D3 G3 B3 E4")
"""Standard six-string guitar tuning."""

TUNINGS: List[Tuning] = [
    STANDARD_TUNING,
    Tuning.from_names("Drop D", "D2 A2 D3 G3 B3 E4"),
    Tuning.from_names("Open G", "D2 G2 D3 G3 B3 D4"),
    Tuning.from_names("Open D", "D2 A2 D3 F#3 A3 D4"),
    Tuning.from_names("DADGAD", "D2 A2 D3 G3 A3 D4"),
    Tuning.from_names("Bass", "E1 A1 D2 G2"),
    Tuning.from_names("Five-String Bass", "B0 E1 A1 D2 G2"),
    Tuning.from_names("Mandolin", "G3 D4 A4 E5"),
    # Reentrant tunings list strings in physical order, not by pitch
    Tuning.from_names("Ukulele", "G4 C4 E4 A4"),
    Tuning.from_names("Banjo", "G4 D3 G3 B3 D4"),
]
"""Preset tunings available to the user."""

TUNING_LOOKUP: Dict[str, Tuning] = {t.name: t for t in TUNINGS}
"""Dictionary lookup from tuning name to Tuning."""
