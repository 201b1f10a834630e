"""Main entry point for the fretfind command-line tool.

Lists where the notes of a chord lie on the fretboard and can audition
positions through a virtual MIDI output port.
"""

import logging
import time
from argparse import ArgumentParser
from typing import List, Optional

from fretfind import constants
from fretfind.chords import NoteType
from fretfind.config import PlayConfig, init_config, init_play_config
from fretfind.fretboard import Orientation, StringPos, fret_label
from fretfind.midi import MidiOutput, NullSink
from fretfind.playback import MidiNotePlayer
from fretfind.session import CellView, Session
from fretfind.tuning import TUNING_LOOKUP


def parse_pos(text: str) -> Optional[StringPos]:
    """Parse a "string:fret" position, with 1 as the highest string.

    Returns:
        The position, or None if the text is malformed.
    """
    parts = text.split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    str_num, fret = int(parts[0]), int(parts[1])
    if str_num < 1:
        return None
    return StringPos(str_index=str_num - 1, fret=fret)


def _mark(view: CellView) -> str:
    note = view.cell.note
    if note is None or not view.enabled:
        return "-"
    name = note.name.display_name
    return f"[{name}]" if view.note_type == NoteType.Root else name


def describe(session: Session) -> List[str]:
    """Describe the fretboard for the current chord, one line per row.

    Enabled notes are shown by name with the chord root bracketed, and
    every other cell as "-".
    """
    chord = session.chord
    lines = [f"Chord: {chord if chord is not None else '(none)'}"]
    horizontal = session.config.orientation == Orientation.Horizontal
    open_notes = session.fretboard.tuning.notes
    for index, row in enumerate(session.rows()):
        if horizontal:
            header = open_notes[index].display()
        else:
            header = fret_label(index) or str(index)
        lines.append(f"{header:>4} | {' '.join(_mark(view) for view in row)}")
    return lines


def play_positions(session: Session, positions: List[StringPos], hold: float) -> None:
    """Play positions one after another, then wait for them to ring out."""
    for pos in positions:
        if not session.play(pos):
            logging.warning("Did not play position %s", pos)
    if positions:
        time.sleep(hold)


def main_with_output(
    session: Session, play_config: PlayConfig, positions: List[StringPos]
) -> None:
    try:
        for line in describe(session):
            print(line)
        play_positions(session, positions, play_config.envelope.hold)
    except KeyboardInterrupt:
        pass
    finally:
        session.close()


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        An ArgumentParser configured with all the command-line options.
    """
    parser = ArgumentParser(prog="fretfind")
    parser.add_argument("chord", nargs="?", default="")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument(
        "--tuning", default="Standard", choices=sorted(TUNING_LOOKUP.keys())
    )
    parser.add_argument("--frets", type=int, default=constants.DEFAULT_MAX_FRET)
    parser.add_argument(
        "--orientation",
        default=Orientation.Horizontal.name,
        choices=[o.name for o in Orientation],
    )
    parser.add_argument(
        "--play",
        action="append",
        default=[],
        metavar="STRING:FRET",
        help="audition a position; strings are numbered from 1 (highest)",
    )
    parser.add_argument("--port", default=constants.DEFAULT_PORT_NAME)
    return parser


def configure_logging(log_level: str) -> None:
    """Send log records to stderr at the given level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def main() -> None:
    """Main entry point for fretfind.

    Parses command-line arguments, configures logging, opens the MIDI
    port if anything is to be played, and describes the chord.
    """
    parser = make_parser()
    args = parser.parse_args()
    configure_logging(args.log_level)
    positions: List[StringPos] = []
    for text in args.play:
        pos = parse_pos(text)
        if pos is None:
            parser.error(f"invalid position: {text}")
        positions.append(pos)
    try:
        config = init_config(
            tuning_name=args.tuning,
            max_fret=args.frets,
            orientation=Orientation[args.orientation],
        )
    except ValueError as e:
        parser.error(str(e))
    play_config = init_play_config(args.port)
    output: Optional[MidiOutput] = None
    if positions:
        output = MidiOutput.open(play_config.output_port, virtual=True)
    try:
        player = MidiNotePlayer(
            output if output is not None else NullSink(),
            channel=play_config.channel,
            velocity=play_config.velocity,
        )
        session = Session(config, player, play_config.envelope)
        session.set_chord_text(args.chord)
        main_with_output(session, play_config, positions)
    finally:
        if output is not None:
            output.reset()
            output.close()
    logging.info("done")


if __name__ == "__main__":
    main()
