"""Tests for the command-line front end."""

from typing import Optional

import pytest

from fretfind.config import init_config
from fretfind.fretboard import Orientation, StringPos
from fretfind.main import describe, make_parser, parse_pos
from fretfind.midi import NullSink
from fretfind.playback import MidiNotePlayer, default_envelope
from fretfind.session import Session


def _session(chord_text: str, orientation: Orientation) -> Session:
    config = init_config(chord_text=chord_text, orientation=orientation)
    player = MidiNotePlayer(NullSink(), auto_release=False)
    return Session(config, player, default_envelope())


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1:0", StringPos(0, 0)),
        ("6:12", StringPos(5, 12)),
        ("0:3", None),
        ("1", None),
        ("a:b", None),
        ("1:-2", None),
        ("1:2:3", None),
    ],
)
def test_parse_pos(text: str, expected: Optional[StringPos]) -> None:
    assert parse_pos(text) == expected


def test_describe_horizontal() -> None:
    lines = describe(_session("C", Orientation.Horizontal))
    assert lines[0] == "Chord: C"
    assert len(lines) == 7
    assert lines[1] == "  E₄ | E - - G - - - - [C] - - - E - - G -"
    assert lines[6].startswith("  E₂ | E")


def test_describe_vertical() -> None:
    lines = describe(_session("", Orientation.Vertical))
    assert lines[0] == "Chord: (none)"
    assert len(lines) == 18
    assert lines[1] == "Open | E A D G B E"
    assert lines[2].startswith("   1 | F")
    assert lines[4].startswith("   3 | G")


def test_make_parser() -> None:
    args = make_parser().parse_args(
        ["am", "--tuning", "Drop D", "--play", "1:0", "--play", "2:1"]
    )
    assert args.chord == "am"
    assert args.tuning == "Drop D"
    assert args.play == ["1:0", "2:1"]
    assert args.frets == 17
    assert args.orientation == "Horizontal"

    defaults = make_parser().parse_args([])
    assert defaults.chord == ""
    assert defaults.play == []


def test_describe_headers_without_frets() -> None:
    config = init_config(chord_text="C", tuning_name="Bass", max_fret=0)
    player = MidiNotePlayer(NullSink(), auto_release=False)
    lines = describe(Session(config, player, default_envelope()))
    assert [line.split(" |")[0].strip() for line in lines[1:]] == [
        "G₂",
        "D₂",
        "A₁",
        "E₁",
    ]
