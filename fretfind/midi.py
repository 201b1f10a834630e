"""MIDI output handling for fretfind.

This module wraps a mido output port behind a small sink interface so that
note playback can be pointed at a real port or at an in-memory sink.
"""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod

import mido
from mido.frozen import FrozenMessage
from mido.ports import BaseOutput

from fretfind.base import Closeable, Resettable


class MidiSink(metaclass=ABCMeta):
    """Somewhere auditioned notes are sent."""

    @abstractmethod
    def send_msg(self, msg: FrozenMessage) -> None:
        """Deliver one message (control change, note on or note off)."""
        raise NotImplementedError()


class MidiOutput(MidiSink, Resettable, Closeable):
    """An audition sink writing to a mido output port."""

    @classmethod
    def open(cls, out_port_name: str, virtual: bool = False) -> MidiOutput:
        """Open the port auditioned notes go to.

        Args:
            out_port_name: Port name, also used as the virtual port name.
            virtual: Create the port for a synth to connect to, rather
                than connecting to an existing one.

        Returns:
            An output wrapping the opened port.
        """
        out_port = mido.open_output(out_port_name, virtual=virtual)
        logging.info("Opened MIDI output port: %s", out_port_name)
        return cls(out_port_name=out_port_name, out_port=out_port)

    def __init__(self, out_port_name: str, out_port: BaseOutput) -> None:
        self._out_port_name = out_port_name
        self._out_port = out_port

    def reset(self) -> None:
        """Silence anything still sounding on the port."""
        self._out_port.reset()

    def close(self) -> None:
        """Close the port. Sounding notes are not released first."""
        self._out_port.close()

    def send_msg(self, msg: FrozenMessage) -> None:
        logging.debug("%s <- %s", self._out_port_name, msg)
        self._out_port.send(msg)


class NullSink(MidiSink):
    """A sink that discards every message, for sessions without output."""

    def send_msg(self, msg: FrozenMessage) -> None:
        logging.debug("Discarding message: %s", msg)
