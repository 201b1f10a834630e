"""Note playback and retention of playback handles.

Playing a note returns a handle that keeps the note sounding until it is
released. The session keeps recent handles in a bounded first-in first-out
cache: once the cache is full, each new handle evicts and releases the
oldest one. Replaying a note does not promote an earlier handle; every play
is a new insertion.
"""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from collections import deque
from dataclasses import dataclass
from threading import Lock, Timer
from typing import Generator, List, Optional

from mido.frozen import FrozenMessage

from fretfind import constants
from fretfind.base import Closeable
from fretfind.midi import MidiSink
from fretfind.notes import Note


@dataclass(frozen=True)
class Envelope:
    """Timing of a played note, in seconds."""

    attack: float
    """Time for the note to reach full volume."""
    sustain: float
    """Time the note is held after the attack."""
    release: float
    """Time for the note to fade once released."""

    @property
    def hold(self) -> float:
        """Time from note on until the note is released."""
        return self.attack + self.sustain


def default_envelope() -> Envelope:
    return Envelope(
        attack=constants.DEFAULT_ATTACK,
        sustain=constants.DEFAULT_SUSTAIN,
        release=constants.DEFAULT_RELEASE,
    )


class PlaybackError(Exception):
    """Raised when a note cannot be played."""

    def __init__(self, note: Note, cause: Exception) -> None:
        super().__init__(f"Failed to play {note}: {cause}")
        self.note = note


class PlaybackHandle(Closeable):
    """A sounding note. Closing the handle releases the note.

    Closing is idempotent; only the first close sends the note off.
    """

    def __init__(self, sink: MidiSink, note_off: FrozenMessage) -> None:
        """Initialize a handle for a note that has just been turned on.

        Args:
            sink: Where to send the note off.
            note_off: The message that releases the note.
        """
        self._sink = sink
        self._note_off = note_off
        self._lock = Lock()
        self._released = False
        self._timer: Optional[Timer] = None

    @property
    def released(self) -> bool:
        return self._released

    def release_after(self, delay: float) -> None:
        """Schedule this handle to close itself after a delay.

        Args:
            delay: Seconds until the note is released.
        """
        timer = Timer(delay, self.close)
        timer.daemon = True
        with self._lock:
            if self._released:
                return
            self._timer = timer
        timer.start()

    def close(self) -> None:
        with self._lock:
            if self._released:
                return
            self._released = True
            timer = self._timer
            self._timer = None
        if timer is not None:
            timer.cancel()
        try:
            self._sink.send_msg(self._note_off)
        except Exception as e:
            logging.warning("Failed to release note %s: %s", self._note_off.note, e)


class NotePlayer(metaclass=ABCMeta):
    """Abstract base class for something that can sound a note."""

    @abstractmethod
    def play(self, note: Note, envelope: Envelope) -> PlaybackHandle:
        """Start sounding a note.

        Args:
            note: The note to play.
            envelope: Timing of the note.

        Returns:
            A handle that must be held for the note to keep sounding.

        Raises:
            PlaybackError: If the note could not be started.
        """
        raise NotImplementedError()


def envelope_control_value(seconds: float) -> int:
    """Scale an envelope time onto the 0-127 sound controller range.

    Args:
        seconds: The envelope time, clamped to [0, MAX_ENVELOPE_TIME].

    Returns:
        The controller value.
    """
    clamped = min(max(seconds, 0.0), constants.MAX_ENVELOPE_TIME)
    return round(127 * clamped / constants.MAX_ENVELOPE_TIME)


class MidiNotePlayer(NotePlayer):
    """Plays notes by sending MIDI to a sink.

    The attack and release times are sent as General MIDI sound
    controllers before the note on. Each handle is released automatically
    once the attack and sustain have elapsed, unless it is closed first.
    """

    def __init__(
        self,
        sink: MidiSink,
        channel: int = constants.DEFAULT_CHANNEL,
        velocity: int = constants.DEFAULT_VELOCITY,
        auto_release: bool = True,
    ) -> None:
        """Initialize the player.

        Args:
            sink: Where to send MIDI messages.
            channel: MIDI channel (0-15).
            velocity: MIDI velocity (1-127) for note on.
            auto_release: Whether to schedule a release after the sustain.
        """
        self._sink = sink
        self._channel = channel
        self._velocity = velocity
        self._auto_release = auto_release

    def play(self, note: Note, envelope: Envelope) -> PlaybackHandle:
        try:
            msgs = [
                FrozenMessage(
                    "control_change",
                    channel=self._channel,
                    control=constants.ATTACK_TIME_CC,
                    value=envelope_control_value(envelope.attack),
                ),
                FrozenMessage(
                    "control_change",
                    channel=self._channel,
                    control=constants.RELEASE_TIME_CC,
                    value=envelope_control_value(envelope.release),
                ),
                FrozenMessage(
                    "note_on",
                    channel=self._channel,
                    note=note.identifier(),
                    velocity=self._velocity,
                ),
            ]
            note_off = FrozenMessage(
                "note_off", channel=self._channel, note=note.identifier()
            )
            for msg in msgs:
                self._sink.send_msg(msg)
        except Exception as e:
            raise PlaybackError(note, e) from e
        logging.debug("Playing %s", note)
        handle = PlaybackHandle(self._sink, note_off)
        if self._auto_release:
            handle.release_after(envelope.hold)
        return handle


class HandleCache(Closeable):
    """A bounded first-in first-out store of playback handles.

    The length never exceeds the capacity: when full, the oldest handle is
    removed and released before the new one is appended.
    """

    def __init__(self, capacity: int = constants.MAX_HANDLES) -> None:
        """Initialize an empty cache.

        Args:
            capacity: Maximum number of handles retained.

        Raises:
            ValueError: If capacity is less than 1.
        """
        if capacity < 1:
            raise ValueError(f"Invalid cache capacity: {capacity}")
        self._capacity = capacity
        self._lock = Lock()
        self._handles: deque[PlaybackHandle] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def insert(self, handle: PlaybackHandle) -> None:
        """Retain a handle, evicting the oldest one if the cache is full.

        Args:
            handle: The handle of a note that just started playing.
        """
        evicted: Optional[PlaybackHandle] = None
        with self._lock:
            if len(self._handles) >= self._capacity:
                evicted = self._handles.popleft()
            self._handles.append(handle)
        if evicted is not None:
            evicted.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)

    def __iter__(self) -> Generator[PlaybackHandle, None, None]:
        """Iterate over a snapshot of the handles, oldest first."""
        with self._lock:
            snapshot = list(self._handles)
        yield from snapshot

    def close(self) -> None:
        """Release every retained handle and empty the cache."""
        with self._lock:
            handles: List[PlaybackHandle] = list(self._handles)
            self._handles.clear()
        for handle in handles:
            handle.close()
