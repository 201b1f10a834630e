"""Lifecycle interfaces and the unmatched-case exception for fretfind.

MIDI outputs, playback handles, the handle cache and the session all hold
something that has to be given back (a port, a sounding note), so they
share the `Closeable` interface. Outputs can also be silenced without
being closed, which is `Resettable`.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import Any


class Closeable(metaclass=ABCMeta):
    """Something that holds a port or a sounding note until closed."""

    @abstractmethod
    def close(self) -> None:
        """Give back the held resource. Further use is an error."""
        raise NotImplementedError()


class Resettable(metaclass=ABCMeta):
    """Something that can be silenced and reused without closing it."""

    @abstractmethod
    def reset(self) -> None:
        raise NotImplementedError()


class MatchException(Exception):
    """Raised when an enum value falls through every branch of a match."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Unmatched value: {value!r}")
