"""Keyboard input decoding for character-at-a-time consoles.

Turns raw terminal input into abstract :class:`KeyEvent` values. The line
editor only ever sees these events, never raw bytes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Iterator

from pi.console.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------


class KeyKind(enum.Enum):
    """Category of a key press."""

    PRINTABLE = "printable"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    TAB = "tab"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    UNDEFINED = "undefined"
    ERROR = "error"


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key press.

    ``char`` holds the typed character for ``PRINTABLE`` events and is empty
    otherwise. ``data`` keeps the raw sequence (or an error description for
    ``ERROR`` events) for diagnostics.
    """

    kind: KeyKind
    char: str = ""
    data: str = ""

    @classmethod
    def printable(cls, char: str) -> KeyEvent:
        return cls(KeyKind.PRINTABLE, char, char)

    @classmethod
    def error(cls, reason: str) -> KeyEvent:
        return cls(KeyKind.ERROR, "", reason)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Legacy escape sequences -> key kinds
LEGACY_KEY_SEQUENCES: dict[str, KeyKind] = {
    "\x1b[A": KeyKind.UP,
    "\x1b[B": KeyKind.DOWN,
    "\x1b[C": KeyKind.RIGHT,
    "\x1b[D": KeyKind.LEFT,
    "\x1bOA": KeyKind.UP,
    "\x1bOB": KeyKind.DOWN,
    "\x1bOC": KeyKind.RIGHT,
    "\x1bOD": KeyKind.LEFT,
    "\x1b[3~": KeyKind.DELETE,
}

SINGLE_BYTE_KEYS: dict[str, KeyKind] = {
    "\r": KeyKind.ENTER,
    "\n": KeyKind.ENTER,
    "\t": KeyKind.TAB,
    "\x7f": KeyKind.BACKSPACE,
    "\x08": KeyKind.BACKSPACE,
}


# ---------------------------------------------------------------------------
# parse_key -- determine what key was pressed from one raw sequence
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyEvent:
    """Decode one complete raw sequence into a :class:`KeyEvent`.

    Anything that is not a key the editor handles is ``UNDEFINED``.
    """
    kind = LEGACY_KEY_SEQUENCES.get(data) or SINGLE_BYTE_KEYS.get(data)
    if kind is not None:
        return KeyEvent(kind, "", data)

    # Printable ASCII only
    if len(data) == 1 and 32 <= ord(data) <= 126:
        return KeyEvent.printable(data)

    return KeyEvent(KeyKind.UNDEFINED, "", data)


# ---------------------------------------------------------------------------
# Decoding streams of input
# ---------------------------------------------------------------------------


class KeyDecoder:
    """Stateful decoder that carries split escape sequences across reads."""

    def __init__(self) -> None:
        self._buffer = StdinBuffer()

    def feed(self, data: str) -> list[KeyEvent]:
        return [parse_key(seq) for seq in self._buffer.process(data)]

    def flush(self) -> list[KeyEvent]:
        return [parse_key(seq) for seq in self._buffer.flush()]


def iter_key_events(read: Callable[[], str]) -> Iterator[KeyEvent]:
    """Yield key events from successive calls to *read*.

    *read* blocks until input is available and returns ``""`` at end of
    input. Read failures, undecodable input and end of input are reported
    as a single ``ERROR`` event, after which the generator stops.
    """
    decoder = KeyDecoder()
    while True:
        try:
            data = read()
        except UnicodeDecodeError as e:
            logger.warning("Undecodable terminal input: %s", e)
            yield KeyEvent.error(f"undecodable input: {e}")
            return
        except OSError as e:
            yield KeyEvent.error(f"read failed: {e}")
            return

        if not data:
            yield from decoder.flush()
            yield KeyEvent.error("end of input")
            return

        for event in decoder.feed(data):
            logger.debug("Key event %s %r", event.kind.value, event.data)
            yield event
