"""Terminal abstraction for raw-mode, character-at-a-time consoles.

Provides a ``Terminal`` protocol, the sink the line editor draws through,
and a concrete ``ProcessTerminal`` that puts the controlling terminal into
raw mode via :mod:`termios`/:mod:`tty` and translates the editor's logical
redraw instructions into control characters on ``sys.stdout``.
"""

from __future__ import annotations

import logging
import os
import sys
import termios
import tty
from typing import IO, Iterator, Protocol

from pi.console.errors import ConfigurationError
from pi.console.keys import KeyEvent, iter_key_events

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Control characters
# ---------------------------------------------------------------------------

# Raw mode disables output post-processing, so a newline needs an explicit
# carriage return.
_NEWLINE = "\r\n"
_BACKSPACE = "\b"
_BELL = "\a"

_READ_SIZE = 1024


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Output sink for the line editor."""

    def write(self, text: str) -> None: ...

    def move_back(self, count: int) -> None: ...

    def bell(self) -> None: ...

    def newline(self) -> None: ...

    def flush(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by ``sys.stdin``/``sys.stdout`` in raw mode.

    Use as a context manager so the saved terminal attributes are always
    restored::

        with ProcessTerminal() as term:
            line = editor.read_line(term.key_events())
    """

    def __init__(
        self,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._original_termios: list | None = None

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Save the terminal state and switch stdin to raw mode."""
        fd = self._stdin.fileno()
        try:
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except termios.error as e:
            self._original_termios = None
            msg = f"Unable to put the console into raw mode: {e}"
            raise ConfigurationError(msg) from e
        logger.debug("Raw mode enabled on fd %d", fd)

    def stop(self) -> None:
        """Restore the terminal attributes saved by :meth:`start`."""
        if self._original_termios is None:
            return
        fd = self._stdin.fileno()
        termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
        self._original_termios = None
        logger.debug("Terminal attributes restored on fd %d", fd)

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.flush()
        self.stop()

    # -- input --------------------------------------------------------------

    def read(self) -> str:
        """Block until input is available and return it.

        Returns an empty string at end of input. Raises
        :class:`UnicodeDecodeError` for bytes that are not valid UTF-8.
        """
        self.flush()
        raw = os.read(self._stdin.fileno(), _READ_SIZE)
        return raw.decode("utf-8")

    def key_events(self) -> Iterator[KeyEvent]:
        """Lazily decode key events from stdin."""
        return iter_key_events(self.read)

    # -- output -------------------------------------------------------------

    def write(self, text: str) -> None:
        if text:
            self._stdout.write(text)

    def move_back(self, count: int) -> None:
        if count > 0:
            self._stdout.write(_BACKSPACE * count)

    def bell(self) -> None:
        self._stdout.write(_BELL)

    def newline(self) -> None:
        self._stdout.write(_NEWLINE)

    def flush(self) -> None:
        try:
            self._stdout.flush()
        except OSError:
            pass
