"""Line editor state machine with history recall and tab completion.

Pulls :class:`KeyEvent` values one at a time, applies each to the line
buffer, the history log or the completion trie, and returns the finished
line when enter is pressed. Pressing tab twice in a row, when the first
press could not extend the line, lists every possible completion.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pi.console.errors import InputProcessingError
from pi.console.history import HistoryLog
from pi.console.keys import KeyEvent, KeyKind
from pi.console.line_buffer import LineBuffer
from pi.console.terminal import Terminal
from pi.console.trie import CompletionTrie

logger = logging.getLogger(__name__)

NO_MATCHES_NOTICE = "No matches"


class LineEditor:
    """Reads one line at a time from a stream of key events."""

    def __init__(
        self,
        trie: CompletionTrie,
        history: HistoryLog,
        terminal: Terminal,
        prompt: str = "",
    ) -> None:
        self.trie = trie
        self.history = history
        self.prompt = prompt
        self._terminal = terminal
        self._buffer = LineBuffer(terminal)
        self._tab_armed: bool = False

    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def cursor(self) -> int:
        return self._buffer.cursor

    @property
    def tab_armed(self) -> bool:
        return self._tab_armed

    def read_line(self, events: Iterable[KeyEvent]) -> str:
        """Show the prompt and edit a line until enter is pressed.

        Raises:
            InputProcessingError: The key source reported an error or ran
                out before enter was pressed.
        """
        self._buffer.reset()
        self.history.reset_browsing()
        self._tab_armed = False
        self._terminal.write(self.prompt)
        self._terminal.flush()

        for event in events:
            if event.kind is KeyKind.ENTER:
                self._terminal.newline()
                self._terminal.flush()
                self._tab_armed = False
                logger.debug("Line submitted: %r", self._buffer.text)
                return self._buffer.text

            self.handle_key(event)
            self._terminal.flush()

        msg = "Key source ended before the line was entered"
        raise InputProcessingError(msg)

    def handle_key(self, event: KeyEvent) -> None:  # noqa: C901
        """Apply one non-enter key event to the line."""
        kind = event.kind

        if kind is KeyKind.ERROR:
            msg = f"There was an error when processing key inputs: {event.data}"
            raise InputProcessingError(msg, event.data)

        if kind is KeyKind.TAB:
            if self._tab_armed:
                self._list_completions()
            else:
                self._complete()
            return

        self._tab_armed = False

        if kind is KeyKind.PRINTABLE:
            self._buffer.insert_char(event.char)
        elif kind is KeyKind.BACKSPACE:
            self._buffer.delete_before_cursor()
        elif kind is KeyKind.DELETE:
            self._buffer.delete_at_cursor()
        elif kind is KeyKind.LEFT:
            self._buffer.move_left()
        elif kind is KeyKind.RIGHT:
            self._buffer.move_right()
        elif kind is KeyKind.UP:
            self._recall(self.history.recall_previous(self._buffer.text))
        elif kind is KeyKind.DOWN:
            self._recall(self.history.recall_next())
        # Undefined keys are ignored

    # -- history ------------------------------------------------------------

    def _recall(self, line: str | None) -> None:
        if line is None:
            self._terminal.bell()
            return
        self._buffer.replace_whole_line(line)

    # -- completion ---------------------------------------------------------

    def _complete(self) -> None:
        count, extended, _ = self.trie.find(self._buffer.text)
        if count > 0 and extended != self._buffer.text:
            self._buffer.replace_whole_line(extended)
            return

        self._terminal.bell()
        self._tab_armed = True

    def _list_completions(self) -> None:
        _, _, matches = self.trie.find(self._buffer.text, list_all=True)
        self._tab_armed = False

        self._terminal.newline()
        if matches:
            for match in matches:
                self._terminal.write(match)
                self._terminal.newline()
        else:
            self._terminal.write(NO_MATCHES_NOTICE)
            self._terminal.newline()
        self.redisplay()

    def redisplay(self) -> None:
        """Draw the prompt and line on a fresh row, restoring the cursor."""
        self._terminal.write(self.prompt + self._buffer.text)
        self._terminal.move_back(len(self._buffer) - self._buffer.cursor)
