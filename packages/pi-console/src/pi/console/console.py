"""Interactive console: prompt loop, command table and built-in commands."""

from __future__ import annotations

import logging
from typing import Iterable

from pi.console.editor import LineEditor
from pi.console.errors import InputProcessingError
from pi.console.history import HistoryLog
from pi.console.keys import KeyEvent
from pi.console.settings import ConsoleSettings
from pi.console.terminal import Terminal
from pi.console.trie import CompletionTrie

logger = logging.getLogger(__name__)

QUIT_COMMAND = "quit"
HISTORY_COMMAND = "history"
BUILTIN_COMMANDS = (QUIT_COMMAND, HISTORY_COMMAND)


def build_command_trie(settings: ConsoleSettings) -> CompletionTrie:
    """Trie of the built-in and configured command names."""
    trie = CompletionTrie(settings.alphabet)
    trie.insert_many(BUILTIN_COMMANDS)
    trie.insert_many(settings.commands)
    return trie


class Console:
    """A prompt that completes command names and echoes what was typed.

    The trie holds the configured command names plus the built-ins, so a
    command name with a character outside the alphabet fails construction
    with :class:`~pi.console.errors.InvalidCharacterError`.
    """

    def __init__(self, settings: ConsoleSettings, terminal: Terminal) -> None:
        self.settings = settings
        self.history = HistoryLog()
        self.trie = build_command_trie(settings)
        self.editor = LineEditor(self.trie, self.history, terminal, settings.prompt)
        self._terminal = terminal

    def run(self, events: Iterable[KeyEvent]) -> int:
        """Read and handle lines until ``quit``.

        Returns 0 after ``quit`` and 1 if reading input failed.
        """
        # A single iterator, so keys typed ahead carry over to the next line
        keys = iter(events)
        try:
            while True:
                line = self.editor.read_line(keys)
                keep_going = self.execute(line)
                self.history.record(line)
                if not keep_going:
                    return 0
        except InputProcessingError as e:
            logger.error("Input processing failed: %s", e)
            # The failed line is left unfinished on screen
            self._terminal.newline()
            self._print(f"There was an error getting the user's input: {e}")
            return 1
        finally:
            self._terminal.flush()

    def execute(self, line: str) -> bool:
        """Handle one submitted line. Returns ``False`` when it was ``quit``."""
        if line == QUIT_COMMAND:
            return False

        if line == HISTORY_COMMAND:
            for entry in self.history:
                self._print(entry)
        elif line in self.settings.commands:
            self._print(self.settings.commands[line])
        else:
            self._print(f"You typed: {line}")
        return True

    def close(self) -> None:
        self.trie.destroy()

    def __enter__(self) -> Console:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _print(self, text: str) -> None:
        self._terminal.write(text)
        self._terminal.newline()
