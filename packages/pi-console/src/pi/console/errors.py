"""Exception types raised by the console core.

Cursor, history and completion boundaries are not errors: the editor rings
the bell and keeps going. Everything defined here propagates to the caller.
"""

from __future__ import annotations


class ConsoleError(Exception):
    """Base class for every error raised by pi-console."""


class ConfigurationError(ConsoleError):
    """The console or its trie cannot be built from the given settings."""


class InvalidCharacterError(ConsoleError, ValueError):
    """A word contains a character that is not part of the trie alphabet."""

    def __init__(self, word: str, char: str, position: int) -> None:
        self.word = word
        self.char = char
        self.position = position
        super().__init__(
            f"Invalid character {char!r} at position {position} in {word!r}"
        )


class TrieCorruptionError(ConsoleError, RuntimeError):
    """A non-terminal trie node has no children.

    Correct insertion never produces such a node, so this signals a defect
    rather than a user error.
    """

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        super().__init__(
            f"The trie is incorrectly formatted: node {prefix!r} should be terminal"
        )


class InputProcessingError(ConsoleError):
    """The key source failed; the current line read is aborted."""

    def __init__(self, message: str, data: str | None = None) -> None:
        self.data = data
        super().__init__(message)
