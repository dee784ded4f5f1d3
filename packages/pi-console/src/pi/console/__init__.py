"""pi-console: line input with history recall and trie-based Tab completion."""

# Console shell
from pi.console.console import Console, build_command_trie

# Line editing
from pi.console.editor import LineEditor
from pi.console.history import HistoryLog
from pi.console.line_buffer import LineBuffer

# Errors
from pi.console.errors import (
    ConfigurationError,
    ConsoleError,
    InputProcessingError,
    InvalidCharacterError,
    TrieCorruptionError,
)

# Keyboard input handling
from pi.console.keys import KeyDecoder, KeyEvent, KeyKind, iter_key_events, parse_key

# Completion
from pi.console.prefix_index import PrefixIndex
from pi.console.trie import CompletionTrie, TrieNode

# Settings
from pi.console.settings import ConsoleSettings, load_settings, save_settings

# Input buffering
from pi.console.stdin_buffer import StdinBuffer, split_sequences

# Terminal interface and implementations
from pi.console.terminal import ProcessTerminal, Terminal

__all__ = [
    # Console
    "Console",
    "build_command_trie",
    # Line editing
    "LineEditor",
    "HistoryLog",
    "LineBuffer",
    # Errors
    "ConfigurationError",
    "ConsoleError",
    "InputProcessingError",
    "InvalidCharacterError",
    "TrieCorruptionError",
    # Keys
    "KeyDecoder",
    "KeyEvent",
    "KeyKind",
    "iter_key_events",
    "parse_key",
    # Completion
    "PrefixIndex",
    "CompletionTrie",
    "TrieNode",
    # Settings
    "ConsoleSettings",
    "load_settings",
    "save_settings",
    # Stdin buffer
    "StdinBuffer",
    "split_sequences",
    # Terminal
    "ProcessTerminal",
    "Terminal",
]
