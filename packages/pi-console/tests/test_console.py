"""Tests for pi.console.console.Console -- the prompt loop and commands."""

from __future__ import annotations

import pytest

from pi.console.console import BUILTIN_COMMANDS, Console, build_command_trie
from pi.console.errors import ConfigurationError, InvalidCharacterError
from pi.console.keys import KeyEvent, KeyKind
from pi.console.settings import ConsoleSettings

from .virtual_terminal import VirtualTerminal

ENTER = KeyEvent(KeyKind.ENTER)
TAB = KeyEvent(KeyKind.TAB)
UP = KeyEvent(KeyKind.UP)


def lines(*typed: str | KeyEvent) -> list[KeyEvent]:
    """Key events typing each string followed by enter."""
    events: list[KeyEvent] = []
    for item in typed:
        if isinstance(item, str):
            events.extend(KeyEvent.printable(ch) for ch in item)
            events.append(ENTER)
        else:
            events.append(item)
    return events


def make_console(**overrides) -> tuple[Console, VirtualTerminal]:
    settings = ConsoleSettings(prompt="$ ", commands={"hello": "Hi!"}, **overrides)
    vt = VirtualTerminal()
    return Console(settings, vt), vt


class TestCommandTrie:
    def test_holds_builtins_and_commands(self) -> None:
        trie = build_command_trie(ConsoleSettings(commands={"status": "ok"}))
        assert trie.words() == sorted([*BUILTIN_COMMANDS, "status"])

    def test_command_outside_alphabet_fails(self) -> None:
        settings = ConsoleSettings(commands={"Shout": "!"})
        with pytest.raises(InvalidCharacterError):
            Console(settings, VirtualTerminal())

    def test_empty_alphabet_fails(self) -> None:
        with pytest.raises(ConfigurationError):
            Console(ConsoleSettings(alphabet=""), VirtualTerminal())


class TestExecute:
    def test_quit_stops(self) -> None:
        console, _ = make_console()
        assert console.execute("quit") is False

    def test_command_prints_message(self) -> None:
        console, vt = make_console()
        assert console.execute("hello") is True
        assert vt.lines[-2] == "Hi!"

    def test_unknown_input_is_echoed(self) -> None:
        console, vt = make_console()
        console.execute("what now")
        assert "You typed: what now" in vt.lines

    def test_history_lists_entries(self) -> None:
        console, vt = make_console()
        console.history.record("one")
        console.history.record("two")
        console.execute("history")
        assert vt.lines[:2] == ["one", "two"]


class TestRun:
    def test_session_until_quit(self) -> None:
        console, vt = make_console()
        assert console.run(lines("hello", "abc", "quit")) == 0
        assert "Hi!" in vt.lines
        assert "You typed: abc" in vt.lines
        assert console.history.entries == ["hello", "abc", "quit"]

    def test_history_command_shows_earlier_lines(self) -> None:
        console, vt = make_console()
        console.run(lines("one", "one", "two", "history", "quit"))
        history_at = vt.lines.index("$ history")
        assert vt.lines[history_at + 1 : history_at + 3] == ["one", "two"]

    def test_tab_completes_command_names(self) -> None:
        console, vt = make_console()
        events = [KeyEvent.printable("q"), TAB, ENTER]
        assert console.run(events) == 0
        assert "$ quit" in vt.lines

    def test_history_recall_between_lines(self) -> None:
        console, vt = make_console()
        events = lines("abc", UP, ENTER, "quit")
        console.run(events)
        assert vt.lines.count("You typed: abc") == 2
        assert console.history.entries == ["abc", "quit"]

    def test_input_error_returns_one(self) -> None:
        console, vt = make_console()
        events = [KeyEvent.printable("a"), KeyEvent.error("end of input")]
        assert console.run(events) == 1
        assert vt.lines[-2].startswith("There was an error getting the user's input:")
        assert "end of input" in vt.lines[-2]

    def test_exhausted_input_returns_one(self) -> None:
        console, _ = make_console()
        assert console.run(lines("abc")) == 1


class TestClose:
    def test_context_manager_destroys_trie(self) -> None:
        with make_console()[0] as console:
            assert not console.trie.is_empty
        assert console.trie.is_empty
