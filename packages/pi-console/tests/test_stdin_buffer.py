"""Tests for pi.console.stdin_buffer.StdinBuffer."""

from __future__ import annotations

from pi.console.stdin_buffer import ESC, StdinBuffer, _sequence_length, split_sequences


# ---------------------------------------------------------------------------
# _sequence_length (internal helper, tested for confidence)
# ---------------------------------------------------------------------------


class TestSequenceLength:
    def test_plain_character_is_one(self) -> None:
        assert _sequence_length("a") == 1
        assert _sequence_length("hello") == 1

    def test_lone_esc_is_incomplete(self) -> None:
        assert _sequence_length(ESC) is None

    def test_meta_key_sequence(self) -> None:
        assert _sequence_length(f"{ESC}ab") == 2

    def test_csi_arrow_key(self) -> None:
        assert _sequence_length(f"{ESC}[A") == 3
        assert _sequence_length(f"{ESC}[Dxyz") == 3

    def test_csi_incomplete_without_final_byte(self) -> None:
        assert _sequence_length(f"{ESC}[") is None
        assert _sequence_length(f"{ESC}[3") is None
        assert _sequence_length(f"{ESC}[1;") is None

    def test_csi_with_parameters(self) -> None:
        assert _sequence_length(f"{ESC}[3~") == 4
        assert _sequence_length(f"{ESC}[1;5A") == 6

    def test_csi_interrupted_by_control_byte(self) -> None:
        assert _sequence_length(f"{ESC}[\r") == 2
        assert _sequence_length(f"{ESC}[1\x7f") == 3

    def test_ss3(self) -> None:
        assert _sequence_length(f"{ESC}O") is None
        assert _sequence_length(f"{ESC}OAb") == 3
        assert _sequence_length(f"{ESC}O\r") == 2


# ---------------------------------------------------------------------------
# split_sequences
# ---------------------------------------------------------------------------


class TestSplitSequences:
    def test_empty_string(self) -> None:
        assert split_sequences("") == ([], "")

    def test_multiple_regular_chars(self) -> None:
        assert split_sequences("abc") == (["a", "b", "c"], "")

    def test_incomplete_escape_goes_to_remainder(self) -> None:
        assert split_sequences(ESC) == ([], ESC)

    def test_mixed_chars_and_sequences(self) -> None:
        seqs, rem = split_sequences(f"a{ESC}[Ab\r")
        assert seqs == ["a", f"{ESC}[A", "b", "\r"]
        assert rem == ""

    def test_incomplete_csi_at_end(self) -> None:
        seqs, rem = split_sequences(f"x{ESC}[3")
        assert seqs == ["x"]
        assert rem == f"{ESC}[3"


# ---------------------------------------------------------------------------
# StdinBuffer
# ---------------------------------------------------------------------------


class TestStdinBuffer:
    def test_process_returns_complete_sequences(self) -> None:
        buf = StdinBuffer()
        assert buf.process(f"ab{ESC}[C") == ["a", "b", f"{ESC}[C"]
        assert buf.flush() == []

    def test_partial_sequence_is_held(self) -> None:
        buf = StdinBuffer()
        assert buf.process(f"q{ESC}[") == ["q"]
        assert buf.process("3~") == [f"{ESC}[3~"]
        assert buf.flush() == []

    def test_lone_escape_is_released_immediately(self) -> None:
        buf = StdinBuffer()
        assert buf.process(f"a{ESC}") == ["a", ESC]
        assert buf.flush() == []

    def test_control_key_ends_unfinished_sequence(self) -> None:
        buf = StdinBuffer()
        assert buf.process(f"{ESC}[") == []
        assert buf.process("\r") == [f"{ESC}[", "\r"]
        assert buf.process("\x7f") == ["\x7f"]

    def test_flush(self) -> None:
        buf = StdinBuffer()
        buf.process(f"{ESC}[1;")
        assert buf.flush() == [f"{ESC}[1;"]
        assert buf.flush() == []
