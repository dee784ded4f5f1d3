"""StdinBuffer splits raw input into complete key sequences.

A single read from a raw-mode terminal can hold several key presses, and an
escape sequence can arrive split across two reads. Without buffering, the
tail of a split sequence would be misread as ordinary key presses.
"""

from __future__ import annotations

ESC = "\x1b"

# CSI parameters and intermediates are in 0x20..0x3F, the final byte in 0x40..0x7E
_CSI_BODY = range(0x20, 0x40)
_CSI_FINAL = range(0x40, 0x7F)


def _sequence_length(data: str) -> int | None:
    """Length of the key sequence at the start of *data*.

    Returns ``None`` when *data* opens an escape sequence that has not
    been fully received yet.
    """
    if not data.startswith(ESC):
        return 1
    if len(data) == 1:
        return None

    introducer = data[1]
    if introducer == "[":
        # ESC [ params final
        for end in range(2, len(data)):
            code = ord(data[end])
            if code in _CSI_FINAL:
                return end + 1
            if code not in _CSI_BODY:
                # Interrupted by a non-CSI byte, which starts the next key
                return end
        return None
    if introducer == "O":
        # ESC O final
        if len(data) < 3:
            return None
        return 3 if ord(data[2]) in _CSI_FINAL else 2
    # Meta: ESC plus one character
    return 2


def split_sequences(data: str) -> tuple[list[str], str]:
    """Split *data* into complete sequences and an unfinished remainder."""
    sequences: list[str] = []
    pos = 0
    while pos < len(data):
        length = _sequence_length(data[pos:])
        if length is None:
            break
        sequences.append(data[pos : pos + length])
        pos += length
    return sequences, data[pos:]


class StdinBuffer:
    """Buffers raw input and returns complete sequences.

    Handles partial escape sequences that arrive across multiple reads. A
    lone ``ESC`` left at the end of a read is released immediately, since
    a blocking reader cannot wait a short time to see whether more follows.
    """

    def __init__(self) -> None:
        self._pending = ""

    def process(self, data: str) -> list[str]:
        """Feed input data and return every sequence it completes."""
        sequences, self._pending = split_sequences(self._pending + data)
        if self._pending == ESC:
            sequences.extend(self.flush())
        return sequences

    def flush(self) -> list[str]:
        """Release whatever is pending as a single sequence."""
        pending, self._pending = self._pending, ""
        return [pending] if pending else []
