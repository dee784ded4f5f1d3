"""Single-line text buffer with a cursor, mirrored onto a terminal.

Every mutation writes the smallest redraw that leaves the visible line equal
to the buffer, with the terminal cursor over the buffer cursor. The
terminal cursor is assumed to start right after the prompt.
"""

from __future__ import annotations

from pi.console.terminal import Terminal


class LineBuffer:
    """Editable input line.

    Mutators return ``True`` when they changed the line and ``False`` when
    they hit a boundary, in which case the bell has been rung.
    """

    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal
        self._text: str = ""
        self._cursor: int = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._text)

    def reset(self) -> None:
        """Start a new, empty line. Nothing is drawn."""
        self._text = ""
        self._cursor = 0

    def insert_char(self, c: str) -> bool:
        tail = self._text[self._cursor :]
        self._text = self._text[: self._cursor] + c + tail
        self._cursor += 1

        self._terminal.write(c + tail)
        self._terminal.move_back(len(tail))
        return True

    def delete_before_cursor(self) -> bool:
        if self._cursor == 0:
            self._terminal.bell()
            return False

        tail = self._text[self._cursor :]
        self._text = self._text[: self._cursor - 1] + tail
        self._cursor -= 1

        # Step back over the removed character, shift the tail left and
        # blank the now-unused last column.
        self._terminal.move_back(1)
        self._terminal.write(tail + " ")
        self._terminal.move_back(len(tail) + 1)
        return True

    def delete_at_cursor(self) -> bool:
        if self._cursor == len(self._text):
            self._terminal.bell()
            return False

        tail = self._text[self._cursor + 1 :]
        self._text = self._text[: self._cursor] + tail

        self._terminal.write(tail + " ")
        self._terminal.move_back(len(tail) + 1)
        return True

    def move_left(self) -> bool:
        if self._cursor == 0:
            self._terminal.bell()
            return False

        self._cursor -= 1
        self._terminal.move_back(1)
        return True

    def move_right(self) -> bool:
        if self._cursor == len(self._text):
            self._terminal.bell()
            return False

        # Rewriting the character under the cursor moves it forward
        self._terminal.write(self._text[self._cursor])
        self._cursor += 1
        return True

    def replace_whole_line(self, new_text: str) -> None:
        """Show *new_text* in place of the current line, cursor at its end."""
        excess = len(self._text) - len(new_text)

        self._terminal.move_back(self._cursor)
        self._terminal.write(new_text)
        if excess > 0:
            self._terminal.write(" " * excess)
            self._terminal.move_back(excess)

        self._text = new_text
        self._cursor = len(new_text)
