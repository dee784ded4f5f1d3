"""Character to slot mapping for the completion trie."""

from __future__ import annotations

from pi.console.errors import ConfigurationError

# Printable ASCII range that can carry a slot (inclusive bounds)
FIRST_PRINTABLE = 32
LAST_PRINTABLE = 126


class PrefixIndex:
    """Maps each allowed character to a dense slot ``0..alphabet_size-1``.

    Slots follow ASCII order, not the order of the alphabet string, so
    anything walking the slots in ascending order sees characters sorted.
    Characters outside the alphabet map to ``None``.
    """

    __slots__ = ("_slots", "_chars")

    def __init__(self, slots: list[int | None], chars: list[str]) -> None:
        self._slots = slots
        self._chars = chars

    @classmethod
    def build(cls, alphabet: str) -> PrefixIndex:
        """Build the index for the characters present in *alphabet*.

        Raises:
            ConfigurationError: The alphabet is empty or holds no printable
                ASCII character.
        """
        if not alphabet:
            msg = "The completion alphabet must not be empty"
            raise ConfigurationError(msg)

        allowed = set(alphabet)
        slots: list[int | None] = [None] * (LAST_PRINTABLE + 1)
        chars: list[str] = []
        for code in range(FIRST_PRINTABLE, LAST_PRINTABLE + 1):
            ch = chr(code)
            if ch in allowed:
                slots[code] = len(chars)
                chars.append(ch)

        if not chars:
            msg = f"The completion alphabet {alphabet!r} has no printable ASCII characters"
            raise ConfigurationError(msg)

        return cls(slots, chars)

    @property
    def alphabet_size(self) -> int:
        return len(self._chars)

    @property
    def alphabet(self) -> str:
        """The valid characters in slot order."""
        return "".join(self._chars)

    def slot(self, c: str) -> int | None:
        """Return the slot for *c*, or ``None`` if it is not in the alphabet."""
        if len(c) != 1:
            return None
        code = ord(c)
        if code >= len(self._slots):
            return None
        return self._slots[code]

    def char_of(self, slot: int) -> str:
        """Return the character stored at *slot*."""
        if not 0 <= slot < len(self._chars):
            raise IndexError(f"Slot {slot} is outside 0..{len(self._chars) - 1}")
        return self._chars[slot]

    def __contains__(self, c: object) -> bool:
        return isinstance(c, str) and self.slot(c) is not None

    def __repr__(self) -> str:
        return f"PrefixIndex({self.alphabet!r})"
