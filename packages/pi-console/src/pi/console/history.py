"""Submitted-line history with up/down navigation."""

from __future__ import annotations

import logging
from typing import Iterator

logger = logging.getLogger(__name__)


class HistoryLog:
    """Append-only log of submitted lines and a browsing cursor.

    ``position == len(entries)`` means no entry is being browsed and the live
    line is in effect. The live line is kept in ``draft`` while browsing so
    that walking forward past the newest entry restores it.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._position: int = 0
        self._draft: str = ""

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def position(self) -> int:
        return self._position

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def browsing(self) -> bool:
        return self._position < len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def record(self, line: str) -> bool:
        """Append *line* unless it is empty or repeats the last entry.

        Browsing is reset either way. Returns whether an entry was added.
        """
        added = bool(line) and (not self._entries or self._entries[-1] != line)
        if added:
            self._entries.append(line)
            logger.debug("History entry %d: %r", len(self._entries), line)
        self.reset_browsing()
        return added

    def reset_browsing(self) -> None:
        self._position = len(self._entries)
        self._draft = ""

    def recall_previous(self, current_line: str) -> str | None:
        """Step to the previous (older) entry.

        Returns ``None`` when already at the oldest entry.
        """
        if self._position == len(self._entries):
            self._draft = current_line

        if self._position == 0:
            return None

        self._position -= 1
        return self._entries[self._position]

    def recall_next(self) -> str | None:
        """Step to the next (newer) entry, or back to the draft.

        Returns ``None`` when the live line is already in effect.
        """
        if self._position >= len(self._entries):
            return None

        self._position += 1
        if self._position == len(self._entries):
            return self._draft
        return self._entries[self._position]
