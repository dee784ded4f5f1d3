"""ASCII-indexed prefix trie used for command completion.

Each node owns a fixed-size child list indexed by :class:`PrefixIndex`
slots and caches the text spelled from the root, so a search never has to
rebuild the path it walked.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pi.console.errors import InvalidCharacterError, TrieCorruptionError
from pi.console.prefix_index import PrefixIndex

logger = logging.getLogger(__name__)

# (ambiguity count, extended prefix, matches)
FindResult = tuple[int, str, list[str]]

_NO_MATCH_COUNT = 0


class TrieNode:
    """Single node in the trie."""

    __slots__ = ("children", "is_terminal", "prefix_text")

    def __init__(self, size: int, prefix_text: str = "") -> None:
        self.children: list[TrieNode | None] = [None] * size
        self.is_terminal: bool = False
        self.prefix_text: str = prefix_text

    def live_slots(self) -> list[int]:
        """Slots of the children that exist, in ascending order."""
        return [i for i, child in enumerate(self.children) if child is not None]


class CompletionTrie:
    """Prefix tree over a fixed alphabet with longest-unambiguous search.

    The root is created on the first insertion. Use the trie as a context
    manager (or call :meth:`destroy`) to release the tree deterministically.
    """

    def __init__(self, alphabet: str) -> None:
        self.index = PrefixIndex.build(alphabet)
        self._root: TrieNode | None = None

    @property
    def is_empty(self) -> bool:
        return self._root is None

    # -- insertion ----------------------------------------------------------

    def insert(self, word: str) -> None:
        """Insert *word*, marking its last node terminal.

        Every character is validated before the tree is touched, so a
        rejected word leaves the trie unchanged.

        Raises:
            InvalidCharacterError: *word* has a character outside the alphabet.
        """
        slots = self._slots_for(word)

        if self._root is None:
            self._root = self._new_node("")

        node = self._root
        for position, slot in enumerate(slots):
            child = node.children[slot]
            if child is None:
                child = self._new_node(word[: position + 1])
                node.children[slot] = child
            node = child

        node.is_terminal = True
        logger.debug("Inserted %r into completion trie", word)

    def insert_many(self, words: Iterable[str]) -> None:
        for word in words:
            self.insert(word)

    # -- search -------------------------------------------------------------

    def find(self, prefix: str, list_all: bool = False) -> FindResult:
        """Search for *prefix* and extend it as far as it is unambiguous.

        Returns a tuple ``(count, extended, matches)``:

        * ``count`` is ``0`` when nothing starts with *prefix*, ``1`` when
          *extended* is a complete word (the final answer), otherwise the
          number of branches at the point where the extension stopped.
        * ``extended`` is the longest unambiguous continuation of *prefix*.
        * ``matches`` lists every word below the stopping point in
          alphabet order, and is only filled when *list_all* is set.

        Raises:
            TrieCorruptionError: A non-terminal node without children was
                reached.
        """
        node = self._walk(prefix)
        if node is None:
            logger.debug("No completion for %r", prefix)
            return _NO_MATCH_COUNT, "", []

        count, stop = self._longest_unambiguous(node)

        matches: list[str] = []
        if list_all:
            if count == 1:
                matches.append(stop.prefix_text)
            else:
                self._collect(stop, matches)

        logger.debug(
            "Completion for %r: count=%d extended=%r matches=%d",
            prefix,
            count,
            stop.prefix_text,
            len(matches),
        )
        return count, stop.prefix_text, matches

    def words(self) -> list[str]:
        """Every inserted word, in alphabet order."""
        words: list[str] = []
        if self._root is not None:
            self._collect(self._root, words)
        return words

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self._walk(word)
        return node is not None and node.is_terminal

    # -- debugging ----------------------------------------------------------

    def dump(self) -> str:
        """Render every node of the trie, depth first, for debugging."""
        if self._root is None:
            return "Empty!"

        lines: list[str] = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            live = node.live_slots()
            children = (
                " ".join(f"[{self.index.char_of(s)}]" for s in live) if live else "None"
            )
            lines.append("----- Begin Node -----")
            lines.append(f"Word to here: {node.prefix_text}")
            lines.append(f"Live children: {children}")
            lines.append(f"Is terminal: {'true' if node.is_terminal else 'false'}")
            lines.append("----- End Node -----")
            stack.extend(node.children[s] for s in reversed(live))
        return "\n".join(lines)

    # -- teardown -----------------------------------------------------------

    def destroy(self) -> None:
        """Tear down the whole tree.

        The root is detached before any node is visited, so calling this
        again, or from a ``finally`` block after a failure, is safe.
        """
        root, self._root = self._root, None
        stack = [root] if root is not None else []
        while stack:
            node = stack.pop()
            stack.extend(child for child in node.children if child is not None)
            node.children = []

    def __enter__(self) -> CompletionTrie:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    # -- internals ----------------------------------------------------------

    def _new_node(self, prefix_text: str) -> TrieNode:
        return TrieNode(self.index.alphabet_size, prefix_text)

    def _slots_for(self, word: str) -> list[int]:
        slots: list[int] = []
        for position, ch in enumerate(word):
            slot = self.index.slot(ch)
            if slot is None:
                raise InvalidCharacterError(word, ch, position)
            slots.append(slot)
        return slots

    def _walk(self, prefix: str) -> TrieNode | None:
        """Follow *prefix* from the root; ``None`` if it leaves the tree."""
        node = self._root
        for ch in prefix:
            if node is None:
                return None
            slot = self.index.slot(ch)
            if slot is None:
                return None
            node = node.children[slot]
        return node

    def _longest_unambiguous(self, node: TrieNode) -> tuple[int, TrieNode]:
        """Descend single-child chains until a terminal or a branch point."""
        while not node.is_terminal:
            live = node.live_slots()
            if not live:
                raise TrieCorruptionError(node.prefix_text)
            if len(live) > 1:
                return len(live), node
            child = node.children[live[0]]
            assert child is not None
            node = child
        return 1, node

    def _collect(self, node: TrieNode, out: list[str]) -> None:
        """Pre-order DFS gathering terminal nodes in ascending slot order."""
        if node.is_terminal:
            out.append(node.prefix_text)
        for child in node.children:
            if child is not None:
                self._collect(child, out)
