from __future__ import annotations

import logging
import string
from typing import Iterable

from honeycomb.errors import MalformedInput, ResourceExhaustion

logger = logging.getLogger("honeycomb")

ALPHABET = frozenset(string.ascii_uppercase)
MAX_WORD_LENGTH = 256


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: str) -> bool:
        node = self.find(word)
        return node is not None and node.is_word

    def insert(self, word: str):
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._size += 1

    def find(self, prefix: str) -> TrieNode | None:
        """Return the node reached by walking ``prefix``, or None if it falls off."""
        node = self.root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def build_from_dictionary(
        self,
        lines: Iterable[str],
        min_length: int = 1,
        max_length: int = MAX_WORD_LENGTH,
    ) -> Trie:
        """Insert every dictionary line, in order.

        Surrounding whitespace is stripped, blank lines are ignored and words
        are folded to upper case. Words still using symbols outside A-Z
        cannot appear on a honeycomb and are skipped.
        A word longer than ``max_length`` raises MalformedInput.
        """
        skipped = 0
        try:
            for lineno, line in enumerate(lines, start=1):
                word = line.strip().upper()
                if not word:
                    continue
                if len(word) > max_length:
                    raise MalformedInput(
                        f"dictionary line {lineno} is {len(word)} symbols long (max {max_length})"
                    )
                if not ALPHABET.issuperset(word):
                    logger.debug("Skipping dictionary line %d: %r", lineno, word)
                    skipped += 1
                    continue
                if len(word) >= min_length:
                    self.insert(word)
        except MemoryError as e:
            raise ResourceExhaustion("out of memory while building the trie") from e

        if skipped:
            logger.warning("Skipped %d dictionary lines with symbols outside A-Z", skipped)
        return self


def load_trie(path: str, min_length: int = 1, max_length: int = MAX_WORD_LENGTH) -> Trie:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        trie = Trie().build_from_dictionary(f, min_length, max_length)
    logger.info("Loaded %d words from %s", len(trie), path)
    return trie
