from __future__ import annotations

from contextlib import contextmanager

from honeycomb.grid import Cell, Honeycomb
from honeycomb.trie import Trie, TrieNode


class SearchPath:
    """Letters and cells of the path the search is currently extending."""

    def __init__(self):
        self.letters: list[str] = []
        self.cells: list[Cell] = []

    def __bool__(self) -> bool:
        return bool(self.cells)

    @property
    def word(self) -> str:
        return "".join(self.letters)

    @contextmanager
    def extended(self, cell: Cell, letter: str):
        self.letters.append(letter)
        self.cells.append(cell)
        try:
            yield self
        finally:
            self.letters.pop()
            self.cells.pop()


class WordStore:
    """Words in the order they were first found, with the path that spelled each."""

    def __init__(self):
        self.words: list[str] = []
        self.paths: dict[str, list[Cell]] = {}

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self):
        return iter(self.words)

    def __contains__(self, word: str) -> bool:
        return word in self.paths

    def record(self, word: str, cells: list[Cell]) -> bool:
        """Store ``word`` unless it was already reported. Returns True if stored."""
        if word in self.paths:
            return False
        self.words.append(word)
        self.paths[word] = list(cells)
        return True


def search_from(grid: Honeycomb, node: TrieNode, column: int, offset: int,
                path: SearchPath, store: WordStore):
    """Extend ``path`` through (column, offset) and every open neighbour beyond it."""
    if path and not grid.is_open(column, offset):
        return

    letter = grid.cell_at(column, offset)
    child = node.children.get(letter)
    if child is None:
        return

    with path.extended((column, offset), letter):
        if child.is_word:
            store.record(path.word, path.cells)

        if child.children:  # prune if no further prefixes
            with grid.mark_visited(column, offset):
                for ncol, noff in grid.adjacent(column, offset):
                    search_from(grid, child, ncol, noff, path, store)


def find_all_words(grid: Honeycomb, trie: Trie) -> WordStore:
    """Run the search from every cell, columns left to right, top to bottom."""
    store = WordStore()
    for column, offset in grid.cells():
        search_from(grid, trie.root, column, offset, SearchPath(), store)
    return store


def solve(grid: Honeycomb, trie: Trie, max_results: int = 0) -> tuple[list[str], dict[str, list[Cell]]]:
    """Find every word on the honeycomb.

    Returns (words, paths): the distinct words sorted alphabetically, and
    the cell path each was first found along.
    """
    store = find_all_words(grid, trie)
    result = sorted(set(store.words))
    result = result[:max_results] if max_results > 0 else result
    return result, {w: store.paths[w] for w in result}
