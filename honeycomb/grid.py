from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Sequence

from honeycomb.errors import MalformedInput, ResourceExhaustion
from honeycomb.trie import ALPHABET

logger = logging.getLogger("honeycomb")

Cell = tuple[int, int]

# (column delta, offset delta); the order the search visits neighbours in
NEIGHBOUR_OFFSETS: tuple[Cell, ...] = tuple(
    (dc, dp) for dc in (-1, 0, 1) for dp in (-1, 0, 1) if (dc, dp) != (0, 0)
)


def half_ring_length(ring: int) -> int:
    return 2 + (ring - 1) * 3


def symbol_count(layer_count: int) -> int:
    """Number of cells in a honeycomb with ``layer_count`` layers."""
    return 1 + 3 * layer_count * (layer_count - 1)


def column_length(layer_count: int, index: int) -> int:
    return 2 * layer_count - 1 - abs(index - (layer_count - 1))


def decode_rings(layer_count: int, symbols: Sequence[str]) -> tuple[str, list[str], list[str]]:
    """Split the input symbols into the center column and the half-rings.

    Returns (center, lefts, rights) with one left and one right string per
    ring, innermost first. Right half-rings are stored in reverse reading
    order, left half-rings as read.
    """
    needed = symbol_count(layer_count)
    if len(symbols) < needed:
        raise MalformedInput(
            f"{layer_count} layers need {needed} symbols, got {len(symbols)}"
        )
    if len(symbols) > needed:
        logger.warning("Ignoring %d symbols past the last ring", len(symbols) - needed)

    stream = iter(symbols)
    center = [""] * (2 * layer_count - 1)
    mid = layer_count - 1
    center[mid] = next(stream)

    lefts: list[str] = []
    rights: list[str] = []
    for ring in range(1, layer_count):
        n = half_ring_length(ring)
        center[mid + ring] = next(stream)
        rights.append("".join(next(stream) for _ in range(n))[::-1])
        center[mid - ring] = next(stream)
        lefts.append("".join(next(stream) for _ in range(n)))

    return "".join(center), lefts, rights


def assemble_half(half_rings: Sequence[str]) -> list[str]:
    """Lay one side's half-rings out as columns, nearest the center first.

    Column k (k+1 steps from the center) takes a contiguous run of ring k
    in its middle and one symbol from each outer ring at either end.
    """
    n = len(half_rings)
    columns = []
    for k in range(n):
        column = [""] * (2 * n - k)
        column[n - k - 1:n + 1] = half_rings[k][k:2 * k + 2]
        for j in range(k + 1, n):
            column[n - j - 1] = half_rings[j][k]
            column[n - k + j] = half_rings[j][3 * j + 1 - k]
        columns.append("".join(column))
    return columns


class Honeycomb:
    """Letters of a hexagonal honeycomb stored as ragged columns.

    Column ``layer_count - 1`` runs through the center; columns shrink by
    one letter per step away from it. Cells on the active search path are
    tracked in a visited set that is only touched through ``mark_visited``.
    """

    def __init__(self, layer_count: int, columns: Sequence[str]):
        if layer_count < 1:
            raise MalformedInput(f"layer count must be at least 1, got {layer_count}")
        if len(columns) != 2 * layer_count - 1:
            raise MalformedInput(
                f"{layer_count} layers need {2 * layer_count - 1} columns, got {len(columns)}"
            )
        for i, column in enumerate(columns):
            if len(column) != column_length(layer_count, i):
                raise MalformedInput(
                    f"column {i} has {len(column)} cells, expected {column_length(layer_count, i)}"
                )
            bad = set(column) - ALPHABET
            if bad:
                raise MalformedInput(f"column {i} contains symbols outside A-Z: {''.join(sorted(bad))}")

        self.layer_count = layer_count
        self.columns: list[str] = list(columns)
        self._visited: set[Cell] = set()

    @classmethod
    def build(cls, layer_count: int, symbols: Sequence[str]) -> Honeycomb:
        if layer_count < 1:
            raise MalformedInput(f"layer count must be at least 1, got {layer_count}")
        try:
            center, lefts, rights = decode_rings(layer_count, symbols)
            columns = assemble_half(lefts)[::-1] + [center] + assemble_half(rights)
        except MemoryError as e:
            raise ResourceExhaustion("out of memory while building the honeycomb") from e
        return cls(layer_count, columns)

    @property
    def number_columns(self) -> int:
        return len(self.columns)

    def __len__(self) -> int:
        return sum(len(column) for column in self.columns)

    def __repr__(self) -> str:
        return f"Honeycomb({self.layer_count}, {self.columns!r})"

    def in_bounds(self, column: int, offset: int) -> bool:
        return 0 <= column < len(self.columns) and 0 <= offset < len(self.columns[column])

    def cell_at(self, column: int, offset: int) -> str | None:
        if not self.in_bounds(column, offset):
            return None
        return self.columns[column][offset]

    def cells(self) -> Iterator[Cell]:
        for column, letters in enumerate(self.columns):
            for offset in range(len(letters)):
                yield column, offset

    def adjacent(self, column: int, offset: int) -> list[Cell]:
        return [
            (column + dc, offset + dp)
            for dc, dp in NEIGHBOUR_OFFSETS
            if self.in_bounds(column + dc, offset + dp)
        ]

    def is_visited(self, column: int, offset: int) -> bool:
        return (column, offset) in self._visited

    def is_open(self, column: int, offset: int) -> bool:
        """True for an in-bounds cell that is not on the active path."""
        return self.in_bounds(column, offset) and (column, offset) not in self._visited

    @property
    def visited(self) -> frozenset[Cell]:
        return frozenset(self._visited)

    @contextmanager
    def mark_visited(self, column: int, offset: int):
        cell = (column, offset)
        if cell in self._visited:
            raise ValueError(f"cell {cell} is already on the path")
        self._visited.add(cell)
        try:
            yield
        finally:
            self._visited.discard(cell)


def parse_honeycomb(text: str) -> tuple[int, list[str]]:
    """Parse honeycomb text: a layer count followed by one symbol per non-blank character."""
    parts = text.split(None, 1)
    if not parts:
        raise MalformedInput("honeycomb input is empty")
    try:
        layer_count = int(parts[0])
    except ValueError:
        raise MalformedInput(f"expected a layer count, got {parts[0]!r}") from None
    rest = parts[1] if len(parts) > 1 else ""
    symbols = [ch for ch in rest if not ch.isspace()]
    return layer_count, symbols


def load_honeycomb(path: str) -> Honeycomb:
    with open(path, "r", encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise MalformedInput(f"honeycomb file is not UTF-8 text: {e}") from e
    layer_count, symbols = parse_honeycomb(text)
    hc = Honeycomb.build(layer_count, symbols)
    logger.info("Loaded %d-layer honeycomb (%d cells) from %s", layer_count, len(hc), path)
    return hc
