# gridsearch/layout.py
"""Initial boundary buffers for the local search.

Both strategies lay out ``nh`` horizontal and ``nv`` vertical cuts as

    origin, nv interleaved pairs, (nh - nv) horizontal-only pairs, terminal

and seed the movable coordinates with consecutive integers.  They differ
only in which axis leads each pair, which changes the order in which the
search tries moves and therefore the local optimum it settles in.
"""
from dataclasses import dataclass
from typing import List, Tuple

from gridsearch.indexed_view import IndexedView


@dataclass
class Layout:
    strategy: str
    width: int
    height: int
    view: IndexedView
    horizontal_positions: Tuple[int, ...]
    vertical_positions: Tuple[int, ...]

    @property
    def nhoriz(self) -> int:
        return len(self.horizontal_positions)

    @property
    def nvert(self) -> int:
        return len(self.vertical_positions)

    @property
    def buffer(self):
        return self.view.raw

    def horizontal_caches(self) -> List[int]:
        raw = self.view.raw
        return [raw[i] for i in self.horizontal_positions]

    def vertical_caches(self) -> List[int]:
        raw = self.view.raw
        return [raw[i] for i in self.vertical_positions]


def check_counts(width: int, height: int, nhoriz: int, nvert: int) -> None:
    if nvert < 0 or nhoriz < nvert:
        raise ValueError(f"need nhoriz >= nvert >= 0 (got nhoriz={nhoriz}, nvert={nvert})")
    if width <= nhoriz:
        raise ValueError(f"width {width} has no room for {nhoriz} horizontal cuts")
    if height <= nvert:
        raise ValueError(f"height {height} has no room for {nvert} vertical cuts")


class LayoutStrategy:
    name = ""

    def build(self, width: int, height: int, nhoriz: int, nvert: int) -> Layout:
        check_counts(width, height, nhoriz, nvert)
        buffer = self._buffer(width, height, nhoriz, nvert)
        horizontal, vertical = self._positions(nhoriz, nvert)
        view = IndexedView(buffer, horizontal + vertical)
        return Layout(self.name, width, height, view, horizontal, vertical)

    def _buffer(self, width: int, height: int, nhoriz: int, nvert: int) -> List[int]:
        raise NotImplementedError

    def _positions(self, nhoriz: int, nvert: int) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


def _interleaved(nvert: int) -> List[int]:
    caches = [0]
    for x in range(nvert):
        caches.extend((2 * x + 1, 2 * (x + 1)))
    return caches


class HorizontalFirst(LayoutStrategy):
    """Pairs are (horizontal, vertical); terminal pair is (width, height)."""

    name = "horizontal-first"

    def _buffer(self, width, height, nhoriz, nvert):
        caches = _interleaved(nvert)
        for x in range(nhoriz - nvert):
            caches.extend((2 * nvert + x + 1, height))
        caches.extend((width, height))
        return caches

    def _positions(self, nhoriz, nvert):
        horizontal = tuple(2 * x + 1 for x in range(nhoriz))
        vertical = tuple(2 * (x + 1) for x in range(nvert))
        return horizontal, vertical


class VerticalFirst(LayoutStrategy):
    """Pairs are (vertical, horizontal); terminal pair is (height, width)."""

    name = "vertical-first"

    def _buffer(self, width, height, nhoriz, nvert):
        caches = _interleaved(nvert)
        for x in range(nhoriz - nvert):
            caches.extend((height, 2 * nvert + x + 1))
        caches.extend((height, width))
        return caches

    def _positions(self, nhoriz, nvert):
        horizontal = tuple(2 * (x + 1) for x in range(nhoriz))
        vertical = tuple(2 * x + 1 for x in range(nvert))
        return horizontal, vertical


HORIZONTAL_FIRST = HorizontalFirst()
VERTICAL_FIRST = VerticalFirst()

STRATEGIES: Tuple[LayoutStrategy, ...] = (HORIZONTAL_FIRST, VERTICAL_FIRST)


__all__ = [
    "Layout",
    "LayoutStrategy",
    "HorizontalFirst",
    "VerticalFirst",
    "HORIZONTAL_FIRST",
    "VERTICAL_FIRST",
    "STRATEGIES",
    "check_counts",
]
