# gridsearch/cost.py
"""Closed-form cost of a grid partition.

A partition is described by an interleaved *boundary sequence*: the origin
``0`` followed by alternating width-axis and height-axis boundaries.  Every
window of three consecutive values ``(start, mid, end)`` is one rectangular
cell of width ``end - start`` and height ``mid``.
"""
from typing import Iterable, Iterator, List, Sequence

from gridsearch.sticky import StickyRepeat


def cell_cost(start: int, height: int, end: int) -> int:
    w = end - start
    h = height
    if w > 0:
        return h * w * (h + w - 2) // 2
    return 0


def total_cost(boundary: Iterable[int]) -> int:
    values = boundary if isinstance(boundary, (list, tuple)) else list(boundary)
    return sum(
        cell_cost(w0, h, w1)
        for w0, h, w1 in zip(values, values[1:], values[2:])
    )


def edge_residual(axis: Sequence[int]) -> int:
    """Cost of the open cell at the far edge: the second-to-last boundary."""
    if len(axis) < 2:
        return 0
    return int(axis[-2])


def boundary_sequence(widths: Sequence[int], heights: Sequence[int]) -> Iterator[int]:
    """Merge two axis sequences into one boundary sequence.

    The shorter ``heights`` axis holds its final value while ``widths``
    continues.  Whichever axis has the smaller first cut leads each pair.
    """
    yield 0
    width_first = widths[0] < heights[0]
    for h, w in zip(StickyRepeat(heights), widths):
        if width_first:
            yield w
            yield h
        else:
            yield h
            yield w


def total_grid_cost(widths: Sequence[int], heights: Sequence[int]) -> int:
    """Cost of the partition given by both axes, terminal lengths included.

    >>> total_grid_cost([50, 100], [100])
    740050
    """
    if len(widths) < len(heights):
        raise ValueError(
            f"Length of width sequence ({len(widths)}) has to be at least "
            f"the length of the height sequence ({len(heights)})"
        )
    if not heights:
        raise ValueError("Both axes need at least their terminal length")
    for name, axis in (("width", widths), ("height", heights)):
        for a, b in zip(axis, axis[1:]):
            if b < a:
                raise ValueError(f"{name} coordinates must not decrease ({a} before {b})")

    merged: List[int] = list(boundary_sequence(widths, heights))
    return edge_residual(widths) + edge_residual(heights) + total_cost(merged)


__all__ = [
    "cell_cost",
    "total_cost",
    "edge_residual",
    "boundary_sequence",
    "total_grid_cost",
]
