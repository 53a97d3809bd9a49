# gridsearch/local_search.py
"""Coordinate-ascent search over the movable cuts of a :class:`Layout`.

The scan walks the movable positions from the last one down to the first,
moving a cut one unit forward whenever that does not raise the total cost.
Every accepted move sends the pivot back to the last position, and a full
scan without any accepted move ends the search.  Coordinates only ever grow
and are bounded by the axis lengths, so the loop always terminates, at a
local optimum.
"""
import logging
from typing import Tuple

from gridsearch.cost import edge_residual, total_cost
from gridsearch.layout import Layout
from models import Solution

log = logging.getLogger(__name__)


class LocalSearch:

    def __init__(self, layout: Layout):
        if len(layout.view) == 0:
            raise ValueError("We need some caches")
        self.layout = layout
        self.view = layout.view
        vertical = set(layout.vertical_positions)
        # per logical position: (axis bound, is_vertical)
        self._axis: Tuple[Tuple[int, bool], ...] = tuple(
            (layout.height, True) if self.view.physical(i) in vertical else (layout.width, False)
            for i in range(len(self.view))
        )
        self.moves = 0
        self.sweeps = 0

    def _blocked(self, index: int) -> bool:
        view = self.view
        value = view[index]
        bound, vertical = self._axis[index]
        if value >= bound:
            return True
        if index + 1 < len(view):
            nxt = view[index + 1]
            if value >= nxt:
                return True
            # two cuts on the same axis may never collapse into one
            if self._axis[index + 1][1] == vertical and value + 1 >= nxt:
                return True
        return False

    def try_advance(self, index: int) -> bool:
        if self._blocked(index):
            return False

        view = self.view
        prev = view[index]
        cost = total_cost(view.raw)
        view[index] = prev + 1
        new_cost = total_cost(view.raw)
        view[index] = prev

        return new_cost <= cost

    def commit_advance(self, index: int) -> None:
        self.view[index] += 1
        self.moves += 1

    def run(self) -> None:
        last = len(self.view) - 1
        improves = False
        pivot = last
        self.sweeps = 1
        while True:
            if self.try_advance(pivot):
                self.commit_advance(pivot)
                improves = True
                pivot = last
            elif pivot > 0:
                pivot -= 1
            else:
                if not improves:
                    break
                pivot = last
                improves = False
                self.sweeps += 1

    def final_cost(self) -> int:
        layout = self.layout
        horizontal = layout.horizontal_caches() + [layout.width]
        vertical = layout.vertical_caches() + [layout.height]
        return edge_residual(horizontal) + edge_residual(vertical) + total_cost(self.view.raw)

    def extract_solution(self) -> Solution:
        return Solution.create(
            self.final_cost(),
            self.layout.vertical_caches(),
            self.layout.horizontal_caches(),
        )

    def find_solution(self) -> Solution:
        self.run()
        sol = self.extract_solution()
        log.debug(
            "%s %dx%d nh=%d nv=%d: cost=%d moves=%d sweeps=%d",
            self.layout.strategy, self.layout.width, self.layout.height,
            self.layout.nhoriz, self.layout.nvert, sol.cost, self.moves, self.sweeps,
        )
        return sol


__all__ = ["LocalSearch"]
