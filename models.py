from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple


@dataclass(frozen=True)
class Grid:
    width: int
    height: int

    def label(self) -> str:
        return f"{self.width} × {self.height}"


@dataclass(frozen=True)
class Solution:
    """Immutable snapshot of a finished search."""

    cost: int
    vertical_caches: Tuple[int, ...] = ()
    horizontal_caches: Tuple[int, ...] = ()

    @classmethod
    def create(cls, cost: int, vertical: Sequence[int], horizontal: Sequence[int]) -> "Solution":
        return cls(int(cost), tuple(int(v) for v in vertical), tuple(int(h) for h in horizontal))

    def full_axes(self, width: int, height: int) -> Tuple[List[int], List[int]]:
        """Return (widths, heights) with the terminal axis lengths appended."""
        return list(self.horizontal_caches) + [width], list(self.vertical_caches) + [height]

    def caches_label(self) -> str:
        return f"{list(self.horizontal_caches)}×{list(self.vertical_caches)}"


@dataclass
class SweepResult:
    grid: Grid
    ncuts: int
    best: Solution
    nvert: int
    costs: Dict[int, int]
    elapsed_sec: float

    @property
    def nhoriz(self) -> int:
        return self.ncuts - self.nvert
