# gridsearch/orchestrator.py
"""Sweep over how many of the N cuts go to the vertical axis.

Every split ``(nh, nv)`` with ``nv`` in ``0..=N//2`` is an independent
problem; the cheapest solution wins.  The grid is never taller than wide,
so giving the vertical axis more than half of the cuts is never needed.
"""
from __future__ import annotations

import logging
import multiprocessing as mp
import time
from typing import Dict, List, Optional, Tuple

from config import CFG
from gridsearch.cost import total_grid_cost
from gridsearch.driver import get_cache_locations
from models import Grid, Solution, SweepResult
from progress import (
    log_attempt_detail,
    set_attempt,
    set_best_cost,
    set_grid,
    set_phase,
    set_phase_total,
    set_progress_pct,
    set_status,
)

log = logging.getLogger(__name__)


def candidate_splits(width: int, height: int, ncuts: int) -> List[Tuple[int, int]]:
    """Feasible ``(nhoriz, nvert)`` pairs, in increasing ``nvert`` order."""
    # nh < width and nv < height bound the range on both ends
    lo = max(0, ncuts - width + 1)
    hi = min(ncuts // 2, height - 1)
    if lo > 0 or hi < ncuts // 2:
        log.debug("%d cuts on %dx%d: only nv in %d..%d fits", ncuts, width, height, lo, hi)
    return [(ncuts - nvert, nvert) for nvert in range(lo, hi + 1)]


# Worker must be top-level (picklable under spawn)
def _solve_split(job: Tuple[int, int, int, int]) -> Tuple[int, Solution]:
    width, height, nhoriz, nvert = job
    # pool workers are daemonic and may not fork helpers of their own
    return nvert, get_cache_locations(width, height, nhoriz, nvert, workers=1)


def _pick_best(results: Dict[int, Solution]) -> Tuple[int, Solution]:
    return min(results.items(), key=lambda item: (item[1].cost, item[0]))


def solve_orchestrator(
    width: int,
    height: int,
    ncuts: int,
    *,
    workers: Optional[int] = None,
) -> SweepResult:
    """Return the cheapest placement of ``ncuts`` cuts on a width × height grid."""
    t0 = time.time()
    if width < 1 or height < 1 or ncuts < 0:
        raise ValueError(f"invalid grid {width}x{height} with {ncuts} cuts")
    if width < height:
        raise ValueError("Grid cannot be taller than wider.")
    if workers is None:
        workers = CFG.WORKERS

    grid = Grid(width, height)
    set_grid(grid.label())

    if ncuts == 0:
        cost = total_grid_cost([width], [height])
        best = Solution.create(cost, [], [])
        set_best_cost(cost, "nh=0 nv=0")
        return SweepResult(grid, 0, best, 0, {0: cost}, time.time() - t0)

    splits = candidate_splits(width, height, ncuts)
    if not splits:
        raise ValueError(f"no room for {ncuts} cuts on a {width}x{height} grid")

    set_status("Solving")
    set_phase("sweep")
    set_phase_total(len(splits))
    set_progress_pct(0.0)
    log_attempt_detail("Sweep setup", grid=grid.label(), ncuts=ncuts, splits=len(splits), workers=workers)

    jobs = [(width, height, nh, nv) for nh, nv in splits]
    results: Dict[int, Solution] = {}

    def _record(nvert: int, sol: Solution) -> None:
        results[nvert] = sol
        best_nv, best = _pick_best(results)
        set_best_cost(best.cost, f"nh={ncuts - best_nv} nv={best_nv}")
        set_progress_pct(100.0 * len(results) / len(jobs))
        log_attempt_detail("Split solved", nh=ncuts - nvert, nv=nvert, cost=sol.cost)

    procs = min(int(workers), len(jobs))
    if procs > 1:
        set_attempt(f"{len(jobs)} splits on {procs} workers")
        ctx = mp.get_context("spawn")
        with ctx.Pool(processes=procs) as pool:
            for nvert, sol in pool.imap_unordered(_solve_split, jobs):
                _record(nvert, sol)
    else:
        for job in jobs:
            set_attempt(f"nh={job[2]} nv={job[3]}")
            nvert, sol = _solve_split(job)
            _record(nvert, sol)

    best_nv, best = _pick_best(results)
    elapsed = time.time() - t0
    log.info(
        "%s with %d cuts: best nh=%d nv=%d cost=%d (%.2fs)",
        grid.label(), ncuts, ncuts - best_nv, best_nv, best.cost, elapsed,
    )
    return SweepResult(
        grid=grid,
        ncuts=ncuts,
        best=best,
        nvert=best_nv,
        costs={nv: sol.cost for nv, sol in sorted(results.items())},
        elapsed_sec=elapsed,
    )


__all__ = ["candidate_splits", "solve_orchestrator"]
