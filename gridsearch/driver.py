# gridsearch/driver.py
"""Run both layout strategies for one (nh, nv) split and keep the cheaper."""
import logging
import threading
from typing import List, Optional

from config import CFG
from gridsearch.layout import HORIZONTAL_FIRST, VERTICAL_FIRST, LayoutStrategy, check_counts
from gridsearch.local_search import LocalSearch
from models import Solution

log = logging.getLogger(__name__)


def search_with(
    strategy: LayoutStrategy,
    width: int,
    height: int,
    nhoriz: int,
    nvert: int,
) -> Solution:
    layout = strategy.build(width, height, nhoriz, nvert)
    return LocalSearch(layout).find_solution()


def get_cache_locations(
    width: int,
    height: int,
    nhoriz: int,
    nvert: int,
    *,
    workers: Optional[int] = None,
) -> Solution:
    """Best of the horizontal-first and vertical-first searches.

    With ``workers > 1`` the vertical-first search runs on a helper thread
    while the caller's thread runs horizontal-first.  Ties go to
    horizontal-first either way, so the result does not depend on timing.
    """
    check_counts(width, height, nhoriz, nvert)
    if workers is None:
        workers = CFG.WORKERS

    args = (width, height, nhoriz, nvert)
    if workers > 1:
        slot: List[Optional[Solution]] = [None]
        failure: List[BaseException] = []

        def _run_vertical() -> None:
            try:
                slot[0] = search_with(VERTICAL_FIRST, *args)
            except BaseException as exc:
                failure.append(exc)

        th = threading.Thread(target=_run_vertical, name="gridsearch-vertical-first", daemon=True)
        th.start()
        try:
            sol_horiz = search_with(HORIZONTAL_FIRST, *args)
        finally:
            th.join()
        if failure:
            raise failure[0]
        sol_vert = slot[0]
    else:
        sol_horiz = search_with(HORIZONTAL_FIRST, *args)
        sol_vert = search_with(VERTICAL_FIRST, *args)

    best = sol_horiz if sol_horiz.cost <= sol_vert.cost else sol_vert
    log.debug(
        "split nh=%d nv=%d: horizontal-first=%d vertical-first=%d",
        nhoriz, nvert, sol_horiz.cost, sol_vert.cost,
    )
    return best


# Public name for the core entry point.
optimize = get_cache_locations


__all__ = ["get_cache_locations", "optimize", "search_with"]
