# main.py — command-line front-end for the cut sweep
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from config import CFG
from gridsearch.orchestrator import solve_orchestrator

EX_OK = getattr(os, "EX_OK", 0)
EX_DATAERR = getattr(os, "EX_DATAERR", 65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridcache",
        description="Place cache cuts on a width x height grid at minimum cost.",
    )
    parser.add_argument("-w", "--width", type=int, required=True, help="Width of the network grid")
    parser.add_argument("-H", "--height", type=int, required=True, help="Height of the network grid")
    parser.add_argument("-n", "--ncaches", type=int, default=0, help="Number of caches")
    parser.add_argument("-c", "--hide-cost", action="store_true", help="Do not print the best cost")
    parser.add_argument("-s", "--show-caches", action="store_true", help="Print the cache coordinates")
    parser.add_argument(
        "--workers", type=int, default=CFG.WORKERS,
        help="Worker processes for the sweep (default: GC_WORKERS or 1)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log solver progress to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.width < args.height:
        print("Grid cannot be taller than wider.", file=sys.stderr)
        return EX_DATAERR

    try:
        result = solve_orchestrator(args.width, args.height, args.ncaches, workers=args.workers)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return EX_DATAERR

    if not args.hide_cost:
        print(result.best.cost)
    if args.show_caches:
        print(result.best.caches_label())

    return EX_OK


if __name__ == "__main__":
    sys.exit(main())
