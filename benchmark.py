"""
This python file is used for the command-line timing driver of the Knight's
Tour solver. Builds a board, runs the chosen searches (backtracking,
Warnsdorff, counting) from one starting square, and prints the elapsed time,
search effort and the labelled board.
####################################################################
## Personal Project - Srinivas Sridharan
####################################################################

Author: Srinivas Sridharan
Copyright: 2026
Project: knight_tour

License: Personal Project
Version: 0.1.0
Maintainer: Srinivas Sridharan

Status: Development

Other dependencies:
    knight_tour
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from knight_tour import KnightBoard, KnightTourError

DEFAULT_ROWS = 25
DEFAULT_COLS = 25
LOG_LEVEL = logging.ERROR

SEARCHES = {
    "backtracking": KnightBoard.solve,
    "warnsdorff": KnightBoard.fast_solve,
    "count": KnightBoard.count_solutions,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Time the knight's tour searches on one board."
    )
    parser.add_argument("rows", type=int, nargs="?", default=DEFAULT_ROWS)
    parser.add_argument("cols", type=int, nargs="?", default=DEFAULT_COLS)
    parser.add_argument("--row", type=int, default=0, help="starting row (0-based)")
    parser.add_argument("--col", type=int, default=0, help="starting column (0-based)")
    parser.add_argument(
        "--method",
        choices=sorted(SEARCHES),
        action="append",
        help="search to run; repeat to time several (default: warnsdorff)",
    )
    parser.add_argument(
        "--count-all",
        action="store_true",
        help="also count tours from every starting square (small boards only)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def run(args: argparse.Namespace) -> int:
    kb = KnightBoard(args.rows, args.cols)
    print(kb)

    for method in args.method or ["warnsdorff"]:
        kb.clear()
        t0 = time.perf_counter()
        result = SEARCHES[method](kb, args.row, args.col)
        elapsed = time.perf_counter() - t0
        print(f"{method}: {result}  ({elapsed:.4f}s, {kb.placements} placements)")
        print(kb)

    if args.count_all:
        kb.clear()
        t0 = time.perf_counter()
        total = kb.count_all_solutions()
        print(f"count-all: {total}  ({time.perf_counter() - t0:.4f}s)")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    try:
        return run(args)
    except KnightTourError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
