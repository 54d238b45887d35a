"""
This python file is used for core Knight's Tour algorithms. Includes the board
state, knight-move generation, the remaining-move (degree) table, plain and
Warnsdorff-ordered backtracking search, exhaustive tour counting, tour
validation utilities, and chessboard visualisation with matplotlib.
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
    numpy, matplotlib
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterator, Optional

import matplotlib
import matplotlib.pyplot as plt
import matplotlib.patches as patches
import numpy as np


matplotlib.use("Agg")  # non-interactive backend for Gradio

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1. Knight moves
# ---------------------------------------------------------------------------

# All eight L-shaped knight moves (row_delta, col_delta), in search order
KNIGHT_MOVES = (
    (1, 2), (-1, 2), (1, -2), (-1, -2),
    (2, 1), (-2, 1), (2, -1), (-2, -1),
)


def knight_destinations(row: int, col: int) -> list[tuple[int, int]]:
    """Return the 8 knight destinations from (row, col) in ``KNIGHT_MOVES`` order.

    Destinations are not bounds-checked.
    """
    return [(row + dr, col + dc) for dr, dc in KNIGHT_MOVES]


def order_by_degree(row: int, col: int, degrees: np.ndarray) -> list[tuple[int, int]]:
    """Warnsdorff ordering of the moves out of (row, col).

    Off-board destinations are dropped; the rest are stably sorted by
    ascending ``degrees`` value, so ties keep ``KNIGHT_MOVES`` order.
    """
    rows, cols = degrees.shape
    candidates = [
        (r, c) for r, c in knight_destinations(row, col)
        if 0 <= r < rows and 0 <= c < cols
    ]
    return sorted(candidates, key=lambda rc: degrees[rc])


# ---------------------------------------------------------------------------
# 2. Errors
# ---------------------------------------------------------------------------

class KnightTourError(Exception):
    """Base class for knight's tour usage errors."""


class InvalidDimensions(KnightTourError, ValueError):
    """Board constructed with a non-positive number of rows or columns."""


class InvalidPosition(KnightTourError, ValueError):
    """Starting square outside the board."""


class InvalidState(KnightTourError, RuntimeError):
    """Search started on a board that already holds knights."""


class DegreeTableNotReady(KnightTourError, RuntimeError):
    """Degree-aware placement used before the degree table was built."""


# ---------------------------------------------------------------------------
# 3. Board and search
# ---------------------------------------------------------------------------

class _Frame:
    """One level of the explicit depth-first search stack."""

    __slots__ = ("row", "col", "level", "moves")

    def __init__(self, row: int, col: int, level: int, moves: Iterator[tuple[int, int]]):
        self.row = row
        self.col = col
        self.level = level
        self.moves = moves


class KnightBoard:
    """A rows x cols board on which knight's tours are searched for.

    ``board[r, c]`` is 0 for an unvisited square, otherwise the 1-based step
    at which the knight landed there.  ``degrees[r, c]`` (built on the first
    heuristic search) is the number of unvisited squares one knight move
    away from (r, c).

    A board is not safe for concurrent searches; use one per thread.
    """

    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise InvalidDimensions(
                f"Board dimensions must be positive, got {rows}x{cols}"
            )
        self.rows = rows
        self.cols = cols
        self.max_level = rows * cols + 1
        self.board = np.zeros((rows, cols), dtype=int)
        self.degrees: Optional[np.ndarray] = None
        self.placements = 0

    # -- board state -------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_empty(self) -> bool:
        return not self.board.any()

    def clear(self) -> None:
        self.board.fill(0)

    def place(self, row: int, col: int, level: int) -> bool:
        """Put the knight's *level*-th step on (row, col) if the square is free."""
        if not self.in_bounds(row, col) or self.board[row, col] != 0:
            return False
        self.board[row, col] = level
        self.placements += 1
        return True

    def remove(self, row: int, col: int, level: int) -> bool:
        """Take back step *level* from (row, col); refuses any other step."""
        if not self.in_bounds(row, col) or self.board[row, col] != level:
            return False
        self.board[row, col] = 0
        return True

    # -- degree table ------------------------------------------------------

    def rebuild_degrees(self) -> np.ndarray:
        """Fill the degree table with each square's on-board knight moves.

        Occupancy is ignored, so this matches the live degrees only on an
        empty board.
        """
        if self.degrees is None:
            self.degrees = np.zeros((self.rows, self.cols), dtype=int)
        for r in range(self.rows):
            for c in range(self.cols):
                self.degrees[r, c] = sum(
                    1 for rr, cc in knight_destinations(r, c) if self.in_bounds(rr, cc)
                )
        return self.degrees

    def _adjust_neighbour_degrees(self, row: int, col: int, delta: int) -> None:
        for r, c in knight_destinations(row, col):
            if self.in_bounds(r, c):
                self.degrees[r, c] += delta

    def place_with_degree(self, row: int, col: int, level: int) -> bool:
        if self.degrees is None:
            raise DegreeTableNotReady("Degree table has not been built")
        if not self.place(row, col, level):
            return False
        self._adjust_neighbour_degrees(row, col, -1)
        return True

    def remove_with_degree(self, row: int, col: int, level: int) -> bool:
        if self.degrees is None:
            raise DegreeTableNotReady("Degree table has not been built")
        if not self.remove(row, col, level):
            return False
        self._adjust_neighbour_degrees(row, col, 1)
        return True

    # -- preconditions -----------------------------------------------------

    def _check_start(self, row: int, col: int) -> None:
        if not self.is_empty():
            raise InvalidState("Board must be empty before a search")
        if not self.in_bounds(row, col):
            raise InvalidPosition(
                f"Start ({row}, {col}) is outside the {self.rows}x{self.cols} board"
            )

    # -- search engine -----------------------------------------------------

    def _search(
        self,
        row: int,
        col: int,
        place: Callable[[int, int, int], bool],
        remove: Callable[[int, int, int], bool],
        candidates: Callable[[int, int], list[tuple[int, int]]],
        exhaustive: bool,
    ) -> int:
        """Depth-first search for tours starting at (row, col).

        Returns the number of complete tours found.  Unless *exhaustive*, the
        search stops at the first one and leaves it on the board; otherwise
        (and whenever nothing is found) every placement is undone.
        """
        found = 0
        stack: list[_Frame] = []

        def enter(r: int, c: int, level: int) -> bool:
            # True when this placement completes a tour
            nonlocal found
            if not place(r, c, level):
                return False
            if level + 1 == self.max_level:
                found += 1
                if exhaustive:
                    remove(r, c, level)
                return True
            stack.append(_Frame(r, c, level, iter(candidates(r, c))))
            return False

        if enter(row, col, 1) and not exhaustive:
            return found

        while stack:
            frame = stack[-1]
            for r, c in frame.moves:
                depth = len(stack)
                if enter(r, c, frame.level + 1):
                    if not exhaustive:
                        return found
                elif len(stack) > depth:
                    break
            else:
                stack.pop()
                remove(frame.row, frame.col, frame.level)
        return found

    # -- public searches ---------------------------------------------------

    def solve(self, start_row: int, start_col: int) -> bool:
        """Search for an open tour trying moves in fixed ``KNIGHT_MOVES`` order.

        On success the board holds the tour labelled 1 .. rows*cols; on
        failure it is left empty.
        """
        self._check_start(start_row, start_col)
        self.placements = 0
        logger.debug("solve %dx%d from (%d, %d)", self.rows, self.cols, start_row, start_col)
        found = self._search(
            start_row, start_col, self.place, self.remove, knight_destinations,
            exhaustive=False,
        )
        logger.debug("solve -> %s after %d placements", bool(found), self.placements)
        return bool(found)

    def fast_solve(self, start_row: int, start_col: int) -> bool:
        """Like :meth:`solve` but tries the move with the fewest onward moves first."""
        self._check_start(start_row, start_col)
        self.rebuild_degrees()
        self.placements = 0
        logger.debug("fast_solve %dx%d from (%d, %d)", self.rows, self.cols, start_row, start_col)
        found = self._search(
            start_row, start_col, self.place_with_degree, self.remove_with_degree,
            lambda r, c: order_by_degree(r, c, self.degrees),
            exhaustive=False,
        )
        logger.debug("fast_solve -> %s after %d placements", bool(found), self.placements)
        return bool(found)

    def count_solutions(self, start_row: int, start_col: int) -> int:
        """Count every open tour starting at (start_row, start_col).

        Exponential in the board area; the board is empty again on return.
        """
        self._check_start(start_row, start_col)
        self.placements = 0
        count = self._search(
            start_row, start_col, self.place, self.remove, knight_destinations,
            exhaustive=True,
        )
        logger.debug(
            "count_solutions %dx%d from (%d, %d) -> %d",
            self.rows, self.cols, start_row, start_col, count,
        )
        return count

    def count_all_solutions(self) -> int:
        """Count tours from every starting square and return the total."""
        total = 0
        effort = 0
        for r in range(self.rows):
            for c in range(self.cols):
                self.clear()
                total += self.count_solutions(r, c)
                effort += self.placements
        self.placements = effort
        return total

    # -- output ------------------------------------------------------------

    def tour(self) -> list[int]:
        """Node indices (row*cols + col) of the labelled squares in visit order."""
        return matrix_to_tour(self.board)

    def render_board(self) -> str:
        """Return the board as a right-aligned grid, one line per row.

        Fields are as wide as rows*cols has digits (width 1 below 10).
        """
        area = self.rows * self.cols
        width = len(str(area)) if area >= 10 else 1
        lines = []
        for r in range(self.rows):
            lines.append(" ".join(f"{int(v):>{width}}" for v in self.board[r]) + "\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.render_board()

    def __repr__(self) -> str:
        return f"KnightBoard(rows={self.rows}, cols={self.cols})"


# ---------------------------------------------------------------------------
# 4. Validation helpers
# ---------------------------------------------------------------------------

def _is_knight_move(a: int, b: int, cols: int) -> bool:
    r1, c1 = divmod(a, cols)
    r2, c2 = divmod(b, cols)
    dr, dc = abs(r1 - r2), abs(c1 - c2)
    return (dr == 1 and dc == 2) or (dr == 2 and dc == 1)


def check_knight_validity(tour: list[int], cols: int) -> bool:
    """Return True if every consecutive pair in *tour* is a valid knight move."""
    for k in range(len(tour) - 1):
        if not _is_knight_move(tour[k], tour[k + 1], cols):
            return False
    return True


def is_closed_tour(tour: list[int], cols: int) -> bool:
    """Check whether the last node can reach the first via a knight move."""
    if len(tour) < 2:
        return False
    return _is_knight_move(tour[-1], tour[0], cols)


def validate_tours(tours: list[list[int]], rows: int, cols: int) -> dict:
    """Validate a list of tours and return summary info."""
    n = rows * cols
    valid_tours = []
    closed_tours = []

    for tour in tours:
        if len(tour) != n:
            continue
        if len(set(tour)) != n or not all(0 <= node < n for node in tour):
            continue
        if not check_knight_validity(tour, cols):
            continue
        valid_tours.append(tour)
        if is_closed_tour(tour, cols):
            closed_tours.append(tour)

    return {
        "total": len(tours),
        "valid": len(valid_tours),
        "closed": len(closed_tours),
        "tours": valid_tours,
        "cycles": closed_tours,
    }


# ---------------------------------------------------------------------------
# 5. Knight Tour Matrix
# ---------------------------------------------------------------------------

def tour_to_matrix(tour: list[int], rows: int, cols: int) -> np.ndarray:
    """Convert a tour (list of node indices) to a rows x cols matrix where
    ``mat[r][c]`` is the visit order (1-based)."""
    mat = np.zeros((rows, cols), dtype=int)
    for idx, node in enumerate(tour):
        r, c = divmod(node, cols)
        mat[r, c] = idx + 1
    return mat


def matrix_to_tour(mat: np.ndarray) -> list[int]:
    """Inverse of :func:`tour_to_matrix`; unvisited (0) squares are skipped."""
    flat = mat.flatten()
    visited = np.flatnonzero(flat)
    order = visited[np.argsort(flat[visited], kind="stable")]
    return [int(node) for node in order]


# ---------------------------------------------------------------------------
# 6. High-level solver  (used by GUI and CLI)
# ---------------------------------------------------------------------------

METHODS = ("backtracking", "warnsdorff", "count")


def is_parity_impossible(rows: int, cols: int, row: int, col: int) -> bool:
    """On boards with an odd number of squares a tour from a minority-colour
    square is impossible (the path needs more squares of that colour than
    exist on the board)."""
    return (rows * cols) % 2 == 1 and (row + col) % 2 == 1


def parity_message(rows: int, cols: int) -> str:
    return (
        "No valid Knight's Tour exists from this starting position.\n"
        f"On a {rows}×{cols} board the path needs more "
        "minority-colour squares than exist (parity constraint)."
    )


def solve_knight_tour(
    rows: int,
    cols: int,
    start_row: int,
    start_col: int,
    method: str = "warnsdorff",
) -> dict:
    """Run one search and return results.

    Returns
    -------
    dict with keys:
        tour : list[int] | None       – the tour to display
        is_cycle : bool               – whether the tour happens to be closed
        count : int | None            – number of tours (``"count"`` only)
        placements : int              – squares placed during the search
        elapsed : float               – wall time in seconds
        message : str                 – human-readable summary
    """
    if method not in METHODS:
        raise ValueError(f"Unknown method {method!r}; expected one of {METHODS}")

    result = {
        "tour": None,
        "is_cycle": False,
        "count": None,
        "placements": 0,
        "elapsed": 0.0,
        "message": "",
    }
    try:
        kb = KnightBoard(rows, cols)
        t0 = time.perf_counter()
        if method == "count":
            found = kb.count_solutions(start_row, start_col)
            result["count"] = found
        elif method == "backtracking":
            found = kb.solve(start_row, start_col)
        else:
            found = kb.fast_solve(start_row, start_col)
        result["elapsed"] = time.perf_counter() - t0
    except KnightTourError as exc:
        result["message"] = str(exc)
        return result

    result["placements"] = kb.placements
    n = rows * cols

    if method == "count":
        result["message"] = (
            f"{found} open tour{'s' if found != 1 else ''} start at this square "
            f"on a {rows}×{cols} board."
        )
        return result

    if not found:
        if is_parity_impossible(rows, cols, start_row, start_col):
            result["message"] = parity_message(rows, cols)
        else:
            result["message"] = "No valid Knight's Tour exists from this starting position."
        return result

    tour = kb.tour()
    cycle = is_closed_tour(tour, cols)
    result["tour"] = tour
    result["is_cycle"] = cycle
    result["message"] = (
        f"Knight's Tour found ({'closed tour ✓' if cycle else 'Open tour'}).\n"
        f"Visited all {n} squares in {result['elapsed']:.3f}s "
        f"({kb.placements} placements)."
    )
    return result


# ---------------------------------------------------------------------------
# 7. Chessboard visualisation
# ---------------------------------------------------------------------------

_LIGHT = "#F0D9B5"
_DARK = "#B58863"
_GREEN = "#7FC97F"
_RED = "#FF4500"
_KNIGHT = "♞"


def _row_label(r: int) -> str:
    return chr(ord("A") + r) if r < 26 else str(r + 1)


def _draw_squares(ax, rows: int, cols: int) -> None:
    ax.set_xlim(0, cols)
    ax.set_ylim(0, rows)
    ax.set_aspect("equal")
    ax.invert_yaxis()
    for r in range(rows):
        for c in range(cols):
            colour = _LIGHT if (r + c) % 2 == 0 else _DARK
            ax.add_patch(patches.Rectangle((c, r), 1, 1, facecolor=colour, edgecolor="none"))


def _label_axes(ax, rows: int, cols: int) -> None:
    ax.set_xticks([i + 0.5 for i in range(cols)])
    ax.set_xticklabels([str(i + 1) for i in range(cols)], fontsize=12)
    ax.set_yticks([i + 0.5 for i in range(rows)])
    ax.set_yticklabels([_row_label(i) for i in range(rows)], fontsize=12)
    ax.tick_params(length=0)


def generate_chessboard_image(
    tour: list[int],
    rows: int,
    cols: int,
    show_animation_frame: int | None = None,
) -> plt.Figure:
    """Render the knight tour on a rows x cols chessboard.

    If *show_animation_frame* is None, draw the full completed tour.
    Otherwise draw only the first *show_animation_frame* steps (for animation).
    """
    steps = len(tour) if show_animation_frame is None else show_animation_frame
    steps = min(steps, len(tour))
    size = max(rows, cols)

    fig, ax = plt.subplots(1, 1, figsize=(5, 5))
    _draw_squares(ax, rows, cols)

    # Highlight only start (green border) and end (red border) squares
    if steps > 0:
        sr, sc = divmod(tour[0], cols)
        ax.add_patch(patches.Rectangle(
            (sc, sr), 1, 1, facecolor="none",
            edgecolor=_GREEN, linewidth=3,
        ))
    if steps == len(tour) and steps > 1:
        er, ec = divmod(tour[-1], cols)
        ax.add_patch(patches.Rectangle(
            (ec, er), 1, 1, facecolor="none",
            edgecolor=_RED, linewidth=3,
        ))

    for idx in range(steps - 1):
        r1, c1 = divmod(tour[idx], cols)
        r2, c2 = divmod(tour[idx + 1], cols)
        ax.annotate(
            "",
            xy=(c2 + 0.5, r2 + 0.5),
            xytext=(c1 + 0.5, r1 + 0.5),
            arrowprops=dict(arrowstyle="->", color="#333333", lw=1.5),
        )

    for idx in range(steps):
        r, c = divmod(tour[idx], cols)
        ax.text(
            c + 0.5, r + 0.5, str(idx + 1),
            ha="center", va="center", fontsize=max(8, 20 - size),
            fontweight="bold", color="black",
        )

    # Knight sits on the last visited square
    if steps > 0:
        lr, lc = divmod(tour[steps - 1], cols)
        ax.text(
            lc + 0.5, lr + 0.15, _KNIGHT,
            ha="center", va="center", fontsize=max(12, 28 - size),
            color="#222",
        )

    _label_axes(ax, rows, cols)

    if steps == len(tour) and len(tour) == rows * cols and is_closed_tour(tour, cols):
        r1, c1 = divmod(tour[-1], cols)
        r2, c2 = divmod(tour[0], cols)
        ax.annotate(
            "",
            xy=(c2 + 0.5, r2 + 0.5),
            xytext=(c1 + 0.5, r1 + 0.5),
            arrowprops=dict(arrowstyle="->", color="blue", lw=2.5, linestyle="dashed"),
        )

    ax.set_title(
        f"Knight's Tour  {rows}×{cols}  "
        f"(step {steps}/{len(tour)})",
        fontsize=14, fontweight="bold",
    )
    fig.tight_layout()
    return fig


def generate_empty_board(
    rows: int,
    cols: int,
    knight_row: int | None = None,
    knight_col: int | None = None,
) -> plt.Figure:
    """Render an empty chessboard, optionally placing a knight on (knight_row, knight_col).

    Parameters are 0-based.
    """
    fig, ax = plt.subplots(1, 1, figsize=(5, 5))
    _draw_squares(ax, rows, cols)

    if (
        knight_row is not None
        and knight_col is not None
        and 0 <= knight_row < rows
        and 0 <= knight_col < cols
    ):
        ax.add_patch(patches.Rectangle(
            (knight_col, knight_row), 1, 1,
            facecolor="none", edgecolor=_GREEN, linewidth=3,
        ))
        ax.text(
            knight_col + 0.5, knight_row + 0.5, _KNIGHT,
            ha="center", va="center",
            fontsize=max(16, 36 - max(rows, cols)), color="#222",
        )

    _label_axes(ax, rows, cols)

    ax.set_title(
        f"Chessboard  {rows}×{cols}",
        fontsize=14, fontweight="bold",
    )
    fig.tight_layout()
    return fig
