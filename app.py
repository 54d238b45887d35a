"""
This python file is used for Gradio web application for the Knight's Tour
solver. Provides an interactive GUI to select board rows and columns, starting
square, search mode (backtracking / Warnsdorff / count), visualise the tour,
and view the visit-order matrix.
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
    gradio, numpy, knight_tour
"""

from __future__ import annotations

import gradio as gr
import numpy as np

from knight_tour import (
    generate_chessboard_image,
    generate_empty_board,
    is_parity_impossible,
    parity_message,
    solve_knight_tour,
    tour_to_matrix,
)


# ── Shared state ──────────────────────────────────────────────────────────
_last_result: dict = {}


# ── Configuration ─────────────────────────────────────────────────────────

ROW_LETTERS = "ABCDEFGH"
MAX_BOARD = len(ROW_LETTERS)
MAX_PLAIN_SQUARES = 25     # plain backtracking blows up past this
MAX_COUNT_SQUARES = 16     # exhaustive counting is exponential in the area

ALGORITHMS = {
    "Backtracking": "backtracking",
    "Warnsdorff's Heuristic": "warnsdorff",
    "Count Solutions": "count",
}


# ── Helpers ───────────────────────────────────────────────────────────────

def _row_choices(rows: int) -> list[str]:
    return [ROW_LETTERS[i] for i in range(rows)]


def _col_choices(cols: int) -> list[str]:
    return [str(i + 1) for i in range(cols)]


def _refusal(method: str, rows: int, cols: int, row: int, col: int) -> str | None:
    """Message for searches the GUI will not run, or None."""
    n = rows * cols
    if method == "backtracking" and is_parity_impossible(rows, cols, row, col):
        # only an exhaustive search would prove this
        return parity_message(rows, cols)
    if method == "backtracking" and n > MAX_PLAIN_SQUARES:
        return (
            f"Plain backtracking is limited to {MAX_PLAIN_SQUARES} squares here.\n"
            "Use Warnsdorff's Heuristic for larger boards."
        )
    if method == "count" and n > MAX_COUNT_SQUARES:
        return f"Counting every tour is limited to {MAX_COUNT_SQUARES} squares here."
    return None


def _format_matrix(mat: np.ndarray, rows: int, cols: int) -> str:
    lines = []
    header = "    " + "  ".join(f"{i+1:>3}" for i in range(cols))
    lines.append(header)
    lines.append("    " + "----" * cols)
    for r in range(rows):
        label = ROW_LETTERS[r]
        vals = "  ".join(f"{mat[r, c]:>3}" for c in range(cols))
        lines.append(f" {label} | {vals}")
    return "\n".join(lines)


# ── Callbacks ─────────────────────────────────────────────────────────────

def on_board_size_change(rows: int, cols: int):
    """Update row/column dropdowns and render empty board when the board size changes."""
    rows, cols = int(rows), int(cols)
    row_opts = _row_choices(rows)
    col_opts = _col_choices(cols)
    fig = generate_empty_board(rows, cols, knight_row=0, knight_col=0)
    return (
        gr.update(choices=row_opts, value=row_opts[0]),
        gr.update(choices=col_opts, value=col_opts[0]),
        fig,
    )


def on_position_change(rows: int, cols: int, row_letter: str, col_str: str):
    """Re-render the board with the knight at the selected position."""
    rows, cols = int(rows), int(cols)
    if not row_letter or not col_str:
        return generate_empty_board(rows, cols)
    row = ROW_LETTERS.index(row_letter)
    col = int(col_str) - 1
    return generate_empty_board(rows, cols, knight_row=row, knight_col=col)


def run_solver(
    rows: int,
    cols: int,
    row_letter: str,
    col_str: str,
    algorithm: str,
):
    """Execute the chosen search and return visualisation + info."""
    global _last_result

    rows, cols = int(rows), int(cols)
    row = ROW_LETTERS.index(row_letter)
    col = int(col_str) - 1
    method = ALGORITHMS[algorithm]
    hidden_slider = gr.update(maximum=1, value=1, visible=False)

    refusal = _refusal(method, rows, cols, row, col)
    if refusal is not None:
        _last_result = {}
        return (
            generate_empty_board(rows, cols, knight_row=row, knight_col=col),
            refusal,
            "",
            hidden_slider,
        )

    result = solve_knight_tour(rows, cols, row, col, method=method)

    if result["tour"] is None:
        _last_result = {}
        return (
            generate_empty_board(rows, cols, knight_row=row, knight_col=col),
            result["message"],
            "",
            hidden_slider,
        )

    _last_result = {"tour": result["tour"], "rows": rows, "cols": cols}
    tour = result["tour"]
    n = rows * cols
    fig = generate_chessboard_image(tour, rows, cols)
    mat = tour_to_matrix(tour, rows, cols)

    return (
        fig,
        result["message"],
        _format_matrix(mat, rows, cols),
        gr.update(minimum=1, maximum=n, value=n, visible=True),
    )


def on_slider_change(step: int):
    """Re-render board at a particular animation step."""
    result = _last_result
    if not result or result.get("tour") is None:
        return None

    return generate_chessboard_image(
        result["tour"], result["rows"], result["cols"], show_animation_frame=int(step),
    )


# ── Gradio UI ─────────────────────────────────────────────────────────────

def build_app() -> gr.Blocks:
    with gr.Blocks(
        title="Knight's Tour Solver",
    ) as app:
        gr.Markdown(
            "# ♞ Knight's Tour Solver\n"
            "Find and visualise an open Knight's Tour on an M×N chessboard.  \n"
            "Choose board size, starting position, search mode, then click **Solve**."
        )

        with gr.Row():
            # ── Left column: controls ──
            with gr.Column(scale=1):
                rows_slider = gr.Slider(
                    minimum=1, maximum=MAX_BOARD, step=1, value=5,
                    label="Rows",
                )
                cols_slider = gr.Slider(
                    minimum=1, maximum=MAX_BOARD, step=1, value=5,
                    label="Columns",
                )
                row_dd = gr.Dropdown(
                    choices=_row_choices(5), value="A",
                    label="Starting Row",
                )
                col_dd = gr.Dropdown(
                    choices=_col_choices(5), value="1",
                    label="Starting Column",
                )
                algo_dd = gr.Radio(
                    choices=list(ALGORITHMS),
                    value="Warnsdorff's Heuristic",
                    label="Search",
                )
                solve_btn = gr.Button("Solve", variant="primary", size="lg")

                status_box = gr.Textbox(label="Result", lines=3, interactive=False)

                step_slider = gr.Slider(
                    minimum=1, maximum=25, step=1, value=25,
                    label="Animation Step (drag to step through)",
                    visible=False,
                )

            # ── Right column: board visualisation ──
            with gr.Column(scale=2):
                board_plot = gr.Plot(
                    label="Chessboard",
                    value=generate_empty_board(5, 5, knight_row=0, knight_col=0),
                )

        # ── Tour matrix ──
        with gr.Accordion("Knight Tour Matrix", open=False):
            matrix_box = gr.Code(label="Visit-Order Matrix", language=None, lines=12)

        # ── Wiring ──
        for size_control in (rows_slider, cols_slider):
            size_control.change(
                on_board_size_change,
                inputs=[rows_slider, cols_slider],
                outputs=[row_dd, col_dd, board_plot],
            )

        for position_control in (row_dd, col_dd):
            position_control.change(
                on_position_change,
                inputs=[rows_slider, cols_slider, row_dd, col_dd],
                outputs=[board_plot],
            )

        solve_btn.click(
            run_solver,
            inputs=[rows_slider, cols_slider, row_dd, col_dd, algo_dd],
            outputs=[board_plot, status_box, matrix_box, step_slider],
        )

        step_slider.change(
            on_slider_change,
            inputs=[step_slider],
            outputs=[board_plot],
        )

    return app


# ── Main ──────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app = build_app()
    app.launch(theme=gr.themes.Soft())
