import matplotlib.pyplot as plt
import numpy as np
import pytest

import knight_tour as kt


@pytest.fixture
def tour_5x5():
    kb = kt.KnightBoard(5, 5)
    assert kb.solve(0, 0)
    return kb.tour()


class TestValidation:
    def test_solver_tour_is_valid(self, tour_5x5):
        summary = kt.validate_tours([tour_5x5], 5, 5)
        assert summary["valid"] == 1
        assert summary["tours"] == [tour_5x5]

    def test_rejects_broken_tours(self, tour_5x5):
        short = tour_5x5[:-1]
        repeated = tour_5x5[:-1] + [tour_5x5[0]]
        swapped = [tour_5x5[1], tour_5x5[0]] + tour_5x5[2:]
        summary = kt.validate_tours([tour_5x5, short, repeated, swapped], 5, 5)
        assert summary["total"] == 4
        assert summary["valid"] == 1

    def test_check_knight_validity(self):
        # (0,0) -> (1,2) -> (2,0) on a 3-column board
        assert kt.check_knight_validity([0, 5, 6], 3)
        assert not kt.check_knight_validity([0, 1], 3)

    def test_closed_tour_detection(self):
        assert kt.is_closed_tour([0, 7], 5)
        assert not kt.is_closed_tour([0, 1], 5)
        assert not kt.is_closed_tour([0], 5)


class TestMatrix:
    def test_matrix_matches_board(self):
        kb = kt.KnightBoard(3, 4)
        kb.place(0, 0, 1)
        kb.place(2, 1, 2)
        kb.place(0, 2, 3)
        assert kb.tour() == [0, 9, 2]
        assert np.array_equal(kt.tour_to_matrix(kb.tour(), 3, 4), kb.board)

    def test_empty_matrix_has_empty_tour(self):
        assert kt.matrix_to_tour(np.zeros((2, 2), dtype=int)) == []


class TestSolveKnightTour:
    def test_heuristic_tour(self):
        result = kt.solve_knight_tour(5, 5, 0, 0)
        assert len(result["tour"]) == 25
        assert result["count"] is None
        assert result["placements"] >= 25
        assert "Open tour" in result["message"]

    def test_backtracking_tour_starts_at_start(self):
        result = kt.solve_knight_tour(3, 4, 0, 0, method="backtracking")
        assert result["tour"] is not None
        assert result["tour"][0] == 0
        assert kt.check_knight_validity(result["tour"], 4)

    def test_parity_message(self):
        result = kt.solve_knight_tour(3, 3, 0, 1, method="backtracking")
        assert result["tour"] is None
        assert "parity" in result["message"]

    def test_parity_impossible_squares(self):
        assert kt.is_parity_impossible(5, 7, 0, 1)
        assert not kt.is_parity_impossible(5, 7, 0, 0)
        assert not kt.is_parity_impossible(4, 4, 0, 1)
        assert "5×7" in kt.parity_message(5, 7)

    def test_plain_failure_message(self):
        result = kt.solve_knight_tour(4, 4, 0, 0, method="warnsdorff")
        assert result["tour"] is None
        assert "No valid Knight's Tour" in result["message"]
        assert "parity" not in result["message"]

    def test_count(self):
        result = kt.solve_knight_tour(3, 3, 0, 0, method="count")
        assert result["count"] == 0
        assert result["tour"] is None
        assert result["message"].startswith("0 open tours")

    def test_usage_errors_become_messages(self):
        result = kt.solve_knight_tour(0, 4, 0, 0)
        assert result["tour"] is None
        assert "positive" in result["message"]
        result = kt.solve_knight_tour(4, 4, 9, 0)
        assert "outside" in result["message"]

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            kt.solve_knight_tour(5, 5, 0, 0, method="annealing")


class TestVisualisation:
    def test_tour_image(self, tour_5x5):
        fig = kt.generate_chessboard_image(tour_5x5, 5, 5)
        assert isinstance(fig, plt.Figure)
        assert fig.axes[0].get_title() == "Knight's Tour  5×5  (step 25/25)"
        plt.close(fig)

    def test_animation_frame(self, tour_5x5):
        fig = kt.generate_chessboard_image(tour_5x5, 5, 5, show_animation_frame=3)
        assert "(step 3/25)" in fig.axes[0].get_title()
        plt.close(fig)

    def test_rectangular_empty_board(self):
        fig = kt.generate_empty_board(3, 4, knight_row=1, knight_col=2)
        ax = fig.axes[0]
        assert ax.get_title() == "Chessboard  3×4"
        assert [t.get_text() for t in ax.get_yticklabels()] == ["A", "B", "C"]
        assert len(ax.get_xticks()) == 4
        plt.close(fig)
