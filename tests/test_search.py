import pytest

import knight_tour as kt
from conftest import assert_full_tour


SMALL_BOARDS = [(1, 1), (1, 2), (1, 3), (2, 3), (2, 4), (3, 3), (3, 4), (4, 3), (4, 4)]


def _starts(rows, cols):
    return [(r, c) for r in range(rows) for c in range(cols)]


class TestKnownBoards:
    def test_single_square_is_a_tour(self):
        kb = kt.KnightBoard(1, 1)
        assert kb.solve(0, 0)
        assert kb.board[0, 0] == 1

    def test_single_square_every_mode(self):
        kb = kt.KnightBoard(1, 1)
        assert kb.fast_solve(0, 0)
        kb.clear()
        assert kb.count_solutions(0, 0) == 1
        assert kb.count_all_solutions() == 1

    def test_3x3_has_no_tour(self):
        kb = kt.KnightBoard(3, 3)
        assert not kb.solve(0, 0)
        assert kb.is_empty()
        assert kb.count_solutions(0, 0) == 0

    def test_5x5_from_corner(self, board_5x5):
        assert board_5x5.solve(0, 0)
        assert board_5x5.board[0, 0] == 1
        assert_full_tour(board_5x5)

    def test_4x4_has_no_tour_anywhere(self):
        kb = kt.KnightBoard(4, 4)
        assert kb.count_all_solutions() == 0
        assert kb.is_empty()

    @pytest.mark.parametrize("start", _starts(2, 4))
    def test_width_two_board_has_no_tour(self, start):
        kb = kt.KnightBoard(2, 4)
        assert not kb.solve(*start)
        assert kb.is_empty()


class TestHeuristicSolve:
    def test_5x5_from_corner(self, board_5x5):
        assert board_5x5.fast_solve(0, 0)
        assert_full_tour(board_5x5)
        assert board_5x5.placements >= 25

    def test_chessboard_from_corner(self):
        kb = kt.KnightBoard(8, 8)
        assert kb.fast_solve(0, 0)
        assert_full_tour(kb)

    def test_rectangular_board(self):
        kb = kt.KnightBoard(5, 6)
        assert kb.fast_solve(2, 3)
        assert kb.board[2, 3] == 1
        assert_full_tour(kb)

    def test_repeated_solves_after_clear(self, board_5x5):
        assert board_5x5.fast_solve(0, 0)
        first = board_5x5.board.copy()
        board_5x5.clear()
        assert board_5x5.fast_solve(0, 0)
        assert (board_5x5.board == first).all()

    def test_failure_restores_board_and_degrees(self):
        kb = kt.KnightBoard(3, 3)
        assert not kb.fast_solve(0, 0)
        assert kb.is_empty()
        expected = kb.degrees.copy()
        assert (kb.rebuild_degrees() == expected).all()


class TestSearchAgreement:
    @pytest.mark.parametrize("rows, cols", SMALL_BOARDS)
    def test_solve_and_fast_solve_agree(self, rows, cols):
        kb = kt.KnightBoard(rows, cols)
        for r, c in _starts(rows, cols):
            kb.clear()
            plain = kb.solve(r, c)
            if plain:
                assert_full_tour(kb)
            else:
                assert kb.is_empty()
            kb.clear()
            fast = kb.fast_solve(r, c)
            if fast:
                assert_full_tour(kb)
            else:
                assert kb.is_empty()
            assert plain == fast

    @pytest.mark.parametrize("rows, cols", [(3, 4), (4, 3), (3, 3), (1, 1)])
    def test_count_matches_solve(self, rows, cols):
        kb = kt.KnightBoard(rows, cols)
        total = 0
        for r, c in _starts(rows, cols):
            kb.clear()
            count = kb.count_solutions(r, c)
            assert count >= 0
            assert kb.is_empty()
            assert (count >= 1) == kb.solve(r, c)
            total += count
        kb.clear()
        assert kb.count_all_solutions() == total

    def test_3x4_has_open_tours(self):
        kb = kt.KnightBoard(3, 4)
        assert kb.count_all_solutions() > 0
        assert kb.is_empty()

    def test_count_all_reports_total_effort(self):
        kb = kt.KnightBoard(3, 4)
        per_start = 0
        for r, c in _starts(3, 4):
            kb.clear()
            kb.count_solutions(r, c)
            per_start += kb.placements
        kb.clear()
        kb.count_all_solutions()
        assert kb.placements == per_start
        assert kb.placements > kb.rows * kb.cols

    def test_count_all_starts_from_dirty_board(self):
        kb = kt.KnightBoard(3, 4)
        expected = kb.count_all_solutions()
        kb.place(1, 1, 1)
        assert kb.count_all_solutions() == expected
