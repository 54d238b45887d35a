import pytest

import knight_tour as kt


@pytest.fixture
def board_5x5():
    return kt.KnightBoard(5, 5)


@pytest.fixture
def board_8x8():
    """Standard chessboard with its degree table built against the empty board."""
    kb = kt.KnightBoard(8, 8)
    kb.rebuild_degrees()
    return kb


def assert_full_tour(kb):
    """Board holds 1..rows*cols once each, consecutive steps a knight move apart."""
    n = kb.rows * kb.cols
    assert sorted(kb.board.flatten().tolist()) == list(range(1, n + 1))
    tour = kb.tour()
    assert len(tour) == n
    assert kt.check_knight_validity(tour, kb.cols)
