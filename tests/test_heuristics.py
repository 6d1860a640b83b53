"""Tests for the solved classifier, excavation score and parity check."""

import pytest

from liquid_sort.core.board import Board
from liquid_sort.core.data_models import ColorKey, Move
from liquid_sort.search.heuristics import color_parity_issues, excavation_score, is_solved

U = ColorKey.UNKNOWN
R = ColorKey.D_RED
B = ColorKey.D_BLUE
G = ColorKey.L_GREEN


def make_board(*tubes, tube_count=14):
    rows = [list(t) for t in tubes]
    rows += [[U] * 4 for _ in range(tube_count - len(rows))]
    return Board.from_tubes(rows)


class TestIsSolved:
    """Test terminal state classification."""

    def test_masked_board_is_solved(self):
        assert is_solved(Board.empty())

    def test_full_pure_tubes_are_solved(self):
        assert is_solved(make_board([R, R, R, R], [B, B, B, B]))

    @pytest.mark.parametrize("tube", [
        [U, R, R, R],   # three of four revealed
        [R, R, R, B],   # mixed colors
        [R, U, U, U],   # revealed above masked content
        [U, U, R, U],   # revealed after a masked cell
    ])
    def test_unsolved_tubes(self, tube):
        assert not is_solved(make_board([R, R, R, R], tube))

    def test_classification_is_idempotent(self):
        board = make_board([R, R, B, B], [B, B, R, R])
        first = is_solved(board)
        assert is_solved(board) == first
        assert first is False

    def test_other_capacities(self):
        board = Board.from_tubes([[G, G, G], [U, U, U]])
        assert is_solved(board)
        assert not is_solved(Board.from_tubes([[G, G, U], [U, U, U]]))


class TestExcavationScore:
    """Test the fallback ranking heuristic."""

    def test_masked_board_scores_zero(self):
        assert excavation_score(Board.empty()) == 0

    def test_revealed_units_above_mask(self):
        assert excavation_score(make_board([R, U, U, U])) == 1
        assert excavation_score(make_board([R, R, U, U], [B, U, U, U])) == 3

    def test_tube_without_mask_scores_zero(self):
        assert excavation_score(make_board([R, R, B, B])) == 0

    def test_free_space_above_top_scores_zero(self):
        assert excavation_score(make_board([U, U, U, R])) == 0

    def test_pouring_away_reduces_score(self):
        board = make_board([G, U, U, U])
        after = board.apply_move(Move(0, 1, G, 1))
        assert excavation_score(after) < excavation_score(board)


class TestColorParity:
    """Test detection of color counts that cannot fill whole tubes."""

    def test_balanced_board(self):
        assert color_parity_issues(make_board([R, R, B, B], [B, B, R, R])) == {}

    def test_single_unit(self):
        assert color_parity_issues(make_board([G, U, U, U])) == {G: 1}

    def test_uses_board_capacity(self):
        board = Board.from_tubes([[R, R, R], [B, B, U]])
        assert color_parity_issues(board) == {B: 2}
