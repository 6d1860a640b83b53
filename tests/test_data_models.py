"""Tests for core data models."""

import pytest

from liquid_sort.core.data_models import (
    BoardShapeError, ColorKey, Move, PALETTE, SolverResult,
    is_empty_capacity, is_undiscovered, parse_color
)


class TestColorKey:
    """Test the color palette and cell accessors."""

    def test_unknown_is_zero(self):
        assert ColorKey.UNKNOWN == 0

    def test_palette_excludes_unknown(self):
        assert ColorKey.UNKNOWN not in PALETTE
        assert len(PALETTE) == 12

    def test_masked_accessors_agree(self):
        for color in ColorKey:
            assert is_empty_capacity(color) == is_undiscovered(color)
        assert is_undiscovered(ColorKey.UNKNOWN)
        assert not is_empty_capacity(ColorKey.D_RED)

    def test_parse_color(self):
        assert parse_color("d_red") == ColorKey.D_RED
        assert parse_color(" YELLOW ") == ColorKey.YELLOW
        assert parse_color("?") == ColorKey.UNKNOWN
        assert parse_color(7) == ColorKey.D_BLUE
        assert parse_color(ColorKey.CYAN) is ColorKey.CYAN

    @pytest.mark.parametrize("value", ["MAGENTA", 99, -1, None, 1.5, True])
    def test_parse_color_invalid(self, value):
        with pytest.raises(BoardShapeError):
            parse_color(value)


class TestMove:
    """Test the Move record."""

    def test_to_dict(self):
        move = Move(from_tube=0, to_tube=3, color=ColorKey.ORANGE, count=2)
        assert move.to_dict() == {'from': 0, 'to': 3, 'color': 'ORANGE', 'count': 2}

    def test_from_dict(self):
        move = Move.from_dict({'from': 5, 'to': 1, 'color': 'gray', 'count': 1})
        assert move == Move(5, 1, ColorKey.GRAY, 1)

    def test_moves_are_hashable(self):
        assert len({Move(0, 1, ColorKey.D_RED, 1), Move(0, 1, ColorKey.D_RED, 1)}) == 1


class TestSolverResult:
    """Test the SolverResult record."""

    def test_defaults(self):
        result = SolverResult()
        assert result.steps == []
        assert result.error is None
        assert result.warning is None
        assert not result.solved

    def test_to_dict_omits_missing_fields(self):
        result = SolverResult(steps=[Move(0, 1, ColorKey.D_RED, 2)], outcome="solved")
        data = result.to_dict()
        assert data['steps'] == [{'from': 0, 'to': 1, 'color': 'D_RED', 'count': 2}]
        assert 'error' not in data
        assert 'warning' not in data
        assert result.solved

    def test_to_dict_with_error(self):
        result = SolverResult(error="boom", warning="careful", outcome="exhausted")
        data = result.to_dict()
        assert data['error'] == "boom"
        assert data['warning'] == "careful"
