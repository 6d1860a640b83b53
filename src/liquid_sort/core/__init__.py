"""Core data structures for the liquid sort solver.

This module holds the color palette, the move and result records and the
flat-array board model shared by every search component.
"""

from .data_models import (
    ColorKey, Move, SolverResult, BoardShapeError, PALETTE,
    is_empty_capacity, is_undiscovered, parse_color
)
from .board import Board, DEFAULT_TUBE_COUNT, DEFAULT_SLOT_COUNT

__all__ = [
    'ColorKey',
    'Move',
    'SolverResult',
    'BoardShapeError',
    'PALETTE',
    'is_empty_capacity',
    'is_undiscovered',
    'parse_color',
    'Board',
    'DEFAULT_TUBE_COUNT',
    'DEFAULT_SLOT_COUNT'
]
