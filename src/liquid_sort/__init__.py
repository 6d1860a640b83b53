"""Liquid sort puzzle solver.

Breadth-first search over pour moves for tube-sorting puzzles that contain
masked (not yet revealed) cells. Given a board it returns the shortest pour
sequence to a solved state, or the best excavation progress found when no
full solution is reachable within the search budget.
"""

from .core.data_models import ColorKey, Move, SolverResult, BoardShapeError
from .core.board import Board
from .search.bfs import BFSSearcher, SearchConfig, create_bfs_searcher, solve

__version__ = "0.1.0"

__all__ = [
    'ColorKey',
    'Move',
    'SolverResult',
    'BoardShapeError',
    'Board',
    'BFSSearcher',
    'SearchConfig',
    'create_bfs_searcher',
    'solve',
]
