"""Search components for the liquid sort solver.

This module implements move generation, board classification, excavation
scoring, the breadth-first search engine and result packaging.
"""

from .moves import generate_moves, is_cosmetic_relocation
from .heuristics import is_solved, excavation_score, color_parity_issues
from .result_packager import SearchOutcome, SearchReport, package_result, format_parity_advisory
from .bfs import BFSSearcher, SearchNode, SearchConfig, SearchStatistics, create_bfs_searcher, solve

__all__ = [
    'generate_moves',
    'is_cosmetic_relocation',
    'is_solved',
    'excavation_score',
    'color_parity_issues',
    'SearchOutcome',
    'SearchReport',
    'package_result',
    'format_parity_advisory',
    'BFSSearcher',
    'SearchNode',
    'SearchConfig',
    'SearchStatistics',
    'create_bfs_searcher',
    'solve'
]
