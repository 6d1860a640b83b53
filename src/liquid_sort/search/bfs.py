"""Breadth-first search for liquid sort boards.

This module implements the budget-limited breadth-first search that finds a
shortest pour sequence to a solved board, while remembering the path to the
first board that reached each new minimum excavation score as a fallback.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from omegaconf import DictConfig

from liquid_sort.core.board import Board
from liquid_sort.core.data_models import Move, SolverResult
from liquid_sort.search.heuristics import color_parity_issues, excavation_score, is_solved
from liquid_sort.search.moves import generate_moves
from liquid_sort.search.result_packager import SearchOutcome, SearchReport, package_result

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    """Node in the breadth-first search tree."""
    board: Board
    score: int  # excavation score of board
    parent: Optional['SearchNode'] = None
    action: Optional[Move] = None
    depth: int = 0

    def get_path(self) -> List[Move]:
        """Reconstruct the move sequence from the root to this node."""
        moves = []
        node = self
        while node.parent is not None:
            moves.append(node.action)
            node = node.parent
        return list(reversed(moves))


@dataclass
class SearchStatistics:
    """Counters collected during one search."""
    iterations: int = 0
    generated: int = 0
    duplicates: int = 0
    visited: int = 0
    max_depth: int = 0
    fallback_updates: int = 0
    computation_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'iterations': self.iterations,
            'generated': self.generated,
            'duplicates': self.duplicates,
            'visited': self.visited,
            'max_depth': self.max_depth,
            'fallback_updates': self.fallback_updates,
            'computation_time': self.computation_time
        }


@dataclass
class SearchConfig:
    """Configuration for breadth-first search."""
    max_iterations: int = 15000  # dequeues before giving up
    prune_cosmetic_moves: bool = True  # skip relocating finished stacks into empty tubes

    @classmethod
    def from_config(cls, cfg: Optional[DictConfig]) -> 'SearchConfig':
        """Build search settings from the ``search`` section of a loaded config."""
        if cfg is None or 'search' not in cfg:
            return cls()
        search_cfg = cfg.search
        return cls(
            max_iterations=int(search_cfg.get('max_iterations', cls.max_iterations)),
            prune_cosmetic_moves=bool(search_cfg.get('prune_cosmetic_moves', cls.prune_cosmetic_moves))
        )


class BFSSearcher:
    """Budget-limited breadth-first search with an excavation fallback.

    Holds only configuration; each :meth:`search` call owns its frontier and
    visited set, so one searcher may be reused and called reentrantly.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize searcher.

        Args:
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        logger.info(f"BFS searcher initialized with max_iterations={self.config.max_iterations}, "
                    f"prune_cosmetic_moves={self.config.prune_cosmetic_moves}")

    def search(self, board: Board) -> SearchReport:
        """Explore the move graph from ``board``.

        Args:
            board: Initial board; it is never modified

        Returns:
            Search report with the terminal outcome and the paths found
        """
        start_time = time.perf_counter()
        stats = SearchStatistics()
        parity_issues = color_parity_issues(board)

        root = SearchNode(board=board.copy(), score=excavation_score(board))
        frontier = deque([root])
        visited = {root.board.canonical_key()}

        best_score = root.score
        best_node = root

        def finish(outcome: SearchOutcome, path: Optional[List[Move]] = None) -> SearchReport:
            stats.visited = len(visited)
            stats.computation_time = time.perf_counter() - start_time
            logger.info(f"Search finished: {outcome.value} after {stats.iterations} iterations, "
                        f"{stats.visited} states visited")
            return SearchReport(
                outcome=outcome,
                path=path or [],
                fallback_path=best_node.get_path(),
                fallback_score=best_score,
                parity_issues=parity_issues,
                slot_count=board.slot_count,
                statistics=stats.to_dict()
            )

        while frontier:
            stats.iterations += 1
            node = frontier.popleft()

            if node.score < best_score:
                best_score = node.score
                best_node = node
                stats.fallback_updates += 1
                logger.debug(f"New best excavation score {best_score} at depth {node.depth}")

            if is_solved(node.board):
                return finish(SearchOutcome.SOLVED, node.get_path())

            if stats.iterations > self.config.max_iterations:
                return finish(SearchOutcome.BUDGET_EXCEEDED)

            for move in generate_moves(node.board, self.config.prune_cosmetic_moves):
                next_board = node.board.apply_move(move)
                stats.generated += 1
                key = next_board.canonical_key()
                if key in visited:
                    stats.duplicates += 1
                    continue
                visited.add(key)
                child = SearchNode(
                    board=next_board,
                    score=excavation_score(next_board),
                    parent=node,
                    action=move,
                    depth=node.depth + 1
                )
                stats.max_depth = max(stats.max_depth, child.depth)
                frontier.append(child)

        return finish(SearchOutcome.EXHAUSTED)

    def solve(self, board: Board) -> SolverResult:
        """Search from ``board`` and package the outcome."""
        return package_result(self.search(board))


def create_bfs_searcher(max_iterations: int = 15000,
                        prune_cosmetic_moves: bool = True) -> BFSSearcher:
    """Factory function to create a searcher with custom configuration.

    Args:
        max_iterations: Dequeue budget before the search gives up
        prune_cosmetic_moves: Skip relocating finished stacks into empty tubes

    Returns:
        Configured BFSSearcher instance
    """
    config = SearchConfig(
        max_iterations=max_iterations,
        prune_cosmetic_moves=prune_cosmetic_moves
    )
    return BFSSearcher(config)


def solve(board: Board, config: Optional[SearchConfig] = None) -> SolverResult:
    """Solve ``board`` with a fresh searcher.

    Args:
        board: Initial board
        config: Search configuration (defaults apply when omitted)

    Returns:
        Success path, excavation fallback with a warning, or an error result
    """
    return BFSSearcher(config).solve(board)
