"""Legal pour enumeration."""

from typing import List

from liquid_sort.core.board import Board
from liquid_sort.core.data_models import Move


def is_cosmetic_relocation(board: Board, source: int, dest: int) -> bool:
    """True if pouring ``source`` into ``dest`` only moves a finished stack.

    That is the case when the destination has no top and the source's whole
    content, from its top down to the sealed bottom, is one revealed color.
    A source that still hides masked content below its top is never cosmetic:
    pouring it away is how that content gets uncovered.
    """
    top = board.top_index(source)
    if top is None or not board.is_fully_masked(dest):
        return False
    if board.has_undiscovered_below_top(source):
        return False
    return board.run_length(source) == board.slot_count - top


def generate_moves(board: Board, prune_cosmetic: bool = True) -> List[Move]:
    """Enumerate legal moves, source index ascending then destination ascending.

    Args:
        board: Board to expand
        prune_cosmetic: Skip moves that relocate a finished single-color stack
            into a fully masked tube

    Returns:
        List of legal moves in deterministic order
    """
    n = board.tube_count
    tops = [board.top_index(i) for i in range(n)]
    capacity = [board.slot_count if top is None else top for top in tops]

    moves: List[Move] = []
    for i in range(n):
        if tops[i] is None:
            continue
        color = board.top_color(i)
        run = board.run_length(i)
        for j in range(n):
            if i == j or capacity[j] == 0:
                continue
            if tops[j] is not None and board.rows[j][tops[j]] != color:
                continue
            if prune_cosmetic and tops[j] is None and is_cosmetic_relocation(board, i, j):
                continue
            moves.append(Move(from_tube=i, to_tube=j, color=color, count=min(run, capacity[j])))
    return moves
