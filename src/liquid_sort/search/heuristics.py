"""Board classification and excavation scoring.

``is_solved`` decides whether a board is a terminal success state and
``excavation_score`` ranks unsolved boards for the fallback path. Both work
on the ``(tubes, slots)`` grid view with vectorized numpy operations.
"""

import logging
from typing import Dict

import numpy as np

from liquid_sort.core.board import Board
from liquid_sort.core.data_models import ColorKey

logger = logging.getLogger(__name__)


def is_solved(board: Board) -> bool:
    """Check whether every tube is fully masked or a full single-color tube.

    A tube with some but not all cells revealed, which includes any tube with
    a revealed cell below a masked one, makes the board unsolved.
    """
    grid = board.grid
    revealed = grid != ColorKey.UNKNOWN
    counts = revealed.sum(axis=1)

    if np.any((counts != 0) & (counts != board.slot_count)):
        return False

    full = grid[counts == board.slot_count]
    if full.size == 0:
        return True
    return bool(np.all(full == full[:, :1]))


def excavation_score(board: Board) -> int:
    """Sum over tubes of the index of the first masked cell.

    Everything above a tube's first masked cell is revealed, so the index is
    the number of revealed units sitting above masked content. Tubes without
    masked cells contribute nothing. Lower is better.
    """
    masked = board.grid == ColorKey.UNKNOWN
    has_masked = masked.any(axis=1)
    first_masked = masked.argmax(axis=1)
    return int(first_masked[has_masked].sum())


def color_parity_issues(board: Board) -> Dict[ColorKey, int]:
    """Revealed colors whose unit count is not a multiple of the tube capacity.

    Returns:
        Mapping of offending color to its total revealed count
    """
    issues = {
        color: count
        for color, count in board.color_counts().items()
        if count % board.slot_count != 0
    }
    if issues:
        logger.debug(
            "Color parity issues: "
            + ", ".join(f"{color.name}={count}" for color, count in issues.items())
        )
    return issues
