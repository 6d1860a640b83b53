"""CLI utility functions."""

import logging
from typing import Dict, List, Optional

from liquid_sort.core.board import Board
from liquid_sort.core.data_models import ColorKey, Move


def setup_logging(level: int = logging.INFO,
                 format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    logging.getLogger().setLevel(level)

    # Hydra is chatty at INFO
    logging.getLogger('hydra').setLevel(logging.WARNING)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def format_move(index: int, move: Move, excavation: bool = False) -> str:
    """One numbered, human-readable line for a step."""
    line = f"{index:3d}. tube {move.from_tube + 1} -> tube {move.to_tube + 1}: {move.count}x {move.color.name}"
    if excavation:
        line += "  (uncovers masked content)"
    return line


def render_board(board: Board) -> str:
    """Render a board as one text row per slot, open end at the top."""
    width = max(len(c.name) for c in ColorKey)
    header = " ".join(f"{i + 1:>{width}}" for i in range(board.tube_count))
    lines = [header]
    for slot in range(board.slot_count):
        cells = []
        for row in board.rows:
            code = row[slot]
            name = "?" if code == ColorKey.UNKNOWN else ColorKey(code).name
            cells.append(f"{name:>{width}}")
        lines.append(" ".join(cells))
    return "\n".join(lines)


def format_color_counts(counts: Dict[ColorKey, int], slot_count: int) -> List[str]:
    """Lines of the color tally, flagging counts that cannot fill whole tubes."""
    lines = []
    for color, count in counts.items():
        if count == 0:
            continue
        marker = "" if count % slot_count == 0 else "  <- not a multiple of %d" % slot_count
        lines.append(f"{color.name:>10}: {count}{marker}")
    return lines
