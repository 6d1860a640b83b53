"""Board loading and result serialization."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from liquid_sort.core.board import Board
from liquid_sort.core.data_models import BoardShapeError, Move, SolverResult

logger = logging.getLogger(__name__)


def parse_board(data: Any,
                tube_count: Optional[int] = None,
                slot_count: Optional[int] = None) -> Board:
    """Build a board from decoded JSON.

    Accepts either a bare list of tubes or an object with a ``tubes`` key
    (the saved-game layout, whose other keys are ignored).

    Args:
        data: Decoded JSON value
        tube_count: Required number of tubes, if fixed
        slot_count: Required tube capacity, if fixed

    Raises:
        BoardShapeError: If the data does not describe a valid board
    """
    if isinstance(data, dict):
        if 'tubes' not in data:
            raise BoardShapeError("Board object has no 'tubes' key")
        data = data['tubes']
    if not isinstance(data, list) or not data or not all(isinstance(t, list) for t in data):
        raise BoardShapeError("Board must be a non-empty list of tubes")
    return Board.from_tubes(data, tube_count=tube_count, slot_count=slot_count)


def load_board(file_path: Union[str, Path],
               tube_count: Optional[int] = None,
               slot_count: Optional[int] = None) -> Board:
    """Load a board from a JSON file.

    Args:
        file_path: Path to JSON file
        tube_count: Required number of tubes, if fixed
        slot_count: Required tube capacity, if fixed

    Returns:
        Loaded board

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not valid JSON or not a valid board
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Board file not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}")

    board = parse_board(data, tube_count=tube_count, slot_count=slot_count)
    logger.info(f"Loaded {board.tube_count}x{board.slot_count} board from {file_path}")
    return board


def load_steps(file_path: Union[str, Path]) -> List[Move]:
    """Load a move list, bare or under a ``steps`` key, from a JSON file."""
    with open(file_path, 'r') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get('steps', [])
    return [Move.from_dict(item) for item in data]


def save_result(result: Union[SolverResult, Dict[str, Any]],
                output_path: Union[str, Path],
                pretty: bool = True) -> None:
    """Save a solver result to a JSON file.

    Args:
        result: Solver result or already-converted dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(result, SolverResult):
        result = result.to_dict()

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(result, f, indent=2, ensure_ascii=False)
        else:
            json.dump(result, f, ensure_ascii=False)

    logger.info(f"Result saved to {output_path}")
