"""CLI command implementations."""

import json
import logging
import time
from typing import Any, Dict, List

from omegaconf import OmegaConf

from liquid_sort.config import ConfigManager, validate_config, ConfigValidationError
from liquid_sort.core.board import Board
from liquid_sort.core.data_models import Move, SolverResult
from liquid_sort.integration.io import load_board, load_steps, save_result
from liquid_sort.search.bfs import BFSSearcher
from liquid_sort.search.heuristics import color_parity_issues, is_solved
from liquid_sort.search.result_packager import format_parity_advisory

from .utils import format_color_counts, format_duration, format_move, render_board

logger = logging.getLogger(__name__)

EMPTY_BOARD_HINT = "every cell is masked; enter the revealed colors before solving"


def _flag_updates(args) -> Dict[str, Any]:
    updates = {
        'search.max_iterations': getattr(args, 'max_iterations', None),
        'board.tube_count': getattr(args, 'tubes', None),
        'board.slot_count': getattr(args, 'slots', None),
    }
    if getattr(args, 'no_prune', False):
        updates['search.prune_cosmetic_moves'] = False
    return updates


def load_settings(args, validate: bool = True) -> ConfigManager:
    """Compose the configuration for a command.

    The ``--config`` override is applied by Hydra, typed flags such as
    ``--tubes`` on top of it. Without ``-v`` or ``-q`` the root logger
    takes its level from ``logging.level``.
    """
    manager = ConfigManager()
    overrides = [args.config] if getattr(args, 'config', None) else []
    manager.load_config(overrides=overrides, validate=False)
    manager.update_config(_flag_updates(args), validate=validate)

    if not getattr(args, 'quiet', False) and not getattr(args, 'verbose', 0):
        logging.getLogger().setLevel(manager.log_level())
    return manager


class LiquidSortSolver:
    """Board loading and search bound to one loaded configuration."""

    def __init__(self, settings: ConfigManager):
        """Initialize solver.

        Args:
            settings: Manager holding a loaded configuration
        """
        self.board_settings = settings.board_settings()
        self.searcher = BFSSearcher(settings.search_config())

        logger.info("Liquid sort solver initialized successfully")

    def load(self, board_file: str) -> Board:
        """Load a board file with the configured shape."""
        return load_board(board_file,
                          tube_count=self.board_settings.tube_count,
                          slot_count=self.board_settings.slot_count)

    def solve_board(self, board: Board) -> SolverResult:
        """Run one search on ``board``."""
        return self.searcher.solve(board)


def _print_steps(board: Board, steps: List[Move], show_boards: bool) -> Board:
    current = board
    for i, move in enumerate(steps, 1):
        print(format_move(i, move, current.is_excavation_move(move)))
        current = current.apply_move(move)
        if show_boards:
            print(render_board(current))
    return current


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        solver = LiquidSortSolver(load_settings(args))
        board = solver.load(args.board_file)

        if all(board.is_fully_masked(i) for i in range(board.tube_count)):
            print(f"Note: {EMPTY_BOARD_HINT}")

        start_time = time.perf_counter()
        result = solver.solve_board(board)
        total_time = time.perf_counter() - start_time

        output: Dict[str, Any] = result.to_dict()
        output['board_file'] = str(args.board_file)
        output['total_time'] = total_time

        if args.output:
            save_result(output, args.output)
            logger.info(f"Results saved to {args.output}")
        else:
            print(json.dumps(output, indent=2, ensure_ascii=False))

        if not args.quiet:
            print(f"\nOutcome: {result.outcome}")
            if result.error:
                print(f"Error: {result.error}")
            if result.warning:
                print(f"Warning: {result.warning}")
            _print_steps(board, result.steps, args.show_steps)
            print(f"Iterations: {result.stats.get('iterations', 0)}")
            print(f"Total time: {format_duration(total_time)}")

        return 1 if result.error else 0

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        print("Solve failed: an error occurred while computing the solution")
        return 1


def replay_command(args) -> int:
    """Handle replay command: apply a saved step list to a board.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code, 1 if a step does not apply
    """
    try:
        solver = LiquidSortSolver(load_settings(args))
        board = solver.load(args.board_file)
        steps = load_steps(args.steps_file)

        final = _print_steps(board, steps, args.show_steps)
        print(f"Replayed {len(steps)} steps; board is {'solved' if is_solved(final) else 'not solved'}")
        return 0

    except Exception as e:
        logger.error(f"Replay command failed: {e}")
        print(f"Replay failed: {e}")
        return 1


def counts_command(args) -> int:
    """Handle counts command: print the revealed color tally.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        solver = LiquidSortSolver(load_settings(args))
        board = solver.load(args.board_file)

        print(render_board(board))
        print()
        for line in format_color_counts(board.color_counts(), board.slot_count):
            print(line)

        advisory = format_parity_advisory(color_parity_issues(board), board.slot_count)
        if advisory:
            print(f"\nWarning: {advisory}")
        return 0

    except Exception as e:
        logger.error(f"Counts command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            config = load_settings(args, validate=False).config
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_settings(args, validate=False).config
                validate_config(config)
                print("Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
