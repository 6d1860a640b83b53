"""Main CLI entry point for the liquid sort solver."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def _add_board_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--tubes',
        type=int,
        help='Number of tubes on the board (default: from configuration, 14)'
    )
    parser.add_argument(
        '--slots',
        type=int,
        help='Capacity of each tube (default: from configuration, 4)'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='liquid-sort',
        description='Liquid sort solver - shortest pour sequences for tube sorting puzzles with masked cells',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  liquid-sort solve board.json                      # Solve a board
  liquid-sort solve board.json --show-steps         # Print the board after every pour
  liquid-sort -o out.json solve board.json          # Save the result
  liquid-sort replay board.json out.json            # Replay the saved steps
  liquid-sort counts board.json                     # Show the revealed color tally
  liquid-sort config show                           # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration override (e.g., search.max_iterations=5000)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a board',
        description='Search for a shortest pour sequence for a board JSON file'
    )

    solve_parser.add_argument(
        'board_file',
        type=str,
        help='Path to board JSON file (list of tubes, open end first)'
    )

    solve_parser.add_argument(
        '--max-iterations',
        type=int,
        help='Search budget in dequeued boards (default: from configuration, 15000)'
    )

    solve_parser.add_argument(
        '--no-prune',
        action='store_true',
        help='Also explore moves that only relocate a finished stack'
    )

    solve_parser.add_argument(
        '--show-steps',
        action='store_true',
        help='Print the board after each step'
    )
    _add_board_options(solve_parser)

    # Replay command
    replay_parser = subparsers.add_parser(
        'replay',
        help='Replay a saved step list',
        description='Apply the steps of a saved result (or a bare move list) to a board'
    )
    replay_parser.add_argument(
        'board_file',
        type=str,
        help='Path to board JSON file'
    )
    replay_parser.add_argument(
        'steps_file',
        type=str,
        help='Path to a result JSON file written by solve -o, or a JSON list of moves'
    )
    replay_parser.add_argument(
        '--show-steps',
        action='store_true',
        help='Print the board after each step'
    )
    _add_board_options(replay_parser)

    # Counts command
    counts_parser = subparsers.add_parser(
        'counts',
        help='Show revealed color counts',
        description='Show the board and the number of revealed units per color'
    )
    counts_parser.add_argument(
        'board_file',
        type=str,
        help='Path to board JSON file'
    )
    _add_board_options(counts_parser)

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Show or validate solver configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        # replaced by logging.level once a command loads its configuration
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'replay':
            return commands.replay_command(parsed_args)
        if parsed_args.command == 'counts':
            return commands.counts_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
