"""Command-line interface for the liquid sort solver.

This module provides CLI commands for solving boards, replaying saved
steps, inspecting color counts and showing configuration.
"""

from .main import main_cli
from .commands import solve_command, replay_command, counts_command, config_command
from .utils import setup_logging, format_move, render_board

__all__ = [
    'main_cli',
    'solve_command',
    'replay_command',
    'counts_command',
    'config_command',
    'setup_logging',
    'format_move',
    'render_board'
]
