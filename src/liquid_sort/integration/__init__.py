"""Board file loading and result serialization."""

from .io import parse_board, load_board, load_steps, save_result

__all__ = [
    'parse_board',
    'load_board',
    'load_steps',
    'save_result'
]
