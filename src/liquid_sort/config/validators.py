"""Configuration validation for the liquid sort solver."""

import logging
from typing import List
from omegaconf import DictConfig

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_board_config(config.get('board', {}))
        validate_search_config(config.get('search', {}))
        validate_logging_config(config.get('logging', {}))

        for warning in validate_parameter_ranges(config):
            logger.warning(warning)

        logger.info("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_board_config(board_config: DictConfig) -> None:
    """Validate board configuration section.

    Args:
        board_config: Board configuration section
    """
    if not board_config:
        return

    tube_count = board_config.get('tube_count', 14)
    if not isinstance(tube_count, int) or isinstance(tube_count, bool) or tube_count < 2:
        raise ConfigValidationError(
            f"board.tube_count must be integer of at least 2, got {tube_count}"
        )

    slot_count = board_config.get('slot_count', 4)
    if not isinstance(slot_count, int) or isinstance(slot_count, bool) or slot_count < 1:
        raise ConfigValidationError(
            f"board.slot_count must be positive integer, got {slot_count}"
        )


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    max_iterations = search_config.get('max_iterations', 15000)
    if not isinstance(max_iterations, int) or isinstance(max_iterations, bool) or max_iterations < 1:
        raise ConfigValidationError(
            f"search.max_iterations must be positive integer, got {max_iterations}"
        )

    prune = search_config.get('prune_cosmetic_moves', True)
    if not isinstance(prune, bool):
        raise ConfigValidationError(
            f"search.prune_cosmetic_moves must be boolean, got {prune}"
        )


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section.

    Args:
        logging_config: Logging configuration section
    """
    if not logging_config:
        return

    level = logging_config.get('level', 'WARNING')
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level}"
        )


def validate_parameter_ranges(config: DictConfig) -> List[str]:
    """Validate parameter ranges and return warnings.

    Args:
        config: Configuration to validate

    Returns:
        List of warning messages
    """
    warnings = []

    search_config = config.get('search', {})
    if search_config:
        max_iterations = search_config.get('max_iterations', 15000)
        if max_iterations > 100000:
            warnings.append(
                f"max_iterations {max_iterations} is large; a solve may block for a long time"
            )

    board_config = config.get('board', {})
    if board_config:
        tube_count = board_config.get('tube_count', 14)
        if tube_count > 20:
            warnings.append(f"tube_count {tube_count} makes the state space grow very quickly")

    return warnings
