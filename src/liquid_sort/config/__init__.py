"""Configuration management for the liquid sort solver.

This module provides Hydra-based configuration loading with runtime
override support, typed section accessors and section validation.
"""

from .config_manager import BoardSettings, ConfigManager, load_config
from .validators import validate_config, ConfigValidationError

__all__ = [
    'BoardSettings',
    'ConfigManager',
    'load_config',
    'validate_config',
    'ConfigValidationError'
]
