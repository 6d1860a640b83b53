"""Hydra-composed configuration for the solver and the command line."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra
from omegaconf import DictConfig, OmegaConf, open_dict

from liquid_sort.core.board import DEFAULT_SLOT_COUNT, DEFAULT_TUBE_COUNT
from liquid_sort.search.bfs import SearchConfig

from .validators import LOG_LEVELS, validate_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).parent.parent / "conf"
CONFIG_NAME = "config"


@dataclass(frozen=True)
class BoardSettings:
    """Shape every board loaded under this configuration must have."""
    tube_count: int = DEFAULT_TUBE_COUNT
    slot_count: int = DEFAULT_SLOT_COUNT


class ConfigManager:
    """Composes ``conf/config.yaml`` and hands out typed sections of it."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Directory holding ``config.yaml``. Defaults to the
                one shipped inside the package.
        """
        self.config_dir = Path(config_dir or DEFAULT_CONFIG_DIR).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

    def load_config(self,
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose the configuration.

        Args:
            overrides: Hydra dotted overrides, e.g. ``search.max_iterations=500``
            validate: Whether to validate the composed configuration

        Returns:
            Composed configuration
        """
        GlobalHydra.instance().clear()
        with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
            cfg = compose(config_name=CONFIG_NAME, overrides=list(overrides or []))

        if validate:
            validate_config(cfg)

        self.config = cfg
        logger.info(f"Configuration loaded from {self.config_dir}"
                    + (f" with overrides {overrides}" if overrides else ""))
        return cfg

    def update_config(self, updates: Dict[str, Any], validate: bool = True) -> DictConfig:
        """Merge values keyed by dotted path into the loaded configuration.

        Entries whose value is None are skipped, so unset command line flags
        can be passed through as they are.

        Args:
            updates: Mapping of dotted key to new value
            validate: Whether to validate the result

        Returns:
            Updated configuration
        """
        cfg = self._loaded()

        applied = {key: value for key, value in updates.items() if value is not None}
        with open_dict(cfg):
            for key, value in applied.items():
                OmegaConf.update(cfg, key, value, merge=True)

        if validate:
            validate_config(cfg)

        if applied:
            logger.debug(f"Configuration updated with: {applied}")
        return cfg

    def board_settings(self) -> BoardSettings:
        """Board shape from the ``board`` section."""
        board = self._loaded().get('board') or {}
        return BoardSettings(
            tube_count=int(board.get('tube_count', DEFAULT_TUBE_COUNT)),
            slot_count=int(board.get('slot_count', DEFAULT_SLOT_COUNT))
        )

    def search_config(self) -> SearchConfig:
        """Search engine settings from the ``search`` section."""
        return SearchConfig.from_config(self._loaded())

    def log_level(self) -> int:
        """Numeric logging level named by ``logging.level``.

        Unknown names map to WARNING; :func:`validate_config` reports them.
        """
        name = str(OmegaConf.select(self._loaded(), 'logging.level', default='WARNING')).upper()
        if name not in LOG_LEVELS:
            return logging.WARNING
        return logging.getLevelName(name)

    def _loaded(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config


def load_config(overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Compose the configuration with a fresh manager.

    Args:
        overrides: Hydra dotted overrides
        config_dir: Directory holding ``config.yaml``
        validate: Whether to validate the composed configuration

    Returns:
        Composed configuration
    """
    return ConfigManager(config_dir).load_config(overrides, validate)
