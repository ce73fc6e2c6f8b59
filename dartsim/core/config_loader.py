"""
Configuration loader with validation and defaults.
"""
import copy
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

from .errors import MalformedInputError
from .io_utils import load_yaml

logger = logging.getLogger(__name__)


class Config:
    """
    Configuration container for game and simulator settings.
    """

    DEFAULTS = {
        "game": {
            "starting_score": 501,
            "max_darts_per_turn": 3,
            # "zero_or_below" or "double_out" for externally submitted turns
            "submitted_win_policy": "zero_or_below",
        },

        # Skill -> dispersion curve: k / (three_da + offset), clamped
        "simulator": {
            "spread_k": 1800.0,
            "spread_offset": 20.0,
            "min_dispersion": 5.0,  # mm
            "max_dispersion": 50.0,  # mm
            "default_three_da": 60.0,
            "seed": None,  # None = system entropy
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Load configuration from file or use defaults.

        Args:
            config_path: Path to config YAML (None = use defaults)
        """
        self.data = copy.deepcopy(self.DEFAULTS)

        if config_path and Path(config_path).exists():
            try:
                user_config = load_yaml(Path(config_path))
                self._merge_config(user_config)
                logger.info(f"Configuration loaded from {config_path}")
            except (OSError, yaml.YAMLError, MalformedInputError) as e:
                self.data = copy.deepcopy(self.DEFAULTS)
                logger.warning(f"Failed to load config: {e}, using defaults")
        else:
            if config_path:
                logger.warning(f"Config file {config_path} not found, using defaults")
            else:
                logger.info("Using default configuration")

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> "Config":
        """Build a config from defaults plus an in-memory override dict."""
        config = cls()
        config._merge_config(overrides)
        return config

    def _merge_config(self, user_config: Any) -> None:
        """
        Merge user config with defaults.

        An empty file or an empty section keeps the defaults.

        Raises:
            MalformedInputError: If the document or a known section is not a mapping
        """
        if user_config is None:
            return
        if not isinstance(user_config, dict):
            raise MalformedInputError(
                f"Config must be a mapping, got {type(user_config).__name__}"
            )

        for section, values in user_config.items():
            if section in self.data:
                if values is None:
                    continue
                if not isinstance(values, dict):
                    raise MalformedInputError(
                        f"Config section '{section}' must be a mapping, "
                        f"got {type(values).__name__}"
                    )
                self.data[section].update(values)
            else:
                self.data[section] = values

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get config value."""
        return self.get_section(section).get(key, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire config section."""
        values = self.data.get(section)
        return values if isinstance(values, dict) else {}
