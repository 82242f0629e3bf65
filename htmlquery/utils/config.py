"""
Configuration utility for htmlquery.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "cache": {
        "enabled": True,
        "max_entries": 50,
    },
    "network": {
        "timeout": 30,
        "retries": 3,
        "backoff_factor": 0.5,
        "user_agent": None,
    },
    "logging": {
        "level": "WARNING",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration manager for htmlquery."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a JSON config file; built-in defaults
                are used when it is None or does not exist
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self.load()

        logger.debug(f"Configuration initialized (config_path: {config_path})")

    def _set_defaults(self) -> None:
        from .. import __version__

        with self._lock:
            self.config = copy.deepcopy(DEFAULTS)
            self.config["network"]["user_agent"] = f"htmlquery/{__version__}"

    def load(self) -> None:
        """Load configuration from file, over the defaults."""
        self._set_defaults()
        if not self.config_path:
            return
        try:
            if os.path.exists(self.config_path):
                with open(self.config_path, 'r') as f:
                    overrides = json.load(f)
                if not isinstance(overrides, dict):
                    raise ValueError("top level of the configuration must be an object")
                with self._lock:
                    self.config = _merge(self.config, overrides)
                logger.debug(f"Configuration loaded from {self.config_path}")
            else:
                logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {e}")

    def save(self) -> None:
        """Save configuration to file."""
        if not self.config_path:
            raise ValueError("no configuration path set")

        with self._lock:
            config_copy = copy.deepcopy(self.config)

        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.config_path, 'w') as f:
            json.dump(config_copy, f, indent=4)

        logger.debug(f"Configuration saved to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'cache.max_entries')
            default: Default value if key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            config = self.config
            parts = key.split('.')
            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return default
                config = config[part]
            return config.get(parts[-1], default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'cache.enabled')
            value: Configuration value
        """
        with self._lock:
            config = self.config
            parts = key.split('.')
            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    config[part] = {}
                config = config[part]
            config[parts[-1]] = value
