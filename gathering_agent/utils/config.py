# gathering_agent/utils/config.py - Configuration management
"""
Configuration management for the agent.
Loads configuration from YAML files and builds the gatherers registry
from it.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from gathering_agent.errors import ConfigurationError
from gathering_agent.gatherers.base import Gatherer
from gathering_agent.gatherers.registry import GatherersRegistry, GatherersRegistryBuilder
from gathering_agent.utils.helpers import load_object


class Config:
    """
    Configuration manager for the agent.

    Loads configuration from YAML files and provides access to settings.
    """

    DEFAULT_CONFIG = {
        'agent': {
            'agent_id': '',
        },
        'logging': {
            'level': 'INFO',
            'file': None,
        },
        'metrics': {
            'enabled': False,
            'port': 9090,
        },
        'gatherers': [],
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML configuration file
        """
        self.logger = logging.getLogger(__name__)
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_from_file(config_file)

    def load_from_file(self, config_file: str):
        """
        Load configuration from YAML file.

        Args:
            config_file: Path to YAML file

        Raises:
            ConfigurationError: If the file is not a valid YAML mapping
        """
        config_path = Path(config_file)

        if not config_path.exists():
            self.logger.warning(f"Config file not found: {config_file}, using defaults")
            return

        try:
            with open(config_path, 'r') as f:
                loaded_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to load config: {e}")
            raise ConfigurationError(f"invalid configuration file {config_file}: {e}") from e

        if not isinstance(loaded_config, dict):
            raise ConfigurationError(f"configuration file {config_file} must hold a mapping")

        # Merge with defaults
        self._merge_config(self.config, loaded_config)
        self.logger.info(f"Loaded configuration from {config_file}")

    def _merge_config(self, base: Dict, override: Dict):
        """
        Recursively merge configuration dictionaries.

        Args:
            base: Base configuration dictionary
            override: Override configuration dictionary
        """
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., 'metrics.port')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value by dot-notation key.

        Args:
            key: Configuration key (e.g., 'agent.agent_id')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def to_dict(self) -> Dict:
        """
        Get full configuration as dictionary.

        Returns:
            Configuration dictionary
        """
        return copy.deepcopy(self.config)


def build_registry_from_config(config: Config) -> GatherersRegistry:
    """
    Instantiate the configured gatherers and freeze them in a registry.

    Each entry of the 'gatherers' list needs a name, a version and a
    "module:attribute" factory called without arguments.

    Args:
        config: Agent configuration

    Returns:
        Built GatherersRegistry

    Raises:
        ConfigurationError: If an entry is incomplete or its factory does
            not produce a Gatherer
    """
    builder = GatherersRegistryBuilder()
    entries = config.get('gatherers') or []

    if not isinstance(entries, list):
        raise ConfigurationError("'gatherers' must be a list")

    for entry in entries:
        if not isinstance(entry, dict):
            raise ConfigurationError(f"gatherer entry {entry!r} must be a mapping")

        missing = [
            key for key in ('name', 'version', 'factory')
            if key not in entry or entry[key] in (None, '')
        ]
        if missing:
            raise ConfigurationError(f"gatherer entry {entry} is missing {', '.join(missing)}")

        factory = load_object(str(entry['factory']))

        try:
            gatherer = factory()
        except Exception as e:
            raise ConfigurationError(f"{entry['factory']} failed to create a gatherer: {e}") from e

        if not isinstance(gatherer, Gatherer):
            raise ConfigurationError(f"{entry['factory']} did not produce a Gatherer")

        builder.add(str(entry['name']), str(entry['version']), gatherer)

    return builder.build()
