"""Configuration file loading and saving.

The fix tool keeps an optional YAML file (default .drive-sync/config.yaml)
that remembers the sync root so the ID does not have to be passed on every run.

Config file structure:
    root_id: "1AbCdEfGh"

A missing or empty file is treated as an empty configuration.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError


@dataclass
class FixConfig:
    """Settings read from the config file.

    Attributes:
        root_id: Drive ID of the sync root folder (None if not configured)
    """
    root_id: Optional[str] = None


class ConfigLoader:
    """Handles config file loading, validation, and saving."""

    DEFAULT_CONFIG_DIR = '.drive-sync'
    DEFAULT_CONFIG_FILE = 'config.yaml'
    DEFAULT_CONFIG_PATH = os.path.join(DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE)

    @classmethod
    def load(cls, config_path: str) -> FixConfig:
        """Load and parse the configuration from a YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            FixConfig with parsed settings

        Raises:
            ConfigError: If the file cannot be read or is malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return FixConfig()
        except PermissionError:
            raise ConfigError("Permission denied", config_path)
        except OSError as e:
            raise ConfigError(str(e), config_path)

        if not content.strip():
            return FixConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}", config_path)

        if config_dict is None:
            return FixConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Config must be a YAML dictionary, got {type(config_dict).__name__}",
                config_path
            )

        return cls._parse_config(config_dict, config_path)

    @classmethod
    def save(cls, config_path: str, config: FixConfig) -> None:
        """Save the configuration to a YAML file.

        Raises:
            ConfigError: If the file cannot be written
        """
        config_dict = {'root_id': config.root_id}

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        try:
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except OSError as e:
            raise ConfigError(f"Cannot write config: {e}", config_path)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any], config_path: str) -> FixConfig:
        root_id = config_dict.get('root_id')

        if root_id is not None and not isinstance(root_id, str):
            raise ConfigError(
                f"'root_id' must be a string, got {type(root_id).__name__}",
                config_path
            )

        return FixConfig(root_id=root_id or None)
