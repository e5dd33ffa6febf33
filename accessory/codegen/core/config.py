"""
Configuration management for accessor generation.

Handles loading and merging configuration from JSON files and explicit
overrides, providing defaults and validation for generator settings.
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class AccessorConfig:
    """Settings consumed by the accessor generator."""

    # Struct to generate accessors for; required
    type_name: str = ""

    # Receiver name; default is the first letter of the struct name, lower-cased
    receiver: Optional[str] = None

    # Output file name relative to the package dir; default <type_name>_accessor.go
    output: Optional[str] = None

    # Lock field guarding the accessors; no locking when unset
    lock: Optional[str] = None


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "type_name": "",
            "receiver": None,
            "output": None,
            "lock": None,
        }

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> AccessorConfig:
        """
        Get complete accessor configuration.

        Args:
            custom_config: Explicit overrides; None values are skipped
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        # Start with defaults
        base_config = self._defaults.copy()

        # Load from file if provided
        if config_file:
            base_config.update(self._load_config_file(config_file))

        # Apply custom overrides
        if custom_config:
            base_config.update(
                {key: value for key, value in custom_config.items() if value is not None}
            )

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> AccessorConfig:
        """Convert dictionary to AccessorConfig instance."""
        known_fields = {f.name for f in fields(AccessorConfig)}

        config_args = {}
        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                logger.warning("Ignoring unknown configuration key: %s", key)

        for key, value in config_args.items():
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"Configuration value for '{key}' must be a string")

        # Empty strings mean "not set" for the optional settings
        for key in ("receiver", "output", "lock"):
            if config_args.get(key) == "":
                config_args[key] = None

        return AccessorConfig(**config_args)

    def validate_config(self, config: AccessorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors
        """
        errors = []

        if not config.type_name:
            errors.append("type name must be set")

        return errors


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> AccessorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Explicit overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
