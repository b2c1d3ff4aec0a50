"""
Configuration Module for the Purchase Order Extraction System.

This module provides centralized configuration management using YAML files.
Parsing thresholds, defaults and logging behaviour are controlled through
settings.yaml; every consumer supplies its own fallback so the engine still
runs when a key (or the whole file) is absent.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional


class ConfigurationManager:
    """
    Centralized configuration management for the PO extraction system.

    This class handles loading and providing access to all
    configuration parameters defined in settings.yaml.

    Attributes:
        config_path (Path): Path to the configuration file.
        config (Dict): Loaded configuration dictionary.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("parsing.header_scan_rows")
        50
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        """
        Singleton pattern to ensure only one configuration instance exists.

        Args:
            config_path: Optional path to configuration file.

        Returns:
            ConfigurationManager instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Optional path to configuration file.
                        Defaults to config/settings.yaml.
        """
        if self._initialized:
            return

        self._explicit = config_path is not None
        if config_path is None:
            self.config_path = Path(__file__).parent / "settings.yaml"
        else:
            self.config_path = Path(config_path)

        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """
        Load configuration from YAML file.

        The bundled settings file is optional; an explicitly requested
        file is not.

        Raises:
            ConfigurationError: If an explicit file is missing or invalid.
        """
        # Imported here: the application package imports this module at load time
        from po_extraction.utils.exceptions import ConfigurationError

        if not self.config_path.exists():
            if self._explicit:
                raise ConfigurationError(
                    f"Configuration file not found: {self.config_path}",
                    {"path": str(self.config_path)}
                )
            self._config = {}
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid configuration file: {self.config_path}",
                {"path": str(self.config_path), "reason": str(e)}
            )

        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping: {self.config_path}",
                {"path": str(self.config_path)}
            )
        self._config = loaded or {}

        self._resolve_paths()

    def _resolve_paths(self) -> None:
        """
        Resolve relative paths in configuration to absolute paths.
        Uses project root as base directory.
        """
        project_root = Path(__file__).parent.parent

        logging_file = self._config.get('logging', {}).get('file') or {}
        path = logging_file.get('path')
        if path and not Path(path).is_absolute():
            logging_file['path'] = str(project_root / path)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., "parsing.default_unit").
            default: Default value if key doesn't exist.

        Returns:
            Configuration value or default.

        Example:
            >>> config.get("parsing.default_unit")
            "NOS"
            >>> config.get("nonexistent.key", "default_value")
            "default_value"
        """
        keys = key.split('.')
        value = self._config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def get_all(self) -> Dict[str, Any]:
        """
        Get the complete configuration dictionary.

        Returns:
            Complete configuration dictionary.
        """
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    @classmethod
    def reset(cls) -> None:
        """
        Reset the singleton instance.
        Useful for testing or configuration changes.
        """
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get configuration values.

    Args:
        key: Configuration key in dot notation.
        default: Default value if key doesn't exist.

    Returns:
        Configuration value or default.
    """
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
