"""
Configuration System

YAML configuration for mdagen runs. Features:
- Single-file YAML loading with environment variable resolution
- Optional configuration: a project without mdagen.yml runs on defaults
- Dot-path access to nested values
- Per-path caching with a default singleton

The file is looked up in this order: explicit path, the MDAGEN_CONFIG
environment variable, mdagen.yml in the current working directory.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Use standard logging (not get_logger) to avoid circular imports with logger.py
logger = logging.getLogger("CONFIG")

CONFIG_FILE_NAME = "mdagen.yml"
CONFIG_ENV_VAR = "MDAGEN_CONFIG"


class ConfigBuilder:
    """
    Configuration builder for generation runs.

    Features:
    - Single-file YAML loading with validation and error handling
    - Environment variable resolution
    - Dot-path access to nested values
    """

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to the configuration file. If None, looks for
                mdagen.yml in the current directory and falls back to an
                empty configuration when it is absent.

        Raises:
            FileNotFoundError: If an explicit config_path does not exist.
        """
        # Environment variables must be available before ${VAR} resolution
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)  # Don't override existing env vars
            logger.debug(f"Loaded .env file from {dotenv_path}")

        if config_path is None:
            cwd_config = Path.cwd() / CONFIG_FILE_NAME
            config_path = cwd_config if cwd_config.exists() else None
        elif not Path(config_path).exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config_path = Path(config_path) if config_path is not None else None
        self.raw_config = self._load_config()

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)

            if config is None:
                logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            if not isinstance(config, dict):
                error_msg = f"Configuration file must contain a dictionary/mapping: {file_path}"
                logger.error(error_msg)
                raise ValueError(error_msg)

            logger.debug(f"Loaded configuration from {file_path}")
            return config
        except yaml.YAMLError as e:
            error_msg = f"Error parsing YAML configuration: {e}"
            logger.error(error_msg)
            raise yaml.YAMLError(error_msg) from e

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        Supports both simple and bash-style default value syntax:
        - ${VAR_NAME} - simple substitution
        - ${VAR_NAME:-default_value} - with default value
        - $VAR_NAME - simple substitution without braces
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):

            def replace_env_var(match):
                if match.group(1):  # ${VAR_NAME:-default} or ${VAR_NAME}
                    var_name = match.group(1)
                    default_value = match.group(2)
                else:  # $VAR_NAME
                    var_name = match.group(3)
                    default_value = None

                env_value = os.environ.get(var_name)
                if env_value is None:
                    if default_value is not None:
                        return default_value
                    logger.info(
                        f"Environment variable '{var_name}' not found, keeping original value"
                    )
                    return match.group(0)
                return env_value

            pattern = r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)"
            return re.sub(pattern, replace_env_var, data)
        else:
            return data

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from the single config file, with environment variables resolved."""
        if self.config_path is None:
            logger.debug(f"No {CONFIG_FILE_NAME} found, using built-in defaults")
            return {}

        config = self._resolve_env_vars(self._load_yaml_file(self.config_path))
        logger.info(f"Loaded configuration from {self.config_path}")
        return config

    def get_section(self, name: str) -> dict[str, Any]:
        """Get a top-level mapping section, or an empty dict."""
        section = self.get(name, {})
        if not isinstance(section, dict):
            raise ValueError(f"Configuration section '{name}' must be a mapping")
        return section

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None

# Per-path config cache for explicit config paths
_config_cache: dict[str, ConfigBuilder] = {}


def _get_config(config_path: str | Path | None = None, set_as_default: bool = False) -> ConfigBuilder:
    """Get configuration instance (singleton pattern with optional explicit path).

    Args:
        config_path: Optional explicit path to configuration file.
        set_as_default: If True and config_path is provided, also set this config
            as the default singleton.

    Returns:
        ConfigBuilder instance for the specified or default configuration
    """
    global _default_config

    if config_path is None:
        if _default_config is None:
            config_file = os.environ.get(CONFIG_ENV_VAR)
            _default_config = ConfigBuilder(config_file) if config_file else ConfigBuilder()
            logger.debug("Initialized default configuration system")
        return _default_config

    resolved_path = str(Path(config_path).resolve())

    if resolved_path not in _config_cache:
        logger.debug(f"Loading configuration from explicit path: {resolved_path}")
        _config_cache[resolved_path] = ConfigBuilder(resolved_path)

    if set_as_default:
        _default_config = _config_cache[resolved_path]

    return _config_cache[resolved_path]


def get_config_builder(
    config_path: str | Path | None = None, set_as_default: bool = False
) -> ConfigBuilder:
    """Get configuration builder instance for full config access.

    Examples:
        >>> config = get_config_builder()
        >>> output = config.get("generation.output", "./gen")

        >>> config = get_config_builder("/path/to/mdagen.yml", set_as_default=True)
    """
    return _get_config(config_path, set_as_default)


def get_config_value(path: str, default: Any = None, config_path: str | Path | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "generation.platform")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None

    Examples:
        >>> platform = get_config_value("generation.platform", "python")
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return _get_config(config_path).get(path, default)


def reset_config() -> None:
    """Forget the default and cached configurations (used when cwd changes)."""
    global _default_config
    _default_config = None
    _config_cache.clear()
