"""Configuration loading from TOML files and environment variables."""

import os
from pathlib import Path

from smallshell.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_LOG_LEVEL,
    ENV_NO_BANNER,
    ENV_NO_PLUGINS,
    ENV_PLUGINS_DIR,
    ENV_PROMPT,
    ensure_directories,
    get_config_path,
)
from smallshell.config.schema import ShellConfig
from smallshell.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError

# Global config instance (singleton)
_config: ShellConfig | None = None

_TRUTHY = ("1", "true", "yes")


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = False,
    required: bool = False,
) -> ShellConfig:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.
        required: Fail instead of using defaults when the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigNotFoundError: If ``required`` and the file is missing.
        ConfigError: If configuration cannot be loaded.
        ConfigValidationError: If configuration is invalid.
    """
    # Use Python 3.11+ tomllib or fallback
    try:
        import tomllib
    except ImportError:
        try:
            import tomli as tomllib
        except ImportError as err:
            raise ConfigError(
                "tomllib not available. Install 'tomli' for Python < 3.11"
            ) from err

    path = config_path or get_config_path()

    if not path.exists():
        if required:
            raise ConfigNotFoundError(f"Configuration file not found: {path}")
        if create_if_missing:
            ensure_directories()
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TOML)
        else:
            # Return default config without file
            return _apply_env_overrides(ShellConfig())

    # Load TOML file
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except Exception as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    # Parse into Pydantic model
    try:
        config = ShellConfig.model_validate(data)
    except Exception as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: ShellConfig) -> ShellConfig:
    """Apply environment variable overrides to configuration."""
    prompt = os.environ.get(ENV_PROMPT)
    if prompt:
        config.prompt = prompt

    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    plugins_dir = os.environ.get(ENV_PLUGINS_DIR)
    if plugins_dir:
        config.plugins.directory = Path(plugins_dir)

    no_banner = os.environ.get(ENV_NO_BANNER)
    if no_banner and no_banner.lower() in _TRUTHY:
        config.banner = False

    no_plugins = os.environ.get(ENV_NO_PLUGINS)
    if no_plugins and no_plugins.lower() in _TRUTHY:
        config.plugins.enabled = False

    return config


def get_config() -> ShellConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.

    Returns:
        Current configuration.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: ShellConfig) -> None:
    """Replace the configuration singleton."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
