"""Configuration management."""

from smallshell.config.loader import get_config, load_config, reset_config, set_config
from smallshell.config.schema import ShellConfig

__all__ = ["ShellConfig", "get_config", "load_config", "reset_config", "set_config"]
