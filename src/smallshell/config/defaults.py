"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "smallshell"
DEFAULT_PLUGINS_DIR: Final[Path] = DEFAULT_CONFIG_DIR / "plugins"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "SMALLSHELL_CONFIG"
ENV_PROMPT: Final[str] = "SMALLSHELL_PROMPT"
ENV_LOG_LEVEL: Final[str] = "SMALLSHELL_LOG_LEVEL"
ENV_PLUGINS_DIR: Final[str] = "SMALLSHELL_PLUGINS_DIR"
ENV_NO_BANNER: Final[str] = "SMALLSHELL_NO_BANNER"
ENV_NO_PLUGINS: Final[str] = "SMALLSHELL_NO_PLUGINS"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# smallshell configuration

prompt = "/> "
banner = true

[plugins]
enabled = true
auto_discover = true
# directory = "~/.config/smallshell/plugins"

[output]
color = true

[logging]
level = "WARNING"
json_format = false
"""


def ensure_directories() -> None:
    """Ensure all default directories exist."""
    DEFAULT_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    DEFAULT_PLUGINS_DIR.mkdir(parents=True, exist_ok=True)


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def get_plugins_dir(configured: Path | None = None) -> Path:
    """Get the plugins directory, preferring an explicit setting."""
    if configured is not None:
        return configured.expanduser()
    return DEFAULT_PLUGINS_DIR
