"""Pydantic models for smallshell configuration."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from smallshell.context import DEFAULT_PROMPT


class PluginsConfig(BaseModel):
    """Plugins configuration."""

    enabled: bool = True
    auto_discover: bool = True  # Installed entry points
    directory: Path | None = None  # Default: ~/.config/smallshell/plugins


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


class ShellConfig(BaseModel):
    """Root configuration for smallshell."""

    prompt: str = DEFAULT_PROMPT
    banner: bool = True
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
