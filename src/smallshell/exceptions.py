"""Exception hierarchy for smallshell."""


class SmallShellError(Exception):
    """Base exception for all smallshell errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Dispatch Errors
class DispatchError(SmallShellError):
    """Errors raised while turning a line into a command invocation."""

    exit_code = 2
    user_message = "Dispatch error"


class ParseError(DispatchError):
    """Command line could not be tokenized."""

    exit_code = 3
    user_message = "Unable to parse command line"

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"unable to parse command line: {line}")


class CommandNotFoundError(DispatchError):
    """First token has no registry entry."""

    exit_code = 4
    user_message = "Command not found"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"command not found: {name}")


# Command Errors
class CommandError(SmallShellError):
    """Command execution errors."""

    exit_code = 40
    user_message = "Command error"


class CommandExecutionError(CommandError):
    """Wraps the failure reported by an invoked command."""

    exit_code = 41
    user_message = "Command failed"

    def __init__(self, name: str, cause: BaseException | str) -> None:
        self.name = name
        self.cause = cause
        super().__init__(str(cause) or f"command '{name}' failed")
        if isinstance(cause, BaseException):
            self.__cause__ = cause


class InvalidArgumentError(CommandError):
    """Invalid argument provided to a command."""

    exit_code = 42
    user_message = "Invalid argument"


# Registry Errors
class RegistryError(SmallShellError):
    """Command registry errors."""

    exit_code = 1
    user_message = "Command registry error"


class RegistryLoadError(RegistryError):
    """A registry provider failed while loading commands."""

    exit_code = 1
    user_message = "Failed to load commands"


class InvalidCommandNameError(RegistryError):
    """Command name is empty or contains whitespace."""

    exit_code = 1
    user_message = "Invalid command name"


# Plugin Errors
class PluginError(RegistryLoadError):
    """Plugin-related errors."""

    exit_code = 1
    user_message = "Plugin error"


class PluginLoadError(PluginError):
    """Failed to load plugin."""

    exit_code = 1
    user_message = "Failed to load plugin"


# Config Errors
class ConfigError(SmallShellError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    exit_code = 21
    user_message = "Configuration file not found"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Stream Errors
class StreamError(SmallShellError):
    """The shell's input or output stream failed; stops the REPL."""

    exit_code = 60
    user_message = "Stream error"


class LineReadError(StreamError):
    """Reading a line from the input stream failed."""

    exit_code = 60
    user_message = "Input stream closed"


class PromptWriteError(StreamError):
    """Writing the prompt to the output stream failed."""

    exit_code = 61
    user_message = "Output stream closed"
