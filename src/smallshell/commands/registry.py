"""Command registry and registry providers."""

from collections.abc import Callable, Iterable, Mapping
from typing import Protocol, TypeVar, runtime_checkable

from smallshell.commands.base import BaseCommand, Command, CommandFunction, FunctionCommand
from smallshell.exceptions import InvalidCommandNameError, RegistryLoadError
from smallshell.utils.logging import get_logger

logger = get_logger(__name__)

# Type for command classes
CommandClass = TypeVar("CommandClass", bound=type[BaseCommand])


@runtime_checkable
class RegistryProvider(Protocol):
    """Source of commands, consulted once at shell startup."""

    def registry(self) -> Mapping[str, Command]:
        ...


def validate_name(name: object) -> str:
    """Check that ``name`` is usable as a command name.

    Raises:
        InvalidCommandNameError: If the name is empty, not a string, or
            contains whitespace.
    """
    if not isinstance(name, str) or not name or any(c.isspace() for c in name):
        raise InvalidCommandNameError(f"Invalid command name: {name!r}")
    return name


class CommandRegistry:
    """Registry of named commands.

    Registering a name twice replaces the earlier command. Lookups are
    exact and case-sensitive.

    Usage:
        registry = CommandRegistry()

        @registry.register
        class EchoCommand(BaseCommand):
            ...

        @registry.command("hello", description="Say hello")
        def hello(ctx, args):
            print("hello", file=ctx.stdout)

        commands = registry.registry()
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name or "registry"
        self._commands: dict[str, Command] = {}

    def register(self, command_class: CommandClass) -> CommandClass:
        """Decorator to register a command class.

        The class is instantiated once and stored under its ``name``.

        Args:
            command_class: The command class to register.

        Returns:
            The command class (unchanged).
        """
        instance = command_class()
        self.register_command(instance.name, instance)
        return command_class

    def register_command(self, name: str, command: Command) -> None:
        """Register a command instance under ``name``.

        Args:
            name: The command name.
            command: The command to register.

        Raises:
            InvalidCommandNameError: If the name is not usable.
        """
        validate_name(name)
        if name in self._commands:
            logger.debug("Command '%s' re-registered, replacing previous entry", name)
        self._commands[name] = command

    def command(
        self,
        name: str | None = None,
        description: str | None = None,
    ) -> Callable[[CommandFunction], CommandFunction]:
        """Decorator factory for registering plain functions as commands.

        Args:
            name: Command name (defaults to the function name).
            description: Help text (defaults to the docstring's first line).

        Returns:
            Decorator function.
        """

        def decorator(func: CommandFunction) -> CommandFunction:
            wrapped = FunctionCommand(func, name=name, description=description)
            self.register_command(wrapped.name, wrapped)
            return func

        return decorator

    def get(self, name: str) -> Command | None:
        """Get a command by exact name."""
        return self._commands.get(name)

    def is_registered(self, name: str) -> bool:
        """Check if a command is registered."""
        return name in self._commands

    def unregister(self, name: str) -> bool:
        """Unregister a command by name.

        Returns:
            True if unregistered, False if not found.
        """
        return self._commands.pop(name, None) is not None

    def list_names(self) -> list[str]:
        """List all command names, sorted."""
        return sorted(self._commands)

    def clear(self) -> None:
        """Clear all registered commands (mainly for testing)."""
        self._commands.clear()

    def registry(self) -> dict[str, Command]:
        """Return a copy of the name -> command mapping."""
        return dict(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands


def get_command_info(commands: Mapping[str, Command]) -> list[dict[str, str]]:
    """Get name and description for each command, sorted by name."""
    return [
        {
            "name": name,
            "description": str(getattr(commands[name], "description", "") or ""),
        }
        for name in sorted(commands)
    ]


def load_registry(providers: Iterable[RegistryProvider]) -> dict[str, Command]:
    """Combine providers into one mapping, later providers winning.

    Each provider's ``registry()`` is called exactly once.

    Raises:
        RegistryLoadError: If a provider fails or returns something that
            is not a mapping of valid names to commands.
    """
    commands: dict[str, Command] = {}
    for provider in providers:
        source = getattr(provider, "name", None) or type(provider).__name__
        try:
            provided = provider.registry()
        except RegistryLoadError:
            raise
        except Exception as e:
            raise RegistryLoadError(f"Failed to load commands from {source}: {e}") from e

        if not isinstance(provided, Mapping):
            raise RegistryLoadError(
                f"Provider {source} returned {type(provided).__name__}, expected a mapping"
            )

        for name, cmd in provided.items():
            try:
                validate_name(name)
            except InvalidCommandNameError as e:
                raise RegistryLoadError(f"{source}: {e}") from e
            if not callable(getattr(cmd, "execute", None)):
                raise RegistryLoadError(f"{source}: '{name}' is not a command")
            if name in commands:
                logger.debug("Command '%s' from %s overrides earlier registration", name, source)
            commands[name] = cmd

        logger.debug("Loaded %d command(s) from %s", len(provided), source)
    return commands
