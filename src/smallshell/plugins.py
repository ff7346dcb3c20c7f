"""Registry providers that load commands from plugins.

Two sources are supported:

* installed distributions exposing entry points in the
  ``smallshell.commands`` group;
* ``*.py`` modules in a plugins directory exposing a ``COMMANDS``
  attribute.

Either kind of export may be a registry provider (anything with a
``registry()`` method), a mapping of names to commands, or, for entry
points only, a single command registered under the entry point name.
"""

import importlib.util
import sys
from collections.abc import Mapping
from importlib.metadata import EntryPoint, entry_points
from pathlib import Path
from typing import Any, Final

from smallshell.commands.base import Command
from smallshell.exceptions import PluginLoadError
from smallshell.utils.logging import get_logger

logger = get_logger(__name__)

ENTRY_POINT_GROUP: Final[str] = "smallshell.commands"
COMMANDS_SYMBOL: Final[str] = "COMMANDS"


def _is_command(obj: Any) -> bool:
    return callable(getattr(obj, "execute", None))


def commands_from_export(
    exported: Any,
    source: str,
    default_name: str | None = None,
) -> dict[str, Command]:
    """Interpret an object exported by a plugin as a set of commands.

    Args:
        exported: Provider, mapping, or single command.
        source: Human-readable origin, used in errors.
        default_name: Name for a bare command export.

    Raises:
        PluginLoadError: If the export cannot be interpreted.
    """
    if callable(getattr(exported, "registry", None)):
        try:
            exported = exported.registry()
        except Exception as e:
            raise PluginLoadError(f"Plugin {source} failed to provide commands: {e}") from e

    if isinstance(exported, Mapping):
        return dict(exported)

    if default_name is not None and _is_command(exported):
        return {default_name: exported}

    raise PluginLoadError(
        f"Plugin {source} exports {type(exported).__name__}, "
        "expected a registry provider, a mapping or a command"
    )


class EntryPointProvider:
    """Load commands from installed entry points.

    Entry points are loaded in name order so overrides between plugins
    are deterministic.
    """

    def __init__(self, group: str = ENTRY_POINT_GROUP) -> None:
        self.group = group
        self.name = f"entry points ({group})"

    def entry_points(self) -> list[EntryPoint]:
        """List entry points in the group, sorted by name."""
        return sorted(entry_points(group=self.group), key=lambda ep: ep.name)

    def registry(self) -> dict[str, Command]:
        commands: dict[str, Command] = {}
        for ep in self.entry_points():
            source = f"{ep.name} ({ep.value})"
            try:
                exported = ep.load()
            except Exception as e:
                raise PluginLoadError(f"Failed to load plugin {source}: {e}") from e
            loaded = commands_from_export(exported, source, default_name=ep.name)
            logger.info("Loaded %d command(s) from plugin %s", len(loaded), source)
            commands.update(loaded)
        return commands


class DirectoryProvider:
    """Load commands from Python modules in a directory.

    Modules are imported in file name order; files starting with an
    underscore are skipped. A missing directory provides no commands.
    """

    def __init__(self, path: Path, symbol: str = COMMANDS_SYMBOL) -> None:
        self.path = Path(path).expanduser()
        self.symbol = symbol
        self.name = f"plugins directory {self.path}"

    def plugin_files(self) -> list[Path]:
        """List plugin modules in the directory."""
        if not self.path.is_dir():
            return []
        return sorted(
            p for p in self.path.glob("*.py") if p.is_file() and not p.name.startswith("_")
        )

    def registry(self) -> dict[str, Command]:
        commands: dict[str, Command] = {}
        for file in self.plugin_files():
            module = self._import(file)
            if not hasattr(module, self.symbol):
                raise PluginLoadError(f"Plugin {file} does not define {self.symbol}")
            loaded = commands_from_export(getattr(module, self.symbol), str(file))
            logger.info("Loaded %d command(s) from plugin %s", len(loaded), file)
            commands.update(loaded)
        return commands

    def _import(self, file: Path) -> Any:
        module_name = f"smallshell_plugins.{file.stem}"
        spec = importlib.util.spec_from_file_location(module_name, file)
        if spec is None or spec.loader is None:
            raise PluginLoadError(f"Cannot import plugin {file}")
        module = importlib.util.module_from_spec(spec)
        # dataclasses and typing resolve annotations through sys.modules
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise PluginLoadError(f"Failed to load plugin {file}: {e}") from e
        return module
