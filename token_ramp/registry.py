"""Command discovery for the token-ramp CLI.

A command is any module in token_ramp/commands/ with a module-level
`command = Command(...)`. The module's docstring is its help page.

Frozen PyInstaller binaries have no package directory for pkgutil to list,
so BUILTIN_COMMANDS names the modules to import in that case.
"""

import importlib
import pkgutil
from collections.abc import Iterator
from types import ModuleType

from token_ramp.core.types import Command

BUILTIN_COMMANDS = ('collections', 'create', 'ramp', 'scan')

_commands: dict[str, Command] = {}
_modules: dict[str, ModuleType] = {}


def _module_names() -> Iterator[str]:
    import token_ramp.commands as pkg

    names = [info.name for info in pkgutil.iter_modules(pkg.__path__) if not info.name.startswith('_')]
    yield from names or BUILTIN_COMMANDS


def discover() -> dict[str, Command]:
    """Import every command module once; later calls reuse the result."""
    if _commands:
        return _commands

    for modname in _module_names():
        module = importlib.import_module(f'token_ramp.commands.{modname}')
        cmd = getattr(module, 'command', None)
        if not isinstance(cmd, Command):
            continue
        if cmd.name in _commands:
            other = _modules[cmd.name].__name__
            raise RuntimeError(f'Command {cmd.name!r} defined by both {other} and {module.__name__}')
        _commands[cmd.name] = cmd
        _modules[cmd.name] = module
    return _commands


def get(name: str) -> Command:
    commands = discover()
    if name not in commands:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(commands))}')
    return commands[name]


def docs(name: str) -> str:
    """Help page of a command: its module docstring, stripped."""
    get(name)
    return (_modules[name].__doc__ or '').strip()


def all_commands() -> dict[str, Command]:
    return discover()
