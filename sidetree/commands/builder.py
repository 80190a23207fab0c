"""Verb table turning tokenized statements into typed ``Command`` values."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..errors import MissingArgumentError, ScriptFileError, UnknownCommandError
from ..input.keys import format_key, parse_key
from .parser import format_statement, parse_statements
from .types import (
    BindKey,
    ChangeDirectory,
    Command,
    Delete,
    Echo,
    NewDirectory,
    NewFile,
    Open,
    Quit,
    Rename,
    RunCommandString,
    SetOption,
    Shell,
)


def _require(verb: str, args: list[str], index: int, name: str) -> str:
    if index >= len(args):
        raise MissingArgumentError(verb, name)
    return args[index]


def _optional(args: list[str]) -> str | None:
    return args[0] if args else None


def _build_set(args: list[str]) -> Command:
    return SetOption(_require("set", args, 0, "name"), _require("set", args, 1, "value"))


def _build_cd(args: list[str]) -> Command:
    target = _optional(args)
    return ChangeDirectory(Path(target) if target is not None else None)


def _build_map(args: list[str]) -> Command:
    key = parse_key(_require("map", args, 0, "key"))
    verb = _require("map", args, 1, "command")
    return BindKey(key, build_command(verb, args[2:]))


_BUILDERS: dict[str, Callable[[list[str]], Command]] = {
    "quit": lambda _args: Quit(),
    "open": lambda _args: Open(None),
    "set": _build_set,
    "echo": lambda args: Echo(" ".join(args)),
    "shell": lambda args: Shell(" ".join(args)),
    "cd": _build_cd,
    "map": _build_map,
    "rename": lambda args: Rename(_optional(args)),
    "mkfile": lambda args: NewFile(_optional(args)),
    "mk": lambda args: NewFile(_optional(args)),
    "mkdir": lambda args: NewDirectory(_optional(args)),
    "rm": lambda _args: Delete(confirm=True),
}

VERBS: tuple[str, ...] = tuple(_BUILDERS)


def build_command(verb: str, args: list[str]) -> Command:
    """Validate one statement against the verb table.

    Raises ``UnknownCommandError`` for unknown verbs, ``MissingArgumentError``
    for short ``set``/``map`` statements and ``KeySpecError`` for bad keys.
    Extra arguments to fixed-arity verbs are ignored.
    """
    builder = _BUILDERS.get(verb)
    if builder is None:
        raise UnknownCommandError(verb)
    return builder(list(args))


def parse_commands(text: str) -> list[Command]:
    """Tokenize ``text`` and build every statement, failing on the first error."""
    return [build_command(verb, args) for verb, args in parse_statements(text)]


def read_script_file(path: Path) -> list[Command]:
    """Read and parse a UTF-8 command script."""
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptFileError(f"cannot read {path}: {exc}") from exc
    return parse_commands(contents)


def command_statement(command: Command) -> tuple[str, list[str]] | None:
    """Return a ``(verb, args)`` statement that builds ``command``.

    ``RunCommandString`` has no verb of its own and yields ``None``, as does a
    ``Delete`` that skips confirmation.
    """
    if isinstance(command, Quit):
        return "quit", []
    if isinstance(command, Open):
        return ("open", []) if command.path is None else None
    if isinstance(command, SetOption):
        return "set", [command.name, command.value]
    if isinstance(command, Echo):
        return "echo", [command.text] if command.text else []
    if isinstance(command, Shell):
        return "shell", [command.text] if command.text else []
    if isinstance(command, ChangeDirectory):
        return "cd", [] if command.path is None else [str(command.path)]
    if isinstance(command, BindKey):
        inner = command_statement(command.command)
        if inner is None:
            return None
        return "map", [format_key(command.key), inner[0], *inner[1]]
    if isinstance(command, Rename):
        return "rename", [] if command.name is None else [command.name]
    if isinstance(command, NewFile):
        return "mkfile", [] if command.name is None else [command.name]
    if isinstance(command, NewDirectory):
        return "mkdir", [] if command.name is None else [command.name]
    if isinstance(command, Delete):
        return ("rm", []) if command.confirm else None
    return None


def format_command(command: Command) -> str:
    """Render ``command`` as script text, falling back to ``repr``."""
    statement = command_statement(command)
    if statement is None:
        return repr(command)
    return format_statement(*statement)


__all__ = [
    "VERBS",
    "build_command",
    "parse_commands",
    "read_script_file",
    "command_statement",
    "format_command",
]
