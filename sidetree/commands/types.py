"""Typed command values produced by the builder and run by the executor.

``Command`` is a closed union: one frozen dataclass per verb. Fields typed
``... | None`` mean "use the currently selected tree entry".
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..input.keys import KeyEvent


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Shell:
    text: str


@dataclass(frozen=True)
class Open:
    path: Path | None = None


@dataclass(frozen=True)
class RunCommandString:
    text: str


@dataclass(frozen=True)
class SetOption:
    name: str
    value: str


@dataclass(frozen=True)
class Echo:
    text: str


@dataclass(frozen=True)
class ChangeDirectory:
    path: Path | None = None


@dataclass(frozen=True)
class BindKey:
    key: KeyEvent
    command: Command


@dataclass(frozen=True)
class Rename:
    name: str | None = None


@dataclass(frozen=True)
class NewFile:
    name: str | None = None


@dataclass(frozen=True)
class NewDirectory:
    name: str | None = None


@dataclass(frozen=True)
class Delete:
    """Remove the selected entry; ``confirm`` asks the user first."""

    confirm: bool = True


Command = (
    Quit
    | Shell
    | Open
    | RunCommandString
    | SetOption
    | Echo
    | ChangeDirectory
    | BindKey
    | Rename
    | NewFile
    | NewDirectory
    | Delete
)


__all__ = [
    "Command",
    "Quit",
    "Shell",
    "Open",
    "RunCommandString",
    "SetOption",
    "Echo",
    "ChangeDirectory",
    "BindKey",
    "Rename",
    "NewFile",
    "NewDirectory",
    "Delete",
]
