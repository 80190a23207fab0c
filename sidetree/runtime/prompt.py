"""Status line: info/error messages and the one-line text prompt.

Prompt purposes are a closed set of frozen dataclasses; ``prompt_submit``
maps a submitted line to the ``Command`` it should run. Input history is
kept per prompt kind by ``StatusLine`` and handed to each ``PromptState``.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..commands.types import Command, Delete, NewDirectory, NewFile, Rename, RunCommandString, Shell
from ..input.keys import KeyEvent


@dataclass(frozen=True)
class ShellPrompt:
    pass


@dataclass(frozen=True)
class CommandPrompt:
    pass


@dataclass(frozen=True)
class RenamePrompt:
    old_name: str


@dataclass(frozen=True)
class NewFilePrompt:
    pass


@dataclass(frozen=True)
class NewDirectoryPrompt:
    pass


@dataclass(frozen=True)
class DeletePrompt:
    pass


Prompt = ShellPrompt | CommandPrompt | RenamePrompt | NewFilePrompt | NewDirectoryPrompt | DeletePrompt

_PROMPT_TEXT: dict[type, str] = {
    ShellPrompt: "!",
    CommandPrompt: ":",
    RenamePrompt: "Rename>",
    NewFilePrompt: "mk>",
    NewDirectoryPrompt: "New dir>",
    DeletePrompt: "delete? [y/N]>",
}


def prompt_text(prompt: Prompt) -> str:
    return _PROMPT_TEXT[type(prompt)]


def prompt_init_text(prompt: Prompt) -> str:
    if isinstance(prompt, RenamePrompt):
        return prompt.old_name
    return ""


def prompt_submit(prompt: Prompt, text: str) -> Command | None:
    """Command produced by submitting ``text`` to ``prompt``."""
    if isinstance(prompt, ShellPrompt):
        return Shell(text)
    if isinstance(prompt, CommandPrompt):
        return RunCommandString(text)
    if isinstance(prompt, RenamePrompt):
        return Rename(text) if text else None
    if isinstance(prompt, NewFilePrompt):
        return NewFile(text) if text else None
    if isinstance(prompt, NewDirectoryPrompt):
        return NewDirectory(text) if text else None
    if isinstance(prompt, DeletePrompt):
        return Delete(confirm=False) if text in {"y", "Y"} else None
    return None


class PromptState:
    """Line editor for one open prompt."""

    def __init__(self, prompt: Prompt, history: list[str]) -> None:
        self.prompt = prompt
        self.input = prompt_init_text(prompt)
        self.history = history
        self._history_pos = len(history)

    def on_key(self, key: KeyEvent) -> tuple[bool, Command | None]:
        """Handle one key; returns ``(closed, command)``."""
        if key.key == "\n" and not key.modifier:
            return True, self.submit()
        if key.key == "esc":
            return True, None
        if key.key == "backspace":
            self.input = self.input[:-1]
        elif key.key == "up":
            self._walk_history(-1)
        elif key.key == "down":
            self._walk_history(1)
        elif key.is_char and key.key.isprintable():
            self.input += key.key
        elif key.key == "\t" and not key.modifier:
            self.input += "\t"
        return False, None

    def _walk_history(self, delta: int) -> None:
        if not self.history:
            return
        self._history_pos = max(0, min(len(self.history), self._history_pos + delta))
        if self._history_pos == len(self.history):
            self.input = ""
        else:
            self.input = self.history[self._history_pos]

    def submit(self) -> Command | None:
        text = self.input
        if text and (not self.history or self.history[-1] != text):
            self.history.append(text)
        self.input = ""
        return prompt_submit(self.prompt, text)


class InfoBox:
    """Last info or error message shown on the status line."""

    def __init__(self) -> None:
        self.message = ""
        self.is_error = False

    def info(self, msg: str) -> None:
        self.message = msg
        self.is_error = False

    def error(self, msg: str) -> None:
        self.message = msg
        self.is_error = True

    def clear(self) -> None:
        self.message = ""
        self.is_error = False


class StatusLine:
    """Bottom row: either the open prompt or the info box."""

    def __init__(self, history: dict[type, list[str]] | None = None) -> None:
        self.prompt_state: PromptState | None = None
        self.info = InfoBox()
        self.history: dict[type, list[str]] = history if history is not None else {}

    def has_focus(self) -> bool:
        """Whether key events go to the prompt instead of the tree."""
        return self.prompt_state is not None

    def prompt(self, prompt: Prompt) -> None:
        self.info.clear()
        self.prompt_state = PromptState(prompt, self.history.setdefault(type(prompt), []))

    def on_key(self, key: KeyEvent) -> tuple[bool, Command | None]:
        """Route ``key`` to the prompt; returns ``(tree_needs_update, command)``."""
        if self.prompt_state is None:
            return False, None
        closed, command = self.prompt_state.on_key(key)
        if closed:
            self.prompt_state = None
        return closed, command


__all__ = [
    "Prompt",
    "ShellPrompt",
    "CommandPrompt",
    "RenamePrompt",
    "NewFilePrompt",
    "NewDirectoryPrompt",
    "DeletePrompt",
    "prompt_text",
    "prompt_init_text",
    "prompt_submit",
    "PromptState",
    "InfoBox",
    "StatusLine",
]
