"""Command execution against the tree, option store and status line.

``App`` owns every piece of mutable runtime state (tree, options, bindings,
status line) and is driven from the single UI thread. Library errors are
caught here and reported on the status line; nothing in this module exits
the process.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

from ..commands import (
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
    format_command,
    parse_commands,
    read_script_file,
)
from ..errors import SidetreeError
from ..file_tree_model import FileTree, absolute_path
from ..input import (
    ALT,
    MOUSE_LEFT,
    MOUSE_RIGHT,
    MOUSE_WHEEL_DOWN,
    MOUSE_WHEEL_UP,
    KeyEvent,
    KeyMap,
    MouseEvent,
)
from .cache import Cache
from .config import Config
from .prompt import (
    CommandPrompt,
    DeletePrompt,
    NewDirectoryPrompt,
    NewFilePrompt,
    RenamePrompt,
    ShellPrompt,
    StatusLine,
)

logger = logging.getLogger(__name__)

ENV_ROOT = "sidetree_root"
ENV_ENTRY = "sidetree_entry"
ENV_DIR = "sidetree_dir"

RunProcess = Callable[..., subprocess.CompletedProcess]


def _move_expanded(expanded: set[Path], src: Path, dst: Path) -> set[Path]:
    """Re-key expanded paths under ``src`` to live under ``dst``."""
    moved: set[Path] = set()
    for path in expanded:
        if path.is_relative_to(src):
            moved.add(dst / path.relative_to(src))
        else:
            moved.add(path)
    return moved


def _drop_expanded(expanded: set[Path], removed: Path) -> set[Path]:
    """Forget ``removed`` and every expanded path beneath it."""
    return {path for path in expanded if not path.is_relative_to(removed)}


class App:
    """Runtime state plus the command interpreter."""

    def __init__(
        self,
        cache: Cache | None = None,
        *,
        root: Path | None = None,
        config: Config | None = None,
        run_process: RunProcess = subprocess.run,
    ) -> None:
        self.config = config if config is not None else Config()
        self.tree = FileTree(root if root is not None else Path.cwd())
        self.exit = False
        self.statusline = StatusLine()
        self.keymap = KeyMap()
        self.tree_start = 0
        self.run_process = run_process
        if cache is not None:
            self.read_cache(cache)
        self.update()

    # Cache

    def read_cache(self, cache: Cache) -> None:
        """Restore expansion state and selection from a saved ``Cache``."""
        self.tree.extend_expanded_paths(cache.expanded_paths)
        self.tree.update(self.config)
        if cache.selected_path is not None:
            self.tree.select_path(cache.selected_path)

    def get_cache(self) -> Cache:
        """Snapshot the selection and expansion set for persisting on exit."""
        return Cache(
            selected_path=self.tree.entry().path,
            expanded_paths=set(self.tree.expanded_paths),
        )

    # Refresh

    def update(self) -> None:
        """Rescan expanded directories and rebuild display lines."""
        self.tree.update(self.config)

    def tick(self) -> None:
        """Periodic refresh so external filesystem changes show up."""
        self.update()

    def ensure_visible(self, height: int) -> None:
        """Clamp ``tree_start`` so the selected line is inside ``height`` rows."""
        height = max(1, height)
        selected = self.tree.selected_idx
        if selected < self.tree_start:
            self.tree_start = selected
        elif selected >= self.tree_start + height:
            self.tree_start = selected - height + 1
        self.tree_start = max(0, min(self.tree_start, max(0, len(self.tree.lines) - height)))

    # Status reporting

    def error(self, msg: str) -> None:
        """Show ``msg`` as an error on the status line."""
        logger.warning("%s", msg)
        self.statusline.info.error(msg)

    def info(self, msg: str) -> None:
        self.statusline.info.info(msg)

    # Input

    def _activate_selection(self) -> None:
        """Toggle the selected directory or open the selected file."""
        entry = self.tree.entry()
        if entry.id == self.tree.root_id:
            return
        if entry.is_dir:
            self.tree.toggle_expanded(entry.path)
            self.update()
        else:
            self.run_command(Open(None))

    def on_key(self, key: KeyEvent) -> None:
        """Dispatch one key: prompt first, then user bindings, then defaults."""
        if self.statusline.has_focus():
            needs_update, command = self.statusline.on_key(key)
            if command is not None:
                self.run_command(command)
            if needs_update:
                self.update()
            return

        command = self.keymap.get_mapping(key)
        if command is not None:
            self.run_command(command)
            return

        tree = self.tree
        name = key.key
        if key.modifier == ALT:
            if name == "l":
                self.run_command(ChangeDirectory(None))
            return
        if key.modifier:
            return
        if name == "q":
            self.exit = True
        elif name in {"j", "down"}:
            tree.select_next()
        elif name in {"k", "up"}:
            tree.select_prev()
        elif name == "\n":
            self._activate_selection()
        elif name in {"l", "right"}:
            entry = tree.entry()
            if entry.is_dir:
                if not entry.is_expanded():
                    tree.expand(entry.path)
                    self.update()
                else:
                    tree.select_next()
        elif name in {"h", "left"}:
            entry = tree.entry()
            if entry.is_expanded() and entry.id != tree.root_id:
                tree.collapse(entry.path)
                self.update()
            else:
                tree.select_up()
        elif name == "!":
            self.statusline.prompt(ShellPrompt())
        elif name == ":":
            self.statusline.prompt(CommandPrompt())
        elif name == ".":
            self.config.show_hidden = not self.config.show_hidden
            self.update()

    def on_mouse(self, event: MouseEvent) -> None:
        """Handle a press at 1-based terminal row ``event.row``."""
        if self.statusline.has_focus():
            return
        if event.button in {MOUSE_LEFT, MOUSE_RIGHT}:
            line = self.tree_start + event.row - 1
            if line >= len(self.tree.lines):
                return
            if self.tree.selected_idx == line:
                self._activate_selection()
            else:
                self.tree.select_nth(line)
        elif event.button == MOUSE_WHEEL_DOWN:
            self.tree.select_next()
        elif event.button == MOUSE_WHEEL_UP:
            self.tree.select_prev()

    # Commands

    def run_commands(self, commands: list[Command]) -> None:
        """Run ``commands`` in order; each refreshes the tree afterwards."""
        for command in commands:
            self.run_command(command)

    def run_script_file(self, path: Path) -> None:
        """Run a startup script; read and parse errors propagate to the caller."""
        self.run_commands(read_script_file(path))

    def run_command(self, command: Command) -> None:
        """Execute one command. Failures are reported on the status line."""
        logger.debug("run %s", format_command(command))
        if isinstance(command, Quit):
            self.exit = True
        elif isinstance(command, Shell):
            self.run_shell(command.text)
        elif isinstance(command, Open):
            self.run_shell(self.config.open_cmd, command.path)
            if self.config.quit_on_open:
                self.exit = True
        elif isinstance(command, RunCommandString):
            try:
                commands = parse_commands(command.text)
            except SidetreeError as exc:
                self.error(str(exc))
            else:
                self.run_commands(commands)
        elif isinstance(command, SetOption):
            try:
                self.config.set_opt(command.name, command.value)
            except SidetreeError as exc:
                self.error(str(exc))
        elif isinstance(command, Echo):
            self.info(command.text)
        elif isinstance(command, ChangeDirectory):
            self._change_directory(command.path)
        elif isinstance(command, BindKey):
            self.keymap.add_mapping(command.key, command.command)
        elif isinstance(command, Rename):
            self._rename(command.name)
        elif isinstance(command, NewFile):
            self._new_file(command.name)
        elif isinstance(command, NewDirectory):
            self._new_directory(command.name)
        elif isinstance(command, Delete):
            self._delete(command.confirm)
        self.update()

    def _change_directory(self, path: Path | None) -> None:
        """chdir to ``path`` (or the selected entry) and re-root the tree there."""
        target = path if path is not None else self.tree.entry().path
        try:
            os.chdir(target)
        except OSError as exc:
            self.error(f"cd: {exc}")
            return
        self.tree.change_root(self.config, Path.cwd())
        self.tree_start = 0

    def _rename(self, name: str | None) -> None:
        """Rename the selected entry within its directory, or prompt for a name."""
        entry = self.tree.entry()
        if name is None:
            self.statusline.prompt(RenamePrompt(old_name=entry.name))
            return
        if entry.id == self.tree.root_id:
            self.error("rename: nothing selected")
            return
        src = entry.path
        dst = absolute_path(src.parent / name)
        if dst.exists() or dst.is_symlink():
            self.error(f"rename: {dst} already exists")
            return
        try:
            os.rename(src, dst)
        except OSError as exc:
            self.error(f"rename failed: {exc}")
            return
        self.tree.expanded_paths = _move_expanded(self.tree.expanded_paths, src, dst)
        self.update()
        self.tree.select_path(dst)

    def _new_file(self, name: str | None) -> None:
        if name is None:
            self.statusline.prompt(NewFilePrompt())
            return
        parent = self.tree.current_dir()
        path = absolute_path(parent / name)
        if path.exists() or path.is_symlink():
            self.error(f"mkfile: {path} already exists")
            return
        try:
            if name.endswith("/"):
                path.mkdir(parents=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.touch(exist_ok=False)
        except OSError as exc:
            self.error(f"mkfile failed: {exc}")
            return
        self._reveal(parent, path)

    def _new_directory(self, name: str | None) -> None:
        if name is None:
            self.statusline.prompt(NewDirectoryPrompt())
            return
        parent = self.tree.current_dir()
        path = absolute_path(parent / name)
        if path.exists() or path.is_symlink():
            self.error(f"mkdir: {path} already exists")
            return
        try:
            path.mkdir(parents=True)
        except OSError as exc:
            self.error(f"mkdir failed: {exc}")
            return
        self._reveal(parent, path)

    def _reveal(self, parent: Path, path: Path) -> None:
        """Expand ``parent`` and select a freshly created ``path``."""
        self.tree.expand(parent)
        self.tree.expand_to_path(path)
        self.update()
        self.tree.select_path(path)

    def _delete(self, confirm: bool) -> None:
        """Remove the selected entry, asking first when ``confirm`` is set."""
        if confirm:
            self.statusline.prompt(DeletePrompt())
            return
        entry = self.tree.entry()
        if entry.id == self.tree.root_id:
            self.error("rm: refusing to delete the tree root")
            return
        path = entry.path
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as exc:
            self.error(f"rm failed: {exc}")
            return
        self.tree.expanded_paths = _drop_expanded(self.tree.expanded_paths, path)

    def shell_env(self) -> dict[str, str]:
        """Environment for shell/open commands: inherited plus sidetree vars."""
        env = dict(os.environ)
        env[ENV_ROOT] = str(self.tree.root_path)
        env[ENV_ENTRY] = str(self.tree.entry().path)
        env[ENV_DIR] = str(self.tree.current_dir())
        return env

    def run_shell(self, cmd: str, path: Path | None = None) -> None:
        """Run ``sh -c cmd -- <path>`` and report spawn errors or failures."""
        target = path if path is not None else self.tree.entry().path
        try:
            result = self.run_process(
                ["sh", "-c", cmd, "--", str(target)],
                env=self.shell_env(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as exc:
            self.error(str(exc))
            return
        if result.returncode != 0:
            logger.info("shell command %r exited with %s", cmd, result.returncode)
            self.error(f"Command failed with exit status: {result.returncode}")


__all__ = ["App", "ENV_ROOT", "ENV_ENTRY", "ENV_DIR"]
