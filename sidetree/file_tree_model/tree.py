"""Incremental file tree with path-keyed expansion state and selection.

Entries live in an arena addressed by stable integer ids, with a parallel
``path -> id`` index. ``expanded_paths`` is the authoritative record of which
directories are open; each entry's ``expanded`` flag is re-derived from it on
every ``update``.

A rescan merges each expanded directory's previous children with a fresh
listing: entries whose path survives keep their id (and therefore their own
already-scanned subtree), vanished paths are dropped from the arena, new paths
get fresh entries. Collapsed directories are never read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from .fs import DirectoryChild, absolute_path, list_directory_children
from .rendering import tree_label_parts
from .types import DisplayLine, TreeEntry

if TYPE_CHECKING:
    from ..runtime.config import Config

logger = logging.getLogger(__name__)


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


class FileTree:
    """Tree model rooted at one directory, plus flattened display lines."""

    def __init__(self, root: Path | str, expanded_paths: Iterable[Path] = ()) -> None:
        self.expanded_paths: set[Path] = {absolute_path(path) for path in expanded_paths}
        self.lines: list[DisplayLine] = []
        self.selected_idx = 0
        self._entries: dict[int, TreeEntry] = {}
        self._index: dict[Path, int] = {}
        self._next_id = 0
        self.root_id = self._create_root(absolute_path(root))

    # Arena bookkeeping

    def _new_entry(self, path: Path, is_dir: bool, is_symlink: bool = False) -> int:
        entry_id = self._next_id
        self._next_id += 1
        self._entries[entry_id] = TreeEntry(
            id=entry_id,
            path=path,
            is_dir=is_dir,
            is_symlink=is_symlink,
            expanded=path in self.expanded_paths,
        )
        self._index[path] = entry_id
        return entry_id

    def _create_root(self, root: Path) -> int:
        self._entries.clear()
        self._index.clear()
        self.expanded_paths.add(root)
        return self._new_entry(root, root.is_dir(), root.is_symlink())

    def _discard(self, entry_id: int) -> None:
        """Drop ``entry_id`` and its whole subtree from the arena."""
        stack = [entry_id]
        while stack:
            entry = self._entries.pop(stack.pop(), None)
            if entry is None:
                continue
            if self._index.get(entry.path) == entry.id:
                del self._index[entry.path]
            stack.extend(entry.children)

    @property
    def root(self) -> TreeEntry:
        return self._entries[self.root_id]

    @property
    def root_path(self) -> Path:
        return self.root.path

    def get(self, entry_id: int) -> TreeEntry:
        return self._entries[entry_id]

    def find(self, path: Path | str) -> TreeEntry | None:
        """Return the tracked entry for ``path`` if it is in the arena."""
        entry_id = self._index.get(absolute_path(path))
        return None if entry_id is None else self._entries[entry_id]

    def __len__(self) -> int:
        return len(self._entries)

    # Expansion set

    def expand(self, path: Path | str) -> None:
        self.expanded_paths.add(absolute_path(path))

    def collapse(self, path: Path | str) -> None:
        """Close ``path``. The root always stays open."""
        resolved = absolute_path(path)
        if resolved != self.root_path:
            self.expanded_paths.discard(resolved)

    def toggle_expanded(self, path: Path | str) -> None:
        resolved = absolute_path(path)
        if resolved == self.root_path:
            return
        if resolved in self.expanded_paths:
            self.expanded_paths.discard(resolved)
        else:
            self.expanded_paths.add(resolved)

    def extend_expanded_paths(self, paths: Iterable[Path | str]) -> None:
        self.expanded_paths.update(absolute_path(path) for path in paths)

    def expand_to_path(self, path: Path | str) -> None:
        """Expand every ancestor of ``path`` that lies inside the root."""
        root = self.root_path
        for ancestor in absolute_path(path).parents:
            if not ancestor.is_relative_to(root):
                break
            self.expanded_paths.add(ancestor)

    # Rescan

    def _merge_children(self, entry: TreeEntry, listing: list[DirectoryChild]) -> None:
        previous = {self._entries[child_id].path: child_id for child_id in entry.children}
        merged: list[int] = []
        for child in listing:
            existing_id = previous.pop(child.path, None)
            if existing_id is not None and self._entries[existing_id].is_dir == child.is_dir:
                self._entries[existing_id].is_symlink = child.is_symlink
                merged.append(existing_id)
                continue
            if existing_id is not None:
                self._discard(existing_id)
            merged.append(self._new_entry(child.path, child.is_dir, child.is_symlink))
        for stale_id in previous.values():
            self._discard(stale_id)
        entry.children = merged

    def _rescan(self, entry_id: int) -> None:
        stack = [(entry_id, True)]
        while stack:
            current_id, reachable = stack.pop()
            entry = self._entries[current_id]
            entry.expanded = entry.is_dir and (entry.id == self.root_id or entry.path in self.expanded_paths)
            if entry.expanded and reachable:
                listing, scan_error = list_directory_children(entry.path)
                if scan_error is not None:
                    logger.debug("cannot read %s: %s", entry.path, scan_error)
                self._merge_children(entry, listing)
            # Collapsed subtrees keep their children but still refresh flags.
            stack.extend((child_id, reachable and entry.expanded) for child_id in reversed(entry.children))

    def _build_lines(self, show_hidden: bool, file_icons: bool) -> list[DisplayLine]:
        lines: list[DisplayLine] = []
        stack: list[tuple[int, int]] = [(child_id, 0) for child_id in reversed(self.root.children)]
        while stack:
            entry_id, depth = stack.pop()
            entry = self._entries[entry_id]
            if not show_hidden and is_hidden(entry.path):
                continue
            marker, icon, name = tree_label_parts(entry, file_icons)
            lines.append(
                DisplayLine(
                    path=entry.path,
                    label=f"{marker}{icon}{name}",
                    depth=depth,
                    is_dir=entry.is_dir,
                    marker=marker,
                    icon=icon,
                )
            )
            if entry.expanded:
                stack.extend((child_id, depth + 1) for child_id in reversed(entry.children))
        return lines

    def update(self, config: Config | None = None) -> None:
        """Rescan expanded directories and rebuild display lines.

        The selection follows the previously selected path; if that path is
        gone the index is kept and clamped into range.
        """
        show_hidden = bool(config.show_hidden) if config is not None else False
        file_icons = bool(config.file_icons) if config is not None else False
        previous = self.selected_line()
        self._rescan(self.root_id)
        self.lines = self._build_lines(show_hidden, file_icons)
        if previous is not None and self.select_path(previous.path):
            return
        self.selected_idx = max(0, min(self.selected_idx, len(self.lines) - 1))

    def change_root(self, config: Config | None, root: Path | str) -> None:
        """Rebuild the arena at ``root``; the expansion set is kept."""
        self.root_id = self._create_root(absolute_path(root))
        self.lines = []
        self.selected_idx = 0
        self.update(config)

    # Selection

    def selected_line(self) -> DisplayLine | None:
        if 0 <= self.selected_idx < len(self.lines):
            return self.lines[self.selected_idx]
        return None

    def entry(self) -> TreeEntry:
        """Currently selected entry, or the root when nothing is selected."""
        line = self.selected_line()
        if line is None:
            return self.root
        entry_id = self._index.get(line.path)
        return self.root if entry_id is None else self._entries[entry_id]

    def current_dir(self) -> Path:
        """Directory new files go into: the selection itself or its parent."""
        entry = self.entry()
        if entry.is_dir:
            return entry.path
        return entry.path.parent

    def select_nth(self, index: int) -> bool:
        if 0 <= index < len(self.lines):
            self.selected_idx = index
            return True
        return False

    def select_next(self) -> None:
        if self.selected_idx + 1 < len(self.lines):
            self.selected_idx += 1

    def select_prev(self) -> None:
        if self.selected_idx > 0:
            self.selected_idx -= 1

    def select_path(self, path: Path | str) -> bool:
        """Select the display line for ``path``; returns ``False`` if hidden/absent."""
        target = absolute_path(path)
        for idx, line in enumerate(self.lines):
            if line.path == target:
                self.selected_idx = idx
                return True
        return False

    def select_up(self) -> None:
        """Jump to the nearest preceding line with a smaller depth."""
        line = self.selected_line()
        if line is None:
            return
        depth = line.depth
        while self.selected_idx > 0:
            self.selected_idx -= 1
            if self.lines[self.selected_idx].depth < depth:
                return


__all__ = ["FileTree", "is_hidden"]
