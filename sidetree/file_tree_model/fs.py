"""Filesystem listing for tree rescans."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DirectoryChild:
    """One directory child observed during a scan."""

    name: str
    path: Path
    is_dir: bool
    is_symlink: bool = False


def absolute_path(path: Path | str) -> Path:
    """Absolutize and normalize ``path`` without resolving symlinks."""
    return Path(os.path.abspath(os.path.expanduser(str(path))))


def children_sort_key(child: DirectoryChild) -> tuple[bool, str]:
    """Directories first, then lexicographic by path."""
    return (not child.is_dir, str(child.path))


def list_directory_children(directory: Path) -> tuple[list[DirectoryChild], Exception | None]:
    """List every child of ``directory`` in display order.

    Returns ``(children, scan_error)``. When the directory cannot be read the
    listing is empty and ``scan_error`` carries the cause. Symlinks to
    directories count as directories.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                try:
                    is_dir = child.is_dir(follow_symlinks=True)
                except OSError:
                    is_dir = False
                try:
                    is_symlink = child.is_symlink()
                except OSError:
                    is_symlink = False
                children.append(
                    DirectoryChild(
                        name=child.name,
                        path=directory / child.name,
                        is_dir=is_dir,
                        is_symlink=is_symlink,
                    )
                )
    except OSError as exc:
        return [], exc

    children.sort(key=children_sort_key)
    return children, None


__all__ = [
    "DirectoryChild",
    "absolute_path",
    "children_sort_key",
    "list_directory_children",
]
