"""Nerd Font glyphs shown in front of tree names when ``file_icons`` is set."""

from __future__ import annotations

from pathlib import Path

DIR_ICON = "\uf115"
DIR_SYMLINK_ICON = "\uf482"
FILE_ICON = "\uf15b"
FILE_SYMLINK_ICON = "\uf481"

ICONS_BY_NAME: dict[str, str] = {
    ".git": "\uf1d3",
    ".gitignore": "\uf1d3",
    ".gitmodules": "\uf1d3",
    ".github": "\uf408",
    ".vscode": "\ue70c",
    "Dockerfile": "\uf308",
    "Makefile": "\uf489",
    "LICENSE": "\uf02d",
    "bin": "\ue5fc",
    "config": "\ue5fc",
}

ICONS_BY_EXTENSION: dict[str, str] = {
    "c": "\ue61e",
    "cpp": "\ue61d",
    "css": "\ue749",
    "go": "\ue626",
    "h": "\uf0fd",
    "html": "\uf13b",
    "js": "\ue74e",
    "json": "\ue60b",
    "md": "\uf48a",
    "py": "\ue606",
    "rs": "\ue7a8",
    "sh": "\uf489",
    "toml": "\ue615",
    "ts": "\ue628",
    "txt": "\uf15c",
    "yaml": "\uf481",
    "yml": "\uf481",
}


def icon_for(path: Path, is_dir: bool, is_symlink: bool = False) -> str:
    """Return the glyph for ``path``, falling back to generic file/dir icons."""
    by_name = ICONS_BY_NAME.get(path.name)
    if by_name is not None:
        return by_name
    if is_dir:
        return DIR_SYMLINK_ICON if is_symlink else DIR_ICON
    if is_symlink:
        return FILE_SYMLINK_ICON
    return ICONS_BY_EXTENSION.get(path.suffix.lstrip(".").lower(), FILE_ICON)


__all__ = ["icon_for"]
