"""Plain-text labels for tree display lines."""

from __future__ import annotations

from ..icons import icon_for
from .types import TreeEntry

EXPANDED_MARKER = "▾ "
COLLAPSED_MARKER = "▸ "
FILE_MARKER = "  "


def tree_label_parts(entry: TreeEntry, file_icons: bool = False) -> tuple[str, str, str]:
    """Return the marker, optional icon and name for one entry."""
    if entry.is_dir:
        marker = EXPANDED_MARKER if entry.expanded else COLLAPSED_MARKER
    else:
        marker = FILE_MARKER
    icon = f"{icon_for(entry.path, entry.is_dir, entry.is_symlink)} " if file_icons else ""
    return marker, icon, entry.name


def format_tree_label(entry: TreeEntry, file_icons: bool = False) -> str:
    return "".join(tree_label_parts(entry, file_icons))


__all__ = ["EXPANDED_MARKER", "COLLAPSED_MARKER", "FILE_MARKER", "tree_label_parts", "format_tree_label"]
