"""Domain model for the filesystem tree shown in the side panel.

This package contains non-UI tree primitives:
- entry/display-line datatypes
- filesystem listing in display order
- the incremental ``FileTree`` with expansion set and selection
"""

from __future__ import annotations

from .fs import DirectoryChild, absolute_path, children_sort_key, list_directory_children
from .rendering import format_tree_label, tree_label_parts
from .tree import FileTree, is_hidden
from .types import DisplayLine, TreeEntry

__all__ = [
    "TreeEntry",
    "DisplayLine",
    "DirectoryChild",
    "absolute_path",
    "children_sort_key",
    "list_directory_children",
    "format_tree_label",
    "tree_label_parts",
    "FileTree",
    "is_hidden",
]
