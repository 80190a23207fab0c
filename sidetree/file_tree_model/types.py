"""Domain datatypes for the filesystem tree and its display projection."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class TreeEntry:
    """One filesystem path tracked by the tree.

    ``children`` holds arena ids owned by this entry. ``expanded`` mirrors
    ``path in expanded_paths`` and is recomputed on every rescan.
    """

    id: int
    path: Path
    is_dir: bool
    is_symlink: bool = False
    children: list[int] = field(default_factory=list)
    expanded: bool = False

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)

    def is_expanded(self) -> bool:
        return self.is_dir and self.expanded


@dataclass(frozen=True)
class DisplayLine:
    """One visible row derived from a ``TreeEntry``.

    ``label`` is the plain text of the row; ``marker`` and ``icon`` are its
    leading parts, kept separately so they can be styled on their own.
    """

    path: Path
    label: str
    depth: int
    is_dir: bool = False
    marker: str = ""
    icon: str = ""


__all__ = ["TreeEntry", "DisplayLine"]
