"""User key bindings installed by ``map`` commands."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from .keys import KeyEvent

if TYPE_CHECKING:
    from ..commands.types import Command


class KeyMap:
    """Key → command table; later bindings for a key replace earlier ones."""

    def __init__(self) -> None:
        self._bindings: dict[KeyEvent, Command] = {}

    def add_mapping(self, key: KeyEvent, command: Command) -> KeyMap:
        """Bind ``key`` to ``command`` and return ``self`` for fluent usage."""
        self._bindings[key] = command
        return self

    def get_mapping(self, key: KeyEvent) -> Command | None:
        return self._bindings.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[tuple[KeyEvent, Command]]:
        return iter(self._bindings.items())
