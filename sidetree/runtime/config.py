"""Option store and config-script location.

``Config`` is the fixed, typed option table behind ``set``. The startup
script lives in the platform config directory and is created empty when
missing.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

from platformdirs import user_config_dir

from ..errors import OptionError
from .style import Style, format_style, parse_style

APP_NAME = "sidetree"
CONFIG_FILENAME = "sidetreerc"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def default_script_path() -> Path:
    """Return the default startup script path, creating an empty file if absent."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    if not CONFIG_PATH.exists():
        CONFIG_PATH.touch()
    return CONFIG_PATH


def _parse_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise OptionError("Could not parse option value")


@dataclass
class Config:
    """Runtime options settable with ``set <name> <value>``."""

    show_hidden: bool = False
    open_cmd: str = ""
    quit_on_open: bool = False
    file_icons: bool = False
    icon_style: Style = field(default_factory=Style)
    dir_name_style: Style = field(default_factory=lambda: Style(fg="blue", add_modifiers="b"))
    file_name_style: Style = field(default_factory=Style)
    highlight_style: Style = field(default_factory=lambda: Style(add_modifiers="r"))

    @classmethod
    def option_names(cls) -> tuple[str, ...]:
        return tuple(item.name for item in fields(cls))

    def _option_type(self, name: str) -> str:
        for item in fields(self):
            if item.name == name:
                return str(item.type)
        raise OptionError(f"unknown option {name}")

    def set_opt(self, name: str, value: str) -> None:
        """Parse ``value`` for option ``name`` and store it."""
        option_type = self._option_type(name)
        if option_type == "bool":
            setattr(self, name, _parse_bool(value))
        elif option_type == "Style":
            setattr(self, name, parse_style(value))
        else:
            setattr(self, name, value)

    def get_opt(self, name: str) -> str:
        """Return option ``name`` in the same form ``set_opt`` accepts."""
        option_type = self._option_type(name)
        value = getattr(self, name)
        if option_type == "bool":
            return "true" if value else "false"
        if option_type == "Style":
            return format_style(value)
        return str(value)


__all__ = ["APP_NAME", "CONFIG_PATH", "Config", "default_script_path"]
