"""Text styles for tree rows, parsed from ``fg[,bg][+mods][-mods]`` strings.

Colors: ``reset``, the sixteen named terminal colors, ``rgb:RRGGBB`` and
``colorN`` (256-color index). Modifiers: ``b`` bold, ``d`` dim, ``i`` italic,
``u`` underline, ``B`` blink, ``r`` reversed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pygments.console import codes, dark_colors, light_colors

from ..errors import OptionError

ESC = "\x1b["
RESET = "\x1b[0m"

NAMED_COLORS: dict[str, str] = {
    "black": "black",
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "blue": "blue",
    "magenta": "magenta",
    "cyan": "cyan",
    "gray": "gray",
    "darkgray": "brightblack",
    "lightred": "brightred",
    "lightgreen": "brightgreen",
    "lightyellow": "brightyellow",
    "lightblue": "brightblue",
    "lightmagenta": "brightmagenta",
    "lightcyan": "brightcyan",
    "white": "white",
}

MODIFIER_ORDER = "bdiuBr"
_MODIFIER_ON: dict[str, str] = {
    "b": codes["bold"],
    "d": codes["faint"],
    "i": codes["standout"],
    "u": codes["underline"],
    "B": codes["blink"],
    "r": ESC + "07m",
}
_MODIFIER_OFF: dict[str, str] = {
    "b": ESC + "22m",
    "d": ESC + "22m",
    "i": ESC + "23m",
    "u": ESC + "24m",
    "B": ESC + "25m",
    "r": ESC + "27m",
}

_STYLE_RE = re.compile(r"^(?P<fg>[^,+\-]*)(?:,(?P<bg>[^+\-]*))?(?:\+(?P<add>[^\-]*))?(?:-(?P<sub>.*))?$")
_RGB_RE = re.compile(r"^rgb:([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")
_INDEXED_RE = re.compile(r"^color(\d+)$")


@dataclass(frozen=True)
class Style:
    """Foreground/background colors plus added and removed modifiers."""

    fg: str | None = None
    bg: str | None = None
    add_modifiers: str = ""
    sub_modifiers: str = ""


def _canonical_color(token: str) -> str:
    if token == "reset" or token in NAMED_COLORS:
        return token
    rgb = _RGB_RE.match(token)
    if rgb is not None:
        return "rgb:" + "".join(part.upper() for part in rgb.groups())
    indexed = _INDEXED_RE.match(token)
    if indexed is not None and int(indexed.group(1)) <= 255:
        return f"color{int(indexed.group(1))}"
    raise OptionError(f"error parsing style: unknown color {token!r}")


def _canonical_modifiers(letters: str) -> str:
    unknown = [letter for letter in letters if letter not in MODIFIER_ORDER]
    if unknown or not letters:
        raise OptionError(f"error parsing style: bad modifiers {letters!r}")
    return "".join(letter for letter in MODIFIER_ORDER if letter in letters)


def parse_style(text: str) -> Style:
    """Parse a style string; raises ``OptionError`` on malformed input."""
    match = _STYLE_RE.match(text)
    if match is None:
        raise OptionError(f"error parsing style: {text!r}")
    fg = match.group("fg")
    bg = match.group("bg")
    add = match.group("add")
    sub = match.group("sub")
    if bg is not None and not bg:
        raise OptionError(f"error parsing style: missing background in {text!r}")
    return Style(
        fg=_canonical_color(fg) if fg else None,
        bg=_canonical_color(bg) if bg else None,
        add_modifiers=_canonical_modifiers(add) if add is not None else "",
        sub_modifiers=_canonical_modifiers(sub) if sub is not None else "",
    )


def format_style(style: Style) -> str:
    """Render ``style`` back to the string form accepted by ``parse_style``."""
    out = style.fg or ""
    if style.bg:
        out += "," + style.bg
    if style.add_modifiers:
        out += "+" + style.add_modifiers
    if style.sub_modifiers:
        out += "-" + style.sub_modifiers
    return out


def _color_sgr(color: str, background: bool) -> str:
    if color == "reset":
        return ESC + ("49m" if background else "39m")
    rgb = _RGB_RE.match(color)
    if rgb is not None:
        r, g, b = (int(part, 16) for part in rgb.groups())
        return f"{ESC}{48 if background else 38};2;{r};{g};{b}m"
    indexed = _INDEXED_RE.match(color)
    if indexed is not None:
        return f"{ESC}{48 if background else 38};5;{int(indexed.group(1))}m"
    name = NAMED_COLORS[color]
    if name in dark_colors:
        base = 30 + dark_colors.index(name)
    else:
        base = 90 + light_colors.index(name)
    return f"{ESC}{base + 10 if background else base}m"


def style_to_ansi(style: Style) -> str:
    """Return the SGR escape prefix that switches the terminal into ``style``."""
    parts: list[str] = []
    if style.fg:
        parts.append(_color_sgr(style.fg, background=False))
    if style.bg:
        parts.append(_color_sgr(style.bg, background=True))
    parts.extend(_MODIFIER_ON[letter] for letter in style.add_modifiers)
    parts.extend(_MODIFIER_OFF[letter] for letter in style.sub_modifiers)
    return "".join(parts)


__all__ = [
    "RESET",
    "NAMED_COLORS",
    "Style",
    "parse_style",
    "format_style",
    "style_to_ansi",
]
