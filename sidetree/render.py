"""Frame composition for the side panel.

Tree rows fill every terminal row but the last; the last row is the status
line (open prompt, or the latest info/error message). ``build_frame`` returns
the escape stream for one frame; ``render_app`` writes it to stdout.
"""

from __future__ import annotations

import os
import sys
import unicodedata

from .file_tree_model import DisplayLine
from .runtime.config import Config
from .runtime.executor import App
from .runtime.prompt import prompt_text
from .runtime.style import RESET, Style, parse_style, style_to_ansi

INDENT = "  "
ERROR_STYLE = parse_style("red+b")
PROMPT_CURSOR = "_"


def char_display_width(ch: str) -> int:
    """Terminal columns taken by ``ch``: 0 for combining marks, 2 for wide."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def clip_text(text: str, max_cols: int) -> tuple[str, int]:
    """Trim plain ``text`` to ``max_cols`` columns; returns the text and its width."""
    if max_cols <= 0:
        return "", 0
    out: list[str] = []
    col = 0
    for ch in text:
        if ch == "\t":
            ch = " "
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out), col


def _styled(text: str, style: Style) -> str:
    prefix = style_to_ansi(style)
    if not prefix or not text:
        return text
    return f"{prefix}{text}{RESET}"


def render_tree_line(line: DisplayLine, config: Config, width: int, selected: bool) -> str:
    """Compose one tree row clipped to ``width`` columns."""
    name = line.label[len(line.marker) + len(line.icon) :]
    name_style = config.dir_name_style if line.is_dir else config.file_name_style

    segments = [(INDENT * line.depth + line.marker, Style()), (line.icon, config.icon_style), (name, name_style)]
    out: list[str] = []
    remaining = width
    for text, style in segments:
        clipped, used = clip_text(text, remaining)
        remaining -= used
        out.append(_styled(clipped, style))
    out.append(" " * max(0, remaining))

    row = "".join(out)
    if selected:
        # Re-apply the highlight after every reset so it spans the whole row.
        highlight = style_to_ansi(config.highlight_style)
        row = highlight + row.replace(RESET, RESET + highlight) + RESET
    return row


def render_status_line(app: App, width: int) -> str:
    statusline = app.statusline
    state = statusline.prompt_state
    if state is not None:
        text, _ = clip_text(f"{prompt_text(state.prompt)}{state.input}{PROMPT_CURSOR}", width)
        return text
    message, _ = clip_text(statusline.info.message, width)
    if statusline.info.is_error:
        return _styled(message, ERROR_STYLE)
    return message


def build_frame(app: App, width: int, height: int) -> str:
    """Return the full-screen escape stream for the current app state."""
    width = max(1, width)
    tree_rows = max(1, height - 1)
    app.ensure_visible(tree_rows)
    lines = app.tree.lines
    out: list[str] = ["\x1b[H"]
    for row in range(tree_rows):
        idx = app.tree_start + row
        out.append(f"\x1b[{row + 1};1H\x1b[2K")
        if idx < len(lines):
            out.append(render_tree_line(lines[idx], app.config, width, idx == app.tree.selected_idx))
    out.append(f"\x1b[{tree_rows + 1};1H\x1b[2K")
    out.append(render_status_line(app, width))
    return "".join(out)


def render_app(app: App, width: int, height: int) -> None:
    os.write(sys.stdout.fileno(), build_frame(app, width, height).encode("utf-8", errors="replace"))


__all__ = [
    "char_display_width",
    "clip_text",
    "render_tree_line",
    "render_status_line",
    "build_frame",
    "render_app",
]
