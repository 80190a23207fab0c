"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyEvent`` and
``MouseEvent`` values. Handles ESC-sequence timing, Alt/Ctrl combos, and SGR
mouse reports.
"""

from __future__ import annotations

import os
import select
from dataclasses import dataclass

from .keys import ALT, CTRL, KeyEvent

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

MOUSE_LEFT = "left"
MOUSE_RIGHT = "right"
MOUSE_MIDDLE = "middle"
MOUSE_WHEEL_UP = "wheel_up"
MOUSE_WHEEL_DOWN = "wheel_down"


@dataclass(frozen=True)
class MouseEvent:
    """Mouse button press at 1-based terminal cell ``(col, row)``."""

    button: str
    col: int
    row: int


_CSI_FINAL_KEYS = {
    b"A": "up",
    b"B": "down",
    b"C": "right",
    b"D": "left",
    b"H": "home",
    b"F": "end",
    b"Z": "backtab",
}

_CSI_TILDE_KEYS = {
    "1": "home",
    "2": "insert",
    "3": "del",
    "4": "end",
    "5": "pageup",
    "6": "pagedown",
    "7": "home",
    "8": "end",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> str:
    """Complete a multi-byte UTF-8 character whose lead byte is ``first``."""
    lead = first[0]
    if lead >= 0xF0:
        missing = 3
    elif lead >= 0xE0:
        missing = 2
    elif lead >= 0xC0:
        missing = 1
    else:
        missing = 0
    data = first
    for _ in range(missing):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def _decode_plain_byte(fd: int, ch: bytes) -> KeyEvent:
    """Map one non-ESC byte (plus UTF-8 continuation) to a key."""
    if ch in {b"\r", b"\n"}:
        return KeyEvent("\n")
    if ch == b"\t":
        return KeyEvent("\t")
    if ch in {b"\x08", b"\x7f"}:
        return KeyEvent("backspace")
    code = ch[0]
    if 1 <= code <= 26:
        return KeyEvent(chr(code + 96), CTRL)
    if code == 0:
        return KeyEvent(" ", CTRL)
    return KeyEvent(_read_utf8_tail(fd, ch))


def _decode_sgr_mouse(fd: int) -> MouseEvent | KeyEvent:
    # SGR mouse: ESC [ < btn ; col ; row (M/m)
    payload = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent("esc")
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return KeyEvent("esc")
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return KeyEvent("esc")
    button = btn & 0b11
    is_wheel = (btn & 0b0100_0000) != 0
    if is_wheel:
        return MouseEvent(MOUSE_WHEEL_UP if button == 0 else MOUSE_WHEEL_DOWN, col, row)
    if part == b"m" or (btn & 0b0010_0000):
        # Releases and drags are not interesting to the tree.
        return MouseEvent("release", col, row)
    names = {0: MOUSE_LEFT, 1: MOUSE_MIDDLE, 2: MOUSE_RIGHT}
    return MouseEvent(names.get(button, "release"), col, row)


def read_event(fd: int, timeout_ms: int | None = None) -> KeyEvent | MouseEvent | None:
    """Read and decode one input event, or ``None`` on timeout/EOF."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None

        ch = os.read(fd, 1)
        if not ch:
            return None

    if ch != b"\x1b":
        return _decode_plain_byte(fd, ch)

    # Escape, Alt combos and CSI sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("esc")
    if seq != b"[":
        if seq == b"\x1b":
            _PENDING_BYTES.append(seq)
            return KeyEvent("esc")
        inner = _decode_plain_byte(fd, seq)
        if inner.modifier or len(inner.key) != 1:
            _PENDING_BYTES.append(seq)
            return KeyEvent("esc")
        return KeyEvent(inner.key, ALT)
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("esc")
    if seq in _CSI_FINAL_KEYS:
        return KeyEvent(_CSI_FINAL_KEYS[seq])
    if seq == b"<":
        return _decode_sgr_mouse(fd)
    if seq.isdigit():
        digits = seq.decode("ascii")
        while True:
            part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return KeyEvent("esc")
            if part == b"~":
                name = _CSI_TILDE_KEYS.get(digits)
                return KeyEvent(name) if name is not None else KeyEvent("esc")
            if part in _CSI_FINAL_KEYS:
                # Modified arrows (ESC [ 1 ; 3 D) collapse to the plain key.
                return KeyEvent(_CSI_FINAL_KEYS[part])
            if len(digits) > 8:
                return KeyEvent("esc")
            digits += part.decode("ascii", errors="replace")
    return KeyEvent("esc")


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "MouseEvent",
    "MOUSE_LEFT",
    "MOUSE_RIGHT",
    "MOUSE_MIDDLE",
    "MOUSE_WHEEL_UP",
    "MOUSE_WHEEL_DOWN",
    "read_event",
]
