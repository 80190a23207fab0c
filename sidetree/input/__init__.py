"""Input-layer public API: key identities, key specs, bindings and decoding."""

from .keymap import KeyMap
from .keys import (
    ALT,
    CHAR_ALIASES,
    CTRL,
    NAMED_KEYS,
    KeyEvent,
    alt_key,
    char_key,
    ctrl_key,
    format_key,
    named_key,
    parse_key,
)
from .reader import (
    ESC_SEQUENCE_TIMEOUT_MS,
    MOUSE_LEFT,
    MOUSE_MIDDLE,
    MOUSE_RIGHT,
    MOUSE_WHEEL_DOWN,
    MOUSE_WHEEL_UP,
    MouseEvent,
    read_event,
)

__all__ = [
    "ALT",
    "CTRL",
    "NAMED_KEYS",
    "CHAR_ALIASES",
    "KeyEvent",
    "KeyMap",
    "char_key",
    "alt_key",
    "ctrl_key",
    "named_key",
    "parse_key",
    "format_key",
    "read_event",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "MouseEvent",
    "MOUSE_LEFT",
    "MOUSE_RIGHT",
    "MOUSE_MIDDLE",
    "MOUSE_WHEEL_UP",
    "MOUSE_WHEEL_DOWN",
]
