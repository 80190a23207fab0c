"""Key identities and the textual key-spec notation used by ``map``.

Specs are either a bare character (``a``) or a bracketed form
(``<a>``, ``<a-x>``, ``<c-b>``, ``<return>``, ``<esc>``).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import KeySpecError

ALT = "alt"
CTRL = "ctrl"

NAMED_KEYS: frozenset[str] = frozenset(
    {
        "esc",
        "backtab",
        "backspace",
        "del",
        "home",
        "end",
        "up",
        "down",
        "left",
        "right",
        "insert",
        "pageup",
        "pagedown",
    }
)

CHAR_ALIASES: dict[str, str] = {
    "return": "\n",
    "ret": "\n",
    "semicolon": ";",
    "gt": ">",
    "lt": "<",
    "percent": "%",
    "space": " ",
    "tab": "\t",
}

_MODIFIER_PREFIXES: dict[str, str] = {"a-": ALT, "c-": CTRL}
_CANONICAL_ALIASES: dict[str, str] = {
    "\n": "return",
    ";": "semicolon",
    ">": "gt",
    "<": "lt",
    "%": "percent",
    " ": "space",
    "\t": "tab",
}


@dataclass(frozen=True)
class KeyEvent:
    """One key press: a single character or a named key, plus modifier.

    ``key`` is either exactly one character or a member of ``NAMED_KEYS``.
    ``modifier`` is ``""``, ``"alt"`` or ``"ctrl"``; named keys never carry one.
    """

    key: str
    modifier: str = ""

    @property
    def is_char(self) -> bool:
        return len(self.key) == 1 and not self.modifier

    @property
    def char(self) -> str | None:
        """Printable character for unmodified character keys."""
        return self.key if self.is_char else None


def char_key(ch: str) -> KeyEvent:
    return KeyEvent(ch)


def alt_key(ch: str) -> KeyEvent:
    return KeyEvent(ch, ALT)


def ctrl_key(ch: str) -> KeyEvent:
    return KeyEvent(ch, CTRL)


def named_key(name: str) -> KeyEvent:
    if name not in NAMED_KEYS:
        raise ValueError(f"unknown key name {name!r}")
    return KeyEvent(name)


def _char_from_word(spec: str, word: str) -> str:
    """Resolve a char alias or a single literal character."""
    if word in CHAR_ALIASES:
        return CHAR_ALIASES[word]
    if len(word) == 1:
        return word
    raise KeySpecError(spec, f"unknown key name {word!r}")


def _parse_bracketed(spec: str, body: str) -> KeyEvent:
    for prefix, modifier in _MODIFIER_PREFIXES.items():
        if body.startswith(prefix) and len(body) > len(prefix):
            return KeyEvent(_char_from_word(spec, body[len(prefix):]), modifier)
    if body in NAMED_KEYS:
        return KeyEvent(body)
    return KeyEvent(_char_from_word(spec, body))


def parse_key(spec: str) -> KeyEvent:
    """Parse a key descriptor, consuming the whole input.

    Raises ``KeySpecError`` for empty input, unknown names, multi-character
    literals and trailing characters after ``>``.
    """
    if not spec:
        raise KeySpecError(spec, "empty key spec")
    if spec.startswith("<") and len(spec) > 1:
        close = spec.find(">", 1)
        if close < 0:
            raise KeySpecError(spec, "missing '>'")
        if close != len(spec) - 1:
            raise KeySpecError(spec, f"unexpected trailing input {spec[close + 1:]!r}")
        body = spec[1:close]
        if not body:
            raise KeySpecError(spec, "empty key name")
        return _parse_bracketed(spec, body)
    if ">" in spec and len(spec) > 1:
        raise KeySpecError(spec, "unexpected '>'")
    return KeyEvent(_char_from_word(spec, spec))


def format_key(key: KeyEvent) -> str:
    """Render ``key`` as a spec that ``parse_key`` maps back to ``key``."""
    if key.key in NAMED_KEYS:
        return f"<{key.key}>"
    word = _CANONICAL_ALIASES.get(key.key, key.key)
    if key.modifier == ALT:
        return f"<a-{word}>"
    if key.modifier == CTRL:
        return f"<c-{word}>"
    if len(word) == 1:
        return word
    return f"<{word}>"


__all__ = [
    "ALT",
    "CTRL",
    "NAMED_KEYS",
    "CHAR_ALIASES",
    "KeyEvent",
    "char_key",
    "alt_key",
    "ctrl_key",
    "named_key",
    "parse_key",
    "format_key",
]
