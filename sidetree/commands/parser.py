"""Tokenizer for the sidetree command language.

A buffer holds statements separated by ``;`` or newlines. Each statement is a
verb followed by arguments; tokens are bare words or single/double quoted
strings with backslash escapes. ``#`` starts a comment running to end of line.
"""

from __future__ import annotations

from ..errors import CommandParseError

Statement = tuple[str, list[str]]

ESCAPES: dict[str, str] = {
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_REVERSE_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
QUOTES = ('"', "'")
STATEMENT_SEPARATORS = (";", "\n")
COMMENT_CHAR = "#"


def is_word_char(ch: str) -> bool:
    """Return whether ``ch`` may appear in an unquoted word."""
    return not ch.isspace() and ch != COMMENT_CHAR and ch != ";"


class _ScanFailure(Exception):
    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset


class _Scanner:
    """Cursor over one command buffer."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos]

    def skip_comment(self) -> None:
        """Skip from ``#`` up to, not including, the next newline."""
        end = self.text.find("\n", self.pos)
        self.pos = len(self.text) if end < 0 else end

    def skip_inline_space(self) -> None:
        while not self.at_end() and self.peek() != "\n" and self.peek().isspace():
            self.pos += 1

    def skip_separators(self) -> None:
        """Skip whitespace, separators and comments between statements."""
        while not self.at_end():
            ch = self.peek()
            if ch.isspace() or ch == ";":
                self.pos += 1
            elif ch == COMMENT_CHAR:
                self.skip_comment()
            else:
                return

    def read_quoted(self) -> str:
        quote = self.peek()
        start = self.pos
        self.pos += 1
        out: list[str] = []
        while True:
            if self.at_end():
                raise _ScanFailure("unterminated string", start)
            ch = self.peek()
            if ch == "\\":
                if self.pos + 1 >= len(self.text):
                    raise _ScanFailure("unterminated string", start)
                escaped = self.text[self.pos + 1]
                replacement = ESCAPES.get(escaped)
                if replacement is None:
                    raise _ScanFailure(f"invalid escape sequence '\\{escaped}'", self.pos)
                out.append(replacement)
                self.pos += 2
                continue
            self.pos += 1
            if ch == quote:
                return "".join(out)
            out.append(ch)

    def read_word(self) -> str:
        start = self.pos
        while not self.at_end() and is_word_char(self.peek()):
            self.pos += 1
        return self.text[start:self.pos]

    def read_token(self) -> str:
        if self.peek() in QUOTES:
            return self.read_quoted()
        return self.read_word()

    def read_statement(self) -> list[str]:
        tokens: list[str] = []
        while True:
            tokens.append(self.read_token())
            self.skip_inline_space()
            if not self.at_end() and self.peek() == COMMENT_CHAR:
                self.skip_comment()
            if self.at_end() or self.peek() in STATEMENT_SEPARATORS:
                return tokens


def parse_statements(text: str) -> list[Statement]:
    """Split ``text`` into ``(verb, args)`` statements.

    Empty statements, blank lines and comment-only lines are skipped. Raises
    ``CommandParseError`` when input remains that cannot be tokenized; the
    error's ``remainder`` starts at the offending statement.
    """
    scanner = _Scanner(text)
    statements: list[Statement] = []
    while True:
        scanner.skip_separators()
        if scanner.at_end():
            return statements
        start = scanner.pos
        try:
            tokens = scanner.read_statement()
        except _ScanFailure as failure:
            raise CommandParseError(
                f"Unexpected content after commands ({failure.message})",
                remainder=text[start:],
                offset=failure.offset,
            ) from None
        statements.append((tokens[0], tokens[1:]))


def quote_arg(arg: str) -> str:
    """Render one token so that the tokenizer reads it back unchanged."""
    if arg and arg[0] not in QUOTES and all(is_word_char(ch) for ch in arg):
        return arg
    escaped = "".join(_REVERSE_ESCAPES.get(ch, ch) for ch in arg)
    return f'"{escaped}"'


def format_statement(verb: str, args: list[str]) -> str:
    return " ".join(quote_arg(token) for token in [verb, *args])


def format_statements(statements: list[Statement]) -> str:
    """Render statements one per line; inverse of ``parse_statements``."""
    return "\n".join(format_statement(verb, args) for verb, args in statements)


__all__ = [
    "Statement",
    "ESCAPES",
    "is_word_char",
    "parse_statements",
    "quote_arg",
    "format_statement",
    "format_statements",
]
