"""Exception types raised by the command language and option store.

Every error here is recoverable: the runtime reports ``str(exc)`` on the
status line. Only the CLI entrypoint turns them into process exits.
"""

from __future__ import annotations


class SidetreeError(Exception):
    """Base class for user-facing sidetree errors."""


class CommandParseError(SidetreeError):
    """Malformed command text.

    ``remainder`` holds the input that could not be consumed, starting at the
    statement that failed.
    """

    def __init__(self, message: str, remainder: str = "", offset: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.remainder = remainder
        self.offset = offset

    def __str__(self) -> str:
        if self.remainder:
            return f"{self.message}: {self.remainder}"
        return self.message


class KeySpecError(SidetreeError):
    """Malformed key descriptor such as ``<bogus>``."""

    def __init__(self, spec: str, reason: str = "could not parse key") -> None:
        super().__init__(f"{reason}: {spec!r}")
        self.spec = spec


class UnknownCommandError(SidetreeError):
    """Verb not present in the command table."""

    def __init__(self, verb: str) -> None:
        super().__init__(f"unknown command {verb}")
        self.verb = verb


class MissingArgumentError(SidetreeError):
    """Fixed-arity verb invoked with too few arguments."""

    def __init__(self, verb: str, argument: str) -> None:
        super().__init__(f"{verb}: missing argument <{argument}>")
        self.verb = verb
        self.argument = argument


class OptionError(SidetreeError):
    """Unknown option name or unparsable option value."""


class ScriptFileError(SidetreeError):
    """Startup script could not be read."""


__all__ = [
    "SidetreeError",
    "CommandParseError",
    "KeySpecError",
    "UnknownCommandError",
    "MissingArgumentError",
    "OptionError",
    "ScriptFileError",
]
