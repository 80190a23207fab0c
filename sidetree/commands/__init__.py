"""Command language: tokenizer, verb table and typed command values.

Text from startup scripts, the ``:`` prompt and ``--exec`` all flows through
``parse_commands`` into a list of ``Command`` values for the executor.
"""

from __future__ import annotations

from .builder import (
    VERBS,
    build_command,
    command_statement,
    format_command,
    parse_commands,
    read_script_file,
)
from .parser import Statement, format_statement, format_statements, parse_statements, quote_arg
from .types import (
    BindKey,
    ChangeDirectory,
    Command,
    Delete,
    Echo,
    NewDirectory,
    NewFile,
    Open,
    Quit,
    Rename,
    RunCommandString,
    SetOption,
    Shell,
)

__all__ = [
    "Command",
    "Quit",
    "Shell",
    "Open",
    "RunCommandString",
    "SetOption",
    "Echo",
    "ChangeDirectory",
    "BindKey",
    "Rename",
    "NewFile",
    "NewDirectory",
    "Delete",
    "Statement",
    "VERBS",
    "parse_statements",
    "quote_arg",
    "format_statement",
    "format_statements",
    "build_command",
    "parse_commands",
    "read_script_file",
    "command_statement",
    "format_command",
]
