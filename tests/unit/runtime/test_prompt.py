"""Tests for the status-line prompt and its submit mapping."""

from __future__ import annotations

import unittest

from sidetree.commands import Delete, NewDirectory, NewFile, Rename, RunCommandString, Shell
from sidetree.input import KeyEvent, ctrl_key
from sidetree.runtime.prompt import (
    CommandPrompt,
    DeletePrompt,
    NewDirectoryPrompt,
    NewFilePrompt,
    RenamePrompt,
    ShellPrompt,
    StatusLine,
    prompt_submit,
    prompt_text,
)

RETURN = KeyEvent("\n")
ESC = KeyEvent("esc")


def type_text(statusline: StatusLine, text: str) -> None:
    for ch in text:
        statusline.on_key(KeyEvent(ch))


class PromptSubmitTests(unittest.TestCase):
    def test_submit_mapping(self) -> None:
        self.assertEqual(prompt_submit(ShellPrompt(), "ls"), Shell("ls"))
        self.assertEqual(prompt_submit(CommandPrompt(), "quit"), RunCommandString("quit"))
        self.assertEqual(prompt_submit(RenamePrompt("a"), "b"), Rename("b"))
        self.assertEqual(prompt_submit(NewFilePrompt(), "x/"), NewFile("x/"))
        self.assertEqual(prompt_submit(NewDirectoryPrompt(), "d"), NewDirectory("d"))
        self.assertEqual(prompt_submit(DeletePrompt(), "y"), Delete(confirm=False))
        self.assertEqual(prompt_submit(DeletePrompt(), "Y"), Delete(confirm=False))

    def test_empty_or_declined_submissions_do_nothing(self) -> None:
        self.assertIsNone(prompt_submit(RenamePrompt("a"), ""))
        self.assertIsNone(prompt_submit(NewFilePrompt(), ""))
        self.assertIsNone(prompt_submit(DeletePrompt(), ""))
        self.assertIsNone(prompt_submit(DeletePrompt(), "yes"))

    def test_prompt_labels(self) -> None:
        self.assertEqual(prompt_text(ShellPrompt()), "!")
        self.assertEqual(prompt_text(CommandPrompt()), ":")
        self.assertEqual(prompt_text(DeletePrompt()), "delete? [y/N]>")


class StatusLineTests(unittest.TestCase):
    def test_typing_and_submit(self) -> None:
        statusline = StatusLine()
        statusline.info.error("old error")
        statusline.prompt(CommandPrompt())

        self.assertTrue(statusline.has_focus())
        self.assertEqual(statusline.info.message, "")
        type_text(statusline, "echoo")
        statusline.on_key(KeyEvent("backspace"))
        statusline.on_key(ctrl_key("a"))

        self.assertEqual(statusline.on_key(RETURN), (True, RunCommandString("echo")))
        self.assertFalse(statusline.has_focus())

    def test_escape_cancels(self) -> None:
        statusline = StatusLine()
        statusline.prompt(ShellPrompt())
        type_text(statusline, "rm -rf")

        self.assertEqual(statusline.on_key(ESC), (True, None))
        self.assertFalse(statusline.has_focus())

    def test_rename_prompt_is_prefilled(self) -> None:
        statusline = StatusLine()
        statusline.prompt(RenamePrompt(old_name="main.py"))
        statusline.on_key(KeyEvent("backspace"))
        statusline.on_key(KeyEvent("y"))

        self.assertEqual(statusline.prompt_state.input, "main.py")
        self.assertEqual(statusline.on_key(RETURN), (True, Rename("main.py")))

    def test_history_is_kept_per_prompt_kind(self) -> None:
        statusline = StatusLine()
        for text in ("first", "second"):
            statusline.prompt(ShellPrompt())
            type_text(statusline, text)
            statusline.on_key(RETURN)
        statusline.prompt(CommandPrompt())
        type_text(statusline, "quit")
        statusline.on_key(RETURN)

        statusline.prompt(ShellPrompt())
        statusline.on_key(KeyEvent("up"))
        self.assertEqual(statusline.prompt_state.input, "second")
        statusline.on_key(KeyEvent("up"))
        statusline.on_key(KeyEvent("up"))
        self.assertEqual(statusline.prompt_state.input, "first")
        statusline.on_key(KeyEvent("down"))
        statusline.on_key(KeyEvent("down"))
        self.assertEqual(statusline.prompt_state.input, "")
        self.assertEqual(statusline.history[CommandPrompt], ["quit"])

    def test_keys_without_prompt_are_ignored(self) -> None:
        self.assertEqual(StatusLine().on_key(RETURN), (False, None))


if __name__ == "__main__":
    unittest.main()
