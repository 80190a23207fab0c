"""Tests for the key-spec notation accepted by ``map``."""

from __future__ import annotations

import unittest

from sidetree.errors import KeySpecError
from sidetree.input import KeyEvent, KeyMap, alt_key, char_key, ctrl_key, format_key, named_key, parse_key
from sidetree.commands import Echo, Quit


class ParseKeyTests(unittest.TestCase):
    def test_bare_and_bracketed_characters(self) -> None:
        self.assertEqual(parse_key("a"), char_key("a"))
        self.assertEqual(parse_key("<a>"), char_key("a"))

    def test_modifier_prefixes(self) -> None:
        self.assertEqual(parse_key("<a-a>"), alt_key("a"))
        self.assertEqual(parse_key("<c-b>"), ctrl_key("b"))
        self.assertEqual(parse_key("<a-return>"), alt_key("\n"))

    def test_named_keys_and_aliases(self) -> None:
        self.assertEqual(parse_key("<return>"), char_key("\n"))
        self.assertEqual(parse_key("<ret>"), char_key("\n"))
        self.assertEqual(parse_key("<esc>"), named_key("esc"))
        self.assertEqual(parse_key("<semicolon>"), char_key(";"))
        self.assertEqual(parse_key("<lt>"), char_key("<"))
        self.assertEqual(parse_key("<space>"), char_key(" "))
        self.assertEqual(parse_key("<pagedown>"), KeyEvent("pagedown"))

    def test_bare_char_aliases(self) -> None:
        self.assertEqual(parse_key("space"), char_key(" "))
        self.assertEqual(parse_key("semicolon"), char_key(";"))

    def test_lone_angle_brackets_are_literal(self) -> None:
        self.assertEqual(parse_key("<"), char_key("<"))
        self.assertEqual(parse_key(">"), char_key(">"))

    def test_invalid_specs_raise(self) -> None:
        for spec in ("", "<bogus>", "<a", "<a>x", "ab", "<>", "a>", "<c-bogus>"):
            with self.subTest(spec=spec):
                with self.assertRaises(KeySpecError):
                    parse_key(spec)

    def test_error_message_names_the_spec(self) -> None:
        with self.assertRaises(KeySpecError) as ctx:
            parse_key("<bogus>")
        self.assertIn("<bogus>", str(ctx.exception))
        self.assertEqual(ctx.exception.spec, "<bogus>")

    def test_named_key_rejects_unknown_names(self) -> None:
        with self.assertRaises(ValueError):
            named_key("bogus")


class FormatKeyTests(unittest.TestCase):
    def test_format_is_parseable(self) -> None:
        keys = [
            char_key("a"),
            char_key("\n"),
            char_key(";"),
            char_key("<"),
            char_key(">"),
            char_key(" "),
            alt_key("l"),
            ctrl_key("x"),
            alt_key(";"),
            named_key("esc"),
            named_key("up"),
        ]
        for key in keys:
            with self.subTest(key=key):
                self.assertEqual(parse_key(format_key(key)), key)

    def test_canonical_forms(self) -> None:
        self.assertEqual(format_key(char_key("q")), "q")
        self.assertEqual(format_key(char_key("\n")), "<return>")
        self.assertEqual(format_key(alt_key("l")), "<a-l>")
        self.assertEqual(format_key(named_key("del")), "<del>")


class KeyMapTests(unittest.TestCase):
    def test_later_binding_replaces_earlier_one(self) -> None:
        keymap = KeyMap()
        keymap.add_mapping(char_key("x"), Quit()).add_mapping(char_key("x"), Echo("hi"))

        self.assertEqual(keymap.get_mapping(char_key("x")), Echo("hi"))
        self.assertEqual(len(keymap), 1)
        self.assertIn(char_key("x"), keymap)

    def test_modifiers_distinguish_bindings(self) -> None:
        keymap = KeyMap()
        keymap.add_mapping(alt_key("x"), Quit())

        self.assertIsNone(keymap.get_mapping(char_key("x")))
        self.assertEqual(list(keymap), [(alt_key("x"), Quit())])


if __name__ == "__main__":
    unittest.main()
