#!/usr/bin/env python3
"""
Unit tests for relay.chat.commands.parse_command
"""

import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from relay.chat.commands import ChatMessage, Help, Quit, UnknownCommand, Who, parse_command


class TestParseCommand(unittest.TestCase):
    """Test cases for input line parsing."""

    def test_empty_line_is_ignored(self):
        self.assertIsNone(parse_command(""))

    def test_known_commands(self):
        self.assertEqual(parse_command("/quit"), Quit())
        self.assertEqual(parse_command("/help"), Help())
        self.assertEqual(parse_command("/who"), Who())

    def test_unknown_command_keeps_raw_text(self):
        self.assertEqual(parse_command("/dance now"), UnknownCommand("/dance now"))
        self.assertEqual(parse_command("/"), UnknownCommand("/"))

    def test_commands_match_the_whole_line(self):
        """Trailing text or whitespace makes a known command unknown."""
        self.assertEqual(parse_command("/quit "), UnknownCommand("/quit "))
        self.assertEqual(parse_command("/WHO"), UnknownCommand("/WHO"))

    def test_plain_text_is_chat(self):
        self.assertEqual(parse_command("hello there"), ChatMessage("hello there"))

    def test_whitespace_only_line_is_chat(self):
        self.assertEqual(parse_command("   "), ChatMessage("   "))

    def test_leading_space_before_slash_is_chat(self):
        self.assertEqual(parse_command(" /quit"), ChatMessage(" /quit"))


if __name__ == '__main__':
    unittest.main()
