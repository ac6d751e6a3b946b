#!/usr/bin/env python3
"""
Unit tests for relay.chat.chat_client.ChatClient

Covers the liveness contract:
- Sends and reads on a closed client fail with ConnectionClosed
- close() is idempotent, also when called concurrently
- read_line() strips only the trailing line terminator
"""

import asyncio
import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from relay.chat.chat_client import ChatClient
from relay.common.errors import ConnectionClosed, ReadError, WriteError
from tests.stream_fakes import FakeStreamWriter, make_connection


class TestChatClient(unittest.IsolatedAsyncioTestCase):
    """Test cases for ChatClient."""

    async def test_address_from_peername(self):
        reader, writer = make_connection(peername=('10.0.0.7', 4242))
        client = ChatClient(reader, writer)

        self.assertEqual(client.address, '10.0.0.7:4242')
        self.assertFalse(client.registered)

    async def test_send_message_writes_a_line(self):
        reader, writer = make_connection()
        client = ChatClient(reader, writer)

        await client.send_message("hello")

        self.assertEqual(writer.text, "hello\n")

    async def test_send_after_close_raises_without_writing(self):
        reader, writer = make_connection()
        client = ChatClient(reader, writer)
        await client.close()

        with self.assertRaises(ConnectionClosed):
            await client.send_message("late")
        with self.assertRaises(ConnectionClosed):
            await client.prompt("late")

        self.assertEqual(writer.chunks, [])

    async def test_send_failure_raises_write_error(self):
        reader = asyncio.StreamReader()
        client = ChatClient(reader, FakeStreamWriter(fail_writes=True))

        with self.assertRaises(WriteError):
            await client.send_message("hello")

    async def test_read_line_strips_only_trailing_terminator(self):
        reader, writer = make_connection()
        reader.feed_data(b"  hello  world \r\n")
        client = ChatClient(reader, writer)

        self.assertEqual(await client.read_line(), "  hello  world ")

    async def test_read_line_accepts_empty_line(self):
        reader, writer = make_connection("")
        client = ChatClient(reader, writer)

        self.assertEqual(await client.read_line(), "")

    async def test_read_line_replaces_invalid_utf8(self):
        reader, writer = make_connection()
        reader.feed_data(b"caf\xff\n")
        client = ChatClient(reader, writer)

        self.assertEqual(await client.read_line(), "caf\ufffd")

    async def test_read_line_at_eof_raises_read_error(self):
        reader, writer = make_connection("first", eof=True)
        client = ChatClient(reader, writer)

        self.assertEqual(await client.read_line(), "first")
        with self.assertRaises(ReadError):
            await client.read_line()

    async def test_unterminated_fragment_at_eof_raises_read_error(self):
        reader, writer = make_connection()
        reader.feed_data(b"partial")
        reader.feed_eof()
        client = ChatClient(reader, writer)

        with self.assertRaises(ReadError):
            await client.read_line()

    async def test_over_long_line_raises_read_error(self):
        reader = asyncio.StreamReader(limit=16)
        reader.feed_data(b"x" * 64 + b"\n")
        client = ChatClient(reader, FakeStreamWriter())

        with self.assertRaises(ReadError):
            await client.read_line()

    async def test_read_after_close_raises_connection_closed(self):
        reader, writer = make_connection("unread")
        client = ChatClient(reader, writer)
        await client.close()

        with self.assertRaises(ConnectionClosed):
            await client.read_line()

    async def test_close_unblocks_pending_read(self):
        reader, writer = make_connection()
        client = ChatClient(reader, writer)

        pending = asyncio.ensure_future(client.read_line())
        await asyncio.sleep(0)
        await client.close()

        with self.assertRaises(ConnectionClosed):
            await pending

    async def test_close_twice_closes_once(self):
        reader, writer = make_connection()
        client = ChatClient(reader, writer)

        await client.close()
        await client.close()

        self.assertTrue(client.closed)
        self.assertEqual(writer.close_calls, 1)

    async def test_concurrent_close_closes_once(self):
        reader, writer = make_connection()
        client = ChatClient(reader, writer)

        await asyncio.gather(*(client.close() for _ in range(10)))

        self.assertEqual(writer.close_calls, 1)

    async def test_force_close_aborts_transport(self):
        reader, writer = make_connection()
        client = ChatClient(reader, writer)

        await client.close(force=True)
        await client.close(force=True)
        await client.close()

        self.assertTrue(client.closed)
        self.assertEqual(writer.transport.abort_calls, 1)
        self.assertEqual(writer.close_calls, 0)

    async def test_force_close_unblocks_pending_read(self):
        reader, writer = make_connection()
        client = ChatClient(reader, writer)

        pending = asyncio.ensure_future(client.read_line())
        await asyncio.sleep(0)
        await client.close(force=True)

        with self.assertRaises(ConnectionClosed):
            await pending

    async def test_label_uses_display_name_once_registered(self):
        reader, writer = make_connection()
        client = ChatClient(reader, writer)

        self.assertEqual(client.label, '<unregistered>')
        client.set_display_name("alice")
        self.assertEqual(client.label, 'alice')

    async def test_display_name_is_set_once(self):
        reader, writer = make_connection()
        client = ChatClient(reader, writer)

        client.set_display_name("alice")
        self.assertTrue(client.registered)
        with self.assertRaises(ValueError):
            client.set_display_name("mallory")
        self.assertEqual(client.display_name, "alice")


if __name__ == '__main__':
    unittest.main()
