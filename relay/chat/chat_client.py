"""
Chat client module.

A ChatClient is the server-side state for one connected session: the owned
connection, the display name and the liveness flag.
"""

import asyncio
from typing import Optional

from relay.chat.session_writer import SessionWriter
from relay.common.constants import ENCODING
from relay.common.errors import ConnectionClosed, ReadError
from relay.utils.logger import logger


class ChatClient:
    """Server-side state for one connected client."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, interactive: bool = False):
        self.reader = reader
        self.writer = writer
        self.session_writer = SessionWriter(writer, interactive)
        self.display_name: Optional[str] = None
        self.last_message_at: Optional[float] = None  # monotonic time of the last accepted chat message
        self.closed = False
        self.lock = asyncio.Lock()  # guards closed

        peer = writer.get_extra_info('peername')
        if isinstance(peer, tuple) and len(peer) >= 2:
            self.address = f"{peer[0]}:{peer[1]}"
        else:
            self.address = str(peer) if peer else 'unknown'

    @property
    def registered(self) -> bool:
        return self.display_name is not None

    @property
    def label(self) -> str:
        """Name used in log lines."""
        return self.display_name if self.registered else '<unregistered>'

    def set_display_name(self, name: str):
        """Set the display name. It can only be set once."""
        if self.registered:
            raise ValueError(f"display name already set to {self.display_name!r}")
        self.display_name = name

    async def send_message(self, text: str):
        """Send one line to the client."""
        if self.closed:
            raise ConnectionClosed(f"client {self.label} is closed")
        await self.session_writer.write_line(text)

    async def prompt(self, text: str):
        """Send text without a line terminator."""
        if self.closed:
            raise ConnectionClosed(f"client {self.label} is closed")
        await self.session_writer.write(text)

    async def read_line(self) -> str:
        """Read one line, without its trailing line terminator."""
        if self.closed:
            raise ConnectionClosed(f"client {self.label} is closed")

        try:
            data = await self.reader.readline()
        except OSError as e:
            raise ReadError(str(e) or e.__class__.__name__) from e
        except ValueError as e:
            # Raised by StreamReader when a line exceeds the stream limit
            raise ReadError(f"line too long: {e}") from e

        if not data.endswith(b'\n'):
            if self.closed:
                raise ConnectionClosed(f"client {self.label} is closed")
            raise ReadError("connection closed by peer")

        return data.decode(ENCODING, errors='replace').rstrip('\r\n')

    async def close(self, force: bool = False):
        """
        Close the connection. Safe to call more than once.

        With force the transport is aborted: buffered output is dropped and a
        drain() blocked on a peer that stopped reading fails at once.
        """
        async with self.lock:
            if self.closed:
                return
            self.closed = True
            transport = getattr(self.writer, 'transport', None)
            if force and transport is not None:
                transport.abort()
            else:
                self.writer.close()

        try:
            await self.writer.wait_closed()
        except OSError as e:
            logger.debug(f"Connection to {self.address} closed with error: {e}")

    def __repr__(self):
        return f"ChatClient(name={self.display_name!r}, address={self.address!r}, closed={self.closed})"
