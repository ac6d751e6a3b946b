"""
Session writer module.

All bytes sent to one connection go through a single SessionWriter, so a
prompt, a direct reply and a broadcast from another session never interleave
on the wire.
"""

import asyncio

from relay.common.constants import CLEAR_LINE, ENCODING, LINE_TERMINATOR, PROMPT
from relay.common.errors import WriteError


class SessionWriter:
    """Serializes outbound writes for one connection."""

    def __init__(self, writer: asyncio.StreamWriter, interactive: bool = False):
        self.writer = writer
        self.interactive = interactive
        self.lock = asyncio.Lock()

    async def write(self, text: str):
        """Write text verbatim (used for prompts)."""
        if self.interactive:
            text = CLEAR_LINE + text
        await self._send(text)

    async def write_line(self, text: str):
        """Write text followed by a line terminator."""
        data = text + LINE_TERMINATOR
        if self.interactive:
            # Clear the half-typed input line, then redraw the prompt after the message
            data = CLEAR_LINE + data + PROMPT
        await self._send(data)

    async def _send(self, text: str):
        async with self.lock:
            try:
                self.writer.write(text.encode(ENCODING))
                await self.writer.drain()
            except OSError as e:
                raise WriteError(str(e) or e.__class__.__name__) from e
