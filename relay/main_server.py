"""
Chat relay server.

RelayServer owns the client registry, the TCP listener and global shutdown.
Each accepted connection runs its own ChatSession task.
"""

import asyncio
from typing import List, Optional, Set, Tuple

from relay.chat.chat_client import ChatClient
from relay.chat.registry import Registry
from relay.chat.session import ChatSession
from relay.common.errors import BindError, RelayError
from relay.common.protocol_definitions import create_shutdown_notice
from relay.utils.config import ServerConfig
from relay.utils.logger import logger


class RelayServer:
    """Main server class."""

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.registry = Registry()
        self.running = False
        self.listener: Optional[asyncio.AbstractServer] = None
        self.connections: Set[ChatClient] = set()  # every live client, registered or not
        self.stopped: Optional[asyncio.Event] = None

    async def start(self, host: Optional[str] = None, port: Optional[int] = None) -> Tuple[str, int]:
        """Bind the listener and start accepting. Returns the bound address."""
        host = self.config.host if host is None else host
        port = self.config.port if port is None else port

        try:
            self.listener = await asyncio.start_server(
                self.handle_client,
                host,
                port,
                limit=self.config.max_line_length
            )
        except OSError as e:
            raise BindError(f"Cannot listen on {host}:{port}: {e}") from e

        self.running = True
        self.stopped = asyncio.Event()

        sockname = self.listener.sockets[0].getsockname()
        logger.info(f"Chat relay listening on {sockname[0]}:{sockname[1]}")
        logger.debug(f"Chat settings: {self.config.get_chat_settings()}")
        return sockname[0], sockname[1]

    async def serve_forever(self):
        """Block until stop() is called."""
        if self.listener is None:
            await self.start()
        await self.stopped.wait()

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        client = ChatClient(reader, writer, self.config.interactive)

        if not self.running:
            await client.close()
            return

        self.connections.add(client)
        logger.log_connection(client.address)

        try:
            await ChatSession(client, self.registry, self.config).run()
        finally:
            self.connections.discard(client)

    async def stop(self):
        """
        Stop accepting and close every client.

        Shutdown is immediate: registered clients get a notice bounded by
        shutdown_notice_timeout, then every connection is aborted without
        taking the registry lock, so a broadcast stuck on a stalled peer
        cannot hold shutdown up. The registry is drained last.
        """
        if not self.running:
            return
        self.running = False

        if self.listener is not None:
            self.listener.close()
            self.listener = None

        clients = list(self.connections)
        await self.notify_shutdown([c for c in clients if c.registered and not c.closed])

        for client in clients:
            await client.close(force=True)

        drained = await self.registry.drain()
        for client in drained:
            await client.close(force=True)

        logger.info(f"Server stopped ({len(clients)} connections closed)")
        self.stopped.set()

    async def notify_shutdown(self, clients: List[ChatClient]):
        """Send the shutdown notice to each client, giving up after a timeout."""
        notice = create_shutdown_notice(self.config.color)

        async def notify(client: ChatClient):
            try:
                await asyncio.wait_for(client.send_message(notice), self.config.shutdown_notice_timeout)
            except (RelayError, asyncio.TimeoutError) as e:
                logger.debug(f"Shutdown notice to {client.label} failed: {e!r}")

        await asyncio.gather(*(notify(c) for c in clients))

    def get_client_count(self) -> int:
        """Get the number of registered clients."""
        return self.registry.count()
