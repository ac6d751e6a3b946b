"""
Client registry module.

This module holds the set of registered clients and fans messages out to
them. Every access to the member set happens under one asyncio.Lock.
"""

import asyncio
from typing import Dict, List, Optional

from relay.chat.chat_client import ChatClient
from relay.common.errors import RelayError
from relay.utils.logger import logger


class Registry:
    """The set of currently registered clients."""

    def __init__(self):
        # Insertion-ordered set: client -> None
        self.members: Dict[ChatClient, None] = {}
        self.lock = asyncio.Lock()

    async def register(self, client: ChatClient):
        """Add a client. Display names are not checked for uniqueness."""
        async with self.lock:
            self.members[client] = None

    async def unregister(self, client: ChatClient) -> bool:
        """Remove a client. Returns whether it was a member."""
        async with self.lock:
            if client not in self.members:
                return False
            del self.members[client]
            return True

    async def snapshot_names(self) -> List[str]:
        """Copy the display names of all live members, in join order."""
        async with self.lock:
            return [c.display_name for c in self.members if not c.closed]

    async def broadcast(self, text: str, exclude: Optional[ChatClient] = None) -> int:
        """
        Send a line to every member except ``exclude``.

        Delivery is best effort: a failing recipient is logged and skipped.
        The lock is held for the whole iteration, so one slow recipient
        delays the rest. Returns the number of successful deliveries.
        """
        delivered = 0

        async with self.lock:
            for client in self.members:
                if client is exclude:
                    continue
                try:
                    await client.send_message(text)
                    delivered += 1
                except RelayError as e:
                    logger.warning(f"Failed to broadcast to {client.label}@{client.address}: {e}")

        return delivered

    async def drain(self) -> List[ChatClient]:
        """Remove and return every member."""
        async with self.lock:
            clients = list(self.members)
            self.members.clear()
        return clients

    def count(self) -> int:
        """Get the number of registered clients."""
        return len(self.members)

    def __contains__(self, client: ChatClient) -> bool:
        return client in self.members
