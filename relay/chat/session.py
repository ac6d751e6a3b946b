"""
Chat session module.

A ChatSession drives one connection from registration through the chat loop
to teardown. Reading and dispatching happen on the same task; other sessions
reach this client only through the registry broadcast.
"""

import time
from enum import Enum

from relay.chat.chat_client import ChatClient
from relay.chat.commands import ChatMessage, Command, Help, Quit, UnknownCommand, Who, parse_command
from relay.chat.registry import Registry
from relay.common.errors import RelayError
from relay.common.protocol_definitions import (
    create_chat_line, create_farewell_message, create_help_message, create_join_notice,
    create_left_notice, create_name_prompt, create_rate_limit_message,
    create_unknown_command_message, create_welcome_message, create_who_message
)
from relay.utils.config import ServerConfig
from relay.utils.logger import logger


class SessionState(Enum):
    UNREGISTERED = 'unregistered'
    REGISTERING = 'registering'
    ACTIVE = 'active'
    CLOSING = 'closing'
    CLOSED = 'closed'


class ChatSession:
    """Per-connection session state machine."""

    def __init__(self, client: ChatClient, registry: Registry, config: ServerConfig):
        self.client = client
        self.registry = registry
        self.config = config
        self.color = config.color
        self.state = SessionState.UNREGISTERED
        self.clock = time.monotonic

    async def run(self):
        """Run the session until the client quits or the connection fails."""
        try:
            if await self.register():
                await self.chat_loop()
        finally:
            await self.teardown()

    async def register(self) -> bool:
        """
        Ask for a display name and add the client to the registry.

        Returns False if the connection failed before registration finished.
        Any name is accepted as-is, including an empty one.
        """
        self.state = SessionState.REGISTERING

        try:
            await self.client.prompt(create_name_prompt(self.color))
            name = await self.client.read_line()
        except RelayError as e:
            logger.info(f"Registration aborted for {self.client.address}: {e}")
            return False

        self.client.set_display_name(name)
        await self.registry.register(self.client)
        logger.log_join(name, self.client.address, self.registry.count())

        await self.registry.broadcast(create_join_notice(name, self.color), exclude=self.client)

        try:
            await self.client.send_message(create_welcome_message(name, self.color))
        except RelayError as e:
            logger.info(f"Could not welcome {name}@{self.client.address}: {e}")
            return False

        self.state = SessionState.ACTIVE
        return True

    async def chat_loop(self):
        """Read and dispatch lines until quit or a connection error."""
        while True:
            try:
                line = await self.client.read_line()
            except RelayError as e:
                logger.debug(f"Read from {self.client.label} ended: {e}")
                return

            command = parse_command(line)
            if command is None:
                continue

            try:
                if not await self.dispatch(command):
                    return
            except RelayError as e:
                logger.debug(f"Write to {self.client.label} failed: {e}")
                return

    async def dispatch(self, command: Command) -> bool:
        """Handle one command. Returns False when the session should end."""
        name = self.client.display_name

        if isinstance(command, Quit):
            logger.log_command(name, 'quit')
            await self.client.send_message(create_farewell_message(self.color))
            return False

        if isinstance(command, Help):
            logger.log_command(name, 'help')
            await self.client.send_message(create_help_message(self.color))
        elif isinstance(command, Who):
            logger.log_command(name, 'who')
            names = await self.registry.snapshot_names()
            await self.client.send_message(create_who_message(names, self.color))
        elif isinstance(command, UnknownCommand):
            logger.log_command(name, command.raw)
            await self.client.send_message(create_unknown_command_message(self.color))
        elif isinstance(command, ChatMessage):
            await self.handle_chat(command.text)
        else:
            raise TypeError(f"unhandled command {command!r}")

        return True

    async def handle_chat(self, text: str):
        """Broadcast a chat line, then apply the rate limit check."""
        name = self.client.display_name
        now = self.clock()

        logger.log_chat(name, text)
        await self.registry.broadcast(create_chat_line(name, text, color=self.color), exclude=self.client)

        # The warning follows delivery; it does not block the message
        last = self.client.last_message_at
        if last is not None and now - last < self.config.rate_limit_interval:
            await self.client.send_message(create_rate_limit_message(self.color))
            return
        self.client.last_message_at = now

    async def teardown(self):
        """Remove the client, tell the others, and close the connection."""
        self.state = SessionState.CLOSING

        if await self.registry.unregister(self.client):
            name = self.client.display_name
            await self.registry.broadcast(create_left_notice(name, self.color), exclude=self.client)
            logger.log_disconnect(name, self.client.address, self.registry.count())

        await self.client.close()
        self.state = SessionState.CLOSED
