"""
Command parsing for client input lines.

parse_command turns one input line into exactly one of the command types
below, so the session dispatches on types instead of raw strings.
"""

from dataclasses import dataclass
from typing import Optional, Union

from relay.common.constants import Commands


@dataclass(frozen=True)
class Quit:
    """Leave the chat."""


@dataclass(frozen=True)
class Help:
    """Show the command list."""


@dataclass(frozen=True)
class Who:
    """List online users."""


@dataclass(frozen=True)
class UnknownCommand:
    """A /-prefixed line that is not a known command."""
    raw: str


@dataclass(frozen=True)
class ChatMessage:
    """Free text to broadcast."""
    text: str


Command = Union[Quit, Help, Who, UnknownCommand, ChatMessage]

KNOWN_COMMANDS = {
    Commands.QUIT: Quit,
    Commands.HELP: Help,
    Commands.WHO: Who,
}


def parse_command(line: str) -> Optional[Command]:
    """Parse one input line. Returns None for an empty line."""
    if not line:
        return None

    command_type = KNOWN_COMMANDS.get(line)
    if command_type is not None:
        return command_type()

    if line.startswith(Commands.PREFIX):
        return UnknownCommand(line)

    return ChatMessage(line)
