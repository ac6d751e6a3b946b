"""
Protocol definitions for the chat relay.

This module builds the text lines the server sends to clients. Every helper
takes a ``color`` flag; when it is false the text carries no ANSI escapes.
"""

from datetime import datetime
from typing import List, Optional

from relay.common.constants import Colors, Commands, TIME_FORMAT


HELP_LINES = [
    "Available commands:",
    f"{Commands.HELP}    - Show help",
    f"{Commands.WHO}     - List online users",
    f"{Commands.QUIT}    - Disconnect from chat",
]


def paint(text: str, code: str, color: bool) -> str:
    """Wrap text in an ANSI colour code."""
    if not color:
        return text
    return f"{code}{text}{Colors.RESET}"


def create_name_prompt(color: bool = True) -> str:
    """Create the registration prompt."""
    return paint("Enter your username: ", Colors.BOLD_CYAN, color)


def create_welcome_message(username: str, color: bool = True) -> str:
    """Create the welcome message for a newly registered client."""
    return paint(f"Welcome, {username}!", Colors.BOLD_GREEN, color) + f" Type {Commands.HELP} for commands"


def create_join_notice(username: str, color: bool = True) -> str:
    """Create the notice sent to others when a client joins."""
    return paint(f"{username} has joined the chat", Colors.BOLD_YELLOW, color)


def create_left_notice(username: str, color: bool = True) -> str:
    """Create the notice sent to others when a client leaves."""
    return paint(f"{username} has left the chat", Colors.BOLD_RED, color)


def create_farewell_message(color: bool = True) -> str:
    """Create the last line sent to a client that issued /quit."""
    return paint("You left.", Colors.BOLD_RED, color)


def create_help_message(color: bool = True) -> str:
    """Create the static command list."""
    return paint("\n".join(HELP_LINES), Colors.BOLD_MAGENTA, color)


def create_who_message(usernames: List[str], color: bool = True) -> str:
    """Create the online user listing."""
    return paint("Online users: ", Colors.BOLD_MAGENTA, color) + paint(", ".join(usernames), Colors.BOLD_YELLOW, color)


def create_unknown_command_message(color: bool = True) -> str:
    """Create the reply for an unrecognised command."""
    return paint(f"Unknown command. Try {Commands.HELP}", Colors.BOLD_RED, color)


def create_rate_limit_message(color: bool = True) -> str:
    """Create the rate limit warning."""
    return paint("Message rate limit exceeded", Colors.BOLD_RED, color)


def create_shutdown_notice(color: bool = True) -> str:
    """Create the notice sent to every client when the server stops."""
    return paint("Server shutting down...", Colors.BOLD_RED, color)


def create_chat_line(username: str, text: str, when: Optional[datetime] = None, color: bool = True) -> str:
    """Create a chat line tagged with sender and time."""
    stamp = (when or datetime.now()).strftime(TIME_FORMAT)
    return f"{paint(f'[{stamp}]', Colors.BOLD_BLUE, color)} {paint(username, Colors.BOLD_CYAN, color)}: {text}"
