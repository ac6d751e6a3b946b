"""
Shared constants for the chat relay.

This module contains all constants used across the relay components.
"""

# Network Configuration
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 4000

# Stream reader limit; longer lines end the session
MAX_LINE_LENGTH = 64 * 1024

# Rate limiting
RATE_LIMIT_INTERVAL = 1.0  # seconds between accepted chat messages

# Shutdown
SHUTDOWN_NOTICE_TIMEOUT = 0.5  # seconds to deliver the shutdown notice before aborting

# Text encoding
ENCODING = 'utf-8'
LINE_TERMINATOR = '\n'

# Terminal decoration
PROMPT = '> '
CLEAR_LINE = '\033[2K\r'
TIME_FORMAT = '%H:%M'

# Logging
DEFAULT_LOG_LEVEL = 'INFO'
LOGGER_NAME = 'chat_relay'


# ANSI colour codes
class Colors:
    RESET = '\033[0m'
    BOLD_RED = '\033[1;31m'
    BOLD_GREEN = '\033[1;32m'
    BOLD_YELLOW = '\033[1;33m'
    BOLD_BLUE = '\033[1;34m'
    BOLD_MAGENTA = '\033[1;35m'
    BOLD_CYAN = '\033[1;36m'


# Client commands
class Commands:
    QUIT = '/quit'
    HELP = '/help'
    WHO = '/who'
    PREFIX = '/'
