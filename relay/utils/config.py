"""
Server configuration module.

This module handles server-side configuration settings.
"""

from typing import Optional

from relay.common.constants import (
    DEFAULT_SERVER_HOST, DEFAULT_PORT, DEFAULT_LOG_LEVEL, MAX_LINE_LENGTH, RATE_LIMIT_INTERVAL,
    SHUTDOWN_NOTICE_TIMEOUT
)


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT,
                 rate_limit_interval: float = RATE_LIMIT_INTERVAL, color: bool = True,
                 interactive: Optional[bool] = None):
        self.host = host
        self.port = port

        # Chat settings
        self.rate_limit_interval = rate_limit_interval
        self.color = color
        # Terminal line clearing and prompt redraw follow colour unless set
        self.interactive = color if interactive is None else interactive

        # Connection settings
        self.max_line_length = MAX_LINE_LENGTH
        self.shutdown_notice_timeout = SHUTDOWN_NOTICE_TIMEOUT

        # Logging configuration
        self.log_level = DEFAULT_LOG_LEVEL
        self.log_file: Optional[str] = None

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }

    def get_chat_settings(self):
        """Get chat settings."""
        return {
            'rate_limit_interval': self.rate_limit_interval,
            'color': self.color,
            'interactive': self.interactive
        }

    def get_log_settings(self):
        """Get logging settings."""
        return {
            'log_level': self.log_level,
            'log_file': self.log_file
        }
