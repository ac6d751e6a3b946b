"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from relay.common.constants import DEFAULT_LOG_LEVEL, LOGGER_NAME


class RelayLogger:
    """Server logging class."""

    def __init__(self, log_level: Union[int, str] = DEFAULT_LOG_LEVEL):
        # Set up main logger
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create formatter
        self.formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Create console handler
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(self.formatter)
        self.logger.addHandler(console_handler)

        self.file_handler: Optional[logging.FileHandler] = None

    def configure(self, log_level: Union[int, str] = DEFAULT_LOG_LEVEL, log_file: Optional[str] = None):
        """Set the log level and optionally mirror output to a file."""
        self.logger.setLevel(log_level)

        if self.file_handler is not None:
            self.logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            self.file_handler = logging.FileHandler(log_file, encoding='utf-8')
            self.file_handler.setFormatter(self.formatter)
            self.logger.addHandler(self.file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, addr: str):
        """Log client connection."""
        self.info(f"New connection from {addr}")

    def log_join(self, username: str, addr: str, active: int):
        """Log a completed registration."""
        self.info(f"User '{username}' joined from {addr} ({active} active connections)")

    def log_disconnect(self, username: str, addr: str, remaining: int):
        """Log user disconnect."""
        self.info(f"{username}@{addr} disconnected ({remaining} active connections)")

    def log_chat(self, username: str, message: str):
        """Log chat message."""
        self.debug(f"Chat from {username}: {message}")

    def log_command(self, username: str, command: str):
        """Log a command issued by a client."""
        self.debug(f"Command from {username}: {command}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = RelayLogger()
