"""
Error types raised by the relay.

BindError is fatal and only raised at startup. ReadError, WriteError and
ConnectionClosed end a single session and never the process.
"""


class RelayError(Exception):
    """Base class for relay errors."""


class BindError(RelayError):
    """The listen address could not be bound."""


class ReadError(RelayError):
    """Reading a line from a client connection failed."""


class WriteError(RelayError):
    """Writing to a client connection failed."""


class ConnectionClosed(RelayError):
    """The client has already been closed."""
