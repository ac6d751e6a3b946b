#!/usr/bin/env python3
"""
Chat Relay Server - Main Entry Point

Starts the line-oriented chat relay. Clients connect with any line-based TCP
tool (telnet, nc), pick a display name and chat.

Usage:
    python main_server.py

Optional arguments:
    --host HOST           Bind address (default: 0.0.0.0)
    --port PORT           TCP port (default: 4000)
    --rate-limit SECONDS  Minimum time between chat messages (default: 1.0)
    --no-color            Send plain text without ANSI escapes
    --log-level LEVEL     Logging level (default: INFO)
    --log-file PATH       Also write the log to a file
"""

import argparse
import asyncio
import sys

from relay.common.constants import DEFAULT_LOG_LEVEL, DEFAULT_PORT, DEFAULT_SERVER_HOST, RATE_LIMIT_INTERVAL
from relay.common.errors import BindError
from relay.main_server import RelayServer
from relay.utils.config import ServerConfig
from relay.utils.logger import logger


def parse_args(argv=None) -> ServerConfig:
    """Build a ServerConfig from command line arguments."""
    parser = argparse.ArgumentParser(description='Line Chat Relay Server')
    parser.add_argument('--host', type=str, default=DEFAULT_SERVER_HOST,
                        help=f'Host to bind to (default: {DEFAULT_SERVER_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                        help=f'TCP port (default: {DEFAULT_PORT})')
    parser.add_argument('--rate-limit', type=float, default=RATE_LIMIT_INTERVAL,
                        help=f'Seconds between chat messages before a warning (default: {RATE_LIMIT_INTERVAL})')
    parser.add_argument('--no-color', action='store_true',
                        help='Disable ANSI colours and prompt redrawing')
    parser.add_argument('--log-level', type=str, default=DEFAULT_LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help=f'Logging level (default: {DEFAULT_LOG_LEVEL})')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write the log to this file')

    args = parser.parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        rate_limit_interval=args.rate_limit,
        color=not args.no_color
    )
    config.log_level = args.log_level
    config.log_file = args.log_file
    return config


async def run_server(config: ServerConfig):
    """Run the relay until cancelled."""
    server = RelayServer(config)
    await server.start()
    try:
        await server.serve_forever()
    finally:
        await server.stop()


def main(argv=None) -> int:
    config = parse_args(argv)
    logger.configure(**config.get_log_settings())

    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except BindError as e:
        logger.log_error("startup", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
