"""
Relay package for the line-oriented chat relay.

This package contains all server-side functionality including:
- Client sessions and command dispatch
- The shared client registry and message broadcasting
- Server lifecycle (start, accept, stop)
- Configuration and utilities
"""
