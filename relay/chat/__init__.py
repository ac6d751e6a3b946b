"""
Chat module for server-side session handling.

Handles:
- Per-connection write serialization
- Client registration and teardown
- Command parsing and dispatch
- Message broadcasting
"""
