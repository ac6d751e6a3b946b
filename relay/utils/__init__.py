"""Configuration and logging utilities for the relay server."""
