"""Shared helpers: logging setup and run-length encoding."""
