"""Shared utilities: logging, errors and environment access."""
