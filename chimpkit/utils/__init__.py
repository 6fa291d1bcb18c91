"""Shared utilities: logging, retries, paths, validation."""
