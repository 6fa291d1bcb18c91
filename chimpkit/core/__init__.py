"""Batching core -- pure functions for turning requests into batch operations."""

from __future__ import annotations

from chimpkit.core.operation_encoder import (
    encode_operation,
    parse_query,
    read_body,
    strip_api_version,
)

__all__ = [
    "encode_operation",
    "parse_query",
    "read_body",
    "strip_api_version",
]
