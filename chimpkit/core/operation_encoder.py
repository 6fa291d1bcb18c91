"""Encode in-flight HTTP requests as batch operations.

Pure functions: no network I/O and no shared state.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from pydantic import ValidationError

from chimpkit.exceptions import MalformedQueryError, RequestConstructionError
from chimpkit.models.operation import API_VERSION_SEGMENT, Operation

if TYPE_CHECKING:
    import requests


def strip_api_version(path: str) -> str:
    """Remove the first API version segment, e.g. ``/3.0/lists/1`` -> ``/lists/1``."""
    stripped = API_VERSION_SEGMENT.sub("", path, count=1)
    if not stripped.startswith("/"):
        stripped = "/" + stripped
    return stripped


def strip_api_root(path: str, api_root: str | None = None) -> str:
    """Remove the path of ``api_root`` from the front of ``path``.

    ``https://proxy.example.com/mailchimp/3.0/`` turns
    ``/mailchimp/3.0/lists/1`` into ``/lists/1`` whatever the version token
    is. Without a root, or when ``path`` lies outside it, falls back to
    :func:`strip_api_version`.
    """
    root_path = urlsplit(api_root).path.rstrip("/") if api_root else ""
    if root_path and (path == root_path or path.startswith(root_path + "/")):
        return path[len(root_path) :] or "/"
    return strip_api_version(path)


def parse_query(raw_query: str | None, *, strict: bool = False) -> dict[str, str] | None:
    """Split a raw query string into a key/value mapping.

    Only fragments with exactly one ``=`` are kept; anything else is dropped,
    or raises :class:`MalformedQueryError` when ``strict`` is set. Values are
    stored as found, without URL decoding. Returns None when nothing is left.
    """
    if not raw_query:
        return None

    params: dict[str, str] = {}
    for fragment in raw_query.split("&"):
        parts = fragment.split("=")
        if len(parts) == 2:
            params[parts[0]] = parts[1]
        elif strict:
            raise MalformedQueryError(fragment)

    return params or None


def read_body(body: Any) -> str | None:
    """Read a request body fully into a string; None for a missing or empty body."""
    if body is None:
        return None
    if hasattr(body, "read"):
        body = body.read()
    elif not isinstance(body, str | bytes | bytearray) and isinstance(body, Iterable):
        body = b"".join(
            chunk.encode("utf-8") if isinstance(chunk, str) else chunk for chunk in body
        )

    if isinstance(body, bytes | bytearray):
        try:
            body = bytes(body).decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"request body is not valid UTF-8: {exc}"
            raise RequestConstructionError(msg) from exc

    if not isinstance(body, str):
        msg = f"unsupported request body type: {type(body).__name__}"
        raise RequestConstructionError(msg)
    return body or None


def encode_operation(
    request: requests.PreparedRequest | None,
    *,
    strict_params: bool = False,
    api_root: str | None = None,
) -> Operation:
    """Convert a prepared request into an :class:`Operation`.

    ``api_root`` is the transport's base URL; its path is cut from the
    recorded path.
    """
    if request is None:
        msg = "can't batch a nil request"
        raise RequestConstructionError(msg)
    if not request.method or not request.url:
        msg = "request has no method or url"
        raise RequestConstructionError(msg)

    url = urlsplit(request.url)

    try:
        return Operation(
            method=request.method,
            path=strip_api_root(url.path, api_root),
            params=parse_query(url.query, strict=strict_params),
            body=read_body(request.body),
        )
    except ValidationError as exc:
        msg = f"request can't be encoded as a batch operation: {exc}"
        raise RequestConstructionError(msg) from exc
