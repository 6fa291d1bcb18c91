"""Service protocols defining interfaces for dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    import requests


class TransportProtocol(Protocol):
    """Protocol for authenticated HTTP transports to the Mailchimp API."""

    api_root: str

    def build_request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> requests.PreparedRequest: ...

    def send_prepared(self, request: requests.PreparedRequest) -> bytes: ...

    def send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> bytes: ...

    def for_account(
        self,
        api_key: str,
        *,
        api_url: str | None = None,
        session: requests.Session | None = None,
    ) -> TransportProtocol: ...
