"""Authenticated HTTP transport for the Mailchimp Marketing API."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import requests
import structlog
from pydantic import ValidationError

from chimpkit.exceptions import (
    APIError,
    ConfigurationError,
    RequestConstructionError,
    TransportError,
    TransportTimeoutError,
)
from chimpkit.models.api_error import ErrorBody
from chimpkit.utils.health_checks import check_mailchimp_health
from chimpkit.utils.paths import single_joining_slash
from chimpkit.utils.retry import retry_with_logging

if TYPE_CHECKING:
    from chimpkit.models.config import Config

logger = structlog.get_logger(__name__)

API_HOST_TEMPLATE = "https://{datacenter}.api.mailchimp.com/3.0/"


def api_root_from_key(api_key: str) -> str:
    """Derive the API root from the datacenter suffix of a key (``<key>-us13``)."""
    parts = api_key.split("-")
    if len(parts) != 2 or not parts[1]:
        msg = "malformed api key: expected '<key>-<datacenter>'"
        raise ConfigurationError(msg)
    return API_HOST_TEMPLATE.format(datacenter=parts[1])


def encode_params(params: dict[str, Any] | None) -> dict[str, str]:
    """Flatten query parameters to strings; None values are skipped."""
    encoded: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, list | tuple | set):
            encoded[key] = ",".join(str(item) for item in value)
        else:
            encoded[key] = str(value)
    return encoded


class MailchimpTransport:
    """Low-level HTTP transport that sends one authenticated call at a time."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str | None = None,
        timeout: float = 30.0,
        max_retry_attempts: int = 2,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            msg = "api_key must not be empty"
            raise ConfigurationError(msg)
        self.api_root = api_url or api_root_from_key(api_key)
        if not self.api_root.endswith("/"):
            self.api_root += "/"
        self.timeout = timeout
        self.max_retry_attempts = max_retry_attempts
        self.session = session or requests.Session()
        self.session.auth = ("OAuthToken", api_key)
        self.session.headers.update({"Accept": "application/json"})
        self._request_count = 0
        self._send_with_retry = retry_with_logging(max_attempts=max_retry_attempts)(
            self._send_once
        )

    @classmethod
    def from_config(
        cls, config: Config, session: requests.Session | None = None
    ) -> MailchimpTransport:
        return cls(
            config.mailchimp_api_key,
            api_url=config.mailchimp_api_url,
            timeout=config.request_timeout,
            max_retry_attempts=config.max_retry_attempts,
            session=session,
        )

    def for_account(
        self,
        api_key: str,
        *,
        api_url: str | None = None,
        session: requests.Session | None = None,
    ) -> MailchimpTransport:
        """Same timeout and retries, authenticated as another account.

        The API root is derived from ``api_key`` unless ``api_url`` is given.
        Credentials live on the session, so the new transport gets its own.
        """
        return MailchimpTransport(
            api_key,
            api_url=api_url,
            timeout=self.timeout,
            max_retry_attempts=self.max_retry_attempts,
            session=session,
        )

    def ping(self) -> bool:
        """True when the API answers the health check endpoint."""
        return check_mailchimp_health(self)

    @property
    def request_count(self) -> int:
        """Number of requests this transport has sent."""
        return self._request_count

    def build_request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> requests.PreparedRequest:
        """Prepare an authenticated request without sending it."""
        headers: dict[str, str] = {}
        data: str | None = None
        if json_body is not None:
            try:
                data = json.dumps(json_body, separators=(",", ":"))
            except (TypeError, ValueError) as exc:
                msg = f"request body is not JSON serializable: {exc}"
                raise RequestConstructionError(msg) from exc
            headers["Content-Type"] = "application/json"

        request = requests.Request(
            method=method.upper(),
            url=single_joining_slash(self.api_root, path),
            params=encode_params(params),
            data=data,
            headers=headers,
        )
        try:
            return self.session.prepare_request(request)
        except (requests.RequestException, ValueError) as exc:
            logger.error("malformed_request", method=method, path=path, error=str(exc))
            msg = f"malformed request: {exc}"
            raise RequestConstructionError(msg) from exc

    def send_prepared(self, request: requests.PreparedRequest) -> bytes:
        """Send a prepared request.

        Returns the response body for 2xx responses (empty for 204).
        Raises APIError for non-success status codes and TransportError when
        no response was received.
        """
        if request is None:
            msg = "can't send nil request"
            raise RequestConstructionError(msg)

        self._request_count += 1
        logger.debug(
            "api_request",
            count=self._request_count,
            method=request.method,
            url=request.url,
        )

        try:
            response = self._send_with_retry(request)
        except requests.Timeout as exc:
            logger.error("request_timeout", method=request.method, url=request.url)
            msg = f"request timed out after {self.timeout}s"
            raise TransportTimeoutError(msg) from exc
        except requests.RequestException as exc:
            logger.error("request_error", method=request.method, url=request.url, error=str(exc))
            msg = f"request failed: {exc}"
            raise TransportError(msg) from exc

        return self._handle_response(request, response)

    def send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> bytes:
        """Build and send one request."""
        return self.send_prepared(self.build_request(method, path, params, json_body))

    def _send_once(self, request: requests.PreparedRequest) -> requests.Response:
        return self.session.send(request, timeout=self.timeout)

    def _handle_response(
        self, request: requests.PreparedRequest, response: requests.Response
    ) -> bytes:
        if response.status_code == 204:
            return b""
        if 200 <= response.status_code < 300:
            return response.content

        logger.info(
            "non_success_response",
            code=response.status_code,
            method=request.method,
            url=request.url,
        )
        raise APIError(self._parse_error(response), response.status_code)

    @staticmethod
    def _parse_error(response: requests.Response) -> ErrorBody:
        try:
            error = ErrorBody.model_validate_json(response.content)
        except ValidationError as exc:
            logger.debug("undecodable_error_body", body=response.text[:500])
            return ErrorBody(
                title="Response error",
                status=response.status_code,
                detail=response.text or str(exc),
            )
        if not error.status:
            error = error.model_copy(update={"status": response.status_code})
        return error
