"""Exception hierarchy for the Mailchimp client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chimpkit.models.api_error import ErrorBody


class ChimpkitError(Exception):
    """Base exception for all client errors."""


class ConfigurationError(ChimpkitError):
    """Raised when the client cannot be configured (e.g. malformed api key)."""


class RequestConstructionError(ChimpkitError, ValueError):
    """Raised when a request cannot be built or encoded."""


class MalformedQueryError(RequestConstructionError):
    """Raised in strict mode when a query fragment is not a key=value pair."""

    def __init__(self, fragment: str) -> None:
        self.fragment = fragment
        super().__init__(f"malformed query fragment: {fragment!r}")


class MissingFieldError(RequestConstructionError):
    """Raised when a request payload lacks a required field."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"missing field: {field}")


class BatchNotActiveError(ChimpkitError):
    """Raised when a batch is finalized on a client that is not batching."""


class BatchTimeoutError(ChimpkitError):
    """Raised when polling gives up before the batch finished."""

    def __init__(self, batch_id: str, timeout: float) -> None:
        self.batch_id = batch_id
        self.timeout = timeout
        super().__init__(f"batch {batch_id} did not finish within {timeout}s")


class TransportError(ChimpkitError):
    """Raised when an HTTP exchange with the API did not complete."""


class TransportTimeoutError(TransportError):
    """Raised when the API did not answer within the configured timeout."""


class ResponseDecodeError(TransportError):
    """Raised when a response body cannot be decoded into the expected shape."""


class APIError(TransportError):
    """Raised for non-success status codes; carries the API problem detail."""

    def __init__(self, error: ErrorBody, status_code: int) -> None:
        self.error = error
        self.status_code = status_code
        super().__init__(str(error))

    @property
    def title(self) -> str:
        return self.error.title

    @property
    def detail(self) -> str:
        return self.error.detail
