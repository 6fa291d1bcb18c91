"""Shared test fixtures for the Mailchimp client.

No test talks to the real API: transports either answer from a queue of
canned responses (``fake_transport``) or run on a real ``requests.Session``
whose ``send`` is a MagicMock (``transport``).
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from chimpkit.services.client import MailchimpClient
from chimpkit.services.http_transport import MailchimpTransport

API_KEY = "b12824bd84759ef84abc67fd789e7570-us13"
RESULT_URL = "https://mailchimp-api-batch.s3.amazonaws.com/8cxk2yb1le-response.tar.gz"


def _make_response(status_code: int = 200, body: Any = None) -> requests.Response:
    """Build a requests.Response; ``body`` may be bytes, str or a JSON value."""
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")
    response._content = content
    response.encoding = "utf-8"
    return response


class FakeTransport(MailchimpTransport):
    """Real request building, canned responses instead of network calls.

    Every prepared request handed to ``send_prepared`` is recorded in
    ``sent``. Queued responses are bytes (returned) or exceptions (raised);
    an empty queue answers ``b"{}"``.
    """

    def __init__(self) -> None:
        super().__init__(API_KEY, max_retry_attempts=1)
        self.responses: list[bytes | Exception] = []
        self.sent: list[requests.PreparedRequest] = []

    def queue_json(self, *documents: Any) -> None:
        for document in documents:
            self.responses.append(json.dumps(document).encode("utf-8"))

    def send_prepared(self, request: requests.PreparedRequest) -> bytes:
        self.sent.append(request)
        if not self.responses:
            return b"{}"
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def sent_body(request: requests.PreparedRequest) -> str:
    body = request.body
    if isinstance(body, bytes):
        return body.decode("utf-8")
    return body or ""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def api_key() -> str:
    return API_KEY


@pytest.fixture
def response_factory() -> Callable[..., requests.Response]:
    return _make_response


@pytest.fixture
def body_of() -> Callable[[requests.PreparedRequest], str]:
    """Decoded body of a prepared request."""
    return sent_body


@pytest.fixture
def batch_response() -> dict[str, Any]:
    """Batch document as returned right after submission."""
    return {
        "id": "8cxk2yb1le",
        "status": "pending",
        "total_operations": 2,
        "finished_operations": 0,
        "errored_operations": 0,
        "submitted_at": "2016-09-16T14:55:51+00:00",
        "completed_at": "",
        "response_body_url": "",
    }


@pytest.fixture
def finished_batch_response(batch_response: dict[str, Any]) -> dict[str, Any]:
    return {
        **batch_response,
        "status": "finished",
        "finished_operations": 2,
        "errored_operations": 1,
        "completed_at": "2016-09-16T14:56:10+00:00",
        "response_body_url": RESULT_URL,
    }


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(fake_transport: FakeTransport) -> MailchimpClient:
    return MailchimpClient(fake_transport)


@pytest.fixture
def mock_session() -> requests.Session:
    """A real session whose ``send`` is replaced by a MagicMock."""
    session = requests.Session()
    session.send = MagicMock(return_value=_make_response(200, {}))  # type: ignore[method-assign]
    return session


@pytest.fixture
def transport(mock_session: requests.Session) -> MailchimpTransport:
    return MailchimpTransport(API_KEY, max_retry_attempts=1, session=mock_session)
