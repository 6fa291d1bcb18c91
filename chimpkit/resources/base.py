"""Shared plumbing for resource wrappers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chimpkit.exceptions import RequestConstructionError, ResponseDecodeError
from chimpkit.models.dispatch_result import Completed, Deferred
from chimpkit.utils.paths import slash_join

if TYPE_CHECKING:
    from chimpkit.services.client import MailchimpClient

# A resource call either returns the decoded JSON document, or the Deferred
# placeholder when the client is recording a batch.
ResourceResult = dict[str, Any] | Deferred


def require_argument(name: str, value: str | int | None) -> None:
    """Identifiers are mandatory path components."""
    if value is None or value == "":
        msg = f"missing argument: {name}"
        raise RequestConstructionError(msg)


class Resource:
    """Base class binding a resource wrapper to a client."""

    def __init__(self, client: MailchimpClient) -> None:
        self.client = client

    @staticmethod
    def _document(result: Completed | Deferred) -> ResourceResult:
        if isinstance(result, Deferred):
            return result
        data = result.json()
        if not isinstance(data, dict):
            msg = f"expected a JSON object, got {type(data).__name__}"
            raise ResponseDecodeError(msg)
        return data

    @staticmethod
    def _outcome(result: Completed | Deferred) -> Deferred | None:
        """For calls without a response document (deletes, actions)."""
        if isinstance(result, Deferred):
            return result
        return None


class ListScopedResource(Resource):
    """Resource nested below a list: ``/lists/{list_id}/<collection>``."""

    collection_url = ""

    def __init__(self, client: MailchimpClient, list_id: str) -> None:
        require_argument("list_id", list_id)
        super().__init__(client)
        self.list_id = list_id

    def _url(self, *parts: str | int) -> str:
        return slash_join("/lists", self.list_id, self.collection_url, *parts)
