"""Mailchimp client: builds requests and dispatches them directly or into a batch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from chimpkit.exceptions import BatchNotActiveError
from chimpkit.models.dispatch_result import Completed, Deferred
from chimpkit.resources.campaigns import CampaignsResource
from chimpkit.resources.lists import ListsResource
from chimpkit.resources.members import MembersResource
from chimpkit.resources.merge_fields import MergeFieldsResource
from chimpkit.resources.reports import ReportsResource
from chimpkit.resources.segments import SegmentsResource
from chimpkit.resources.webhooks import WebhooksResource
from chimpkit.services.batch_queue import BatchQueue
from chimpkit.services.http_transport import MailchimpTransport

if TYPE_CHECKING:
    import requests

    from chimpkit.models.batch import Batch
    from chimpkit.models.config import Config
    from chimpkit.services.protocols import TransportProtocol

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Direct:
    """Send every call to the API immediately."""


@dataclass(frozen=True)
class Recording:
    """Record every call into ``queue`` instead of sending it."""

    queue: BatchQueue


DispatchMode = Direct | Recording


class MailchimpClient:
    """Entry point for all API calls.

    Every call goes through :meth:`dispatch`, which consults the client's
    dispatch mode. In :class:`Recording` mode calls return a
    :class:`~chimpkit.models.Deferred` placeholder and nothing is sent until
    :meth:`run_batch`.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        mode: DispatchMode | None = None,
        *,
        strict_batch_params: bool = False,
    ) -> None:
        self.transport = transport
        self.strict_batch_params = strict_batch_params
        self._mode: DispatchMode = mode or Direct()

    @classmethod
    def from_config(
        cls, config: Config, session: requests.Session | None = None
    ) -> MailchimpClient:
        return cls(
            MailchimpTransport.from_config(config, session=session),
            strict_batch_params=config.strict_batch_params,
        )

    # ------------------------------------------------------------------
    # dispatch

    @property
    def mode(self) -> DispatchMode:
        return self._mode

    @property
    def is_batching(self) -> bool:
        return isinstance(self._mode, Recording)

    @property
    def batch_queue(self) -> BatchQueue | None:
        """The attached queue while recording, else None."""
        if isinstance(self._mode, Recording):
            return self._mode.queue
        return None

    def dispatch(self, request: requests.PreparedRequest) -> Completed | Deferred:
        """Send a prepared request, or record it when a batch is active."""
        match self._mode:
            case Recording(queue=queue):
                return queue.enqueue(request)
            case _:
                return Completed(self.transport.send_prepared(request))

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: Any = None,
    ) -> Completed | Deferred:
        return self.dispatch(self.transport.build_request(method, path, params, data))

    def get(self, path: str, params: dict[str, Any] | None = None) -> Completed | Deferred:
        return self.request("GET", path, params)

    def post(
        self, path: str, data: Any = None, params: dict[str, Any] | None = None
    ) -> Completed | Deferred:
        return self.request("POST", path, params, data)

    def patch(
        self, path: str, data: Any = None, params: dict[str, Any] | None = None
    ) -> Completed | Deferred:
        return self.request("PATCH", path, params, data)

    def put(
        self, path: str, data: Any = None, params: dict[str, Any] | None = None
    ) -> Completed | Deferred:
        return self.request("PUT", path, params, data)

    def delete(self, path: str) -> Completed | Deferred:
        return self.request("DELETE", path)

    # ------------------------------------------------------------------
    # batching

    def new_batch(self) -> BatchQueue:
        """Attach a new empty queue; later calls on this client are recorded."""
        queue = BatchQueue(self.transport, strict_params=self.strict_batch_params)
        self._mode = Recording(queue)
        logger.debug("batch_started")
        return queue

    def batched(self) -> MailchimpClient:
        """Return a new recording client that shares this client's transport.

        The current client keeps sending calls directly.
        """
        clone = MailchimpClient(self.transport, strict_batch_params=self.strict_batch_params)
        clone.new_batch()
        return clone

    def with_account(
        self,
        api_key: str,
        *,
        api_url: str | None = None,
        session: requests.Session | None = None,
    ) -> MailchimpClient:
        """Return a direct client that calls the API as another account.

        Call :meth:`batched` on the result to record calls for that account.
        """
        transport = self.transport.for_account(api_key, api_url=api_url, session=session)
        return MailchimpClient(transport, strict_batch_params=self.strict_batch_params)

    def run_batch(self) -> Batch:
        """Detach the active queue and submit it.

        The client is back in direct mode afterwards, even if the submission
        fails. Keep a reference to :attr:`batch_queue` beforehand to retry.
        """
        queue = self.batch_queue
        if queue is None:
            msg = "no batch is active on this client"
            raise BatchNotActiveError(msg)
        self._mode = Direct()
        return queue.run()

    def get_batch(self, batch_id: str) -> Batch:
        """Look up a batch job; always sent directly, even while recording."""
        return BatchQueue(self.transport).get(batch_id)

    # ------------------------------------------------------------------
    # resources

    @property
    def lists(self) -> ListsResource:
        return ListsResource(self)

    def members(self, list_id: str) -> MembersResource:
        return MembersResource(self, list_id)

    def segments(self, list_id: str) -> SegmentsResource:
        return SegmentsResource(self, list_id)

    def merge_fields(self, list_id: str) -> MergeFieldsResource:
        return MergeFieldsResource(self, list_id)

    def webhooks(self, list_id: str) -> WebhooksResource:
        return WebhooksResource(self, list_id)

    @property
    def campaigns(self) -> CampaignsResource:
        return CampaignsResource(self)

    @property
    def reports(self) -> ReportsResource:
        return ReportsResource(self)
