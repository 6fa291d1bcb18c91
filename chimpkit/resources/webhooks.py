"""List webhook endpoints.

Decoding of incoming webhook events is not handled here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chimpkit.resources.base import ListScopedResource, ResourceResult, require_argument
from chimpkit.utils.validators import require_fields

if TYPE_CHECKING:
    from chimpkit.models.dispatch_result import Deferred


class WebhooksResource(ListScopedResource):
    collection_url = "/webhooks"

    def get_all(self) -> ResourceResult:
        return self._document(self.client.get(self._url()))

    def get(self, webhook_id: str) -> ResourceResult:
        require_argument("webhook_id", webhook_id)
        return self._document(self.client.get(self._url(webhook_id)))

    def create(self, data: dict[str, Any]) -> ResourceResult:
        """Register a webhook; ``events`` and ``sources`` are optional."""
        require_fields(data, "url")
        return self._document(self.client.post(self._url(), data))

    def delete(self, webhook_id: str) -> Deferred | None:
        require_argument("webhook_id", webhook_id)
        return self._outcome(self.client.delete(self._url(webhook_id)))
