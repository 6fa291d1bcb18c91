"""List segment endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chimpkit.resources.base import ListScopedResource, ResourceResult, require_argument
from chimpkit.utils.validators import require_fields

if TYPE_CHECKING:
    from chimpkit.models.dispatch_result import Deferred


class SegmentsResource(ListScopedResource):
    collection_url = "/segments"

    def get_all(self, **params: Any) -> ResourceResult:
        return self._document(self.client.get(self._url(), params or None))

    def get(self, segment_id: int | str) -> ResourceResult:
        require_argument("segment_id", segment_id)
        return self._document(self.client.get(self._url(segment_id)))

    def create(self, data: dict[str, Any]) -> ResourceResult:
        require_fields(data, "name")
        return self._document(self.client.post(self._url(), data))

    def update(self, segment_id: int | str, data: dict[str, Any]) -> ResourceResult:
        require_argument("segment_id", segment_id)
        return self._document(self.client.put(self._url(segment_id), data))

    def delete(self, segment_id: int | str) -> Deferred | None:
        require_argument("segment_id", segment_id)
        return self._outcome(self.client.delete(self._url(segment_id)))
