"""List merge field endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chimpkit.exceptions import RequestConstructionError
from chimpkit.resources.base import ListScopedResource, ResourceResult, require_argument
from chimpkit.utils.validators import require_fields

if TYPE_CHECKING:
    from chimpkit.models.dispatch_result import Deferred


MAX_TAG_LENGTH = 10


class MergeFieldsResource(ListScopedResource):
    collection_url = "/merge-fields"

    def get_all(self, **params: Any) -> ResourceResult:
        return self._document(self.client.get(self._url(), params or None))

    def get(self, merge_id: int) -> ResourceResult:
        require_argument("merge_id", merge_id)
        return self._document(self.client.get(self._url(merge_id)))

    def create(self, data: dict[str, Any]) -> ResourceResult:
        require_fields(data, "name", "type")
        if len(data.get("tag") or "") > MAX_TAG_LENGTH:
            msg = f"tag length over limit ({MAX_TAG_LENGTH})"
            raise RequestConstructionError(msg)
        return self._document(self.client.post(self._url(), data))

    def update(self, merge_id: int, data: dict[str, Any]) -> ResourceResult:
        require_argument("merge_id", merge_id)
        return self._document(self.client.put(self._url(merge_id), data))

    def delete(self, merge_id: int) -> Deferred | None:
        require_argument("merge_id", merge_id)
        return self._outcome(self.client.delete(self._url(merge_id)))
