"""Audience (list) endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chimpkit.resources.base import Resource, ResourceResult, require_argument
from chimpkit.utils.paths import slash_join
from chimpkit.utils.validators import require_fields

if TYPE_CHECKING:
    from chimpkit.models.dispatch_result import Deferred

LISTS_URL = "/lists"

CREATE_LIST_FIELDS = ("name", "contact", "permission_reminder", "campaign_defaults")


class ListsResource(Resource):
    def get_all(self, **params: Any) -> ResourceResult:
        """Fetch lists; params are passed as query filters (count, offset, fields...)."""
        return self._document(self.client.get(LISTS_URL, params or None))

    def get(self, list_id: str) -> ResourceResult:
        require_argument("list_id", list_id)
        return self._document(self.client.get(slash_join(LISTS_URL, list_id)))

    def create(self, data: dict[str, Any]) -> ResourceResult:
        require_fields(data, *CREATE_LIST_FIELDS)
        return self._document(self.client.post(LISTS_URL, data))

    def update(self, list_id: str, data: dict[str, Any]) -> ResourceResult:
        require_argument("list_id", list_id)
        return self._document(self.client.patch(slash_join(LISTS_URL, list_id), data))

    def delete(self, list_id: str) -> Deferred | None:
        require_argument("list_id", list_id)
        return self._outcome(self.client.delete(slash_join(LISTS_URL, list_id)))
