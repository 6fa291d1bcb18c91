"""List member endpoints."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Any

from chimpkit.resources.base import ListScopedResource, ResourceResult, require_argument
from chimpkit.utils.validators import require_fields

if TYPE_CHECKING:
    from chimpkit.models.dispatch_result import Deferred


def member_email_to_id(email: str) -> str:
    """Subscriber hash: MD5 of the lowercased email address."""
    return hashlib.md5(email.lower().encode("utf-8")).hexdigest()


def _member_id(member: str) -> str:
    # Members are addressed by subscriber hash; accept an email address too.
    return member_email_to_id(member) if "@" in member else member


class MembersResource(ListScopedResource):
    collection_url = "/members"

    def get_all(self, **params: Any) -> ResourceResult:
        return self._document(self.client.get(self._url(), params or None))

    def get(self, member: str) -> ResourceResult:
        """Fetch a member by subscriber hash or email address."""
        require_argument("member", member)
        return self._document(self.client.get(self._url(_member_id(member))))

    def create(self, data: dict[str, Any]) -> ResourceResult:
        require_fields(data, "email_address", "status")
        return self._document(self.client.post(self._url(), data))

    def update(self, member: str, data: dict[str, Any]) -> ResourceResult:
        require_argument("member", member)
        return self._document(self.client.patch(self._url(_member_id(member)), data))

    def upsert(self, member: str, data: dict[str, Any]) -> ResourceResult:
        """Add or update a member; PUT succeeds even for a previously deleted member."""
        require_argument("member", member)
        require_fields(data, "email_address")
        return self._document(self.client.put(self._url(_member_id(member)), data))

    def delete(self, member: str) -> Deferred | None:
        require_argument("member", member)
        return self._outcome(self.client.delete(self._url(_member_id(member))))
