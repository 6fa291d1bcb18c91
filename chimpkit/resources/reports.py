"""Campaign report endpoints."""

from __future__ import annotations

from typing import Any

from chimpkit.resources.base import Resource, ResourceResult, require_argument
from chimpkit.utils.paths import slash_join

REPORTS_URL = "/reports"
SENT_TO_URL = "/sent-to"


class ReportsResource(Resource):
    def get(self, campaign_id: str) -> ResourceResult:
        require_argument("campaign_id", campaign_id)
        return self._document(self.client.get(slash_join(REPORTS_URL, campaign_id)))

    def sent_to(self, campaign_id: str, **params: Any) -> ResourceResult:
        """Send status per member. Optional params: fields, exclude_fields, count, offset."""
        require_argument("campaign_id", campaign_id)
        return self._document(
            self.client.get(slash_join(REPORTS_URL, campaign_id, SENT_TO_URL), params or None)
        )
