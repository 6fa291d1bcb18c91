"""Campaign endpoints, including campaign actions and content."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from chimpkit.resources.base import Resource, ResourceResult, require_argument
from chimpkit.utils.paths import slash_join
from chimpkit.utils.validators import require_fields

if TYPE_CHECKING:
    from chimpkit.models.dispatch_result import Deferred

CAMPAIGNS_URL = "/campaigns"
CONTENT_URL = "/content"


class CampaignAction(StrEnum):
    CANCEL = "actions/cancel-send"
    PAUSE = "actions/pause"
    RESUME = "actions/resume"
    SCHEDULE = "actions/schedule"
    SEND = "actions/send"
    TEST = "actions/test"
    UNSCHEDULE = "actions/unschedule"


class CampaignsResource(Resource):
    def get_all(self, **params: Any) -> ResourceResult:
        return self._document(self.client.get(CAMPAIGNS_URL, params or None))

    def get(self, campaign_id: str) -> ResourceResult:
        require_argument("campaign_id", campaign_id)
        return self._document(self.client.get(slash_join(CAMPAIGNS_URL, campaign_id)))

    def create(self, data: dict[str, Any]) -> ResourceResult:
        require_fields(data, "type")
        return self._document(self.client.post(CAMPAIGNS_URL, data))

    def update(self, campaign_id: str, data: dict[str, Any]) -> ResourceResult:
        require_argument("campaign_id", campaign_id)
        return self._document(self.client.patch(slash_join(CAMPAIGNS_URL, campaign_id), data))

    def delete(self, campaign_id: str) -> Deferred | None:
        require_argument("campaign_id", campaign_id)
        return self._outcome(self.client.delete(slash_join(CAMPAIGNS_URL, campaign_id)))

    def action(
        self, campaign_id: str, action: CampaignAction, data: dict[str, Any] | None = None
    ) -> Deferred | None:
        """Trigger a campaign action. Schedule needs ``schedule_time``, test needs
        ``test_emails`` and ``send_type`` in ``data``."""
        require_argument("campaign_id", campaign_id)
        url = slash_join(CAMPAIGNS_URL, campaign_id, action.value)
        return self._outcome(self.client.post(url, data))

    def cancel(self, campaign_id: str) -> Deferred | None:
        return self.action(campaign_id, CampaignAction.CANCEL)

    def pause(self, campaign_id: str) -> Deferred | None:
        return self.action(campaign_id, CampaignAction.PAUSE)

    def resume(self, campaign_id: str) -> Deferred | None:
        return self.action(campaign_id, CampaignAction.RESUME)

    def schedule(self, campaign_id: str, schedule_time: str) -> Deferred | None:
        return self.action(
            campaign_id, CampaignAction.SCHEDULE, {"schedule_time": schedule_time}
        )

    def send(self, campaign_id: str) -> Deferred | None:
        return self.action(campaign_id, CampaignAction.SEND)

    def test(
        self, campaign_id: str, test_emails: list[str], send_type: str = "html"
    ) -> Deferred | None:
        return self.action(
            campaign_id,
            CampaignAction.TEST,
            {"test_emails": test_emails, "send_type": send_type},
        )

    def unschedule(self, campaign_id: str) -> Deferred | None:
        return self.action(campaign_id, CampaignAction.UNSCHEDULE)

    def get_content(self, campaign_id: str) -> ResourceResult:
        require_argument("campaign_id", campaign_id)
        return self._document(
            self.client.get(slash_join(CAMPAIGNS_URL, campaign_id, CONTENT_URL))
        )

    def set_content(self, campaign_id: str, content: dict[str, Any]) -> ResourceResult:
        require_argument("campaign_id", campaign_id)
        return self._document(
            self.client.put(slash_join(CAMPAIGNS_URL, campaign_id, CONTENT_URL), content)
        )
