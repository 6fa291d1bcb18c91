"""Thin per-resource wrappers; plain JSON dicts in and out."""

from chimpkit.resources.base import ResourceResult
from chimpkit.resources.campaigns import CampaignAction, CampaignsResource
from chimpkit.resources.lists import ListsResource
from chimpkit.resources.members import MembersResource, member_email_to_id
from chimpkit.resources.merge_fields import MergeFieldsResource
from chimpkit.resources.reports import ReportsResource
from chimpkit.resources.segments import SegmentsResource
from chimpkit.resources.webhooks import WebhooksResource

__all__ = [
    "CampaignAction",
    "CampaignsResource",
    "ListsResource",
    "MembersResource",
    "MergeFieldsResource",
    "ReportsResource",
    "ResourceResult",
    "SegmentsResource",
    "WebhooksResource",
    "member_email_to_id",
]
