"""API health check utilities."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from chimpkit.exceptions import ChimpkitError
from chimpkit.utils.logger import get_logger

if TYPE_CHECKING:
    from chimpkit.services.protocols import TransportProtocol

logger = get_logger(__name__)

PING_URL = "/ping"


def check_mailchimp_health(transport: TransportProtocol) -> bool:
    """Check if the Mailchimp API is reachable and the key is accepted."""
    try:
        response = transport.send("GET", PING_URL)
    except ChimpkitError as exc:
        logger.warning("mailchimp_health_check_failed", error=str(exc))
        return False

    try:
        status = json.loads(response).get("health_status", "")
    except (ValueError, AttributeError):
        logger.warning("mailchimp_health_check_failed", error="unexpected ping response")
        return False
    logger.debug("mailchimp_health_check", health_status=status)
    return bool(status)
