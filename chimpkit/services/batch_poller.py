"""Caller-side polling of a submitted batch job."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import structlog

from chimpkit.exceptions import BatchTimeoutError
from chimpkit.utils.progress import PollTracker

if TYPE_CHECKING:
    from collections.abc import Callable

    from chimpkit.models.batch import Batch

logger = structlog.get_logger(__name__)


def wait_for_batch(
    fetch: Callable[[str], Batch],
    batch_id: str,
    *,
    poll_interval: float = 5.0,
    timeout: float | None = None,
    sleep: Callable[[float], None] | None = None,
    on_poll: Callable[[Batch], None] | None = None,
) -> Batch:
    """Poll ``fetch(batch_id)`` until the batch finishes.

    ``fetch`` is ``BatchQueue.get`` or ``MailchimpClient.get_batch``. Each
    poll is a single request; errors from ``fetch`` propagate
    immediately. Raises BatchTimeoutError once ``timeout`` seconds passed
    without the batch finishing.
    """
    tracker = PollTracker(batch_id=batch_id)
    pause = sleep or time.sleep

    while True:
        batch = fetch(batch_id)
        if not tracker.record(batch):
            logger.warning(
                "batch_counters_decreased",
                batch_id=batch_id,
                finished=batch.finished_operations,
                errored=batch.errored_operations,
            )
        tracker.log_progress(batch)
        if on_poll is not None:
            on_poll(batch)

        if batch.is_finished:
            logger.info("batch_finished", **tracker.summary(), batch_id=batch_id)
            return batch

        if timeout is not None and tracker.elapsed_seconds + poll_interval > timeout:
            raise BatchTimeoutError(batch_id, timeout)

        pause(poll_interval)
