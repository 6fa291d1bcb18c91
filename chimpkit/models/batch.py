"""Batch model for the server-side asynchronous batch job."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class BatchStatus(StrEnum):
    PENDING = "pending"
    PREPROCESSING = "preprocessing"
    STARTED = "started"
    FINALIZING = "finalizing"
    FINISHED = "finished"


class Batch(BaseModel):
    """Job handle returned when a batch is submitted or polled.

    ``status`` is kept as a plain string so that statuses introduced by the
    API later still decode; compare against :class:`BatchStatus` members.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    status: str = BatchStatus.PENDING.value
    total_operations: int = 0
    finished_operations: int = 0
    errored_operations: int = 0
    submitted_at: str = ""
    completed_at: str = ""
    response_body_url: str = ""

    def counter_violations(self) -> list[str]:
        """Negative counters and broken ``errored <= finished <= total`` relations.

        The document is kept as the server sent it; callers report these.
        """
        violations = [
            f"{name} {value} < 0"
            for name, value in (
                ("total_operations", self.total_operations),
                ("finished_operations", self.finished_operations),
                ("errored_operations", self.errored_operations),
            )
            if value < 0
        ]
        if self.finished_operations > self.total_operations:
            violations.append(
                f"finished_operations {self.finished_operations} > "
                f"total_operations {self.total_operations}"
            )
        if self.errored_operations > self.finished_operations:
            violations.append(
                f"errored_operations {self.errored_operations} > "
                f"finished_operations {self.finished_operations}"
            )
        return violations

    @property
    def is_finished(self) -> bool:
        return self.status == BatchStatus.FINISHED

    @property
    def result_url(self) -> str | None:
        """Location of the results archive, only once the job finished."""
        if self.is_finished and self.response_body_url:
            return self.response_body_url
        return None

    @property
    def progress_percentage(self) -> float:
        if self.total_operations == 0:
            return 100.0 if self.is_finished else 0.0
        return (self.finished_operations / self.total_operations) * 100.0
