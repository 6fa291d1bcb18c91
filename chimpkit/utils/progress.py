"""Progress tracking for batch status polling."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chimpkit.utils.logger import get_logger

if TYPE_CHECKING:
    from chimpkit.models.batch import Batch

logger = get_logger(__name__)


@dataclass
class PollTracker:
    """Track successive polls of one batch job."""

    batch_id: str
    polls: int = 0
    finished_operations: int = 0
    errored_operations: int = 0
    regressions: list[str] = field(default_factory=list)
    start_time: float = field(default_factory=time.monotonic)

    def record(self, batch: Batch) -> bool:
        """Record an observed batch; False when a counter went backwards."""
        self.polls += 1
        monotonic = True
        if batch.finished_operations < self.finished_operations:
            monotonic = False
            self.regressions.append(
                f"finished_operations {self.finished_operations} -> {batch.finished_operations}"
            )
        if batch.errored_operations < self.errored_operations:
            monotonic = False
            self.regressions.append(
                f"errored_operations {self.errored_operations} -> {batch.errored_operations}"
            )
        self.finished_operations = max(self.finished_operations, batch.finished_operations)
        self.errored_operations = max(self.errored_operations, batch.errored_operations)
        return monotonic

    @property
    def elapsed_seconds(self) -> float:
        """Time elapsed since start."""
        return time.monotonic() - self.start_time

    def log_progress(self, batch: Batch) -> None:
        logger.info(
            "batch_progress",
            batch_id=self.batch_id,
            status=batch.status,
            finished=batch.finished_operations,
            errored=batch.errored_operations,
            total=batch.total_operations,
            percentage=f"{batch.progress_percentage:.1f}%",
            polls=self.polls,
            elapsed=f"{self.elapsed_seconds:.1f}s",
        )

    def summary(self) -> dict[str, int | float | list[str]]:
        """Return summary statistics."""
        return {
            "polls": self.polls,
            "finished_operations": self.finished_operations,
            "errored_operations": self.errored_operations,
            "duration_seconds": round(self.elapsed_seconds, 2),
            "regressions": self.regressions,
        }
