"""Batch queue: record requests now, submit them later as one batch job.

Example::

    # A batching client records calls instead of sending them.
    batch_client = client.batched()

    # The result is a Deferred placeholder, not list data. Only the
    # raised exceptions are meaningful for a batched call.
    batch_client.lists.create({...})

    batch = batch_client.run_batch()
    print(batch.id, batch.status)

Operations run in the background on the server. Poll with ``get`` (or
:func:`chimpkit.services.batch_poller.wait_for_batch`) and download
``batch.result_url`` once finished for per-operation outcomes.

A queue is owned by one client and is not safe for concurrent ``enqueue``
calls; guard it with a lock if it must be shared between threads.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from chimpkit.core.operation_encoder import encode_operation
from chimpkit.exceptions import RequestConstructionError, ResponseDecodeError
from chimpkit.models.batch import Batch
from chimpkit.models.dispatch_result import Deferred
from chimpkit.utils.paths import slash_join

if TYPE_CHECKING:
    import requests

    from chimpkit.models.operation import Operation
    from chimpkit.services.protocols import TransportProtocol

logger = structlog.get_logger(__name__)

BATCHES_URL = "/batches"


def decode_batch(response: bytes) -> Batch:
    """Decode a batch status document."""
    try:
        batch = Batch.model_validate_json(response)
    except ValidationError as exc:
        msg = f"invalid batch response: {exc}"
        raise ResponseDecodeError(msg) from exc

    violations = batch.counter_violations()
    if violations:
        logger.warning("batch_counters_inconsistent", batch_id=batch.id, violations=violations)
    return batch


class BatchQueue:
    """Ordered collection of operations submitted with a single call."""

    def __init__(self, transport: TransportProtocol, *, strict_params: bool = False) -> None:
        self.transport = transport
        self.strict_params = strict_params
        self._operations: list[Operation] = []

    def __len__(self) -> int:
        return len(self._operations)

    @property
    def operations(self) -> tuple[Operation, ...]:
        """Recorded operations in submission order."""
        return tuple(self._operations)

    def enqueue(self, request: requests.PreparedRequest | None) -> Deferred:
        """Record a request instead of sending it.

        Always returns a Deferred placeholder for a valid request, whatever
        the live call would have returned. Raises RequestConstructionError
        (leaving the queue untouched) when the request can't be encoded.
        """
        operation = encode_operation(
            request,
            strict_params=self.strict_params,
            api_root=self.transport.api_root,
        )
        return self.add(operation)

    def add(self, operation: Operation) -> Deferred:
        """Append an already built operation."""
        self._operations.append(operation)
        position = len(self._operations) - 1
        logger.debug(
            "batched_request",
            count=len(self._operations),
            method=operation.method.value,
            path=operation.path,
        )
        return Deferred(operation=operation, position=position)

    def to_payload(self) -> dict[str, Any]:
        """Body of the batch submission request."""
        return {"operations": [op.to_payload() for op in self._operations]}

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), separators=(",", ":"))

    def run(self) -> Batch:
        """Submit every recorded operation as one batch job.

        One network round trip, no retries. Transport errors propagate
        unchanged and the queue keeps its operations, so ``run`` may be
        called again.
        """
        response = self.transport.send("POST", BATCHES_URL, None, self.to_payload())
        batch = decode_batch(response)
        logger.info(
            "batch_submitted",
            batch_id=batch.id,
            status=batch.status,
            operations=len(self._operations),
        )
        return batch

    def get(self, batch_id: str) -> Batch:
        """Fetch the current status of a batch job."""
        if not batch_id:
            msg = "missing argument: batch_id"
            raise RequestConstructionError(msg)
        response = self.transport.send("GET", slash_join(BATCHES_URL, batch_id))
        return decode_batch(response)
