"""Contract tests for BatchQueue.

Requests are built by a real transport; submissions are answered from the
fake transport's response queue and recorded for inspection.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
import requests
from structlog.testing import capture_logs

from chimpkit.exceptions import (
    APIError,
    MalformedQueryError,
    RequestConstructionError,
    ResponseDecodeError,
    TransportError,
)
from chimpkit.models.api_error import ErrorBody
from chimpkit.models.batch import Batch
from chimpkit.models.dispatch_result import PLACEHOLDER_BODY, Deferred
from chimpkit.models.operation import Operation
from chimpkit.services.batch_queue import BatchQueue, decode_batch

ROUND_TRIP_JSON = (
    '{"operations":[{"method":"GET","path":"/resource/id"},'
    '{"method":"POST","path":"/resource/id","body":"{\\"key\\":\\"value\\"}"}]}'
)


@pytest.fixture
def queue(fake_transport: Any) -> BatchQueue:
    return BatchQueue(fake_transport)


# ---------------------------------------------------------------------------
# Recording
# ---------------------------------------------------------------------------


class TestEnqueue:
    """Tests for BatchQueue.enqueue and add."""

    def test_order_preserved(self, queue: BatchQueue, fake_transport: Any) -> None:
        paths = ["/lists/a", "/campaigns/b", "/lists/a/members/c", "/reports/d"]
        results = [queue.enqueue(fake_transport.build_request("GET", path)) for path in paths]

        assert [op.path for op in queue.operations] == paths
        assert [result.position for result in results] == [0, 1, 2, 3]
        assert len(queue) == 4

    def test_version_segment_stripped(self, queue: BatchQueue, fake_transport: Any) -> None:
        queue.enqueue(fake_transport.build_request("GET", "/resoruce/id"))
        assert queue.operations[0].path == "/resoruce/id"

    def test_query_recorded_as_params(self, queue: BatchQueue, fake_transport: Any) -> None:
        queue.enqueue(fake_transport.build_request("GET", "/resource/id", {"r": "K"}))
        assert queue.operations[0].params == {"r": "K"}

    def test_no_query_means_no_params(self, queue: BatchQueue, fake_transport: Any) -> None:
        queue.enqueue(fake_transport.build_request("GET", "/resource/id"))
        assert queue.operations[0].params is None

    def test_malformed_query_fragments_dropped(
        self, queue: BatchQueue, fake_transport: Any
    ) -> None:
        request = fake_transport.build_request("GET", "/lists")
        request.url += "?count=10&broken&x=1=2"
        queue.enqueue(request)
        assert queue.operations[0].params == {"count": "10"}

    def test_strict_mode_rejects_malformed_query(self, fake_transport: Any) -> None:
        queue = BatchQueue(fake_transport, strict_params=True)
        request = fake_transport.build_request("GET", "/lists")
        request.url += "?count=10&broken"

        with pytest.raises(MalformedQueryError):
            queue.enqueue(request)
        assert len(queue) == 0

    def test_placeholder_regardless_of_request(
        self, queue: BatchQueue, fake_transport: Any
    ) -> None:
        fake_transport.queue_json({"id": "would-be-live-response"})
        results = [
            queue.enqueue(fake_transport.build_request("GET", "/lists/a")),
            queue.enqueue(fake_transport.build_request("POST", "/lists", json_body={"a": 1})),
            queue.enqueue(fake_transport.build_request("DELETE", "/lists/a")),
        ]

        for result in results:
            assert isinstance(result, Deferred)
            assert result.body == PLACEHOLDER_BODY
            assert result.json() == {}
        assert fake_transport.sent == []

    def test_none_request_rejected(self, queue: BatchQueue, fake_transport: Any) -> None:
        queue.enqueue(fake_transport.build_request("GET", "/lists/a"))

        with pytest.raises(RequestConstructionError, match="nil request"):
            queue.enqueue(None)
        assert len(queue) == 1

    def test_unencodable_request_leaves_queue_unchanged(
        self, queue: BatchQueue, fake_transport: Any
    ) -> None:
        with pytest.raises(RequestConstructionError):
            queue.enqueue(requests.Request("HEAD", "https://x.test/3.0/lists").prepare())
        assert queue.operations == ()

    def test_add_prebuilt_operation(self, queue: BatchQueue) -> None:
        operation = Operation(method="PUT", path="/lists/a", operation_id="rename")
        result = queue.add(operation)

        assert result.operation is operation
        assert result.position == 0
        assert queue.operations == (operation,)

    def test_operations_is_a_snapshot(self, queue: BatchQueue) -> None:
        snapshot = queue.operations
        queue.add(Operation(method="GET", path="/lists"))
        assert snapshot == ()


# ---------------------------------------------------------------------------
# Payload
# ---------------------------------------------------------------------------


class TestPayload:
    """Tests for the submission payload."""

    def test_round_trip_json(self, queue: BatchQueue, fake_transport: Any) -> None:
        queue.enqueue(fake_transport.build_request("GET", "/resource/id"))
        queue.enqueue(
            fake_transport.build_request("POST", "/resource/id", json_body={"key": "value"})
        )
        assert queue.to_json() == ROUND_TRIP_JSON

    def test_empty_queue_payload(self, queue: BatchQueue) -> None:
        assert queue.to_payload() == {"operations": []}


# ---------------------------------------------------------------------------
# run / get
# ---------------------------------------------------------------------------


class TestRun:
    """Tests for BatchQueue.run."""

    def test_posts_operations_and_decodes_batch(
        self,
        queue: BatchQueue,
        fake_transport: Any,
        batch_response: dict[str, Any],
        body_of: Callable[[requests.PreparedRequest], str],
    ) -> None:
        queue.enqueue(fake_transport.build_request("GET", "/resource/id"))
        queue.enqueue(
            fake_transport.build_request("POST", "/resource/id", json_body={"key": "value"})
        )
        fake_transport.queue_json(batch_response)

        batch = queue.run()

        assert len(fake_transport.sent) == 1
        sent = fake_transport.sent[0]
        assert sent.method == "POST"
        assert sent.url == "https://us13.api.mailchimp.com/3.0/batches"
        assert body_of(sent) == ROUND_TRIP_JSON
        assert batch == Batch(**batch_response)
        assert batch.model_dump() == batch_response

    def test_run_keeps_operations(
        self, queue: BatchQueue, batch_response: dict[str, Any], fake_transport: Any
    ) -> None:
        queue.add(Operation(method="GET", path="/lists"))
        fake_transport.queue_json(batch_response)
        queue.run()
        assert len(queue) == 1

    def test_transport_failure_propagates_unchanged(
        self,
        queue: BatchQueue,
        fake_transport: Any,
        batch_response: dict[str, Any],
        body_of: Callable[[requests.PreparedRequest], str],
    ) -> None:
        queue.add(Operation(method="GET", path="/lists"))
        queue.add(Operation(method="DELETE", path="/lists/a"))
        before = queue.operations
        failure = TransportError("connection reset")
        fake_transport.responses.append(failure)

        with pytest.raises(TransportError) as exc_info:
            queue.run()

        assert exc_info.value is failure
        assert queue.operations == before

        # a retry submits the same operations again
        fake_transport.queue_json(batch_response)
        assert queue.run().id == batch_response["id"]
        assert body_of(fake_transport.sent[0]) == body_of(fake_transport.sent[1])

    def test_api_error_propagates(self, queue: BatchQueue, fake_transport: Any) -> None:
        fake_transport.responses.append(
            APIError(ErrorBody(title="Invalid Resource", status=400), 400)
        )
        with pytest.raises(APIError):
            queue.run()

    def test_undecodable_response(self, queue: BatchQueue, fake_transport: Any) -> None:
        fake_transport.responses.append(b'{"status": "pending"}')
        with pytest.raises(ResponseDecodeError):
            queue.run()


class TestGet:
    """Tests for BatchQueue.get."""

    def test_get_batch(
        self,
        queue: BatchQueue,
        fake_transport: Any,
        finished_batch_response: dict[str, Any],
    ) -> None:
        fake_transport.queue_json(finished_batch_response)

        batch = queue.get("8cxk2yb1le")

        sent = fake_transport.sent[0]
        assert sent.method == "GET"
        assert sent.url == "https://us13.api.mailchimp.com/3.0/batches/8cxk2yb1le"
        assert batch.is_finished
        assert batch.finished_operations == 2
        assert batch.errored_operations == 1
        assert batch.result_url == finished_batch_response["response_body_url"]

    def test_empty_id_rejected(self, queue: BatchQueue, fake_transport: Any) -> None:
        with pytest.raises(RequestConstructionError, match="batch_id"):
            queue.get("")
        assert fake_transport.sent == []

    def test_counters_never_decrease_across_polls(
        self, queue: BatchQueue, fake_transport: Any, batch_response: dict[str, Any]
    ) -> None:
        fake_transport.queue_json(
            {**batch_response, "status": "started", "finished_operations": 0},
            {**batch_response, "status": "started", "finished_operations": 1},
            {
                **batch_response,
                "status": "finished",
                "finished_operations": 2,
                "errored_operations": 1,
            },
        )

        polls = [queue.get("8cxk2yb1le") for _ in range(3)]

        finished = [batch.finished_operations for batch in polls]
        errored = [batch.errored_operations for batch in polls]
        assert finished == sorted(finished)
        assert errored == sorted(errored)
        assert polls[-1].is_finished


class TestDecodeBatch:
    """Tests for decode_batch."""

    def test_decodes(self, batch_response: dict[str, Any]) -> None:
        batch = decode_batch(json.dumps(batch_response).encode())
        assert batch.id == "8cxk2yb1le"
        assert batch.total_operations == 2

    def test_invalid_json(self) -> None:
        with pytest.raises(ResponseDecodeError):
            decode_batch(b"not json")

    def test_inconsistent_counters_decoded_and_logged(self) -> None:
        document = b'{"id":"x","status":"started","total_operations":1,"finished_operations":2}'

        with capture_logs() as logs:
            batch = decode_batch(document)

        assert batch.finished_operations == 2
        warnings = [log for log in logs if log["event"] == "batch_counters_inconsistent"]
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["violations"] == ["finished_operations 2 > total_operations 1"]

    def test_consistent_counters_not_logged(self, batch_response: dict[str, Any]) -> None:
        with capture_logs() as logs:
            decode_batch(json.dumps(batch_response).encode())
        assert not [log for log in logs if log["event"] == "batch_counters_inconsistent"]
