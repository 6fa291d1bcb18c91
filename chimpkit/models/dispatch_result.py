"""Results of dispatching one outbound call.

A call either went to the API (:class:`Completed`) or was recorded into an
active batch (:class:`Deferred`). A deferred call has no resource data yet;
its ``body`` is the fixed ``b"{}"`` placeholder no matter what the live call
would have returned. Check ``is_deferred`` (or ``isinstance``) before reading
data from a result.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, ClassVar

from chimpkit.exceptions import ResponseDecodeError
from chimpkit.models.operation import Operation

PLACEHOLDER_BODY = b"{}"


@dataclass(frozen=True)
class Completed:
    """A call that was sent; ``body`` holds the raw response bytes."""

    body: bytes
    is_deferred: ClassVar[bool] = False

    def json(self) -> Any:
        """Decode the body; an empty (204) body decodes to ``{}``."""
        if not self.body:
            return {}
        try:
            return json.loads(self.body)
        except ValueError as exc:
            raise ResponseDecodeError(f"invalid JSON response: {exc}") from exc


@dataclass(frozen=True)
class Deferred:
    """A call recorded into a batch queue at ``position``."""

    operation: Operation
    position: int
    is_deferred: ClassVar[bool] = True

    @property
    def body(self) -> bytes:
        return PLACEHOLDER_BODY

    def json(self) -> dict[str, Any]:
        return {}


DispatchResult = Completed | Deferred
