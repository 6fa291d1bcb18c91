"""Pydantic data models for the Mailchimp client."""

from chimpkit.models.api_error import ErrorBody, FieldError
from chimpkit.models.batch import Batch, BatchStatus
from chimpkit.models.config import Config
from chimpkit.models.dispatch_result import (
    PLACEHOLDER_BODY,
    Completed,
    Deferred,
    DispatchResult,
)
from chimpkit.models.operation import HttpMethod, Operation

__all__ = [
    "PLACEHOLDER_BODY",
    "Batch",
    "BatchStatus",
    "Completed",
    "Config",
    "Deferred",
    "DispatchResult",
    "ErrorBody",
    "FieldError",
    "HttpMethod",
    "Operation",
]
