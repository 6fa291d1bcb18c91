"""chimpkit -- Mailchimp Marketing API client with request batching."""

from chimpkit.exceptions import (
    APIError,
    BatchNotActiveError,
    BatchTimeoutError,
    ChimpkitError,
    ConfigurationError,
    MalformedQueryError,
    MissingFieldError,
    RequestConstructionError,
    ResponseDecodeError,
    TransportError,
    TransportTimeoutError,
)
from chimpkit.models import (
    Batch,
    BatchStatus,
    Completed,
    Config,
    Deferred,
    HttpMethod,
    Operation,
)
from chimpkit.services.batch_poller import wait_for_batch
from chimpkit.services.batch_queue import BatchQueue
from chimpkit.services.client import Direct, MailchimpClient, Recording
from chimpkit.services.http_transport import MailchimpTransport

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "Batch",
    "BatchNotActiveError",
    "BatchQueue",
    "BatchStatus",
    "BatchTimeoutError",
    "ChimpkitError",
    "Completed",
    "Config",
    "ConfigurationError",
    "Deferred",
    "Direct",
    "HttpMethod",
    "MailchimpClient",
    "MailchimpTransport",
    "MalformedQueryError",
    "MissingFieldError",
    "Operation",
    "Recording",
    "RequestConstructionError",
    "ResponseDecodeError",
    "TransportError",
    "TransportTimeoutError",
    "wait_for_batch",
]
