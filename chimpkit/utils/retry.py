"""Retry logic with structured logging using tenacity."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

import requests
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from chimpkit.utils.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

P = ParamSpec("P")
T = TypeVar("T")

logger = get_logger(__name__)

# Only failures where no response was received. Status code errors are
# never retried since POSTs are not idempotent.
NETWORK_ERRORS: tuple[type[BaseException], ...] = (
    requests.ConnectionError,
    requests.Timeout,
)


def _request_context(args: tuple[Any, ...]) -> dict[str, Any]:
    for arg in args:
        if isinstance(arg, requests.PreparedRequest):
            return {"method": arg.method, "url": arg.url}
    return {}


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "retrying_request",
        attempt=retry_state.attempt_number,
        function=getattr(retry_state.fn, "__name__", "unknown"),
        error=str(exc) if exc else "unknown",
        **_request_context(retry_state.args),
    )


def retry_with_logging(
    max_attempts: int = 3,
    *,
    retry_on: tuple[type[BaseException], ...] = NETWORK_ERRORS,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator using tenacity with structured logging.

    Retries on ``retry_on`` (requests connection errors and timeouts by
    default) with exponential backoff from 2s, capped at 10s. The last
    error is re-raised unchanged. ``max_attempts`` below 1 means one attempt.
    """
    attempts = max(1, max_attempts)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @retry(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type(retry_on),
            before_sleep=_log_retry,
            reraise=True,
        )
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
