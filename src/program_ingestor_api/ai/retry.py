"""Retry helpers for LLM provider calls: exponential backoff on transient errors only."""
import logging
from typing import Any, Callable, TypeVar

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT_SECONDS = 1
DEFAULT_MAX_WAIT_SECONDS = 10

RETRYABLE_STATUS_CODES = {408, 409, 429, 500, 502, 503, 504}

_TRANSIENT_MARKERS = (
    "rate limit",
    "429",
    "500",
    "502",
    "503",
    "504",
    "overloaded",
    "timeout",
    "timed out",
    "connection",
    "temporary failure in name resolution",
)


def is_retryable_error(exception: BaseException) -> bool:
    """
    Decide whether a provider error is transient.

    Provider SDK errors expose status_code; anything else is classified
    from its message and class name. Auth, bad-request and quota errors
    are never retried.
    """
    status_code = getattr(exception, "status_code", None)
    if isinstance(status_code, int):
        return status_code in RETRYABLE_STATUS_CODES

    error_str = str(exception).lower()
    exception_type = type(exception).__name__.lower()

    if "quota" in error_str or "unauthorized" in error_str or "authentication" in error_str:
        return False

    if "timeout" in exception_type or "connect" in exception_type:
        return True

    return any(marker in error_str for marker in _TRANSIENT_MARKERS)


def _retry_kwargs(max_attempts: int, min_wait_seconds: float, max_wait_seconds: float) -> dict[str, Any]:
    return {
        "retry": retry_if_exception(is_retryable_error),
        "stop": stop_after_attempt(max_attempts),
        "wait": wait_exponential(multiplier=1, min=min_wait_seconds, max=max_wait_seconds),
        "before_sleep": before_sleep_log(logger, logging.WARNING),
        "reraise": True,
    }


def retry_sync_call(
    func: Callable[..., T],
    *args: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
    **kwargs: Any,
) -> T:
    """
    Call func, retrying transient failures.

    Raises:
        The last exception once attempts are exhausted, or the first
        non-retryable one immediately.
    """
    retrying = Retrying(**_retry_kwargs(max_attempts, min_wait_seconds, max_wait_seconds))
    return retrying(func, *args, **kwargs)
