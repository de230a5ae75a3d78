"""
utils/retry.py — Exponential-backoff retry decorator for upstream fetches.

Only the fetch layer retries; the engine itself never does. Built on tenacity,
with each retry logged through structlog.

Usage:
    from dbe_reports.utils.retry import with_retry

    @with_retry(max_attempts=3, base_delay=1.0)
    async def fetch_rows() -> list[dict]: ...
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

log = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Coroutine[Any, Any, Any]])


def _log_before_sleep(name: str, max_attempts: int) -> Callable[[RetryCallState], None]:
    def before_sleep(state: RetryCallState) -> None:
        exc = state.outcome.exception() if state.outcome else None
        log.warning(
            "retry_attempt",
            function=name,
            attempt=state.attempt_number,
            max_attempts=max_attempts,
            delay_s=state.next_action.sleep if state.next_action else None,
            error=str(exc) if exc else None,
        )

    return before_sleep


def with_retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    retry_on: type[Exception] | tuple[type[Exception], ...] = Exception,
) -> Callable[[F], F]:
    """
    Retry an async function with exponential backoff.

    Delays grow as base_delay * 2^(attempt-1), capped at max_delay. The last
    exception is re-raised unchanged once attempts run out.

    Args:
        max_attempts: Total attempts, including the first call.
        base_delay:   Initial delay in seconds (0 disables waiting).
        max_delay:    Maximum delay in seconds.
        retry_on:     Exception type(s) that trigger a retry.
    """

    def decorator(fn: F) -> F:
        name = fn.__qualname__

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            retrying = AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=base_delay, max=max_delay),
                retry=retry_if_exception_type(retry_on),
                before_sleep=_log_before_sleep(name, max_attempts),
                reraise=True,
            )
            try:
                return await retrying(fn, *args, **kwargs)
            except retry_on as exc:
                log.error(
                    "retry_exhausted",
                    function=name,
                    max_attempts=max_attempts,
                    error=str(exc),
                )
                raise

        return wrapper  # type: ignore[return-value]

    return decorator
