"""
Opt-in retry policy for callers of the Alertmanager client. The client itself never retries; callers that want retries wrap their own coroutine with `with_retry`, which retries only transient failures (network errors, exhausted deadlines, 429 and 5xx responses, and partial fan-outs caused by one of those) with exponential backoff. Re-posting alerts is safe because Alertmanager deduplicates them by label set.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import Awaitable, Callable, Optional, TypeVar

from tenacity import RetryCallState, retry, retry_if_exception, stop_after_attempt, wait_exponential

from alertmanager_kit.config import config
from alertmanager_kit.errors import DeadlineExceededError, PartialFanoutError, StatusError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_RETRY_ON_STATUS: frozenset[int] = frozenset({429, 500, 502, 503, 504})


def is_transient_error(
    exc: Optional[BaseException],
    retry_on_status: frozenset[int] | set[int] = _DEFAULT_RETRY_ON_STATUS,
) -> bool:
    if isinstance(exc, PartialFanoutError):
        return is_transient_error(exc.__cause__, retry_on_status)
    if isinstance(exc, (TransportError, DeadlineExceededError)):
        return True
    if isinstance(exc, StatusError):
        return exc.status_code in retry_on_status
    return False


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Attempt %d failed for %s: %s. Retrying...",
        retry_state.attempt_number,
        getattr(retry_state.fn, "__name__", "call"),
        exc,
    )


def with_retry(
    max_retries: Optional[int] = None,
    backoff: Optional[float] = None,
    max_backoff: Optional[float] = None,
    retry_on_status: frozenset[int] | set[int] = _DEFAULT_RETRY_ON_STATUS,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    max_retries = config.MAX_RETRIES if max_retries is None else max_retries
    backoff = config.RETRY_BACKOFF if backoff is None else backoff
    max_backoff = config.RETRY_MAX_BACKOFF if max_backoff is None else max_backoff
    retry_set = frozenset(retry_on_status)

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        return retry(
            retry=retry_if_exception(lambda exc: is_transient_error(exc, retry_set)),
            stop=stop_after_attempt(max_retries + 1),
            wait=wait_exponential(multiplier=backoff, max=max_backoff),
            before_sleep=_log_retry,
            reraise=True,
        )(func)

    return decorator
