# yandex_sdk/core/retry.py
# SPDX-License-Identifier: Apache-2.0
"""
Bounded async retry with exponential backoff.

The adapters run every HTTP call through `retry_async`. Only errors flagged
`retryable` (network failures, 429 and 5xx responses) are re-attempted; the
last error is re-raised unmodified once attempts run out.

Jitter can be toggled off for deterministic tests:

    policy = RetryPolicy(max_attempts=3, base_ms=1, max_ms=1, use_jitter=False)
    body = await retry_async(lambda: api.completion(request), policy=policy)
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from yandex_sdk.core.errors import BadRequest

LOG = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryStats:
    """
    Statistics about one retried operation.

    Attributes:
        attempts: Number of attempts made (including the successful one)
        total_delay: Total time spent sleeping between attempts (seconds)
        last_exception: Last exception seen before success, if any
    """
    attempts: int
    total_delay: float
    last_exception: Optional[BaseException] = None


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry configuration with exponential backoff.

    Attributes:
        max_attempts: Total tries including the first attempt.
        base_ms:      Initial backoff in milliseconds.
        max_ms:       Maximum backoff cap in milliseconds.
        multiplier:   Exponential growth factor per attempt.
        use_jitter:   Randomize sleep in [0, backoff] to spread retries.
    """

    max_attempts: int = 4
    base_ms: int = 150
    max_ms: int = 10_000
    multiplier: float = 2.0
    use_jitter: bool = True

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_ms <= 0 or self.max_ms <= 0:
            raise ValueError("Backoff times must be positive")
        if self.multiplier < 1.0:
            raise ValueError("Multiplier must be >= 1.0")
        if self.base_ms > self.max_ms:
            raise ValueError("base_ms cannot exceed max_ms")

    def backoff_ms(self, attempt_index: int) -> int:
        """Compute exponential backoff for a given retry index."""
        raw = int(self.base_ms * (self.multiplier ** attempt_index))
        return min(raw, self.max_ms)


NO_RETRY = RetryPolicy(max_attempts=1)


def is_retryable_error(exc: BaseException) -> bool:
    """Validation errors never retry; everything else follows its `retryable` flag."""
    if isinstance(exc, BadRequest):
        return False
    return bool(getattr(exc, "retryable", False))


async def retry_async(
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy = RetryPolicy(),
    is_retryable: Callable[[BaseException], bool] = is_retryable_error,
    on_backoff: Optional[Callable[[int, float, BaseException], None]] = None,
    return_stats: bool = False,
) -> Any:
    """
    Execute an async operation, retrying retryable failures.

    Args:
        fn:           Zero-arg coroutine factory invoked once per attempt.
        policy:       RetryPolicy controlling attempts and backoff.
        is_retryable: Predicate deciding whether an exception is retried.
        on_backoff:   Optional callback (attempt_no, sleep_seconds, exc) before sleeping.
        return_stats: If True, returns (result, RetryStats).

    Raises:
        The last exception when attempts are exhausted or a non-retryable
        error occurs.
    """
    attempts = max(1, policy.max_attempts)
    total_delay = 0.0
    last_exception: Optional[BaseException] = None

    for attempt in range(1, attempts + 1):
        try:
            result = await fn()
            if return_stats:
                return result, RetryStats(
                    attempts=attempt,
                    total_delay=total_delay,
                    last_exception=last_exception,
                )
            return result

        except Exception as exc:
            last_exception = exc
            if not is_retryable(exc) or attempt >= attempts:
                raise

            backoff = policy.backoff_ms(attempt_index=attempt - 1) / 1000.0
            sleep_for = random.random() * backoff if policy.use_jitter else backoff
            total_delay += sleep_for

            LOG.warning(
                "Attempt %d/%d failed (%s); retrying in %.3fs",
                attempt,
                attempts,
                exc,
                sleep_for,
            )
            if on_backoff:
                try:
                    on_backoff(attempt, sleep_for, exc)
                except Exception:
                    # Hooks must not break the retry loop.
                    pass

            await asyncio.sleep(sleep_for)

    raise RuntimeError("unreachable")  # pragma: no cover


__all__ = [
    "RetryPolicy",
    "RetryStats",
    "NO_RETRY",
    "is_retryable_error",
    "retry_async",
]
