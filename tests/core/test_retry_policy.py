# SPDX-License-Identifier: Apache-2.0
"""
Retry: bounded attempts, retryable-only re-attempts, unmodified re-raise.
"""

import logging

import pytest

from yandex_sdk.core.errors import BadRequest, TransportError
from yandex_sdk.core.retry import NO_RETRY, RetryPolicy, is_retryable_error, retry_async

pytestmark = pytest.mark.asyncio

FAST = RetryPolicy(max_attempts=3, base_ms=1, max_ms=1, use_jitter=False)


class Flaky:
    """Fails with the given errors in order, then returns `value`."""

    def __init__(self, *errors, value="ok"):
        self.errors = list(errors)
        self.value = value
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.value


async def test_retryable_failure_then_success():
    fn = Flaky(TransportError("HTTP 503", status=503, retryable=True))
    result, stats = await retry_async(fn, policy=FAST, return_stats=True)
    assert result == "ok"
    assert fn.calls == 2
    assert stats.attempts == 2
    assert isinstance(stats.last_exception, TransportError)


async def test_non_retryable_error_raised_immediately():
    err = TransportError("HTTP 400", status=400, retryable=False)
    fn = Flaky(err)
    with pytest.raises(TransportError) as exc_info:
        await retry_async(fn, policy=FAST)
    assert exc_info.value is err
    assert fn.calls == 1


async def test_validation_error_is_never_retried():
    fn = Flaky(BadRequest("bad"))
    with pytest.raises(BadRequest):
        await retry_async(fn, policy=FAST)
    assert fn.calls == 1


async def test_exhaustion_reraises_last_error_unmodified():
    errors = [TransportError(f"HTTP 503 #{i}", status=503, retryable=True) for i in range(5)]
    fn = Flaky(*errors)
    with pytest.raises(TransportError) as exc_info:
        await retry_async(fn, policy=FAST)
    assert fn.calls == 3
    assert exc_info.value is errors[2]


async def test_no_retry_policy_makes_one_attempt():
    fn = Flaky(TransportError("HTTP 503", status=503, retryable=True))
    with pytest.raises(TransportError):
        await retry_async(fn, policy=NO_RETRY)
    assert fn.calls == 1


async def test_backoff_is_logged_and_reported(caplog):
    seen = []
    fn = Flaky(TransportError("HTTP 429", status=429, retryable=True))
    with caplog.at_level(logging.WARNING, logger="yandex_sdk.core.retry"):
        await retry_async(fn, policy=FAST, on_backoff=lambda n, s, e: seen.append((n, s)))
    assert seen == [(1, 0.001)]
    assert any("retrying" in r.getMessage() for r in caplog.records)


async def test_failing_backoff_hook_does_not_break_retry():
    def hook(*_):
        raise RuntimeError("hook failed")

    fn = Flaky(TransportError("HTTP 500", status=500, retryable=True))
    assert await retry_async(fn, policy=FAST, on_backoff=hook) == "ok"


async def test_backoff_grows_and_is_capped():
    policy = RetryPolicy(max_attempts=5, base_ms=100, max_ms=300, multiplier=2.0)
    assert [policy.backoff_ms(i) for i in range(4)] == [100, 200, 300, 300]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_attempts": 0},
        {"base_ms": 0},
        {"multiplier": 0.5},
        {"base_ms": 500, "max_ms": 100},
    ],
)
async def test_invalid_policies_rejected(kwargs):
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)


async def test_is_retryable_error_reads_flag():
    assert is_retryable_error(TransportError("x", retryable=True)) is True
    assert is_retryable_error(TransportError("x", retryable=False)) is False
    assert is_retryable_error(ValueError("x")) is False
