# yandex_sdk/core/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""Errors, metrics sinks and retry policy shared by all adapters."""

from yandex_sdk.core.errors import (
    YandexAdapterError,
    BadRequest,
    UnknownModelError,
    UnsupportedRoleError,
    TransportError,
)
from yandex_sdk.core.metrics import (
    MetricsSink,
    NoopMetrics,
    LoggingMetrics,
)
from yandex_sdk.core.retry import (
    RetryPolicy,
    RetryStats,
    NO_RETRY,
    is_retryable_error,
    retry_async,
)

__all__ = [
    "YandexAdapterError",
    "BadRequest",
    "UnknownModelError",
    "UnsupportedRoleError",
    "TransportError",
    "MetricsSink",
    "NoopMetrics",
    "LoggingMetrics",
    "RetryPolicy",
    "RetryStats",
    "NO_RETRY",
    "is_retryable_error",
    "retry_async",
]
