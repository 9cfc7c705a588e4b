# yandex_sdk/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Yandex Foundation Models adapters behind a vendor-neutral chat and
embedding interface.

    from yandex_sdk import create_chat_adapter

    adapter = create_chat_adapter()
    result = await adapter.call([{"role": "user", "content": "Hello!"}])
"""

from yandex_sdk._version import __version__
from yandex_sdk.core import (
    YandexAdapterError,
    BadRequest,
    UnknownModelError,
    UnsupportedRoleError,
    TransportError,
    MetricsSink,
    NoopMetrics,
    LoggingMetrics,
    RetryPolicy,
)
from yandex_sdk.options import (
    ChatOptions,
    EmbeddingOptions,
    YandexChatOptions,
    YandexEmbeddingOptions,
    merge_chat_options,
    merge_embedding_options,
)
from yandex_sdk.api import YandexApi
from yandex_sdk.llm import (
    ChatTurn,
    ChatResult,
    Generation,
    TokenUsage,
    YandexChatAdapter,
)
from yandex_sdk.embedding import (
    Embedding,
    EmbeddingResult,
    YandexEmbeddingAdapter,
)
from yandex_sdk.config import (
    ConnectionSettings,
    ChatSettings,
    EmbeddingSettings,
)
from yandex_sdk.factory import (
    create_chat_adapter,
    create_embedding_adapter,
)

__all__ = [
    "__version__",

    # Errors
    "YandexAdapterError",
    "BadRequest",
    "UnknownModelError",
    "UnsupportedRoleError",
    "TransportError",

    # Metrics / retry
    "MetricsSink",
    "NoopMetrics",
    "LoggingMetrics",
    "RetryPolicy",

    # Options
    "ChatOptions",
    "EmbeddingOptions",
    "YandexChatOptions",
    "YandexEmbeddingOptions",
    "merge_chat_options",
    "merge_embedding_options",

    # Adapters and results
    "YandexApi",
    "ChatTurn",
    "ChatResult",
    "Generation",
    "TokenUsage",
    "YandexChatAdapter",
    "Embedding",
    "EmbeddingResult",
    "YandexEmbeddingAdapter",

    # Settings / wiring
    "ConnectionSettings",
    "ChatSettings",
    "EmbeddingSettings",
    "create_chat_adapter",
    "create_embedding_adapter",
]
